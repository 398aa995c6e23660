"""
Base connector — abstract interface for bank statement sources.

Connectors read statement lines from an external source and normalize them
into unreconciled BankTransaction records ready for the record store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from jayloy.models.records import BankTransaction


class BaseConnector(ABC):
    """Abstract base class for statement connectors.

    To create a new connector, subclass this and implement:
    - `name`: Unique connector identifier.
    - `pull()`: Async method that returns bank transactions.
    - `validate_credentials()`: Check if the source is reachable.
    """

    name: str = "base"
    description: str = "Base connector"

    def __init__(self, credentials: dict[str, Any] | None = None, **options: Any) -> None:
        self.credentials = credentials or {}
        self.options = options

    @abstractmethod
    async def pull(self) -> list[BankTransaction]:
        """Read statement lines from the source.

        Returns:
            Bank transactions without ids, not yet reconciled.
        """
        ...

    @abstractmethod
    async def validate_credentials(self) -> bool:
        """Validate that the source is accessible."""
        ...

    async def health_check(self) -> dict[str, Any]:
        """Check connector health and connectivity."""
        try:
            valid = await self.validate_credentials()
            return {"connector": self.name, "healthy": valid, "error": None}
        except Exception as e:
            return {"connector": self.name, "healthy": False, "error": str(e)}
