"""
Base agent — shared logic for LLM-backed readers.

Each agent wraps one task the dashboard hands to a generative model and
turns the model's free-text reply into structured data.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import litellm

if TYPE_CHECKING:
    from jayloy.config import JayloyConfig, LLMConfig

logger = logging.getLogger("jayloy.agents")


class BaseAgent(ABC):
    """Abstract base class for Jayloy agents.

    Subclass this to add a new model-backed task. Each agent:
    - Has a system prompt defining its job.
    - Calls the LLM through litellm, so any provider works.
    - Parses the reply into a structured result.
    """

    name: str = "base_agent"
    description: str = "Base agent"

    def __init__(self, config: JayloyConfig) -> None:
        self.config = config
        self.llm_config: LLMConfig = config.llm

    @property
    @abstractmethod
    def system_prompt(self) -> str:
        """The system prompt that defines this agent's job."""
        ...

    async def _call_llm(
        self,
        messages: list[dict[str, Any]],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Call the LLM via litellm (supports any provider)."""
        full_messages = [{"role": "system", "content": self.system_prompt}] + messages

        response = await litellm.acompletion(
            model=self.llm_config.model,
            messages=full_messages,
            temperature=temperature if temperature is not None else self.llm_config.temperature,
            max_tokens=max_tokens or self.llm_config.max_tokens,
            api_key=self.llm_config.api_key,
            api_base=self.llm_config.api_base,
            timeout=self.llm_config.timeout,
        )

        content = response.choices[0].message.content or ""
        logger.debug("[%s] LLM response: %s...", self.name, content[:200])
        return content
