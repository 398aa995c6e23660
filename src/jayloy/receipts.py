"""
Receipt parsing — shared types and helpers for turning an LLM's reading of a
receipt photo into an expense.

The model is asked for JSON but usually wraps it in markdown fences, so the
text is cleaned before parsing. Each receipt in a batch is an independent
request; one failure never affects the others.
"""

from __future__ import annotations

import asyncio
import base64
import json
import logging
import mimetypes
import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from jayloy.models.records import Expense, ExpenseItem, TransactionKind

logger = logging.getLogger("jayloy.receipts")

RECEIPT_PROMPT = """Extract essential information in this transaction picture and format into following json format:
- Extract the vendor name from the receipt and use it as the 'vendor' field. If not found, use the most prominent text or leave as 'Unknown Vendor'.
- Response only in JSON format. In case you are unsure about an item just leave the name as "UNKNOWN".

{{
  "vendor": example: "Starbucks Coffee", if not found use the most prominent text or "Unknown Vendor",
  "type": EXPENSE OR INCOME,
  "description": example: "I bought cake", mostly in remark option, if not found just null,
  "date": format "YYYY-MM-DD",
  "total_amount": only the number; if the receipt is in KHR convert to USD by dividing by {khr_per_usd:g},
  "items": [
    {{
      "id": in order 1 to ...,
      "name": the name of the item (keep Khmer or any other language), "UNKNOWN" if unclear,
      "amount": the cost of the item, only the number,
      "currency": the currency shown on the receipt
    }}
  ]
}}"""

_FENCE_RE = re.compile(r"```(?:json|JSON)?[ \t]*\n?")


class ReceiptParseError(Exception):
    """A receipt could not be read or its response could not be parsed."""


class ParsedReceiptItem(BaseModel):
    id: int | str
    name: str = "UNKNOWN"
    amount: float = 0.0
    currency: str = "USD"
    category: str | None = None


class ParsedReceipt(BaseModel):
    """Structured content read off a receipt."""

    model_config = ConfigDict(populate_by_name=True)

    vendor: str = "Unknown Vendor"
    type: TransactionKind = TransactionKind.EXPENSE
    description: str | None = None
    receipt_date: date | None = Field(default=None, alias="date")
    total_amount: float = 0.0
    items: list[ParsedReceiptItem] = Field(default_factory=list)

    @field_validator("type", mode="before")
    @classmethod
    def _lower_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("vendor", mode="before")
    @classmethod
    def _default_vendor(cls, value: Any) -> Any:
        return value or "Unknown Vendor"

    def to_expense(
        self,
        *,
        fallback_date: date,
        category: str = "Other",
        currency: str = "USD",
        receipt_url: str | None = None,
    ) -> Expense:
        """Draft an Expense from the parsed receipt.

        ``fallback_date`` is used when no date could be read.
        """
        return Expense(
            vendor=self.vendor,
            amount=self.total_amount,
            date=self.receipt_date or fallback_date,
            description=self.description or "",
            category=category,
            type=self.type,
            currency=currency,
            receipt_url=receipt_url,
            receipt_data=self.model_dump(mode="json", by_alias=True),
            items=[
                ExpenseItem(
                    id=item.id,
                    name=item.name,
                    amount=item.amount,
                    currency=item.currency,
                    category=item.category,
                )
                for item in self.items
            ],
        )


def clean_llm_json(text: str) -> str:
    """Strip markdown code fences and any prose around the JSON object."""
    cleaned = _FENCE_RE.sub("", text).strip()
    first, last = cleaned.find("{"), cleaned.rfind("}")
    if first != -1 and last > first:
        cleaned = cleaned[first : last + 1]
    return cleaned


def parse_receipt_text(text: str) -> ParsedReceipt:
    """Parse the model's reply into a ParsedReceipt.

    Raises:
        ReceiptParseError: The reply is not JSON or does not fit the schema.
    """
    cleaned = clean_llm_json(text)
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ReceiptParseError(f"Receipt response is not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise ReceiptParseError("Receipt response is not a JSON object")
    try:
        return ParsedReceipt.model_validate(payload)
    except ValidationError as e:
        raise ReceiptParseError(f"Receipt response has unexpected fields: {e}") from e


def read_image(path: str | Path) -> tuple[bytes, str]:
    """Return the file's bytes and its MIME type."""
    path = Path(path)
    if not path.exists():
        raise ReceiptParseError(f"Receipt file not found: {path}")
    mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return path.read_bytes(), mime_type


def image_data_uri(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


class ReceiptParser(Protocol):
    """Anything that can read one receipt image."""

    async def parse(self, path: str | Path) -> ParsedReceipt:
        ...


@dataclass
class ReceiptResult:
    """Outcome for one receipt of a batch."""

    source: str
    receipt: ParsedReceipt | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.receipt is not None


async def parse_receipts(parser: ReceiptParser, paths: Sequence[str | Path]) -> list[ReceiptResult]:
    """Parse several receipts concurrently.

    Returns one result per path, in input order. A receipt that fails carries
    its error message instead of a parsed receipt.
    """
    outcomes = await asyncio.gather(
        *(parser.parse(path) for path in paths),
        return_exceptions=True,
    )
    results: list[ReceiptResult] = []
    for path, outcome in zip(paths, outcomes):
        if isinstance(outcome, ReceiptParseError):
            logger.warning("Receipt %s failed: %s", path, outcome)
            results.append(ReceiptResult(source=str(path), error=str(outcome)))
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            results.append(ReceiptResult(source=str(path), receipt=outcome))
    return results
