"""Tests for receipt response parsing and batch handling."""

from datetime import date
from pathlib import Path

import pytest

from jayloy.models.records import TransactionKind
from jayloy.receipts import (
    ParsedReceipt,
    ReceiptParseError,
    clean_llm_json,
    parse_receipt_text,
    parse_receipts,
    read_image,
)

FENCED_REPLY = """```json
{
  "vendor": "Brown Coffee",
  "type": "EXPENSE",
  "description": "Team coffee meeting",
  "date": "2025-01-14",
  "total_amount": 7.5,
  "items": [
    {"id": 1, "name": "Iced Latte", "amount": 3.75, "currency": "USD"},
    {"id": 2, "name": "កាហ្វេ", "amount": 3.75, "currency": "USD"}
  ]
}
```"""


class TestCleanLLMJson:
    def test_strips_json_fence(self) -> None:
        assert clean_llm_json('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_strips_bare_fence(self) -> None:
        assert clean_llm_json('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_strips_surrounding_prose(self) -> None:
        assert clean_llm_json('Here you go: {"a": {"b": 2}} Hope that helps!') == '{"a": {"b": 2}}'

    def test_plain_json_unchanged(self) -> None:
        assert clean_llm_json('  {"a": 1}  ') == '{"a": 1}'


class TestParseReceiptText:
    def test_fenced_reply(self) -> None:
        receipt = parse_receipt_text(FENCED_REPLY)

        assert receipt.vendor == "Brown Coffee"
        assert receipt.type == TransactionKind.EXPENSE
        assert receipt.receipt_date == date(2025, 1, 14)
        assert receipt.total_amount == 7.5
        assert [item.name for item in receipt.items] == ["Iced Latte", "កាហ្វេ"]

    def test_missing_vendor_and_null_description(self) -> None:
        receipt = parse_receipt_text('{"vendor": null, "description": null, "total_amount": 3}')
        assert receipt.vendor == "Unknown Vendor"
        assert receipt.description is None
        assert receipt.receipt_date is None

    def test_income_type(self) -> None:
        assert parse_receipt_text('{"type": "Income"}').type == TransactionKind.INCOME

    def test_not_json(self) -> None:
        with pytest.raises(ReceiptParseError):
            parse_receipt_text("Sorry, I cannot read this receipt.")

    def test_json_array_rejected(self) -> None:
        with pytest.raises(ReceiptParseError):
            parse_receipt_text("[1, 2, 3]")

    def test_bad_field_rejected(self) -> None:
        with pytest.raises(ReceiptParseError):
            parse_receipt_text('{"total_amount": "a lot"}')


class TestToExpense:
    def test_draft_expense(self) -> None:
        expense = parse_receipt_text(FENCED_REPLY).to_expense(
            fallback_date=date(2025, 2, 1),
            category="Meals & Entertainment",
            receipt_url="receipt.jpg",
        )

        assert expense.vendor == "Brown Coffee"
        assert expense.amount == 7.5
        assert expense.date == date(2025, 1, 14)
        assert expense.category == "Meals & Entertainment"
        assert expense.receipt_url == "receipt.jpg"
        assert len(expense.items) == 2
        assert expense.receipt_data["date"] == "2025-01-14"

    def test_fallback_date(self) -> None:
        expense = ParsedReceipt(total_amount=1).to_expense(fallback_date=date(2025, 2, 1))
        assert expense.date == date(2025, 2, 1)
        assert expense.description == ""


class TestReadImage:
    def test_reads_bytes_and_mime(self, tmp_path: Path) -> None:
        image = tmp_path / "receipt.png"
        image.write_bytes(b"\x89PNG")
        assert read_image(image) == (b"\x89PNG", "image/png")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ReceiptParseError):
            read_image(tmp_path / "missing.jpg")


class FakeParser:
    """Parses by file name: names containing 'bad' fail."""

    async def parse(self, path: str | Path) -> ParsedReceipt:
        if "bad" in str(path):
            raise ReceiptParseError(f"could not read {path}")
        return ParsedReceipt(vendor=str(path), total_amount=1.0)


class CrashingParser:
    async def parse(self, path: str | Path) -> ParsedReceipt:
        raise RuntimeError("bug")


class TestParseReceipts:
    @pytest.mark.asyncio
    async def test_one_failure_does_not_affect_others(self) -> None:
        results = await parse_receipts(FakeParser(), ["a.jpg", "bad.jpg", "c.jpg"])

        assert [r.ok for r in results] == [True, False, True]
        assert results[0].receipt.vendor == "a.jpg"
        assert results[1].error == "could not read bad.jpg"
        assert results[2].source == "c.jpg"

    @pytest.mark.asyncio
    async def test_empty_batch(self) -> None:
        assert await parse_receipts(FakeParser(), []) == []

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(self) -> None:
        with pytest.raises(RuntimeError):
            await parse_receipts(CrashingParser(), ["a.jpg"])
