"""
Invoicing — line pricing, VAT totals and invoice numbering.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, timedelta

from jayloy.models.records import Invoice, InvoiceItem, InvoiceStatus

DEFAULT_VAT_RATE = 0.10
DEFAULT_PAYMENT_TERMS_DAYS = 30


def price_items(items: Sequence[InvoiceItem]) -> list[InvoiceItem]:
    """Set each line's amount to quantity × rate."""
    return [item.model_copy(update={"amount": item.quantity * item.rate}) for item in items]


def invoice_totals(
    items: Sequence[InvoiceItem],
    vat_rate: float = DEFAULT_VAT_RATE,
) -> tuple[float, float, float]:
    """Return ``(subtotal, tax, total)`` for the given lines."""
    subtotal = sum(item.quantity * item.rate for item in items)
    tax = subtotal * vat_rate
    return subtotal, tax, subtotal + tax


def next_invoice_number(now: datetime) -> str:
    """Timestamp-based invoice number, e.g. ``INV-1736899200000``."""
    return f"INV-{int(now.timestamp() * 1000)}"


def build_invoice(
    customer_name: str,
    items: Sequence[InvoiceItem],
    issue_date: date,
    *,
    invoice_number: str,
    due_date: date | None = None,
    customer_email: str = "",
    customer_address: str = "",
    currency: str = "USD",
    status: InvoiceStatus = InvoiceStatus.DRAFT,
    notes: str | None = None,
    vat_rate: float = DEFAULT_VAT_RATE,
    payment_terms_days: int = DEFAULT_PAYMENT_TERMS_DAYS,
) -> Invoice:
    """Create an invoice with priced lines and computed totals.

    The due date defaults to ``payment_terms_days`` after the issue date.
    """
    priced = price_items(items)
    subtotal, tax, total = invoice_totals(priced, vat_rate)
    return Invoice(
        invoice_number=invoice_number,
        customer_name=customer_name,
        customer_email=customer_email,
        customer_address=customer_address,
        issue_date=issue_date,
        due_date=due_date or issue_date + timedelta(days=payment_terms_days),
        items=priced,
        subtotal=subtotal,
        tax=tax,
        total=total,
        currency=currency,
        status=status,
        notes=notes,
    )
