"""
Report models — finance metrics, reporting windows, tax summary.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

# Display colours for category breakdowns, assigned by position.
CATEGORY_PALETTE: tuple[str, ...] = (
    "#3B82F6",
    "#10B981",
    "#F59E0B",
    "#EF4444",
    "#8B5CF6",
    "#EC4899",
    "#6366F1",
    "#F472B6",
    "#FBBF24",
)


class ReportWindow(BaseModel):
    """The period a report covers.

    Omitted bounds are derived from the caller's reference date: ``end``
    defaults to the end of that month and ``start`` to the first day of the
    month ``months - 1`` months before ``end``. A start after the end is
    allowed and simply matches no records.
    """

    months: int = Field(default=6, ge=1)
    start: date | None = None
    end: date | None = None


class MonthlyPoint(BaseModel):
    """One calendar month of the trailing series."""

    month: str  # "Jan 2025"
    revenue: float = 0.0
    expenses: float = 0.0
    profit: float = 0.0


class CategorySlice(BaseModel):
    """A category's share of a breakdown chart."""

    name: str
    value: float
    color: str


class FinanceMetrics(BaseModel):
    """Headline figures, monthly series and expense breakdown for a window."""

    total_revenue: float = 0.0
    total_expenses: float = 0.0
    net_profit: float = 0.0
    profit_margin: float = 0.0  # Percent
    outstanding_invoices: int = 0
    outstanding_amount: float = 0.0
    monthly_data: list[MonthlyPoint] = Field(default_factory=list)
    expense_categories: list[CategorySlice] = Field(default_factory=list)
    period_start: date | None = None
    period_end: date | None = None


class TaxSummary(BaseModel):
    """VAT owed for a reporting window."""

    vat_rate: float
    total_sales: float
    vat_output: float
    total_purchases: float
    vat_input: float
    net_vat_due: float
