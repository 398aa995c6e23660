"""
Finance Metrics — revenue, expense and profit figures for a reporting window.

Produces the dashboard's headline numbers:
1. **Totals** — paid revenue, expenses, net profit and margin for the window.
2. **Receivables** — count and value of invoices sent but not yet paid.
3. **Monthly series** — revenue/expenses/profit for the trailing N calendar
   months, zero-filled so every month is present.
4. **Category breakdown** — expense totals per category, coloured in
   first-seen order.

Pure computation: the reference date is passed in, the clock is never read.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import date

from jayloy.analyzers.periods import end_of_month, month_label, resolve_window, trailing_months
from jayloy.models.metrics import (
    CATEGORY_PALETTE,
    CategorySlice,
    FinanceMetrics,
    MonthlyPoint,
    ReportWindow,
    TaxSummary,
)
from jayloy.models.records import Expense, Invoice

logger = logging.getLogger("jayloy.analyzers.finance_metrics")


def color_slices(
    totals: Iterable[tuple[str, float]],
    palette: Sequence[str] = CATEGORY_PALETTE,
) -> list[CategorySlice]:
    """Attach palette colours to ``(name, value)`` pairs by position."""
    return [
        CategorySlice(name=name, value=value, color=palette[index % len(palette)])
        for index, (name, value) in enumerate(totals)
    ]


def _in_range(d: date, start: date, end: date) -> bool:
    return start <= d <= end


def compute_metrics(
    invoices: Sequence[Invoice],
    expenses: Sequence[Expense],
    window: ReportWindow | None = None,
    *,
    as_of: date,
    palette: Sequence[str] = CATEGORY_PALETTE,
) -> FinanceMetrics:
    """Aggregate invoices and expenses into a metrics summary.

    Args:
        invoices: Invoices in any order.
        expenses: Expense-book entries in any order.
        window: Reporting window; defaults to the six calendar months
            ending with the month of ``as_of``.
        as_of: Reference date used to resolve omitted window bounds.
        palette: Colours for the category breakdown.

    Returns:
        FinanceMetrics for the window. ``monthly_data`` always holds exactly
        ``window.months`` entries, ending with the month of the window end.
        Each month only counts records that also fall inside the window, so
        months before an explicit ``start`` come out as zero.
    """
    window = window or ReportWindow()
    start, end = resolve_window(window, as_of)

    in_window_invoices = [inv for inv in invoices if _in_range(inv.issue_date, start, end)]
    in_window_expenses = [exp for exp in expenses if _in_range(exp.date, start, end)]
    paid = [inv for inv in in_window_invoices if inv.is_paid]
    spent = [exp for exp in in_window_expenses if exp.is_expense]

    total_revenue = sum(inv.total for inv in paid)
    total_expenses = sum(exp.amount for exp in spent)
    net_profit = total_revenue - total_expenses
    profit_margin = (net_profit / total_revenue) * 100 if total_revenue > 0 else 0.0

    outstanding = [inv for inv in in_window_invoices if inv.is_outstanding]

    monthly_data: list[MonthlyPoint] = []
    for month_start in trailing_months(end, window.months):
        lo = max(month_start, start)
        hi = min(end_of_month(month_start), end)
        revenue = sum(inv.total for inv in paid if _in_range(inv.issue_date, lo, hi))
        spend = sum(exp.amount for exp in spent if _in_range(exp.date, lo, hi))
        monthly_data.append(
            MonthlyPoint(
                month=month_label(month_start),
                revenue=revenue,
                expenses=spend,
                profit=revenue - spend,
            )
        )

    by_category: dict[str, float] = {}
    for exp in spent:
        by_category[exp.category] = by_category.get(exp.category, 0) + exp.amount

    logger.debug(
        "Metrics %s..%s: %d invoices, %d expenses in window",
        start,
        end,
        len(in_window_invoices),
        len(in_window_expenses),
    )

    return FinanceMetrics(
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        net_profit=net_profit,
        profit_margin=profit_margin,
        outstanding_invoices=len(outstanding),
        outstanding_amount=sum(inv.total for inv in outstanding),
        monthly_data=monthly_data,
        expense_categories=color_slices(by_category.items(), palette),
        period_start=start,
        period_end=end,
    )


def tax_summary(metrics: FinanceMetrics, vat_rate: float = 0.10) -> TaxSummary:
    """VAT output on sales, VAT input on purchases, and the net due."""
    return TaxSummary(
        vat_rate=vat_rate,
        total_sales=metrics.total_revenue,
        vat_output=metrics.total_revenue * vat_rate,
        total_purchases=metrics.total_expenses,
        vat_input=metrics.total_expenses * vat_rate,
        net_vat_due=(metrics.total_revenue - metrics.total_expenses) * vat_rate,
    )
