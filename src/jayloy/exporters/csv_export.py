"""
CSV exporter — spreadsheet-friendly dumps of invoices, expenses, payroll and
the profit & loss statement.

Quoting follows a minimal rule: only string values containing a comma or a
double quote are wrapped in quotes, with inner quotes doubled.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date
from enum import Enum
from typing import Any

from jayloy.analyzers.payroll import PayrollSummary
from jayloy.models.metrics import FinanceMetrics, MonthlyPoint
from jayloy.models.records import Expense, Invoice


def _format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, str):
        if "," in value or '"' in value:
            return '"' + value.replace('"', '""') + '"'
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def export_to_csv(rows: Sequence[Mapping[str, Any]]) -> str:
    """Serialize rows to CSV text.

    The header is taken from the first row's keys. Later rows missing one of
    those keys get an empty cell; keys the first row lacks are dropped.
    An empty input yields an empty string.
    """
    if not rows:
        return ""
    headers = list(rows[0].keys())
    lines = [",".join(headers)]
    for row in rows:
        lines.append(",".join(_format_value(row.get(header)) for header in headers))
    return "\n".join(lines)


def csv_filename(prefix: str, period: str) -> str:
    """File name for an export, e.g. ``invoices_last_month.csv``.

    Only the first ``-`` of the period is replaced.
    """
    return f"{prefix}_{period.replace('-', '_', 1)}.csv"


def export_invoices_to_csv(invoices: Sequence[Invoice]) -> str:
    return export_to_csv([
        {
            "Invoice Number": inv.invoice_number,
            "Customer Name": inv.customer_name,
            "Customer Email": inv.customer_email,
            "Issue Date": inv.issue_date,
            "Due Date": inv.due_date,
            "Status": inv.status,
            "Subtotal": inv.subtotal,
            "Tax": inv.tax,
            "Total": inv.total,
            "Currency": inv.currency,
            "Notes": inv.notes or "",
        }
        for inv in invoices
    ])


def export_expenses_to_csv(expenses: Sequence[Expense]) -> str:
    return export_to_csv([
        {
            "Vendor": exp.vendor,
            "Date": exp.date,
            "Description": exp.description,
            "Category": exp.category,
            "Type": exp.type,
            "Amount": exp.amount,
            "Tax": exp.tax,
            "Currency": exp.currency,
        }
        for exp in expenses
    ])


def export_profit_loss_to_csv(
    monthly_data: Sequence[MonthlyPoint],
    metrics: FinanceMetrics,
    period: str,
) -> str:
    """Profit & loss statement: a summary block then the monthly breakdown.

    The two blocks have their own header rows and are separated by a blank
    line.
    """
    summary = export_to_csv([
        {
            "Report Type": "Profit & Loss Statement",
            "Period": period,
            "Total Revenue": metrics.total_revenue,
            "Total Expenses": metrics.total_expenses,
            "Net Profit": metrics.net_profit,
            "Profit Margin %": metrics.profit_margin,
        }
    ])
    monthly = export_monthly_to_csv(monthly_data)
    if not monthly:
        return summary
    return f"{summary}\n\n{monthly}"


def export_monthly_to_csv(monthly_data: Sequence[MonthlyPoint]) -> str:
    return export_to_csv([
        {
            "Month": point.month,
            "Revenue": point.revenue,
            "Expenses": point.expenses,
            "Profit": point.profit,
        }
        for point in monthly_data
    ])


def export_payroll_to_csv(summary: PayrollSummary) -> str:
    return export_to_csv([
        {
            "Month": summary.month,
            "Employee": line.name,
            "Position": line.position,
            "Base Salary": line.base_salary,
            "Allowances": line.allowances,
            "Gross Salary": line.gross,
            "NSSF": line.nssf,
            "Tax": line.tax,
            "Net Salary": line.net,
        }
        for line in summary.lines
    ])
