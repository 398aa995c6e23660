"""
Jayloy analyzers — pure computation modules.

Nothing here reads the clock or touches storage; callers pass in records
and a reference date.
"""

from jayloy.analyzers.finance_metrics import compute_metrics, tax_summary
from jayloy.analyzers.inventory import InventoryReport, StockStatus, inventory_report, stock_status
from jayloy.analyzers.invoicing import build_invoice, invoice_totals, next_invoice_number
from jayloy.analyzers.payroll import (
    PayrollRules,
    PayrollSummary,
    Payslip,
    build_employee,
    compute_payslip,
    summarize_payroll,
)
from jayloy.analyzers.periods import ReportPeriod, resolve_window, window_for_period
from jayloy.analyzers.reconciliation import (
    BankReconciler,
    MatchKind,
    ReconciliationMatch,
    ReconciliationSummary,
)

__all__ = [
    "BankReconciler",
    "InventoryReport",
    "MatchKind",
    "PayrollRules",
    "PayrollSummary",
    "Payslip",
    "ReconciliationMatch",
    "ReconciliationSummary",
    "ReportPeriod",
    "StockStatus",
    "build_employee",
    "build_invoice",
    "compute_metrics",
    "compute_payslip",
    "inventory_report",
    "invoice_totals",
    "next_invoice_number",
    "resolve_window",
    "stock_status",
    "summarize_payroll",
    "tax_summary",
    "window_for_period",
]
