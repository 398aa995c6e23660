"""Exporters package — convert reports to various output formats."""
from jayloy.exporters.csv_export import (
    csv_filename,
    export_expenses_to_csv,
    export_invoices_to_csv,
    export_monthly_to_csv,
    export_payroll_to_csv,
    export_profit_loss_to_csv,
    export_to_csv,
)
from jayloy.exporters.html import render_html
from jayloy.exporters.markdown import render_markdown

__all__ = [
    "csv_filename",
    "export_expenses_to_csv",
    "export_invoices_to_csv",
    "export_monthly_to_csv",
    "export_payroll_to_csv",
    "export_profit_loss_to_csv",
    "export_to_csv",
    "render_html",
    "render_markdown",
]
