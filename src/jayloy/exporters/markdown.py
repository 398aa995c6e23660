"""
Markdown report exporter.

Generates a Markdown financial report from FinanceMetrics, suitable for
GitHub, Notion, or any Markdown viewer.
"""

from __future__ import annotations

from jayloy.models.metrics import FinanceMetrics, TaxSummary


def _cell(text: str) -> str:
    """Escape pipes so a value stays in one table cell."""
    return text.replace("|", "\\|")


def render_markdown(
    metrics: FinanceMetrics,
    period: str,
    *,
    report_type: str = "Financial Report",
    tax: TaxSummary | None = None,
) -> str:
    """Render FinanceMetrics as Markdown."""
    lines: list[str] = []

    lines.append(f"# 📊 {report_type}")
    lines.append("")
    lines.append(f"*Period: {period}*")
    if metrics.period_start and metrics.period_end:
        lines.append(f"*Covering {metrics.period_start} to {metrics.period_end}*")
    lines.append("")

    net_label = "Net Profit" if metrics.net_profit >= 0 else "Net Loss"
    lines.append("## Summary")
    lines.append("")
    lines.append("| Metric | Value |")
    lines.append("|--------|-------|")
    lines.append(f"| **Total Revenue** | ${metrics.total_revenue:,.2f} |")
    lines.append(f"| **Total Expenses** | ${metrics.total_expenses:,.2f} |")
    lines.append(f"| **{net_label}** | ${abs(metrics.net_profit):,.2f} |")
    lines.append(f"| **Profit Margin** | {metrics.profit_margin:.1f}% |")
    lines.append(
        f"| **Outstanding Invoices** | {metrics.outstanding_invoices} "
        f"(${metrics.outstanding_amount:,.2f}) |"
    )
    lines.append("")

    lines.append("## 📅 Monthly Breakdown")
    lines.append("")
    lines.append("| Month | Revenue | Expenses | Profit |")
    lines.append("|-------|--------:|---------:|-------:|")
    for point in metrics.monthly_data:
        lines.append(
            f"| {_cell(point.month)} | ${point.revenue:,.2f} | ${point.expenses:,.2f} | ${point.profit:,.2f} |"
        )
    lines.append("")

    if metrics.expense_categories:
        lines.append("## 🏷️ Expense Categories")
        lines.append("")
        lines.append("| Category | Amount |")
        lines.append("|----------|-------:|")
        for category in metrics.expense_categories:
            lines.append(f"| {_cell(category.name)} | ${category.value:,.2f} |")
        lines.append("")

    if tax is not None:
        lines.append(f"## 🧾 Tax Summary (VAT {tax.vat_rate:.0%})")
        lines.append("")
        lines.append(f"- **VAT Output** on ${tax.total_sales:,.2f} sales: ${tax.vat_output:,.2f}")
        lines.append(f"- **VAT Input** on ${tax.total_purchases:,.2f} purchases: ${tax.vat_input:,.2f}")
        lines.append(f"- **Net VAT Due:** ${tax.net_vat_due:,.2f}")
        lines.append("")

    lines.append("---")
    lines.append("*Generated by Jayloy*")
    return "\n".join(lines)
