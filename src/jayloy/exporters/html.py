"""
HTML report exporter.

Generates a standalone HTML financial report from FinanceMetrics: four
metric cards, the monthly breakdown and the expense categories. Inline
styles only, so the page prints or converts to PDF without assets.
"""

from __future__ import annotations

import html

from jayloy.models.metrics import CategorySlice, FinanceMetrics, MonthlyPoint

_GREEN = "#059669"
_RED = "#dc2626"
_CELL = "padding: 12px; border-bottom: 1px solid #e5e7eb;"
_HEAD = "padding: 12px; border-bottom: 1px solid #d1d5db;"


def _escape(text: str) -> str:
    """HTML-escape a string."""
    return html.escape(str(text))


def _currency(amount: float) -> str:
    return f"${amount:,.2f}"


def _card(title: str, value: str, background: str, color: str) -> str:
    return f"""
        <div style="background: {background}; padding: 15px; border-radius: 8px;">
          <h3 style="margin: 0 0 10px 0; color: {color};">{_escape(title)}</h3>
          <p style="font-size: 24px; font-weight: bold; margin: 0; color: {color};">{value}</p>
        </div>"""


def _monthly_rows(points: list[MonthlyPoint]) -> str:
    rows = []
    for point in points:
        profit_color = _GREEN if point.profit >= 0 else _RED
        rows.append(
            f"""
            <tr>
              <td style="{_CELL}">{_escape(point.month)}</td>
              <td style="{_CELL} text-align: right;">{_currency(point.revenue)}</td>
              <td style="{_CELL} text-align: right;">{_currency(point.expenses)}</td>
              <td style="{_CELL} text-align: right; color: {profit_color};">{_currency(point.profit)}</td>
            </tr>"""
        )
    return "".join(rows)


def _category_table(slices: list[CategorySlice]) -> str:
    if not slices:
        return ""
    rows = "".join(
        f"""
            <tr>
              <td style="{_CELL}"><span style="color: {s.color};">&#9679;</span> {_escape(s.name)}</td>
              <td style="{_CELL} text-align: right;">{_currency(s.value)}</td>
            </tr>"""
        for s in slices
    )
    return f"""
      <h2 style="color: #1f2937; margin-bottom: 15px;">Expense Categories</h2>
      <table style="width: 100%; border-collapse: collapse;">
        <thead>
          <tr style="background: #f3f4f6;">
            <th style="{_HEAD} text-align: left;">Category</th>
            <th style="{_HEAD} text-align: right;">Amount</th>
          </tr>
        </thead>
        <tbody>{rows}
        </tbody>
      </table>"""


def render_html(report_type: str, metrics: FinanceMetrics, period: str) -> str:
    """Render FinanceMetrics as a standalone HTML page."""
    profitable = metrics.net_profit >= 0
    profit_color = _GREEN if profitable else _RED

    cards = "".join([
        _card("Total Revenue", _currency(metrics.total_revenue), "#dbeafe", "#1e40af"),
        _card("Total Expenses", _currency(metrics.total_expenses), "#fee2e2", _RED),
        _card(
            f"Net {'Profit' if profitable else 'Loss'}",
            _currency(abs(metrics.net_profit)),
            "#d1fae5" if profitable else "#fee2e2",
            profit_color,
        ),
        _card("Profit Margin", f"{metrics.profit_margin:.1f}%", "#fef3c7", "#d97706"),
    ])

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>{_escape(report_type)} ({_escape(period)})</title>
</head>
<body>
    <div style="font-family: Arial, sans-serif; padding: 20px; max-width: 800px;">
      <h1 style="color: #1f2937; margin-bottom: 10px;">{_escape(report_type)}</h1>
      <p style="color: #6b7280; margin-bottom: 30px;">Period: {_escape(period)}</p>

      <div style="display: grid; grid-template-columns: repeat(2, 1fr); gap: 20px; margin-bottom: 30px;">{cards}
      </div>

      <h2 style="color: #1f2937; margin-bottom: 15px;">Monthly Breakdown</h2>
      <table style="width: 100%; border-collapse: collapse; margin-bottom: 30px;">
        <thead>
          <tr style="background: #f3f4f6;">
            <th style="{_HEAD} text-align: left;">Month</th>
            <th style="{_HEAD} text-align: right;">Revenue</th>
            <th style="{_HEAD} text-align: right;">Expenses</th>
            <th style="{_HEAD} text-align: right;">Profit</th>
          </tr>
        </thead>
        <tbody>{_monthly_rows(metrics.monthly_data)}
        </tbody>
      </table>
{_category_table(metrics.expense_categories)}
    </div>
</body>
</html>"""
