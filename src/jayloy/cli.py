"""
Jayloy CLI — command-line interface.

Usage:
    jayloy seed --seed 42
    jayloy metrics --period last-month --output report.html
    jayloy import-statement statement.csv
    jayloy reconcile
    jayloy parse-receipt receipt.jpg --save
"""

from __future__ import annotations

import asyncio
from datetime import date
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from jayloy import __version__

app = typer.Typer(
    name="jayloy",
    help="📒 Jayloy — bookkeeping for small businesses in Cambodia",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()

CONFIG_OPTION = typer.Option(
    "jayloy.yaml",
    "--config",
    "-c",
    help="Path to config file",
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold]Jayloy[/bold] v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        help="Show version",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
) -> None:
    """📒 Jayloy — invoices, expenses, payroll and reports."""
    from jayloy.logging_config import configure_logging

    configure_logging(verbose=verbose)


def _dashboard(config: str):  # noqa: ANN202
    from jayloy.dashboard import Dashboard

    config_path = config if Path(config).exists() else None
    return Dashboard.from_config(config_path)


def _parse_date(value: str | None, option: str) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        console.print(f"[red]Error: {option} must be a date like 2025-01-31, got '{value}'[/red]")
        raise typer.Exit(1)


@app.command()
def metrics(
    config: str = CONFIG_OPTION,
    period: str = typer.Option(
        None,
        "--period",
        "-p",
        help="current-month, last-month, last-3-months or ytd",
    ),
    months: int = typer.Option(
        None,
        "--months",
        "-m",
        help="Length of the monthly series",
        min=1,
    ),
    as_of: str = typer.Option(
        None,
        "--as-of",
        help="Reference date (YYYY-MM-DD), defaults to today",
    ),
    output: str = typer.Option(
        None,
        "--output",
        "-o",
        help="Save the report (.md, .html, .csv)",
    ),
) -> None:
    """Show revenue, expenses and profit for a period."""
    from jayloy.analyzers.periods import ReportPeriod

    reference = _parse_date(as_of, "--as-of")
    if period is not None:
        try:
            ReportPeriod(period)
        except ValueError:
            choices = ", ".join(p.value for p in ReportPeriod)
            console.print(f"[red]Error: unknown period '{period}' (choose from {choices})[/red]")
            raise typer.Exit(1)

    dashboard = _dashboard(config)
    if months is not None:
        dashboard.config.reports.months = months
    result = dashboard.metrics(period=period, as_of=reference)
    label = period or f"last-{dashboard.config.reports.months}-months"

    console.print(Panel.fit(
        "[bold blue]📊 Jayloy[/bold blue] — Financial Report",
        subtitle=f"{result.period_start} to {result.period_end}",
    ))
    _display_metrics(result)

    if output:
        _save_metrics(dashboard, result, label, output)


@app.command()
def payroll(
    config: str = CONFIG_OPTION,
    month: str = typer.Option(
        None,
        "--month",
        help="Payroll month (YYYY-MM), defaults to the current month",
    ),
    output: str = typer.Option(
        None,
        "--output",
        "-o",
        help="Save the payroll run as CSV",
    ),
) -> None:
    """Show the monthly payroll for active employees."""
    from jayloy.exporters.csv_export import export_payroll_to_csv

    summary = _dashboard(config).payroll(month)

    table = Table(title=f"Payroll {summary.month}")
    table.add_column("Employee", style="bold")
    table.add_column("Position")
    table.add_column("Gross", justify="right")
    table.add_column("NSSF", justify="right")
    table.add_column("Tax", justify="right")
    table.add_column("Net", justify="right", style="green")
    for line in summary.lines:
        table.add_row(
            line.name,
            line.position,
            f"${line.gross:,.2f}",
            f"${line.nssf:,.2f}",
            f"${line.tax:,.2f}",
            f"${line.net:,.2f}",
        )
    console.print(table)
    console.print(
        f"{summary.headcount} employees · gross [bold]${summary.total_gross:,.2f}[/bold] · "
        f"deductions ${summary.total_deductions:,.2f} · net [bold green]${summary.total_net:,.2f}[/bold green]"
    )

    if output:
        Path(output).write_text(export_payroll_to_csv(summary))
        console.print(f"[green]✓[/green] Payroll saved to [bold]{output}[/bold]")


@app.command()
def inventory(config: str = CONFIG_OPTION) -> None:
    """Show stock value and reorder alerts."""
    report = _dashboard(config).inventory()

    console.print(
        f"[bold]{report.product_count}[/bold] products · stock value "
        f"[bold]${report.total_value:,.2f}[/bold]"
    )
    if report.out_of_stock:
        console.print(f"[red]Out of stock:[/red] {', '.join(p.name for p in report.out_of_stock)}")
    if report.low_stock:
        console.print(f"[yellow]Low stock:[/yellow] {', '.join(p.name for p in report.low_stock)}")

    if report.top_stock:
        table = Table(title="Top Stock by Value")
        table.add_column("Product", style="bold")
        table.add_column("Stock", justify="right")
        table.add_column("Reorder At", justify="right")
        table.add_column("Value", justify="right")
        for position in report.top_stock:
            table.add_row(
                position.name,
                str(position.stock),
                str(position.reorder_level),
                f"${position.value:,.2f}",
            )
        console.print(table)


@app.command()
def reconcile(config: str = CONFIG_OPTION) -> None:
    """List unreconciled bank lines with suggested matches."""
    summary, suggestions = _dashboard(config).reconciliation()

    console.print(
        f"Reconciled [bold]{len(summary.reconciled)}[/bold] of {summary.total_entries} "
        f"bank lines ({summary.reconciliation_rate:.0%})"
    )
    if not summary.unreconciled:
        return

    table = Table(title="Unreconciled Bank Lines", show_lines=True)
    table.add_column("ID", style="dim")
    table.add_column("Date")
    table.add_column("Description")
    table.add_column("Amount", justify="right")
    table.add_column("Suggested Matches")
    for txn in summary.unreconciled:
        matches = suggestions.get(txn.id or "", [])
        color = "green" if txn.is_credit else "red"
        table.add_row(
            txn.id or "",
            str(txn.date),
            txn.description,
            f"[{color}]${txn.amount:,.2f}[/{color}]",
            "\n".join(f"{m.kind.value}: {m.label} (${m.amount:,.2f})" for m in matches) or "-",
        )
    console.print(table)


@app.command("import-statement")
def import_statement(
    file: str = typer.Argument(..., help="Bank statement CSV"),
    config: str = CONFIG_OPTION,
) -> None:
    """Import bank statement lines from a CSV file."""
    if not Path(file).exists():
        console.print(f"[red]Error: file not found: {file}[/red]")
        raise typer.Exit(1)

    dashboard = _dashboard(config)
    with console.status("[bold green]Importing statement...[/bold green]"):
        lines = dashboard.import_statement_sync(file)
    console.print(f"[green]✓[/green] Imported [bold]{len(lines)}[/bold] bank lines")


@app.command("parse-receipt")
def parse_receipt(
    files: list[str] = typer.Argument(..., help="Receipt images"),
    config: str = CONFIG_OPTION,
    save: bool = typer.Option(
        False,
        "--save",
        help="Store each parsed receipt as an expense",
    ),
    category: str = typer.Option(
        "Other",
        "--category",
        help="Expense category for saved receipts",
    ),
) -> None:
    """Read receipt images into expense drafts."""
    dashboard = _dashboard(config)
    with console.status("[bold green]Reading receipts...[/bold green]"):
        results = asyncio.run(dashboard.parse_receipts(files))

    failures = 0
    for result in results:
        if result.receipt is None:
            failures += 1
            console.print(f"[red]✗ {result.source}: {result.error}[/red]")
            continue
        receipt = result.receipt
        console.print(
            f"[green]✓[/green] [bold]{result.source}[/bold]: {receipt.vendor} · "
            f"{receipt.receipt_date or 'no date'} · ${receipt.total_amount:,.2f} "
            f"({len(receipt.items)} items)"
        )
        if save:
            expense = dashboard.record_receipt(result, category=category)
            console.print(f"  saved as expense [dim]{expense.id}[/dim]")

    if failures == len(results):
        raise typer.Exit(1)


@app.command()
def seed(
    config: str = CONFIG_OPTION,
    as_of: str = typer.Option(
        None,
        "--as-of",
        help="Generate records in the 180 days before this date",
    ),
    random_seed: int = typer.Option(
        None,
        "--seed",
        help="Random seed for a reproducible data set",
    ),
) -> None:
    """Replace invoices and expenses with sample data."""
    reference = _parse_date(as_of, "--as-of")
    invoices, expenses = _dashboard(config).seed(as_of=reference, seed=random_seed)
    console.print(f"[green]✓[/green] Loaded {invoices} sample invoices and {expenses} expenses")


@app.command()
def export(
    kind: str = typer.Argument(..., help="invoices or expenses"),
    config: str = CONFIG_OPTION,
    period: str = typer.Option(
        "all-time",
        "--period",
        "-p",
        help="Period label used in the file name",
    ),
    output: str = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file (defaults to <kind>_<period>.csv)",
    ),
) -> None:
    """Export invoices or expenses as CSV."""
    from jayloy.exporters.csv_export import (
        csv_filename,
        export_expenses_to_csv,
        export_invoices_to_csv,
    )

    dashboard = _dashboard(config)
    if kind == "invoices":
        content = export_invoices_to_csv(dashboard.records.invoices)
    elif kind == "expenses":
        content = export_expenses_to_csv(dashboard.records.expenses)
    else:
        console.print(f"[red]Error: can only export invoices or expenses, not '{kind}'[/red]")
        raise typer.Exit(1)

    path = Path(output or csv_filename(kind, period))
    path.write_text(content)
    console.print(f"[green]✓[/green] Exported {kind} to [bold]{path}[/bold]")


def _display_metrics(result) -> None:  # noqa: ANN001
    """Display metrics in the terminal."""
    table = Table(title="Summary", show_lines=True)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Total Revenue", f"${result.total_revenue:,.2f}")
    table.add_row("Total Expenses", f"${result.total_expenses:,.2f}")
    profit_color = "green" if result.net_profit >= 0 else "red"
    table.add_row("Net Profit", f"[{profit_color}]${result.net_profit:,.2f}[/{profit_color}]")
    table.add_row("Profit Margin", f"{result.profit_margin:.1f}%")
    table.add_row(
        "Outstanding Invoices",
        f"{result.outstanding_invoices} (${result.outstanding_amount:,.2f})",
    )
    console.print(table)

    monthly = Table(title="Monthly Breakdown")
    monthly.add_column("Month")
    monthly.add_column("Revenue", justify="right")
    monthly.add_column("Expenses", justify="right")
    monthly.add_column("Profit", justify="right")
    for point in result.monthly_data:
        monthly.add_row(
            point.month,
            f"${point.revenue:,.2f}",
            f"${point.expenses:,.2f}",
            f"${point.profit:,.2f}",
        )
    console.print(monthly)

    if result.expense_categories:
        categories = Table(title="Expense Categories")
        categories.add_column("Category")
        categories.add_column("Amount", justify="right")
        for slice_ in result.expense_categories:
            categories.add_row(f"[{slice_.color}]●[/{slice_.color}] {slice_.name}", f"${slice_.value:,.2f}")
        console.print(categories)


def _save_metrics(dashboard, result, period: str, output: str) -> None:  # noqa: ANN001
    """Save the metrics report to file."""
    from jayloy.exporters.csv_export import export_profit_loss_to_csv
    from jayloy.exporters.html import render_html
    from jayloy.exporters.markdown import render_markdown

    path = Path(output)
    if path.suffix == ".html":
        content = render_html("Financial Report", result, period)
    elif path.suffix == ".csv":
        content = export_profit_loss_to_csv(result.monthly_data, result, period)
    else:
        content = render_markdown(result, period, tax=dashboard.tax_summary(result))

    path.write_text(content)
    console.print(f"[green]✓[/green] Report saved to [bold]{path}[/bold]")


if __name__ == "__main__":
    app()
