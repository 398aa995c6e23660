"""
Jayloy — Dashboard facade.

The Dashboard ties configuration, the record store and the analyzers
together. It is the one place that reads the clock: every analyzer is
handed an explicit reference date.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import InitVar, dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

from jayloy.analyzers.finance_metrics import compute_metrics, tax_summary
from jayloy.analyzers.inventory import InventoryReport, inventory_report
from jayloy.analyzers.invoicing import build_invoice, next_invoice_number
from jayloy.analyzers.payroll import PayrollSummary, build_employee, summarize_payroll
from jayloy.analyzers.periods import ReportPeriod, window_for_period
from jayloy.analyzers.reconciliation import (
    BankReconciler,
    ReconciliationMatch,
    ReconciliationSummary,
)
from jayloy.config import JayloyConfig
from jayloy.connectors.csv_connector import BankStatementCSV
from jayloy.models.metrics import FinanceMetrics, ReportWindow, TaxSummary
from jayloy.models.records import (
    BankTransaction,
    Employee,
    Expense,
    Invoice,
    InvoiceItem,
)
from jayloy.receipts import ReceiptParser, ReceiptResult, parse_receipts
from jayloy.sample_data import generate_sample_data
from jayloy.store import JsonFileBackend, KeyValueBackend, MemoryBackend, RecordStore

logger = logging.getLogger("jayloy")


@dataclass
class Dashboard:
    """Top-level entry point for Jayloy.

    Usage::

        from jayloy import Dashboard

        dashboard = Dashboard.from_config("jayloy.yaml")
        metrics = dashboard.metrics(period="last-month")
        summary = dashboard.payroll("2025-01")

    The Dashboard coordinates:
    - **Store**: invoices, expenses, bank lines, employees and products.
    - **Analyzers**: metrics, payroll, inventory and reconciliation.
    - **Receipts**: LLM or HTTP endpoint parsing into expense drafts.
    """

    config: JayloyConfig = field(default_factory=JayloyConfig)
    store: InitVar[RecordStore | None] = None
    _store: RecordStore = field(init=False, repr=False)

    def __post_init__(self, store: RecordStore | None) -> None:
        self._store = store if store is not None else RecordStore(self._make_backend())

    @classmethod
    def from_config(cls, config_path: str | None = None, **overrides: Any) -> Dashboard:
        """Create a Dashboard from a config file or keyword arguments."""
        config = JayloyConfig.load(config_path, **overrides)
        instance = cls(config=config)
        logger.info(
            "Jayloy initialized with %s storage",
            config.storage.backend,
        )
        return instance

    def _make_backend(self) -> KeyValueBackend:
        if self.config.storage.backend == "memory":
            return MemoryBackend()
        return JsonFileBackend(self.config.storage.data_dir)

    @property
    def records(self) -> RecordStore:
        return self._store

    # Reports

    def metrics(
        self,
        period: ReportPeriod | str | None = None,
        window: ReportWindow | None = None,
        as_of: date | None = None,
    ) -> FinanceMetrics:
        """Finance metrics for a named period or an explicit window.

        With neither, the trailing ``reports.months`` months are used.
        """
        as_of = as_of or date.today()
        months = self.config.reports.months
        if window is None:
            window = window_for_period(period, as_of, months) if period else ReportWindow(months=months)
        return compute_metrics(self.records.invoices, self.records.expenses, window, as_of=as_of)

    def tax_summary(self, metrics: FinanceMetrics) -> TaxSummary:
        return tax_summary(metrics, self.config.invoicing.vat_rate)

    def payroll(self, month: str | None = None) -> PayrollSummary:
        """Payroll run for ``month`` (``YYYY-MM``, default current month)."""
        month = month or date.today().strftime("%Y-%m")
        return summarize_payroll(self.records.employees, month)

    def inventory(self) -> InventoryReport:
        return inventory_report(self.records.products)

    def reconciliation(self) -> tuple[ReconciliationSummary, dict[str, list[ReconciliationMatch]]]:
        """Reconciliation status and candidate matches for open bank lines."""
        reconciler = BankReconciler()
        transactions = self.records.bank_transactions
        suggestions = reconciler.suggest(
            transactions, self.records.invoices, self.records.expenses
        )
        return reconciler.summarize(transactions), suggestions

    def reconcile(self, transaction_id: str, kind: str, record_id: str) -> BankTransaction | None:
        return BankReconciler().reconcile(self.records, transaction_id, kind, record_id)

    # Records

    def create_invoice(
        self,
        customer_name: str,
        items: Sequence[InvoiceItem],
        issue_date: date | None = None,
        **details: Any,
    ) -> Invoice:
        """Price, number and store a new invoice."""
        draft = build_invoice(
            customer_name,
            items,
            issue_date or date.today(),
            invoice_number=next_invoice_number(datetime.now(timezone.utc)),
            currency=details.pop("currency", self.config.currency),
            vat_rate=self.config.invoicing.vat_rate,
            payment_terms_days=self.config.invoicing.payment_terms_days,
            **details,
        )
        return self.records.add_invoice(draft)

    def hire(self, name: str, base_salary: float, start_date: date, **details: Any) -> Employee:
        """Store a new employee with deductions computed from the payroll rules."""
        employee = build_employee(
            name, base_salary, start_date, rules=self.config.payroll.rules(), **details
        )
        return self.records.add_employee(employee)

    async def import_statement(self, path: str | Path, **options: Any) -> list[BankTransaction]:
        """Read a bank statement CSV and store its lines."""
        connector = BankStatementCSV(file_path=str(path), **options)
        lines = await connector.pull()
        stored = [self.records.add_bank_transaction(line) for line in lines]
        logger.info("Imported %d bank lines from %s", len(stored), path)
        return stored

    def import_statement_sync(self, path: str | Path, **options: Any) -> list[BankTransaction]:
        """Synchronous wrapper around :meth:`import_statement`."""
        return asyncio.run(self.import_statement(path, **options))

    # Receipts

    def receipt_parser(self) -> ReceiptParser:
        """The HTTP endpoint client when one is configured, otherwise the LLM agent."""
        if self.config.receipts.endpoint_url:
            from jayloy.connectors.receipt_endpoint import ReceiptEndpointClient

            return ReceiptEndpointClient(
                self.config.receipts.endpoint_url,
                timeout=self.config.receipts.timeout,
            )
        from jayloy.agents.receipt_agent import ReceiptAgent

        return ReceiptAgent(self.config)

    async def parse_receipts(
        self,
        paths: Sequence[str | Path],
        parser: ReceiptParser | None = None,
    ) -> list[ReceiptResult]:
        """Parse receipt images concurrently; failures are reported per receipt."""
        parser = parser or self.receipt_parser()
        try:
            return await parse_receipts(parser, paths)
        finally:
            close = getattr(parser, "close", None)
            if close is not None:
                await close()

    def record_receipt(
        self,
        result: ReceiptResult,
        category: str = "Other",
        fallback_date: date | None = None,
    ) -> Expense | None:
        """Store a successfully parsed receipt as an expense."""
        if result.receipt is None:
            return None
        expense = result.receipt.to_expense(
            fallback_date=fallback_date or date.today(),
            category=category,
            currency=self.config.currency,
            receipt_url=result.source,
        )
        return self.records.add_expense(expense)

    def seed(self, as_of: date | None = None, seed: int | None = None) -> tuple[int, int]:
        """Replace invoices and expenses with generated sample data."""
        invoices, expenses = generate_sample_data(as_of or date.today(), seed=seed)
        self.records.load_sample(invoices, expenses)
        return len(invoices), len(expenses)
