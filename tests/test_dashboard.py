"""Tests for the Dashboard facade."""

from datetime import date
from pathlib import Path

import pytest

from jayloy.config import JayloyConfig
from jayloy.dashboard import Dashboard
from jayloy.models.records import InvoiceItem, InvoiceStatus, Product
from jayloy.receipts import ParsedReceipt, ReceiptParseError
from jayloy.store import JsonFileBackend, MemoryBackend, RecordStore

AS_OF = date(2025, 3, 15)


@pytest.fixture
def dashboard() -> Dashboard:
    return Dashboard(config=JayloyConfig(storage={"backend": "memory"}))


class StubParser:
    def __init__(self) -> None:
        self.closed = False

    async def parse(self, path: str | Path) -> ParsedReceipt:
        if str(path).endswith("bad.jpg"):
            raise ReceiptParseError("unreadable")
        return ParsedReceipt(vendor="Khmer Market", total_amount=8.0, date="2025-03-01")

    async def close(self) -> None:
        self.closed = True


class TestDashboard:
    def test_from_config_uses_json_backend(self, tmp_path: Path) -> None:
        dashboard = Dashboard.from_config(None, storage={"data_dir": str(tmp_path)})
        assert isinstance(dashboard.records.backend, JsonFileBackend)

    def test_given_store_is_used(self) -> None:
        store = RecordStore(MemoryBackend())
        dashboard = Dashboard(config=JayloyConfig(storage={"backend": "memory"}), store=store)
        assert dashboard.records is store

    def test_default_store_follows_config(self, dashboard: Dashboard) -> None:
        assert isinstance(dashboard.records.backend, MemoryBackend)

    def test_metrics_for_period(self, dashboard: Dashboard) -> None:
        dashboard.create_invoice(
            "ABC Corporation",
            [InvoiceItem(id="1", description="IT Consulting", quantity=2, rate=100)],
            issue_date=date(2025, 2, 10),
            status=InvoiceStatus.PAID,
        )
        metrics = dashboard.metrics(period="last-month", as_of=AS_OF)

        assert metrics.total_revenue == pytest.approx(220.0)
        assert metrics.period_start == date(2025, 2, 1)
        assert len(metrics.monthly_data) == 6

    def test_metrics_uses_configured_months(self) -> None:
        dashboard = Dashboard(config=JayloyConfig(storage={"backend": "memory"}, reports={"months": 3}))
        assert len(dashboard.metrics(as_of=AS_OF).monthly_data) == 3

    def test_create_invoice_uses_invoicing_config(self) -> None:
        dashboard = Dashboard(
            config=JayloyConfig(
                storage={"backend": "memory"},
                invoicing={"vat_rate": 0.0, "payment_terms_days": 14},
            )
        )
        invoice = dashboard.create_invoice(
            "XYZ Solutions",
            [InvoiceItem(id="1", description="Network Setup", rate=300)],
            issue_date=date(2025, 1, 1),
        )
        assert invoice.id is not None
        assert invoice.invoice_number.startswith("INV-")
        assert invoice.total == 300
        assert invoice.due_date == date(2025, 1, 15)

    def test_hire_and_payroll(self, dashboard: Dashboard) -> None:
        dashboard.hire("Sokha", 1500, date(2024, 1, 1), position="Accountant")
        summary = dashboard.payroll("2025-03")

        assert summary.headcount == 1
        assert summary.total_net == pytest.approx(1426.0)

    def test_inventory(self, dashboard: Dashboard) -> None:
        dashboard.records.add_product(Product(name="Rice", cost=20, stock=2, reorder_level=5))
        report = dashboard.inventory()
        assert report.total_value == 40
        assert len(report.low_stock) == 1

    def test_import_and_reconcile(self, dashboard: Dashboard, tmp_path: Path) -> None:
        statement = tmp_path / "statement.csv"
        statement.write_text("date,description,amount\n2025-02-20,Transfer in,220.00\n")
        invoice = dashboard.create_invoice(
            "ABC Corporation",
            [InvoiceItem(id="1", description="IT Consulting", quantity=2, rate=100)],
            issue_date=date(2025, 2, 10),
            status=InvoiceStatus.SENT,
        )

        lines = dashboard.import_statement_sync(statement)
        summary, suggestions = dashboard.reconciliation()
        assert summary.total_entries == 1
        assert suggestions[lines[0].id][0].record_id == invoice.id

        dashboard.reconcile(lines[0].id, "invoice", invoice.id)
        summary, suggestions = dashboard.reconciliation()
        assert summary.reconciliation_rate == 1.0
        assert suggestions == {}

    def test_seed(self, dashboard: Dashboard) -> None:
        assert dashboard.seed(as_of=AS_OF, seed=1) == (30, 50)
        assert len(dashboard.records.invoices) == 30

    def test_receipt_parser_selection(self) -> None:
        from jayloy.agents.receipt_agent import ReceiptAgent
        from jayloy.connectors.receipt_endpoint import ReceiptEndpointClient

        local = Dashboard(config=JayloyConfig(storage={"backend": "memory"}))
        remote = Dashboard(
            config=JayloyConfig(
                storage={"backend": "memory"},
                receipts={"endpoint_url": "http://localhost:3000/api/llm"},
            )
        )
        assert isinstance(local.receipt_parser(), ReceiptAgent)
        assert isinstance(remote.receipt_parser(), ReceiptEndpointClient)

    @pytest.mark.asyncio
    async def test_parse_and_record_receipts(self, dashboard: Dashboard) -> None:
        parser = StubParser()
        results = await dashboard.parse_receipts(["ok.jpg", "bad.jpg"], parser=parser)

        assert parser.closed is True
        assert [r.ok for r in results] == [True, False]

        expense = dashboard.record_receipt(results[0], category="Meals & Entertainment")
        assert expense.vendor == "Khmer Market"
        assert expense.date == date(2025, 3, 1)
        assert dashboard.record_receipt(results[1]) is None
        assert len(dashboard.records.expenses) == 1
