"""Tests for the record store."""

import json
from datetime import date, timedelta
from pathlib import Path

import pytest
from pydantic import ValidationError

from jayloy.models.records import (
    BankTransaction,
    Employee,
    Expense,
    Invoice,
    InvoiceStatus,
    Product,
)
from jayloy.store import (
    EXPENSES_KEY,
    INVOICES_KEY,
    JsonFileBackend,
    MemoryBackend,
    RecordStore,
)


def make_invoice(total: float = 110.0) -> Invoice:
    return Invoice(
        invoice_number="INV-0001",
        customer_name="Cambodia Tech",
        issue_date=date(2025, 1, 10),
        due_date=date(2025, 1, 10) + timedelta(days=30),
        total=total,
    )


def make_expense(amount: float = 25.0) -> Expense:
    return Expense(vendor="Brown Coffee", amount=amount, date=date(2025, 1, 12))


@pytest.fixture(params=["memory", "json"])
def store(request: pytest.FixtureRequest, tmp_path: Path) -> RecordStore:
    if request.param == "memory":
        return RecordStore(MemoryBackend())
    return RecordStore(JsonFileBackend(tmp_path / "data"))


class TestRecordStore:
    def test_starts_empty(self, store: RecordStore) -> None:
        assert store.invoices == []
        assert store.expenses == []
        assert store.bank_transactions == []
        assert store.employees == []
        assert store.products == []

    def test_add_assigns_id_and_timestamp(self, store: RecordStore) -> None:
        saved = store.add_invoice(make_invoice())

        assert saved.id
        assert saved.created_at is not None
        assert store.invoices == [saved]

    def test_ids_are_unique(self, store: RecordStore) -> None:
        first = store.add_expense(make_expense())
        second = store.add_expense(make_expense())
        assert first.id != second.id

    def test_update_merges_changes(self, store: RecordStore) -> None:
        saved = store.add_invoice(make_invoice())
        updated = store.update_invoice(saved.id, status="paid")

        assert updated is not None
        assert updated.status == InvoiceStatus.PAID
        assert updated.total == saved.total
        assert store.invoices[0].status == InvoiceStatus.PAID

    def test_update_unknown_id(self, store: RecordStore) -> None:
        store.add_invoice(make_invoice())
        assert store.update_invoice("missing", status="paid") is None

    def test_update_validates(self, store: RecordStore) -> None:
        saved = store.add_expense(make_expense())
        with pytest.raises(ValidationError):
            store.update_expense(saved.id, amount=-5)

    def test_delete(self, store: RecordStore) -> None:
        keep = store.add_expense(make_expense(1))
        drop = store.add_expense(make_expense(2))

        assert store.delete_expense(drop.id) is True
        assert store.expenses == [keep]
        assert store.delete_expense(drop.id) is False

    def test_all_collections(self, store: RecordStore) -> None:
        txn = store.add_bank_transaction(
            BankTransaction(date=date(2025, 1, 3), amount=-25, type="debit")
        )
        employee = store.add_employee(
            Employee(name="Sokha", base_salary=900, start_date=date(2024, 1, 1))
        )
        product = store.add_product(Product(name="Notebook", cost=1.5, stock=40))

        assert store.get_bank_transaction(txn.id) == txn
        assert store.update_employee(employee.id, position="Cashier").position == "Cashier"
        assert store.update_product(product.id, stock=39).stock == 39
        assert store.delete_bank_transaction(txn.id) is True
        assert store.delete_employee(employee.id) is True
        assert store.delete_product(product.id) is True

    def test_load_sample_replaces(self, store: RecordStore) -> None:
        store.add_invoice(make_invoice())
        store.load_sample([make_invoice(50), make_invoice(60)], [make_expense()])

        assert [inv.total for inv in store.invoices] == [50, 60]
        assert len(store.expenses) == 1


class TestBackends:
    def test_json_backend_persists_across_instances(self, tmp_path: Path) -> None:
        RecordStore(JsonFileBackend(tmp_path)).add_invoice(make_invoice(77))

        reopened = RecordStore(JsonFileBackend(tmp_path))
        assert [inv.total for inv in reopened.invoices] == [77]
        assert (tmp_path / f"{INVOICES_KEY}.json").exists()

    def test_blob_is_json_array(self, tmp_path: Path) -> None:
        RecordStore(JsonFileBackend(tmp_path)).add_expense(make_expense(9.5))

        payload = json.loads((tmp_path / f"{EXPENSES_KEY}.json").read_text())
        assert isinstance(payload, list)
        assert payload[0]["vendor"] == "Brown Coffee"
        assert payload[0]["date"] == "2025-01-12"

    def test_corrupt_blob_reads_as_empty(self, caplog: pytest.LogCaptureFixture) -> None:
        backend = MemoryBackend({INVOICES_KEY: "{not json"})
        store = RecordStore(backend)

        assert store.invoices == []
        assert "unreadable" in caplog.text

    def test_writes_are_last_write_wins(self) -> None:
        backend = MemoryBackend()
        tab_a = RecordStore(backend)
        tab_b = RecordStore(backend)

        tab_a.add_expense(make_expense(1))
        tab_b.add_expense(make_expense(2))
        assert len(tab_a.expenses) == 2
