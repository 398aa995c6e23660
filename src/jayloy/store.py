"""
Record store — persisted collections of invoices, expenses, bank lines,
employees and products.

Each collection is a JSON array kept under a fixed key in a key-value
backend. Every mutation reads the whole array, changes it and writes it back,
so concurrent writers race and the last write wins.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Generic, Protocol, TypeVar
from uuid import uuid4

from pydantic import TypeAdapter, ValidationError

from jayloy.models.records import (
    BankTransaction,
    Employee,
    Expense,
    Invoice,
    Product,
    Record,
)

logger = logging.getLogger("jayloy.store")

INVOICES_KEY = "jayloy_invoices"
EXPENSES_KEY = "jayloy_expenses"
BANK_TRANSACTIONS_KEY = "jayloy_bank_transactions"
EMPLOYEES_KEY = "jayloy_employees"
PRODUCTS_KEY = "jayloy_products"

R = TypeVar("R", bound=Record)


class KeyValueBackend(Protocol):
    """String key-value storage."""

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryBackend:
    """In-process backend, handy for tests and one-off reports."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileBackend:
    """One ``<key>.json`` file per key inside a directory."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(value, encoding="utf-8")


class Collection(Generic[R]):
    """A list of records persisted under one key."""

    def __init__(
        self,
        backend: KeyValueBackend,
        key: str,
        model: type[R],
        *,
        stamp_created: bool = False,
    ) -> None:
        self.backend = backend
        self.key = key
        self.model = model
        self.stamp_created = stamp_created
        self._adapter = TypeAdapter(list[model])  # type: ignore[valid-type]

    def load(self) -> list[R]:
        raw = self.backend.get(self.key)
        if not raw:
            return []
        try:
            return self._adapter.validate_json(raw)
        except ValidationError as e:
            logger.error("Stored collection '%s' is unreadable, starting empty: %s", self.key, e)
            return []

    def save(self, records: list[R]) -> None:
        self.backend.set(self.key, self._adapter.dump_json(records).decode("utf-8"))

    def get(self, record_id: str) -> R | None:
        return next((r for r in self.load() if r.id == record_id), None)

    def add(self, record: R) -> R:
        update: dict[str, Any] = {"id": uuid4().hex}
        if self.stamp_created:
            update["created_at"] = datetime.now(timezone.utc)
        new = record.model_copy(update=update)
        records = self.load()
        records.append(new)
        self.save(records)
        logger.debug("Added %s %s", self.model.__name__, new.id)
        return new

    def update(self, record_id: str, changes: dict[str, Any]) -> R | None:
        records = self.load()
        for index, existing in enumerate(records):
            if existing.id == record_id:
                merged = self.model.model_validate(
                    {**existing.model_dump(), **changes, "id": record_id}
                )
                records[index] = merged
                self.save(records)
                return merged
        logger.warning("No %s with id %s to update", self.model.__name__, record_id)
        return None

    def delete(self, record_id: str) -> bool:
        records = self.load()
        kept = [r for r in records if r.id != record_id]
        if len(kept) == len(records):
            logger.warning("No %s with id %s to delete", self.model.__name__, record_id)
            return False
        self.save(kept)
        return True

    def replace_all(self, records: list[R]) -> None:
        self.save(records)


class RecordStore:
    """CRUD access to every collection the dashboard keeps.

    Usage::

        store = RecordStore(JsonFileBackend("./jayloy_data"))
        invoice = store.add_invoice(draft)
        store.update_invoice(invoice.id, status="paid")
    """

    def __init__(self, backend: KeyValueBackend | None = None) -> None:
        self.backend = backend or MemoryBackend()
        self._invoices = Collection(self.backend, INVOICES_KEY, Invoice, stamp_created=True)
        self._expenses = Collection(self.backend, EXPENSES_KEY, Expense, stamp_created=True)
        self._bank_transactions = Collection(self.backend, BANK_TRANSACTIONS_KEY, BankTransaction)
        self._employees = Collection(self.backend, EMPLOYEES_KEY, Employee)
        self._products = Collection(self.backend, PRODUCTS_KEY, Product)

    # Invoices

    @property
    def invoices(self) -> list[Invoice]:
        return self._invoices.load()

    def add_invoice(self, invoice: Invoice) -> Invoice:
        return self._invoices.add(invoice)

    def update_invoice(self, invoice_id: str, **changes: Any) -> Invoice | None:
        return self._invoices.update(invoice_id, changes)

    def delete_invoice(self, invoice_id: str) -> bool:
        return self._invoices.delete(invoice_id)

    # Expenses

    @property
    def expenses(self) -> list[Expense]:
        return self._expenses.load()

    def add_expense(self, expense: Expense) -> Expense:
        return self._expenses.add(expense)

    def update_expense(self, expense_id: str, **changes: Any) -> Expense | None:
        return self._expenses.update(expense_id, changes)

    def delete_expense(self, expense_id: str) -> bool:
        return self._expenses.delete(expense_id)

    # Bank transactions

    @property
    def bank_transactions(self) -> list[BankTransaction]:
        return self._bank_transactions.load()

    def get_bank_transaction(self, transaction_id: str) -> BankTransaction | None:
        return self._bank_transactions.get(transaction_id)

    def add_bank_transaction(self, transaction: BankTransaction) -> BankTransaction:
        return self._bank_transactions.add(transaction)

    def update_bank_transaction(self, transaction_id: str, **changes: Any) -> BankTransaction | None:
        return self._bank_transactions.update(transaction_id, changes)

    def delete_bank_transaction(self, transaction_id: str) -> bool:
        return self._bank_transactions.delete(transaction_id)

    # Employees

    @property
    def employees(self) -> list[Employee]:
        return self._employees.load()

    def add_employee(self, employee: Employee) -> Employee:
        return self._employees.add(employee)

    def update_employee(self, employee_id: str, **changes: Any) -> Employee | None:
        return self._employees.update(employee_id, changes)

    def delete_employee(self, employee_id: str) -> bool:
        return self._employees.delete(employee_id)

    # Products

    @property
    def products(self) -> list[Product]:
        return self._products.load()

    def add_product(self, product: Product) -> Product:
        return self._products.add(product)

    def update_product(self, product_id: str, **changes: Any) -> Product | None:
        return self._products.update(product_id, changes)

    def delete_product(self, product_id: str) -> bool:
        return self._products.delete(product_id)

    def load_sample(self, invoices: list[Invoice], expenses: list[Expense]) -> None:
        """Replace the invoice and expense collections wholesale."""
        self._invoices.replace_all(invoices)
        self._expenses.replace_all(expenses)
        logger.info("Loaded %d sample invoices and %d expenses", len(invoices), len(expenses))
