"""
Accounting records — invoices, expenses, bank lines, employees, products.

These are the shapes persisted by the record store and consumed by the
analyzers. Records are immutable; edits go through ``model_copy`` or the
store's ``update_*`` methods, which re-validate the merged result.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class InvoiceStatus(str, Enum):
    """Invoice lifecycle."""

    DRAFT = "draft"
    SENT = "sent"  # Outstanding until paid
    PAID = "paid"
    OVERDUE = "overdue"


class TransactionKind(str, Enum):
    """Direction of an expense-book entry."""

    EXPENSE = "expense"
    INCOME = "income"


class BankTransactionType(str, Enum):
    DEBIT = "debit"
    CREDIT = "credit"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Record(BaseModel):
    """Base for every stored record."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None


class InvoiceItem(BaseModel):
    """A billable line on an invoice."""

    model_config = ConfigDict(frozen=True)

    id: str
    description: str
    quantity: float = Field(default=1.0, ge=0)
    rate: float = Field(default=0.0, ge=0)
    amount: float = 0.0


class Invoice(Record):
    """A customer invoice (receivable)."""

    invoice_number: str
    customer_name: str
    customer_email: str = ""
    customer_address: str = ""
    issue_date: date
    due_date: date
    items: list[InvoiceItem] = Field(default_factory=list)
    subtotal: float = 0.0
    tax: float = 0.0
    total: float = Field(ge=0)
    currency: str = "USD"
    status: InvoiceStatus = InvoiceStatus.DRAFT
    notes: str | None = None
    created_at: datetime | None = None

    @property
    def is_paid(self) -> bool:
        return self.status == InvoiceStatus.PAID

    @property
    def is_outstanding(self) -> bool:
        return self.status == InvoiceStatus.SENT


class ExpenseItem(BaseModel):
    """A line read off a receipt."""

    model_config = ConfigDict(frozen=True)

    id: int | str
    name: str = "UNKNOWN"
    amount: float = 0.0
    currency: str = "USD"
    category: str | None = None


class Expense(Record):
    """An entry in the expense book.

    Despite the name, an entry can record income (``type == income``);
    only ``expense`` entries count towards expense totals.
    """

    vendor: str
    amount: float = Field(ge=0)
    date: date
    description: str = ""
    category: str = "Other"
    tax: float = 0.0
    type: TransactionKind = TransactionKind.EXPENSE
    currency: str = "USD"
    receipt_url: str | None = None
    receipt_data: dict[str, Any] | None = None
    items: list[ExpenseItem] = Field(default_factory=list)
    created_at: datetime | None = None

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionKind.EXPENSE


class BankTransaction(Record):
    """A line imported from a bank statement."""

    date: date
    description: str = ""
    amount: float  # Signed: negative for debits
    type: BankTransactionType
    balance: float = 0.0
    reconciled: bool = False
    matched_invoice_id: str | None = None
    matched_expense_id: str | None = None

    @property
    def is_credit(self) -> bool:
        return self.type == BankTransactionType.CREDIT

    @property
    def is_debit(self) -> bool:
        return self.type == BankTransactionType.DEBIT


class Employee(Record):
    """An employee with the deductions of their monthly payslip."""

    name: str
    position: str = ""
    base_salary: float = Field(ge=0)
    allowances: float = Field(default=0.0, ge=0)
    nssf_deduction: float = 0.0
    tax_deduction: float = 0.0
    net_salary: float = 0.0
    start_date: date
    status: EmployeeStatus = EmployeeStatus.ACTIVE

    @property
    def gross_salary(self) -> float:
        return self.base_salary + self.allowances

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE


class Product(Record):
    """A stocked product."""

    name: str
    sku: str = ""
    description: str = ""
    price: float = Field(default=0.0, ge=0)
    cost: float = Field(default=0.0, ge=0)
    stock: int = Field(default=0, ge=0)
    reorder_level: int = Field(default=0, ge=0)
    category: str = "General"
    unit: str = "pcs"

    @property
    def stock_value(self) -> float:
        """Stock valued at cost."""
        return self.stock * self.cost
