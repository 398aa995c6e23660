"""Tests for the record and report models."""

from datetime import date

import pytest
from pydantic import ValidationError

from jayloy.models.records import (
    BankTransaction,
    BankTransactionType,
    Employee,
    EmployeeStatus,
    Expense,
    Invoice,
    InvoiceStatus,
    Product,
    TransactionKind,
)


class TestInvoice:
    def test_status_flags(self) -> None:
        invoice = Invoice(
            invoice_number="INV-1",
            customer_name="XYZ Solutions",
            issue_date=date(2025, 1, 1),
            due_date=date(2025, 1, 31),
            total=110.0,
            status="sent",
        )
        assert invoice.status == InvoiceStatus.SENT
        assert invoice.is_outstanding is True
        assert invoice.is_paid is False

    def test_negative_total_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Invoice(
                invoice_number="INV-1",
                customer_name="XYZ Solutions",
                issue_date=date(2025, 1, 1),
                due_date=date(2025, 1, 31),
                total=-1,
            )

    def test_unknown_status_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Invoice(
                invoice_number="INV-1",
                customer_name="XYZ Solutions",
                issue_date=date(2025, 1, 1),
                due_date=date(2025, 1, 31),
                total=10,
                status="void",
            )

    def test_records_are_frozen(self) -> None:
        invoice = Invoice(
            invoice_number="INV-1",
            customer_name="XYZ Solutions",
            issue_date=date(2025, 1, 1),
            due_date=date(2025, 1, 31),
            total=10,
        )
        with pytest.raises(ValidationError):
            invoice.total = 20  # type: ignore[misc]


class TestExpense:
    def test_defaults(self) -> None:
        expense = Expense(vendor="Lucky Supermarket", amount=12.5, date="2025-02-03")
        assert expense.date == date(2025, 2, 3)
        assert expense.category == "Other"
        assert expense.type == TransactionKind.EXPENSE
        assert expense.is_expense is True

    def test_income_entry(self) -> None:
        expense = Expense(vendor="Client", amount=300, date=date(2025, 2, 3), type="income")
        assert expense.is_expense is False

    def test_bad_date_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Expense(vendor="Lucky Supermarket", amount=1, date="not-a-date")


class TestBankTransaction:
    def test_credit_and_debit(self) -> None:
        credit = BankTransaction(date=date(2025, 1, 2), amount=500, type="credit")
        debit = BankTransaction(date=date(2025, 1, 2), amount=-20, type=BankTransactionType.DEBIT)
        assert credit.is_credit and not credit.is_debit
        assert debit.is_debit and not debit.is_credit
        assert credit.reconciled is False


class TestEmployeeAndProduct:
    def test_gross_salary(self) -> None:
        employee = Employee(
            name="Sokha",
            base_salary=1000,
            allowances=150,
            start_date=date(2024, 6, 1),
        )
        assert employee.gross_salary == 1150
        assert employee.is_active is True

    def test_inactive_employee(self) -> None:
        employee = Employee(
            name="Dara",
            base_salary=800,
            start_date=date(2023, 1, 1),
            status=EmployeeStatus.INACTIVE,
        )
        assert employee.is_active is False

    def test_stock_value_uses_cost(self) -> None:
        product = Product(name="Rice 25kg", price=30, cost=22, stock=10)
        assert product.stock_value == 220

    def test_negative_stock_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Product(name="Rice 25kg", stock=-1)
