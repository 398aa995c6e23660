"""Data models — stored records and computed reports."""
from jayloy.models.metrics import (
    CATEGORY_PALETTE,
    CategorySlice,
    FinanceMetrics,
    MonthlyPoint,
    ReportWindow,
    TaxSummary,
)
from jayloy.models.records import (
    BankTransaction,
    BankTransactionType,
    Employee,
    EmployeeStatus,
    Expense,
    ExpenseItem,
    Invoice,
    InvoiceItem,
    InvoiceStatus,
    Product,
    TransactionKind,
)

__all__ = [
    "CATEGORY_PALETTE",
    "BankTransaction",
    "BankTransactionType",
    "CategorySlice",
    "Employee",
    "EmployeeStatus",
    "Expense",
    "ExpenseItem",
    "FinanceMetrics",
    "Invoice",
    "InvoiceItem",
    "InvoiceStatus",
    "MonthlyPoint",
    "Product",
    "ReportWindow",
    "TaxSummary",
    "TransactionKind",
]
