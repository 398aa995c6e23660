"""
Sample data — a plausible half year of invoices and expenses for demos.

Records are spread over the 180 days before ``as_of``. Pass a seed for a
reproducible set.
"""

from __future__ import annotations

import random
from datetime import date, datetime, time, timedelta, timezone

from jayloy.analyzers.invoicing import DEFAULT_PAYMENT_TERMS_DAYS, DEFAULT_VAT_RATE
from jayloy.models.records import (
    Expense,
    ExpenseItem,
    Invoice,
    InvoiceItem,
    InvoiceStatus,
    TransactionKind,
)

SPAN_DAYS = 180

CUSTOMERS = [
    "ABC Corporation",
    "XYZ Solutions",
    "TechStart Inc",
    "Global Services Ltd",
    "Digital Innovations",
    "Cambodia Tech",
    "Phnom Penh Solutions",
    "Siem Reap Digital",
    "Battambang Systems",
    "Kampot Technologies",
]

SERVICES = [
    "Web Development",
    "Mobile App Development",
    "IT Consulting",
    "System Integration",
    "Cloud Migration",
    "Data Analytics",
    "Cybersecurity Audit",
    "Network Setup",
    "Software Training",
    "Technical Support",
]

VENDORS = [
    "Office Depot",
    "Starbucks Coffee",
    "Shell Gas Station",
    "Amazon Business",
    "FedEx Office",
    "Restaurant Cambodia",
    "Khmer Market",
    "Phnom Penh Hotel",
    "Lucky Supermarket",
    "Brown Coffee",
    "Microsoft Office",
    "Adobe Creative Suite",
    "Zoom Pro",
    "Slack Premium",
    "Dropbox Business",
]

EXPENSE_CATEGORIES = [
    "Office Supplies",
    "Travel",
    "Marketing",
    "Utilities",
    "Equipment",
    "Professional Services",
    "Meals & Entertainment",
    "Software & Subscriptions",
    "Other",
]

DESCRIPTIONS = [
    "Business meeting refreshments",
    "Office supplies purchase",
    "Business travel fuel",
    "Equipment and supplies",
    "Document printing services",
    "Client dinner meeting",
    "Office snacks and beverages",
    "Business accommodation",
    "Monthly grocery supplies",
    "Team coffee meeting",
    "Software license renewal",
    "Cloud storage subscription",
    "Professional development",
    "Marketing materials",
    "Equipment maintenance",
]


def _created_at(day: date) -> datetime:
    return datetime.combine(day, time(9, 0), tzinfo=timezone.utc)


def generate_sample_invoices(
    as_of: date,
    count: int = 30,
    rng: random.Random | None = None,
) -> list[Invoice]:
    """Invoices with random customers, amounts and statuses."""
    rng = rng or random.Random()
    invoices: list[Invoice] = []
    for i in range(count):
        issue_date = as_of - timedelta(days=rng.randrange(SPAN_DAYS))
        subtotal = round(rng.uniform(500, 5500), 2)
        tax = subtotal * DEFAULT_VAT_RATE
        invoices.append(
            Invoice(
                id=f"inv-{i + 1}",
                invoice_number=f"INV-{i + 1:04d}",
                customer_name=rng.choice(CUSTOMERS),
                customer_email=f"customer{i + 1}@example.com",
                customer_address=f"{rng.randint(1, 999)} Street, Phnom Penh, Cambodia",
                issue_date=issue_date,
                due_date=issue_date + timedelta(days=DEFAULT_PAYMENT_TERMS_DAYS),
                items=[
                    InvoiceItem(
                        id=f"item-{i}-1",
                        description=rng.choice(SERVICES),
                        quantity=rng.randint(1, 5),
                        rate=round(rng.uniform(50, 250), 2),
                        amount=subtotal,
                    )
                ],
                subtotal=subtotal,
                tax=tax,
                total=subtotal + tax,
                status=rng.choice(list(InvoiceStatus)),
                notes="Special discount applied" if rng.random() > 0.7 else None,
                created_at=_created_at(issue_date),
            )
        )
    return invoices


def generate_sample_expenses(
    as_of: date,
    count: int = 50,
    rng: random.Random | None = None,
) -> list[Expense]:
    """Expense-book entries, roughly one in ten recorded as income."""
    rng = rng or random.Random()
    expenses: list[Expense] = []
    for i in range(count):
        day = as_of - timedelta(days=rng.randrange(SPAN_DAYS))
        amount = round(rng.uniform(10, 510), 2)
        expenses.append(
            Expense(
                id=f"exp-{i + 1}",
                vendor=rng.choice(VENDORS),
                amount=amount,
                date=day,
                description=rng.choice(DESCRIPTIONS),
                category=rng.choice(EXPENSE_CATEGORIES),
                tax=amount * DEFAULT_VAT_RATE,
                type=TransactionKind.EXPENSE if rng.random() > 0.1 else TransactionKind.INCOME,
                items=[
                    ExpenseItem(
                        id=f"exp-item-{i}-1",
                        name=rng.choice(DESCRIPTIONS),
                        amount=amount,
                        category=rng.choice(EXPENSE_CATEGORIES),
                    )
                ],
                created_at=_created_at(day),
            )
        )
    return expenses


def generate_sample_data(
    as_of: date,
    seed: int | None = None,
) -> tuple[list[Invoice], list[Expense]]:
    """30 invoices and 50 expenses over the 180 days before ``as_of``."""
    rng = random.Random(seed)
    return (
        generate_sample_invoices(as_of, rng=rng),
        generate_sample_expenses(as_of, rng=rng),
    )
