"""Tests for the sample data generator."""

from datetime import date, timedelta

import pytest

from jayloy.models.records import TransactionKind
from jayloy.sample_data import generate_sample_data

AS_OF = date(2025, 6, 30)


class TestSampleData:
    def test_counts(self) -> None:
        invoices, expenses = generate_sample_data(AS_OF, seed=1)
        assert len(invoices) == 30
        assert len(expenses) == 50

    def test_seed_is_reproducible(self) -> None:
        assert generate_sample_data(AS_OF, seed=7) == generate_sample_data(AS_OF, seed=7)

    def test_dates_within_last_180_days(self) -> None:
        invoices, expenses = generate_sample_data(AS_OF, seed=3)
        earliest = AS_OF - timedelta(days=179)

        assert all(earliest <= inv.issue_date <= AS_OF for inv in invoices)
        assert all(earliest <= exp.date <= AS_OF for exp in expenses)

    def test_invoice_totals_include_vat(self) -> None:
        invoices, _ = generate_sample_data(AS_OF, seed=5)
        for inv in invoices:
            assert inv.tax == pytest.approx(inv.subtotal * 0.10)
            assert inv.total == pytest.approx(inv.subtotal + inv.tax)
            assert inv.due_date == inv.issue_date + timedelta(days=30)

    def test_mostly_expenses(self) -> None:
        _, expenses = generate_sample_data(AS_OF, seed=11)
        spent = [exp for exp in expenses if exp.type == TransactionKind.EXPENSE]
        assert len(spent) > len(expenses) // 2

    def test_ids_are_unique(self) -> None:
        invoices, expenses = generate_sample_data(AS_OF, seed=2)
        assert len({inv.id for inv in invoices}) == 30
        assert len({exp.id for exp in expenses}) == 50
