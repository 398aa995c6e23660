"""
Bank Reconciliation — match imported bank lines with invoices and expenses.

Credits (money in) are matched against invoices, debits (money out) against
expenses, by approximate amount. Confirming a match marks the bank line as
reconciled and records which invoice or expense it settled.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from jayloy.models.records import BankTransaction, Expense, Invoice

if TYPE_CHECKING:
    from jayloy.store import RecordStore

logger = logging.getLogger("jayloy.analyzers.reconciliation")


class MatchKind(str, Enum):
    """What kind of record a bank line was matched to."""

    INVOICE = "invoice"
    EXPENSE = "expense"


@dataclass
class ReconciliationMatch:
    """A candidate record for a bank line."""

    transaction: BankTransaction
    kind: MatchKind
    record_id: str | None
    label: str
    amount: float
    difference: float = 0.0  # record amount minus bank amount (absolute values)

    @property
    def is_exact(self) -> bool:
        return abs(self.difference) < 0.01


@dataclass
class ReconciliationSummary:
    """Reconciled/unreconciled split of the imported bank lines."""

    reconciled: list[BankTransaction] = field(default_factory=list)
    unreconciled: list[BankTransaction] = field(default_factory=list)

    @property
    def total_entries(self) -> int:
        return len(self.reconciled) + len(self.unreconciled)

    @property
    def reconciliation_rate(self) -> float:
        """Fraction of bank lines reconciled."""
        if self.total_entries == 0:
            return 0.0
        return len(self.reconciled) / self.total_entries


class BankReconciler:
    """
    Suggest and confirm matches between bank lines and book records.

    Example usage:
        reconciler = BankReconciler()
        matches = reconciler.find_matches(txn, store.invoices, store.expenses)
        if matches:
            reconciler.reconcile(store, txn.id, matches[0].kind, matches[0].record_id)
    """

    def __init__(self, amount_tolerance: float = 1.0):
        """
        Initialize reconciler.

        Args:
            amount_tolerance: Largest absolute amount difference (exclusive)
                still considered a match.
        """
        self.amount_tolerance = amount_tolerance

    def find_matches(
        self,
        transaction: BankTransaction,
        invoices: Sequence[Invoice],
        expenses: Sequence[Expense],
    ) -> list[ReconciliationMatch]:
        """
        List candidate records for a bank line.

        Args:
            transaction: The bank line to match.
            invoices: Invoices to consider for credits.
            expenses: Expenses to consider for debits.

        Returns:
            Matches in the order the records were given.
        """
        bank_amount = abs(transaction.amount)
        matches: list[ReconciliationMatch] = []

        if transaction.is_credit:
            for inv in invoices:
                if self._amounts_close(inv.total, bank_amount):
                    matches.append(ReconciliationMatch(
                        transaction=transaction,
                        kind=MatchKind.INVOICE,
                        record_id=inv.id,
                        label=f"{inv.invoice_number} ({inv.customer_name})",
                        amount=inv.total,
                        difference=inv.total - bank_amount,
                    ))
        elif transaction.is_debit:
            for exp in expenses:
                if self._amounts_close(exp.amount, bank_amount):
                    matches.append(ReconciliationMatch(
                        transaction=transaction,
                        kind=MatchKind.EXPENSE,
                        record_id=exp.id,
                        label=f"{exp.vendor}: {exp.description}",
                        amount=exp.amount,
                        difference=exp.amount - bank_amount,
                    ))

        return matches

    def suggest(
        self,
        transactions: Sequence[BankTransaction],
        invoices: Sequence[Invoice],
        expenses: Sequence[Expense],
    ) -> dict[str, list[ReconciliationMatch]]:
        """Candidate matches for every unreconciled bank line, keyed by line id."""
        return {
            txn.id or "": self.find_matches(txn, invoices, expenses)
            for txn in transactions
            if not txn.reconciled
        }

    def reconcile(
        self,
        store: RecordStore,
        transaction_id: str,
        kind: MatchKind | str,
        record_id: str,
    ) -> BankTransaction | None:
        """
        Mark a bank line as reconciled against an invoice or expense.

        Returns:
            The updated bank line, or None when the id is unknown.
        """
        kind = MatchKind(kind)
        if kind == MatchKind.INVOICE:
            changes = {"reconciled": True, "matched_invoice_id": record_id}
        else:
            changes = {"reconciled": True, "matched_expense_id": record_id}

        updated = store.update_bank_transaction(transaction_id, **changes)
        if updated:
            logger.info("Reconciled bank line %s with %s %s", transaction_id, kind.value, record_id)
        return updated

    @staticmethod
    def summarize(transactions: Sequence[BankTransaction]) -> ReconciliationSummary:
        """Split bank lines into reconciled and unreconciled."""
        return ReconciliationSummary(
            reconciled=[t for t in transactions if t.reconciled],
            unreconciled=[t for t in transactions if not t.reconciled],
        )

    def _amounts_close(self, record_amount: float, bank_amount: float) -> bool:
        return abs(record_amount - bank_amount) < self.amount_tolerance
