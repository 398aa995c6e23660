"""
CSV Connector — import bank statements from CSV files.

Supports any CSV with date, description and amount columns; debit/credit
columns and a running balance are picked up when present.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any

import pandas as pd

from jayloy.connectors.base import BaseConnector
from jayloy.models.records import BankTransaction, BankTransactionType

logger = logging.getLogger("jayloy.connectors.csv")

# Common column name mappings
_COLUMN_ALIASES: dict[str, list[str]] = {
    "date": ["date", "transaction_date", "txn_date", "posted_date", "posting_date", "value_date"],
    "description": ["description", "memo", "narrative", "details", "particulars", "reference"],
    "amount": ["amount", "net_amount", "value", "sum"],
    "debit": ["debit", "withdrawal", "withdrawals", "money_out", "paid_out"],
    "credit": ["credit", "deposit", "deposits", "money_in", "paid_in"],
    "balance": ["balance", "running_balance", "closing_balance"],
}


class BankStatementCSV(BaseConnector):
    """Import bank statement lines from a CSV file.

    Usage::

        connector = BankStatementCSV(file_path="statement.csv")
        transactions = await connector.pull()

    Either a signed ``amount`` column or separate ``debit``/``credit``
    columns are accepted. Negative amounts are debits.
    """

    name = "csv"
    description = "Import bank statements from CSV files"

    def __init__(
        self,
        credentials: dict[str, Any] | None = None,
        file_path: str | None = None,
        **options: Any,
    ) -> None:
        super().__init__(credentials, **options)
        creds = credentials or {}
        self.file_path = (
            file_path
            or options.get("file_path")
            or creds.get("file_path", "")
        )
        self.encoding = options.get("encoding", "utf-8")
        self.delimiter = options.get("delimiter", ",")

    async def pull(self) -> list[BankTransaction]:
        """Read and parse the CSV file into bank transactions."""
        path = Path(self.file_path)
        if not path.exists():
            raise FileNotFoundError(f"CSV file not found: {self.file_path}")

        df = pd.read_csv(path, encoding=self.encoding, delimiter=self.delimiter)
        df.columns = df.columns.str.strip().str.lower().str.replace(" ", "_")

        col_map = self._detect_columns(df)
        transactions = self._parse_transactions(df, col_map)

        logger.info("Parsed %d statement lines from %s", len(transactions), path.name)
        return transactions

    async def validate_credentials(self) -> bool:
        """Check if the CSV file exists and is readable."""
        path = Path(self.file_path)
        return path.exists() and path.is_file()

    def _detect_columns(self, df: pd.DataFrame) -> dict[str, str]:
        """Auto-detect column mappings from the DataFrame."""
        col_map: dict[str, str] = {}
        df_cols = set(df.columns)

        for field, aliases in _COLUMN_ALIASES.items():
            for alias in aliases:
                if alias in df_cols:
                    col_map[field] = alias
                    break

        return col_map

    def _parse_transactions(
        self, df: pd.DataFrame, col_map: dict[str, str]
    ) -> list[BankTransaction]:
        """Convert DataFrame rows to BankTransaction objects."""
        transactions: list[BankTransaction] = []

        date_col = col_map.get("date")
        amount_col = col_map.get("amount")
        debit_col = col_map.get("debit")
        credit_col = col_map.get("credit")
        desc_col = col_map.get("description")
        balance_col = col_map.get("balance")

        if not date_col or not (amount_col or debit_col or credit_col):
            logger.warning("Statement CSV missing required columns (date, amount)")
            return transactions

        for _, row in df.iterrows():
            try:
                raw_date = row[date_col]
                if isinstance(raw_date, str):
                    txn_date = pd.to_datetime(raw_date).date()
                elif isinstance(raw_date, (datetime, date)):
                    txn_date = raw_date.date() if isinstance(raw_date, datetime) else raw_date
                else:
                    continue

                if amount_col:
                    raw_amount = row[amount_col]
                    if pd.isna(raw_amount) or not str(raw_amount).strip():
                        continue
                    amount = _number(raw_amount)
                else:
                    money_in = _number(row.get(credit_col)) if credit_col else 0.0
                    money_out = _number(row.get(debit_col)) if debit_col else 0.0
                    amount = money_in - abs(money_out)

                if pd.isna(amount):
                    continue

                txn_type = BankTransactionType.DEBIT if amount < 0 else BankTransactionType.CREDIT
                description = row.get(desc_col, "") if desc_col else ""

                transactions.append(BankTransaction(
                    date=txn_date,
                    description="" if pd.isna(description) else str(description),
                    amount=amount,
                    type=txn_type,
                    balance=_number(row.get(balance_col)) if balance_col else 0.0,
                    reconciled=False,
                ))
            except Exception as e:
                logger.debug("Skipping row: %s", e)

        return transactions


def _number(value: Any) -> float:
    """Float from a cell that may be blank or formatted like ``1,200.00``."""
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return 0.0
    if isinstance(value, str):
        value = value.replace(",", "").strip()
        if not value:
            return 0.0
    return float(value)
