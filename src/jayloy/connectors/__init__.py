"""Connectors package — bank statement sources and the receipt endpoint."""
from jayloy.connectors.base import BaseConnector
from jayloy.connectors.csv_connector import BankStatementCSV
from jayloy.connectors.receipt_endpoint import ReceiptEndpointClient

__all__ = [
    "BankStatementCSV",
    "BaseConnector",
    "ReceiptEndpointClient",
]
