"""
Jayloy — bookkeeping for small businesses in Cambodia.

Invoices, expenses, payroll, inventory and bank reconciliation,
with receipts read by an LLM.
"""

__version__ = "0.1.0"
__all__ = ["Dashboard"]

from jayloy.dashboard import Dashboard  # noqa: E402
