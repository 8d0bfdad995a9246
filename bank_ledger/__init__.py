"""In-process bank ledger with JSON snapshot persistence."""

from bank_ledger.models import Account, Transaction, TransactionType
from bank_ledger.store import Bank

__all__ = ["Account", "Bank", "Transaction", "TransactionType"]

__version__ = "0.1.0"
