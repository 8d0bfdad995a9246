"""Ledger domain models."""

from bank_ledger.models.account import ACCOUNT_NUMBER_LENGTH, Account, is_account_number
from bank_ledger.models.enums import TransactionType
from bank_ledger.models.money import to_decimal
from bank_ledger.models.transaction import Transaction

__all__ = [
    "ACCOUNT_NUMBER_LENGTH",
    "Account",
    "Transaction",
    "TransactionType",
    "is_account_number",
    "to_decimal",
]
