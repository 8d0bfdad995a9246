"""Identifier generators."""

from bank_ledger.generators.account_number import AccountNumberGenerator

__all__ = ["AccountNumberGenerator"]
