"""In-memory bank aggregate."""

from bank_ledger.store.bank import Bank

__all__ = ["Bank"]
