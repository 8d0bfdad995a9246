"""Snapshot persistence for the ledger."""

from bank_ledger.storage.json_file import JsonFileStore

__all__ = ["JsonFileStore"]
