"""Pytest configuration and fixtures."""

import logging
from pathlib import Path
from typing import Iterator

import pytest

from bank_ledger.generators import AccountNumberGenerator
from bank_ledger.storage import JsonFileStore
from bank_ledger.store import Bank


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Data directory that does not exist yet."""
    return tmp_path / "data"


@pytest.fixture
def sleeps() -> list[float]:
    """Delays requested by the store under test."""
    return []


@pytest.fixture
def store(sleeps: list[float]) -> JsonFileStore:
    """Store that records backoff delays instead of sleeping."""
    return JsonFileStore(max_retries=3, retry_backoff_seconds=0.05, sleep=sleeps.append)


@pytest.fixture
def bank(seed: int, data_dir: Path, store: JsonFileStore) -> Bank:
    """Empty bank persisting under a temporary directory."""
    return Bank(
        generator=AccountNumberGenerator(seed=seed),
        storage=store,
        accounts_path=data_dir / "accounts.json",
        transactions_path=data_dir / "transactions.json",
    )


@pytest.fixture
def account_number(bank: Bank) -> str:
    """Account held by John Doe with PIN 1234 and zero balance."""
    return bank.create_account("John Doe", "1234")


@pytest.fixture
def restore_root_logging() -> Iterator[None]:
    """Put back root logger handlers and level after setup_logging()."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
