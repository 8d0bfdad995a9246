"""Configuration management for bank-ledger."""

import math
import os
from dataclasses import dataclass, field
from pathlib import Path

from bank_ledger.exceptions import ConfigurationError


@dataclass
class StorageConfig:
    """Snapshot file locations and I/O retry policy."""

    data_dir: Path = field(default_factory=lambda: Path("data"))
    accounts_file: str = "accounts.json"
    transactions_file: str = "transactions.json"
    max_retries: int = 3
    retry_backoff_seconds: float = 0.05

    @property
    def accounts_path(self) -> Path:
        """Full path of the accounts snapshot."""
        return Path(self.data_dir) / self.accounts_file

    @property
    def transactions_path(self) -> Path:
        """Full path of the transactions snapshot."""
        return Path(self.data_dir) / self.transactions_file


@dataclass
class BankConfig:
    """Main configuration for bank-ledger."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"
    min_pin_length: int = 4

    @classmethod
    def from_env(cls) -> "BankConfig":
        """Create config from environment variables."""
        storage = StorageConfig(
            data_dir=Path(os.getenv("BANK_DATA_DIR", "data")),
            max_retries=_env_number("BANK_MAX_RETRIES", "3", int),
            retry_backoff_seconds=_env_number("BANK_RETRY_BACKOFF", "0.05", float),
        )
        if storage.max_retries < 1:
            raise ConfigurationError("BANK_MAX_RETRIES must be at least 1")
        backoff = storage.retry_backoff_seconds
        if not math.isfinite(backoff) or backoff < 0:
            raise ConfigurationError("BANK_RETRY_BACKOFF must be a non-negative number")

        return cls(
            storage=storage,
            seed=_env_number("SEED", None, int),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )


def _env_number(name: str, default: str | None, cast: type) -> int | float | None:
    raw = os.getenv(name, default)
    if raw is None or raw == "":
        return None
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a {cast.__name__}, got {raw!r}") from e
