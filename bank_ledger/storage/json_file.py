"""JSON snapshot files for accounts and transactions."""

import logging
import time
from pathlib import Path
from typing import Any, Callable, TypeVar

import simplejson

from bank_ledger.config import StorageConfig
from bank_ledger.exceptions import (
    MalformedDataError,
    StorageDirectoryNotFoundError,
    StorageError,
    StoragePermissionError,
)
from bank_ledger.models import Account, Transaction
from bank_ledger.storage.serialization import (
    account_from_dict,
    account_to_dict,
    transaction_from_dict,
    transaction_to_dict,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Retrying these cannot help, so they are reported straight away
_PERMANENT_ERRORS = (
    FileNotFoundError,
    NotADirectoryError,
    IsADirectoryError,
    FileExistsError,
    PermissionError,
)


class JsonFileStore:
    """Read and write whole-collection snapshots as indented JSON arrays.

    Each file is read or written with a bounded retry: transient ``OSError``s
    (for example another process holding the file) are retried up to
    ``max_retries`` attempts in total, sleeping ``retry_backoff_seconds *
    attempt`` between attempts.
    """

    def __init__(
        self,
        max_retries: int = 3,
        retry_backoff_seconds: float = 0.05,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the store.

        Parameters
        ----------
        max_retries : int
            Total attempts per file before giving up.
        retry_backoff_seconds : float
            Base delay; attempt ``n`` waits ``n`` times this long.
        sleep : Callable[[float], None]
            Sleep function, replaceable in tests.
        """
        self.max_retries = max(1, max_retries)
        self.retry_backoff_seconds = retry_backoff_seconds
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: StorageConfig) -> "JsonFileStore":
        """Create a store using the configured retry policy."""
        return cls(
            max_retries=config.max_retries,
            retry_backoff_seconds=config.retry_backoff_seconds,
        )

    def save(
        self,
        accounts: list[Account],
        transactions: list[Transaction],
        accounts_path: str | Path,
        transactions_path: str | Path,
    ) -> None:
        """Write both collections, creating the data directory if needed.

        Raises
        ------
        StorageError
            If the directory cannot be created or a file cannot be written
            after all retries.
        """
        accounts_path = Path(accounts_path)
        transactions_path = Path(transactions_path)

        for directory in {accounts_path.parent, transactions_path.parent}:
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise _storage_error(e, f"Unable to create or access directory {directory}") from e

        self._write_with_retry(accounts_path, [account_to_dict(a) for a in accounts])
        self._write_with_retry(
            transactions_path, [transaction_to_dict(t) for t in transactions]
        )
        logger.info(
            "Saved %d accounts to %s and %d transactions to %s",
            len(accounts),
            accounts_path,
            len(transactions),
            transactions_path,
        )

    def load(
        self,
        accounts_path: str | Path,
        transactions_path: str | Path,
    ) -> tuple[list[Account] | None, list[Transaction] | None]:
        """Read both collections.

        A collection is returned as ``None`` when its file does not exist or
        is blank, meaning the caller should keep what it has.

        Raises
        ------
        MalformedDataError
            If a file has content that is not a JSON array of valid records,
            or the accounts file repeats an account number.
        StorageError
            If a file cannot be read after all retries.
        """
        accounts = self._load_records(Path(accounts_path), account_from_dict)
        if accounts is not None:
            _check_unique_account_numbers(accounts, accounts_path)
        transactions = self._load_records(Path(transactions_path), transaction_from_dict)
        return accounts, transactions

    def _load_records(self, path: Path, parse: Callable[[Any], T]) -> list[T] | None:
        try:
            exists = path.exists()
        except OSError as e:
            raise _storage_error(e, f"Unable to access {path}") from e
        if not exists:
            logger.debug("No snapshot at %s", path)
            return None

        text = self._read_with_retry(path)
        if not text.strip():
            logger.debug("Snapshot %s is blank", path)
            return None

        try:
            data = simplejson.loads(text, use_decimal=True)
        except simplejson.JSONDecodeError as e:
            raise MalformedDataError(f"Malformed JSON in {path}: {e}") from e

        if not isinstance(data, list):
            raise MalformedDataError(f"Expected a JSON array in {path}")

        try:
            records = [parse(item) for item in data]
        except MalformedDataError as e:
            raise MalformedDataError(f"{path}: {e}") from e
        logger.info("Loaded %d records from %s", len(records), path)
        return records

    def _read_with_retry(self, path: Path) -> str:
        def read() -> str:
            try:
                return path.read_text(encoding="utf-8")
            except UnicodeDecodeError as e:
                raise MalformedDataError(f"{path} is not valid UTF-8 text") from e

        return self._with_retry(read, path, "reading")

    def _write_with_retry(self, path: Path, records: list[dict[str, Any]]) -> None:
        content = simplejson.dumps(records, indent=2, ensure_ascii=False, use_decimal=True)

        def write() -> None:
            with open(path, "w", encoding="utf-8") as f:
                f.write(content)

        self._with_retry(write, path, "writing")

    def _with_retry(self, operation: Callable[[], T], path: Path, action: str) -> T:
        attempt = 1
        while True:
            try:
                return operation()
            except _PERMANENT_ERRORS as e:
                raise _storage_error(e, f"Error {action} {path}") from e
            except OSError as e:
                if attempt == self.max_retries:
                    raise StorageError(
                        f"Error {action} {path} after {attempt} attempts: {e}"
                    ) from e
                delay = self.retry_backoff_seconds * attempt
                logger.warning(
                    "Attempt %d/%d %s %s failed (%s), retrying in %.3fs",
                    attempt,
                    self.max_retries,
                    action,
                    path,
                    e,
                    delay,
                )
                self._sleep(delay)
                attempt += 1


def _check_unique_account_numbers(accounts: list[Account], path: str | Path) -> None:
    seen: set[str] = set()
    for account in accounts:
        if account.account_number in seen:
            raise MalformedDataError(
                f"{path}: duplicate AccountNumber {account.account_number}"
            )
        seen.add(account.account_number)


def _storage_error(error: OSError, message: str) -> StorageError:
    """Map an ``OSError`` onto the storage error taxonomy."""
    if isinstance(error, PermissionError):
        return StoragePermissionError(f"{message}: permission denied")
    if isinstance(error, (FileNotFoundError, NotADirectoryError, FileExistsError)):
        return StorageDirectoryNotFoundError(f"{message}: directory not found")
    return StorageError(f"{message}: {error}")
