"""Bank aggregate: owns all accounts and the transaction log."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any

from bank_ledger.config import BankConfig, StorageConfig
from bank_ledger.exceptions import (
    AccountNotFoundError,
    AuthenticationError,
    InsufficientFundsError,
    InvalidArgumentError,
    NonZeroBalanceError,
)
from bank_ledger.generators import AccountNumberGenerator
from bank_ledger.logging import log_fields
from bank_ledger.models import ACCOUNT_NUMBER_LENGTH, Account, Transaction, TransactionType
from bank_ledger.models.money import to_decimal
from bank_ledger.storage import JsonFileStore

logger = logging.getLogger(__name__)

DEFAULT_ACCOUNTS_PATH = StorageConfig().accounts_path
DEFAULT_TRANSACTIONS_PATH = StorageConfig().transactions_path


@dataclass
class Bank:
    """In-memory ledger with snapshot persistence.

    Every operation validates all of its inputs, then resolves and
    authenticates accounts, then checks balances, and only then mutates
    state, so a failed call leaves accounts and the transaction log
    untouched. Account numbers are unique within ``accounts``.
    """

    accounts: list[Account] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)

    generator: AccountNumberGenerator = field(default_factory=AccountNumberGenerator, repr=False)
    storage: JsonFileStore = field(default_factory=JsonFileStore, repr=False)
    accounts_path: Path = DEFAULT_ACCOUNTS_PATH
    transactions_path: Path = DEFAULT_TRANSACTIONS_PATH
    min_pin_length: int = 4

    @classmethod
    def from_config(cls, config: BankConfig) -> "Bank":
        """Create an empty bank wired to the configured storage and seed."""
        return cls(
            generator=AccountNumberGenerator(seed=config.seed),
            storage=JsonFileStore.from_config(config.storage),
            accounts_path=config.storage.accounts_path,
            transactions_path=config.storage.transactions_path,
            min_pin_length=config.min_pin_length,
        )

    # Persistence
    def load_data(
        self,
        accounts_path: str | Path | None = None,
        transactions_path: str | Path | None = None,
    ) -> None:
        """Replace in-memory collections with the persisted snapshots.

        A collection whose file is missing or blank is left as it is. Both
        files are parsed before either collection is replaced, so a
        malformed file leaves the bank unchanged.
        """
        accounts, transactions = self.storage.load(
            accounts_path or self.accounts_path,
            transactions_path or self.transactions_path,
        )
        if accounts is not None:
            self.accounts = accounts
        if transactions is not None:
            self.transactions = transactions

    def save_data(
        self,
        accounts_path: str | Path | None = None,
        transactions_path: str | Path | None = None,
    ) -> None:
        """Write both collections to their snapshot files."""
        self.storage.save(
            self.accounts,
            self.transactions,
            accounts_path or self.accounts_path,
            transactions_path or self.transactions_path,
        )

    # Account lifecycle
    def create_account(self, name: str, pin: str) -> str | None:
        """Open a zero-balance account and return its number.

        Returns ``None`` without creating anything when the PIN is shorter
        than ``min_pin_length``.
        """
        _require(name, "Name")
        _require(pin, "PIN")

        if len(pin) < self.min_pin_length:
            logger.debug("Account not created: PIN shorter than %d", self.min_pin_length)
            return None

        account_number = self._generate_unique_account_number()
        self.accounts.append(Account(name=name, account_number=account_number, pin=pin))
        logger.info(
            "Created account %s", account_number, extra=log_fields(account_number=account_number)
        )
        return account_number

    def edit_account(self, account_number: str, old_pin: str, new_name: str) -> bool:
        """Rename the holder of an account."""
        _require_account_number(account_number)
        _require(old_pin, "PIN")
        _require(new_name, "New name")

        account = self._get_account(account_number)
        _check_pin(account, old_pin)

        account.name = new_name
        logger.info(
            "Renamed holder of account %s",
            account_number,
            extra=log_fields(account_number=account_number),
        )
        return True

    def delete_account(self, account_number: str, name: str, pin: str) -> bool:
        """Close an account. Both holder name and PIN must match."""
        _require_account_number(account_number)
        _require(name, "Name")
        _require(pin, "PIN")

        account = self._get_account(account_number)
        if account.name != name:
            raise AuthenticationError("Name does not match")
        _check_pin(account, pin)

        if account.balance != 0:
            raise NonZeroBalanceError("Account balance must be zero before deletion")

        self.accounts.remove(account)
        logger.info(
            "Deleted account %s", account_number, extra=log_fields(account_number=account_number)
        )
        return True

    def get_account_details(self, account_number: str, pin: str) -> Account | None:
        """Return the account matching both number and PIN, else ``None``.

        A wrong PIN and an unknown number look the same to the caller.
        """
        _require_account_number(account_number)
        _require(pin, "PIN")

        return next(
            (a for a in self.accounts if a.account_number == account_number and a.pin == pin),
            None,
        )

    # Money movement
    def deposit_funds(self, account_number: str, amount: Decimal | int | str) -> bool:
        """Credit ``amount`` to an account."""
        _require_account_number(account_number)
        amount = _require_amount(amount)

        account = self._get_account(account_number)

        account.balance += amount
        self._record(account_number, TransactionType.DEPOSIT, amount)
        logger.info(
            "Deposited %s into %s",
            amount,
            account_number,
            extra=log_fields(account_number=account_number, amount=amount),
        )
        return True

    def withdraw_funds(self, account_number: str, pin: str, amount: Decimal | int | str) -> bool:
        """Debit ``amount`` from an account."""
        _require_account_number(account_number)
        _require(pin, "PIN")
        amount = _require_amount(amount)

        account = self._get_account(account_number)
        _check_pin(account, pin)
        if account.balance < amount:
            raise InsufficientFundsError("Insufficient funds")

        account.balance -= amount
        self._record(account_number, TransactionType.WITHDRAWAL, amount)
        logger.info(
            "Withdrew %s from %s",
            amount,
            account_number,
            extra=log_fields(account_number=account_number, amount=amount),
        )
        return True

    def transfer_funds(
        self,
        sender_account_number: str,
        sender_pin: str,
        receiver_account_number: str,
        amount: Decimal | int | str,
    ) -> bool:
        """Move ``amount`` between two accounts.

        One ``Transfer`` transaction is logged against the sender; nothing
        is logged against the receiver.
        """
        _require_account_number(sender_account_number, "Sender account number")
        _require(sender_pin, "Sender PIN")
        _require_account_number(receiver_account_number, "Receiver account number")
        if sender_account_number == receiver_account_number:
            raise InvalidArgumentError("Sender and receiver account numbers must be different")
        amount = _require_amount(amount)

        sender = self._get_account(sender_account_number, "Sender account not found")
        if sender.pin != sender_pin:
            raise AuthenticationError("Sender PIN does not match")
        receiver = self._get_account(receiver_account_number, "Receiver account not found")
        if sender.balance < amount:
            raise InsufficientFundsError("Insufficient funds")

        sender.balance -= amount
        receiver.balance += amount
        self._record(
            sender_account_number,
            TransactionType.TRANSFER,
            amount,
            recipient_account_id=receiver_account_number,
        )
        logger.info(
            "Transferred %s from %s to %s",
            amount,
            sender_account_number,
            receiver_account_number,
            extra=log_fields(
                account_number=sender_account_number,
                recipient_account_number=receiver_account_number,
                amount=amount,
            ),
        )
        return True

    def summary(self) -> dict[str, Any]:
        """Return entity counts."""
        return {
            "accounts": len(self.accounts),
            "transactions": len(self.transactions),
        }

    # Internals
    def _generate_unique_account_number(self) -> str:
        # Rejection sampling against the current accounts; with far fewer
        # accounts than 10**11 numbers this almost always takes one draw.
        existing = {a.account_number for a in self.accounts}
        while True:
            candidate = self.generator.account_number()
            if candidate not in existing:
                return candidate
            logger.debug("Account number collision, drawing again")

    def _get_account(self, account_number: str, message: str = "Account not found") -> Account:
        account = next((a for a in self.accounts if a.account_number == account_number), None)
        if account is None:
            raise AccountNotFoundError(message)
        return account

    def _record(
        self,
        account_id: str,
        transaction_type: TransactionType,
        amount: Decimal,
        recipient_account_id: str | None = None,
    ) -> None:
        self.transactions.append(
            Transaction(
                transaction_id=self.generator.transaction_id(),
                account_id=account_id,
                transaction_type=transaction_type,
                amount=amount,
                timestamp=datetime.now(),
                recipient_account_id=recipient_account_id,
            )
        )


def _require(value: str, label: str) -> None:
    if not isinstance(value, str) or not value:
        raise InvalidArgumentError(f"{label} cannot be null or empty")


def _require_account_number(value: str, label: str = "Account number") -> None:
    _require(value, label)
    if len(value) != ACCOUNT_NUMBER_LENGTH:
        raise InvalidArgumentError(f"{label} must be {ACCOUNT_NUMBER_LENGTH} digits long")


def _require_amount(amount: Any) -> Decimal:
    amount = to_decimal(amount, "Amount")
    if amount <= 0:
        raise InvalidArgumentError("Amount must be positive")
    return amount


def _check_pin(account: Account, pin: str) -> None:
    if account.pin != pin:
        raise AuthenticationError("PIN does not match")
