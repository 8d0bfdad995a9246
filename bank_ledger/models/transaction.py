"""Transaction model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from bank_ledger.exceptions import InvalidArgumentError
from bank_ledger.models.account import ACCOUNT_NUMBER_LENGTH, is_account_number
from bank_ledger.models.enums import TransactionType
from bank_ledger.models.money import to_decimal


@dataclass
class Transaction:
    """A single recorded money movement.

    Transfers are recorded once, against the sender, with the receiver in
    ``recipient_account_id``. Deposits and withdrawals carry no recipient.
    """

    transaction_id: str
    account_id: str
    transaction_type: TransactionType
    amount: Decimal
    timestamp: datetime
    recipient_account_id: str | None = None

    def __post_init__(self) -> None:
        # Checked in this order so the first bad field is the one reported
        if not isinstance(self.transaction_id, str) or not self.transaction_id:
            raise InvalidArgumentError("Transaction ID cannot be null or empty.")
        if not self.account_id:
            raise InvalidArgumentError("Account ID cannot be null or empty.")
        try:
            self.transaction_type = TransactionType(self.transaction_type)
        except ValueError as e:
            raise InvalidArgumentError(
                f"Unknown transaction type: {self.transaction_type!r}"
            ) from e
        self.amount = to_decimal(self.amount, "Amount")
        if not self.amount > 0:
            raise InvalidArgumentError("Amount must be a positive value.")
        if not isinstance(self.timestamp, datetime) or self.timestamp == datetime.min:
            raise InvalidArgumentError("Timestamp must be a valid date and time.")
        if self.transaction_type == TransactionType.TRANSFER and not self.recipient_account_id:
            raise InvalidArgumentError(
                "Recipient account ID cannot be null or empty for transfer transactions."
            )
        if self.transaction_type != TransactionType.TRANSFER and self.recipient_account_id:
            raise InvalidArgumentError(
                "Recipient account ID is only allowed on transfer transactions."
            )
        if self.recipient_account_id is not None and not is_account_number(
            self.recipient_account_id
        ):
            raise InvalidArgumentError(
                f"Recipient account ID must be exactly {ACCOUNT_NUMBER_LENGTH} digits long."
            )
        if not is_account_number(self.account_id):
            raise InvalidArgumentError(
                f"Account ID must be exactly {ACCOUNT_NUMBER_LENGTH} digits long."
            )
