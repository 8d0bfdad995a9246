"""Account model."""

from dataclasses import dataclass, field
from decimal import Decimal

from bank_ledger.exceptions import InvalidArgumentError
from bank_ledger.models.money import to_decimal

ACCOUNT_NUMBER_LENGTH = 11


def is_account_number(value: str | None) -> bool:
    """Return True when ``value`` is an 11-digit decimal string."""
    return (
        isinstance(value, str)
        and len(value) == ACCOUNT_NUMBER_LENGTH
        and value.isascii()
        and value.isdigit()
    )


@dataclass
class Account:
    """Bank account held by a single customer.

    Only the owning ``Bank`` mutates ``name`` and ``balance``; the account
    number never changes once the account exists. The PIN is kept in plain
    text.
    """

    name: str
    account_number: str
    pin: str = field(repr=False)
    balance: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise InvalidArgumentError("Name cannot be null or empty.")
        if not is_account_number(self.account_number):
            raise InvalidArgumentError(
                f"Account number must be a {ACCOUNT_NUMBER_LENGTH}-digit string."
            )
        if not isinstance(self.pin, str) or not self.pin:
            raise InvalidArgumentError("Pin cannot be null or empty.")
        self.balance = to_decimal(self.balance, "Balance")
        if self.balance < 0:
            raise InvalidArgumentError("Balance cannot be negative.")
