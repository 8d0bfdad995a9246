"""Identifier generation for accounts and transactions."""

from bank_ledger.generators.base import BaseGenerator
from bank_ledger.models.account import ACCOUNT_NUMBER_LENGTH


class AccountNumberGenerator(BaseGenerator):
    """Generate account numbers and transaction ids.

    Account numbers are ``ACCOUNT_NUMBER_LENGTH`` independent uniform
    decimal digits; leading zeros are allowed. Uniqueness is the caller's
    concern, see ``Bank.create_account``.
    """

    def account_number(self) -> str:
        """Draw one candidate account number."""
        return self.fake.numerify("#" * ACCOUNT_NUMBER_LENGTH)

    def transaction_id(self) -> str:
        """Return a new UUID4 string."""
        return str(self.fake.uuid4())
