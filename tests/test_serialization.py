"""Tests for record serialization."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from bank_ledger.exceptions import MalformedDataError
from bank_ledger.models import Account, Transaction, TransactionType
from bank_ledger.storage.serialization import (
    account_from_dict,
    account_to_dict,
    serialize_value,
    transaction_from_dict,
    transaction_to_dict,
)


@pytest.fixture
def sample_account() -> Account:
    return Account(
        name="John Doe",
        account_number="12345678901",
        pin="1234",
        balance=Decimal("699.75"),
    )


@pytest.fixture
def sample_transfer() -> Transaction:
    return Transaction(
        transaction_id="0b6c8d5e-0f7e-4f4e-8a55-5c3d3f0d6b1a",
        account_id="12345678901",
        transaction_type=TransactionType.TRANSFER,
        amount=Decimal("25.10"),
        timestamp=datetime(2024, 6, 15, 10, 30, 0, 123456),
        recipient_account_id="10987654321",
    )


class TestSerializeValue:
    """Tests for serialize_value function."""

    def test_decimal_kept_exact(self) -> None:
        value = serialize_value(Decimal("12345678901234567.89"))

        assert isinstance(value, Decimal)
        assert value == Decimal("12345678901234567.89")

    def test_enum(self) -> None:
        assert serialize_value(TransactionType.DEPOSIT) == "Deposit"

    def test_datetime(self) -> None:
        assert serialize_value(datetime(2024, 6, 15, 10, 30)) == "2024-06-15T10:30:00"

    def test_passthrough(self) -> None:
        assert serialize_value("hello") == "hello"
        assert serialize_value(None) is None
        assert serialize_value(date(2024, 6, 15)) == date(2024, 6, 15)


class TestAccountMapping:
    """Tests for account <-> persisted object mapping."""

    def test_to_dict_uses_persisted_field_names(self, sample_account: Account) -> None:
        assert account_to_dict(sample_account) == {
            "Name": "John Doe",
            "AccountNumber": "12345678901",
            "Pin": "1234",
            "Balance": Decimal("699.75"),
        }

    def test_from_dict(self, sample_account: Account) -> None:
        data = {
            "Name": "John Doe",
            "AccountNumber": "12345678901",
            "Pin": "1234",
            "Balance": Decimal("699.75"),
        }

        assert account_from_dict(data) == sample_account

    def test_from_dict_integer_balance(self) -> None:
        account = account_from_dict(
            {"Name": "A", "AccountNumber": "12345678901", "Pin": "1234", "Balance": 0}
        )

        assert account.balance == Decimal("0")
        assert isinstance(account.balance, Decimal)

    def test_missing_field(self) -> None:
        with pytest.raises(MalformedDataError, match="Missing field 'Pin'"):
            account_from_dict({"Name": "A", "AccountNumber": "12345678901", "Balance": 0})

    def test_invalid_values(self) -> None:
        with pytest.raises(MalformedDataError, match="Invalid account record"):
            account_from_dict(
                {"Name": "A", "AccountNumber": "12345678901", "Pin": "1234", "Balance": -1}
            )

    def test_not_an_object(self) -> None:
        with pytest.raises(MalformedDataError, match="Expected a JSON object"):
            account_from_dict(["John Doe"])


class TestTransactionMapping:
    """Tests for transaction <-> persisted object mapping."""

    def test_to_dict_uses_persisted_field_names(self, sample_transfer: Transaction) -> None:
        assert transaction_to_dict(sample_transfer) == {
            "TransactionId": "0b6c8d5e-0f7e-4f4e-8a55-5c3d3f0d6b1a",
            "AccountId": "12345678901",
            "Type": "Transfer",
            "Amount": Decimal("25.10"),
            "Timestamp": "2024-06-15T10:30:00.123456",
            "RecipientAccountId": "10987654321",
        }

    def test_deposit_has_null_recipient(self) -> None:
        tx = Transaction(
            transaction_id="tx-1",
            account_id="12345678901",
            transaction_type=TransactionType.DEPOSIT,
            amount=Decimal("5"),
            timestamp=datetime(2024, 1, 1),
        )

        assert transaction_to_dict(tx)["RecipientAccountId"] is None

    def test_from_dict(self, sample_transfer: Transaction) -> None:
        data = transaction_to_dict(sample_transfer)
        data["Amount"] = Decimal("25.10")

        assert transaction_from_dict(data) == sample_transfer

    def test_absent_recipient_is_accepted(self) -> None:
        tx = transaction_from_dict(
            {
                "TransactionId": "tx-1",
                "AccountId": "12345678901",
                "Type": "Withdrawal",
                "Amount": Decimal("3.50"),
                "Timestamp": "2024-01-01T08:00:00",
            }
        )

        assert tx.transaction_type is TransactionType.WITHDRAWAL
        assert tx.recipient_account_id is None

    def test_type_ordinal(self) -> None:
        tx = transaction_from_dict(
            {
                "TransactionId": "tx-1",
                "AccountId": "12345678901",
                "Type": 0,
                "Amount": 10,
                "Timestamp": "2024-01-01T08:00:00",
                "RecipientAccountId": None,
            }
        )

        assert tx.transaction_type is TransactionType.DEPOSIT

    @pytest.mark.parametrize("type_value", ["Refund", 7, None])
    def test_unknown_type(self, type_value: object) -> None:
        with pytest.raises(MalformedDataError, match="Unknown transaction type"):
            transaction_from_dict(
                {
                    "TransactionId": "tx-1",
                    "AccountId": "12345678901",
                    "Type": type_value,
                    "Amount": 10,
                    "Timestamp": "2024-01-01T08:00:00",
                }
            )

    @pytest.mark.parametrize("timestamp", ["yesterday", 1704096000, None])
    def test_bad_timestamp(self, timestamp: object) -> None:
        with pytest.raises(MalformedDataError, match="Timestamp"):
            transaction_from_dict(
                {
                    "TransactionId": "tx-1",
                    "AccountId": "12345678901",
                    "Type": "Deposit",
                    "Amount": 10,
                    "Timestamp": timestamp,
                }
            )
