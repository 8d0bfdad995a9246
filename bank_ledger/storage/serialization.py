"""Mapping between ledger records and their on-disk JSON objects."""

from datetime import datetime
from enum import Enum
from typing import Any

from bank_ledger.exceptions import InvalidArgumentError, MalformedDataError
from bank_ledger.models import Account, Transaction, TransactionType

# Attribute name -> persisted field name
ACCOUNT_FIELDS = {
    "name": "Name",
    "account_number": "AccountNumber",
    "pin": "Pin",
    "balance": "Balance",
}

TRANSACTION_FIELDS = {
    "transaction_id": "TransactionId",
    "account_id": "AccountId",
    "transaction_type": "Type",
    "amount": "Amount",
    "timestamp": "Timestamp",
    "recipient_account_id": "RecipientAccountId",
}

_TRANSACTION_TYPES_BY_ORDINAL = list(TransactionType)


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output.

    ``Decimal`` values are passed through so the encoder can write them as
    exact JSON numbers.
    """
    if isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    return value


def account_to_dict(account: Account) -> dict[str, Any]:
    """Convert an account to its persisted object."""
    return {
        key: serialize_value(getattr(account, attr)) for attr, key in ACCOUNT_FIELDS.items()
    }


def transaction_to_dict(transaction: Transaction) -> dict[str, Any]:
    """Convert a transaction to its persisted object."""
    return {
        key: serialize_value(getattr(transaction, attr))
        for attr, key in TRANSACTION_FIELDS.items()
    }


def account_from_dict(data: Any) -> Account:
    """Rebuild an account from its persisted object.

    Raises
    ------
    MalformedDataError
        If the object is missing fields or fails account validation.
    """
    values = _extract(data, ACCOUNT_FIELDS, optional=())
    try:
        return Account(**values)
    except InvalidArgumentError as e:
        raise MalformedDataError(f"Invalid account record: {e}") from e


def transaction_from_dict(data: Any) -> Transaction:
    """Rebuild a transaction from its persisted object.

    ``Type`` may be the type name or its ordinal, and ``RecipientAccountId``
    may be absent.

    Raises
    ------
    MalformedDataError
        If the object is missing fields or fails transaction validation.
    """
    values = _extract(data, TRANSACTION_FIELDS, optional=("recipient_account_id",))
    try:
        values["transaction_type"] = _parse_transaction_type(values["transaction_type"])
        values["timestamp"] = _parse_timestamp(values["timestamp"])
        return Transaction(**values)
    except InvalidArgumentError as e:
        raise MalformedDataError(f"Invalid transaction record: {e}") from e


def _extract(data: Any, mapping: dict[str, str], optional: tuple[str, ...]) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise MalformedDataError(f"Expected a JSON object, got {type(data).__name__}")
    values = {}
    for attr, key in mapping.items():
        if key in data:
            values[attr] = data[key]
        elif attr in optional:
            values[attr] = None
        else:
            raise MalformedDataError(f"Missing field {key!r}")
    return values


def _parse_transaction_type(value: Any) -> TransactionType:
    if isinstance(value, int) and not isinstance(value, bool):
        if 0 <= value < len(_TRANSACTION_TYPES_BY_ORDINAL):
            return _TRANSACTION_TYPES_BY_ORDINAL[value]
        raise InvalidArgumentError(f"Unknown transaction type: {value!r}")
    try:
        return TransactionType(value)
    except ValueError as e:
        raise InvalidArgumentError(f"Unknown transaction type: {value!r}") from e


def _parse_timestamp(value: Any) -> datetime:
    if not isinstance(value, str):
        raise InvalidArgumentError(f"Timestamp must be an ISO-8601 string, got {value!r}")
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise InvalidArgumentError(f"Timestamp must be an ISO-8601 string, got {value!r}") from e
