"""Fixed-point money helpers."""

from decimal import Decimal, InvalidOperation
from typing import Any

from bank_ledger.exceptions import InvalidArgumentError


def to_decimal(value: Any, field_name: str = "amount") -> Decimal:
    """Convert ``value`` to a finite ``Decimal``.

    Floats go through ``str`` so ``1000.50`` becomes ``Decimal("1000.5")``
    rather than its binary expansion.
    """
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{field_name} must be a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise InvalidArgumentError(f"{field_name} must be a number, got {value!r}") from e
    if not result.is_finite():
        raise InvalidArgumentError(f"{field_name} must be a finite number, got {value!r}")
    return result
