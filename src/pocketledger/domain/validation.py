"""Input checks shared by the domain services.

All helpers raise ValidationError so callers can reject input before anything
is persisted.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional, TypeVar

from pocketledger.domain.errors import ValidationError, invalid_choice
from pocketledger.utils.amount_parser import to_cents

E = TypeVar("E", bound=Enum)


def require_id(value, field: str = "user_id") -> int:
    """Return ``value`` if it is a positive integer identifier."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"A valid {field} is required")
    return value


def require_choice(enum_cls: type[E], value, field: str) -> E:
    """Coerce ``value`` into a member of ``enum_cls``."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(invalid_choice(field, str(value), [m.value for m in enum_cls]))


def require_amount(value, field: str, allow_zero: bool = False) -> Decimal:
    """Return ``value`` as a 2-place Decimal, rejecting floats and non-positive amounts."""
    if isinstance(value, float) or isinstance(value, bool):
        raise ValidationError(f"{field} must be a Decimal, not {type(value).__name__}")
    try:
        amount = to_cents(Decimal(value))
    except (ArithmeticError, TypeError, ValueError):
        raise ValidationError(f"Invalid {field} '{value}'")
    if not amount.is_finite():
        raise ValidationError(f"{field} must be finite")
    if amount < 0 or (amount == 0 and not allow_zero):
        qualifier = "zero or greater" if allow_zero else "greater than zero"
        raise ValidationError(f"{field} must be {qualifier}, got {amount}")
    return amount


def require_name(value: Optional[str], field: str = "name") -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field} must not be empty")
    return value.strip()
