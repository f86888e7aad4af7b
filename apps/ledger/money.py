"""Currency helpers shared by the split calculator and the balance engine."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from .exceptions import InvalidAmountError


CENT = Decimal('0.01')

# Largest discrepancy accepted between an amount and the sum of its shares.
TOLERANCE = Decimal('0.01')

ZERO = Decimal('0.00')


def to_money(value, field='amount'):
    """
    Coerce a user-supplied value to a Decimal quantized to cents.

    Floats go through ``str()`` so 0.1 becomes Decimal('0.10') rather than
    its binary expansion.

    Raises:
        InvalidAmountError: If the value is not a finite number.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidAmountError(f"{field} must be a number, got {value!r}")
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmountError(f"{field} must be a number, got {value!r}")
    if not amount.is_finite():
        raise InvalidAmountError(f"{field} must be a finite number, got {value!r}")
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def to_cents(amount):
    """Convert a cent-quantized Decimal to an integer number of cents."""
    return int(amount * 100)


def from_cents(cents):
    return (Decimal(cents) / 100).quantize(CENT)


def is_zero(amount):
    """True when the amount is within rounding tolerance of zero."""
    return abs(amount) < TOLERANCE
