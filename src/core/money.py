"""Decimal helpers for cent-exact money arithmetic."""
from decimal import ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value, default=None):
    """Coerce *value* to ``Decimal``; return *default* when it cannot be parsed.

    Floats go through ``str()`` so ``1.8`` becomes ``Decimal("1.8")`` rather
    than its binary approximation. Booleans, NaN and infinities are rejected.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        result = value
    else:
        raw = str(value).strip().replace("$", "").replace(",", "")
        if not raw:
            return default
        try:
            result = Decimal(raw)
        except (InvalidOperation, ValueError):
            return default
    if not result.is_finite():
        return default
    return result


def quantize_cents(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def ceil_cents(value: Decimal) -> Decimal:
    """Round up to the next cent (33.333 -> 33.34)."""
    return value.quantize(CENT, rounding=ROUND_CEILING)


def floor_cents(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_FLOOR)
