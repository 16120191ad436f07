from __future__ import annotations

from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable

from ..core.constants import CENT, ZERO


def to_decimal(value: Any) -> Decimal:
    """Convert a number coming from a form, JSON or the DB into Decimal.

    Floats go through ``str`` so that 333.33 stays 333.33. Unparseable
    values become zero.
    """

    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        value = repr(value)
    try:
        d = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return ZERO
    return d if d.is_finite() else ZERO


def round2(value: Any) -> Decimal:
    """Round half-up to two decimal places."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def floor2(value: Any) -> Decimal:
    """Round down to the cent (truncate towards zero)."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_DOWN)


def to_cents(value: Any) -> int:
    return int(round2(value) * 100)


def from_cents(cents: int) -> Decimal:
    return (Decimal(int(cents)) / 100).quantize(CENT)


def sum_amounts(values: Iterable[Any]) -> Decimal:
    """Exact sum, computed in integer cents."""
    return from_cents(sum(to_cents(v) for v in values))


def non_negative(value: Any) -> Decimal:
    d = to_decimal(value)
    return d if d > 0 else ZERO
