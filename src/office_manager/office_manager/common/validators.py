from __future__ import annotations

import math
from decimal import Decimal
from typing import Any

from ..core.constants import MAX_YEAR, MIN_YEAR
from ..core.exceptions import ValidationError
from .money import to_decimal


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_month_year(month: Any, year: Any) -> tuple[int, int]:
    try:
        m, y = int(month), int(year)
    except (TypeError, ValueError):
        raise ValidationError("Invalid month/year")
    if not 1 <= m <= 12:
        raise ValidationError("Month must be between 1 and 12")
    if not MIN_YEAR <= y <= MAX_YEAR:
        raise ValidationError(f"Year must be between {MIN_YEAR} and {MAX_YEAR}")
    return m, y


def require_non_negative_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        n = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if n < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return n


def require_non_negative_amount(value: Any, field_name: str) -> Decimal:
    if not _looks_numeric(value):
        raise ValidationError(f"{field_name} must be a number")
    d = to_decimal(value)
    if d < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return d


def _looks_numeric(value: Any) -> bool:
    if isinstance(value, bool) or value is None:
        return False
    if isinstance(value, (int, Decimal)):
        return True
    try:
        return math.isfinite(float(str(value).strip()))
    except ValueError:
        return False
