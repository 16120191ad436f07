from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import time
from typing import Any, Optional

from ..core.constants import MINUTES_PER_HOUR

_HHMM = re.compile(r"(\d{1,2}):(\d{2})(?::(\d{2}))?", re.ASCII)


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """Wall-clock time with minute precision."""

    hour: int
    minute: int

    @property
    def minutes(self) -> int:
        """Minutes since midnight."""
        return self.hour * MINUTES_PER_HOUR + self.minute

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


def parse_time_of_day(value: Any) -> Optional[TimeOfDay]:
    """Parse a recorded clock time.

    Empty, malformed or out-of-range values are treated as "not recorded"
    and return None. This is the only place that policy is applied.
    """

    if value is None:
        return None
    if isinstance(value, TimeOfDay):
        return value
    if isinstance(value, time):
        return TimeOfDay(hour=value.hour, minute=value.minute)
    if not isinstance(value, str):
        return None

    v = value.strip()
    if not v:
        return None

    m = _HHMM.fullmatch(v)
    if m is None:
        return None

    hour, minute = int(m.group(1)), int(m.group(2))
    if hour > 23 or minute > 59:
        return None
    if m.group(3) is not None and int(m.group(3)) > 59:
        return None
    return TimeOfDay(hour=hour, minute=minute)


def is_malformed_time(value: Any) -> bool:
    """True for a non-empty value that parse_time_of_day would discard."""
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return parse_time_of_day(value) is None


def format_time_of_day(value: Optional[TimeOfDay]) -> str:
    return str(value) if value is not None else ""


def format_minutes(minutes: int) -> str:
    """Format a minute total as HH:MM ("00:00" for zero or negative)."""
    if minutes <= 0:
        return "00:00"
    return f"{minutes // MINUTES_PER_HOUR:02d}:{minutes % MINUTES_PER_HOUR:02d}"
