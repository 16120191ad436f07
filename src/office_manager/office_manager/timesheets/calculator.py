"""Pure timesheet arithmetic.

All functions take recorded clock times (``TimeOfDay``, ``datetime.time``,
``"HH:MM"`` strings or empty values) and never raise on bad input: anything
that cannot be read as a time counts as not recorded.
"""

from __future__ import annotations

from typing import Any

from ..common.time_of_day import parse_time_of_day
from .model import DayEntry, MonthSheet, MonthTotals


def worked_minutes(start: Any, end: Any) -> int:
    """Minutes between two clock times; 0 if either is missing or end < start."""
    s = parse_time_of_day(start)
    e = parse_time_of_day(end)
    if s is None or e is None:
        return 0
    if e.minutes < s.minutes:
        # No overnight shifts.
        return 0
    return e.minutes - s.minutes


def daily_total(in1: Any, out1: Any, in2: Any, out2: Any) -> int:
    """Worked minutes of one shift given its four clock fields.

    Only fully determined blocks are counted; an unfinished block is never
    extrapolated.
    """

    e1 = parse_time_of_day(in1)
    s1 = parse_time_of_day(out1)
    e2 = parse_time_of_day(in2)
    s2 = parse_time_of_day(out2)

    if e1 is None:
        return 0

    if s1 is None and e2 is None and s2 is None:
        return 0

    # Left for lunch and never came back.
    if s1 is not None and e2 is None and s2 is None:
        return worked_minutes(e1, s1)

    # No break recorded: entrance to exit.
    if s1 is None and e2 is None and s2 is not None:
        return worked_minutes(e1, s2)

    if s1 is not None and e2 is not None and s2 is not None:
        return worked_minutes(e1, s1) + worked_minutes(e2, s2)

    # Back from lunch but no exit yet: only the morning counts.
    if s1 is not None and e2 is not None and s2 is None:
        return worked_minutes(e1, s1)

    return 0


def day_minutes(day: DayEntry) -> tuple[int, int]:
    """(normal, overtime) minutes of one day."""
    return daily_total(*day.normal_fields), daily_total(*day.overtime_fields)


def month_totals(sheet: MonthSheet) -> MonthTotals:
    normal = 0
    overtime = 0
    for day in sheet.days:
        n, o = day_minutes(day)
        normal += n
        overtime += o
    return MonthTotals(normal_minutes=normal, overtime_minutes=overtime)
