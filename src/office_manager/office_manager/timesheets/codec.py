"""Day entries <-> plain dicts (JSON column and HTTP payloads)."""

from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Mapping

from ..common.datetime_utils import parse_iso_date
from ..common.time_of_day import format_time_of_day, is_malformed_time, parse_time_of_day
from ..core.exceptions import ValidationError
from .model import DayEntry

TIME_FIELDS = (
    "clock_in_1",
    "clock_out_1",
    "clock_in_2",
    "clock_out_2",
    "extra_in_1",
    "extra_out_1",
    "extra_in_2",
    "extra_out_2",
)


def day_to_dict(day: DayEntry) -> dict[str, Any]:
    out: dict[str, Any] = {"day": day.day_number, "iso_date": day.iso_date.isoformat()}
    for name in TIME_FIELDS:
        out[name] = format_time_of_day(getattr(day, name))
    out["note"] = day.note or ""
    return out


def day_from_dict(data: Mapping[str, Any], *, strict: bool = False) -> DayEntry:
    """Build a DayEntry from a dict.

    With ``strict`` a non-empty value that is not a valid HH:MM time raises
    ValidationError; otherwise it is stored as not recorded.
    """

    try:
        day_number = int(data["day"])
        iso = data.get("iso_date")
        iso_date = iso if isinstance(iso, date) else parse_iso_date(str(iso))
    except (KeyError, TypeError, ValueError):
        raise ValidationError("Invalid day entry")

    times = {}
    for name in TIME_FIELDS:
        raw = data.get(name)
        if strict and is_malformed_time(raw):
            raise ValidationError(f"Invalid time (HH:MM) on day {day_number}: {name}={raw!r}")
        times[name] = parse_time_of_day(raw)

    return DayEntry(day_number=day_number, iso_date=iso_date, note=str(data.get("note") or ""), **times)


def days_to_list(days: Iterable[DayEntry]) -> list[dict[str, Any]]:
    return [day_to_dict(d) for d in days]


def days_from_list(items: Iterable[Mapping[str, Any]], *, strict: bool = False) -> tuple[DayEntry, ...]:
    return tuple(day_from_dict(item, strict=strict) for item in items)
