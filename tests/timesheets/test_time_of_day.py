from __future__ import annotations

from datetime import date, time

import pytest

from src.office_manager.office_manager.common.time_of_day import (
    TimeOfDay,
    format_minutes,
    is_malformed_time,
    parse_time_of_day,
)
from src.office_manager.office_manager.core.exceptions import ValidationError
from src.office_manager.office_manager.timesheets.codec import day_from_dict, day_to_dict
from src.office_manager.office_manager.timesheets.model import new_empty_sheet


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("08:30", TimeOfDay(8, 30)),
        ("8:05", TimeOfDay(8, 5)),
        (" 17:00 ", TimeOfDay(17, 0)),
        ("07:45:59", TimeOfDay(7, 45)),
        ("00:00", TimeOfDay(0, 0)),
        (time(9, 10), TimeOfDay(9, 10)),
    ],
)
def test_parse_valid_times(raw, expected):
    assert parse_time_of_day(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "   ", "24:00", "12:60", "8h", "12-30", "ab:cd", "1:2:3:4", 830, "08:0", "008:00", "\u0661\u0662:00", "08:00:5"])
def test_parse_invalid_times_are_absent(raw):
    assert parse_time_of_day(raw) is None


def test_is_malformed_time_ignores_empty_values():
    assert not is_malformed_time("")
    assert not is_malformed_time(None)
    assert not is_malformed_time("08:00")
    assert is_malformed_time("8 o'clock")


def test_time_of_day_minutes_and_str():
    assert TimeOfDay(13, 5).minutes == 785
    assert str(TimeOfDay(7, 3)) == "07:03"


def test_format_minutes():
    assert format_minutes(0) == "00:00"
    assert format_minutes(-5) == "00:00"
    assert format_minutes(480) == "08:00"
    assert format_minutes(10_000) == "166:40"


def test_new_empty_sheet_has_every_day_of_month():
    sheet = new_empty_sheet("c-9", 2, 2024)

    assert len(sheet.days) == 29
    assert sheet.days[0].iso_date == date(2024, 2, 1)
    assert sheet.days[-1].day_number == 29
    assert all(f is None for d in sheet.days for f in d.normal_fields + d.overtime_fields)
    assert sheet.sheet_id == "c-9_2024_2"


def test_codec_keeps_times_and_note():
    data = {"day": 3, "iso_date": "2026-03-03", "clock_in_1": "08:00", "extra_out_2": "21:15", "note": "client visit"}
    day = day_from_dict(data)

    assert day.clock_in_1 == TimeOfDay(8, 0)
    assert day.clock_out_1 is None
    out = day_to_dict(day)
    assert out["extra_out_2"] == "21:15"
    assert out["clock_out_1"] == ""
    assert out["note"] == "client visit"


def test_codec_lenient_mode_drops_bad_time():
    day = day_from_dict({"day": 1, "iso_date": "2026-03-01", "clock_in_1": "8am"})
    assert day.clock_in_1 is None


def test_codec_strict_mode_rejects_bad_time():
    with pytest.raises(ValidationError):
        day_from_dict({"day": 1, "iso_date": "2026-03-01", "clock_in_1": "8am"}, strict=True)


def test_codec_rejects_missing_date():
    with pytest.raises(ValidationError):
        day_from_dict({"day": 1})


def test_codec_strict_mode_rejects_short_minutes():
    with pytest.raises(ValidationError):
        day_from_dict({"day": 1, "iso_date": "2026-03-01", "clock_in_1": "08:0"}, strict=True)
