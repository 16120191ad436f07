from __future__ import annotations

from datetime import date
from decimal import Decimal

from src.office_manager.office_manager.common.time_of_day import parse_time_of_day
from src.office_manager.office_manager.payroll.calculator.standard_calculator import (
    StandardPayrollCalculator,
    payroll_summary,
)
from src.office_manager.office_manager.timesheets.model import DayEntry, new_empty_sheet


def _sheet_with(normal: tuple[str, str, str, str], overtime: tuple[str, str, str, str] = ("", "", "", "")):
    sheet = new_empty_sheet("c-1", 1, 2026)
    n = [parse_time_of_day(v) for v in normal]
    o = [parse_time_of_day(v) for v in overtime]
    day = DayEntry(
        day_number=5,
        iso_date=date(2026, 1, 5),
        clock_in_1=n[0],
        clock_out_1=n[1],
        clock_in_2=n[2],
        clock_out_2=n[3],
        extra_in_1=o[0],
        extra_out_1=o[1],
        extra_in_2=o[2],
        extra_out_2=o[3],
    )
    days = list(sheet.days)
    days[4] = day
    return sheet.with_days(tuple(days))


def test_gross_uses_normal_plus_overtime_hours():
    sheet = _sheet_with(("08:00", "12:00", "13:00", "17:00"), ("18:00", "", "", "20:00"))

    summary = payroll_summary(sheet, Decimal("25.00"), Decimal("50.00"))

    assert summary.normal_minutes == 480
    assert summary.overtime_minutes == 120
    assert summary.total_minutes == 600
    assert summary.gross_value == Decimal("250.00")
    assert summary.deduction == Decimal("50.00")
    assert summary.net_value == Decimal("200.00")


def test_net_never_below_zero():
    sheet = _sheet_with(("08:00", "", "", "09:00"))

    summary = StandardPayrollCalculator().summarize(sheet, hourly_rate="10", fixed_deduction="1000000")

    assert summary.gross_value == Decimal("10.00")
    assert summary.net_value == Decimal("0.00")


def test_gross_is_rounded_to_the_cent():
    # 100 min at 33.33/h = 55.55
    sheet = _sheet_with(("08:00", "", "", "09:40"))

    summary = payroll_summary(sheet, Decimal("33.33"))

    assert summary.gross_value == Decimal("55.55")
    assert summary.net_value == Decimal("55.55")


def test_negative_inputs_are_clamped():
    sheet = _sheet_with(("08:00", "", "", "10:00"))

    summary = payroll_summary(sheet, Decimal("-5"), Decimal("-20"))

    assert summary.gross_value == Decimal("0.00")
    assert summary.deduction == Decimal("0.00")
    assert summary.net_value == Decimal("0.00")


def test_empty_sheet_pays_nothing():
    summary = payroll_summary(new_empty_sheet("c-1", 4, 2026), 40, 0)
    assert summary.total_minutes == 0
    assert summary.net_value == Decimal("0.00")
