"""Example: using the calculators and the allocator directly (no Flask, no DB)."""

from dataclasses import replace
from datetime import date
from decimal import Decimal

from src.office_manager.office_manager.common.time_of_day import format_minutes
from src.office_manager.office_manager.installments import allocator
from src.office_manager.office_manager.payroll.calculator.standard_calculator import payroll_summary
from src.office_manager.office_manager.timesheets.codec import day_from_dict
from src.office_manager.office_manager.timesheets.model import new_empty_sheet


def main():
    sheet = new_empty_sheet("c-1", 3, 2026)
    day = day_from_dict(
        {
            "day": 2,
            "iso_date": "2026-03-02",
            "clock_in_1": "08:00",
            "clock_out_1": "12:00",
            "clock_in_2": "13:00",
            "clock_out_2": "17:00",
            "extra_in_1": "18:00",
            "extra_out_2": "20:00",
        }
    )
    sheet = sheet.with_days(sheet.days[:1] + (day,) + sheet.days[2:])

    summary = payroll_summary(sheet, hourly_rate=Decimal("25.00"), fixed_deduction=Decimal("50.00"))
    print("worked:", format_minutes(summary.total_minutes), "net:", summary.net_value)

    schedule = allocator.generate("p-1", Decimal("1000.00"), 3)
    print([str(i.amount) for i in schedule])

    paid = allocator.mark_received(
        [replace(i, installment_id=n) for n, i in enumerate(schedule, start=1)],
        [1],
        today=date.today(),
    )
    print([str(i.amount) for i in allocator.generate("p-1", Decimal("1000.00"), 4, paid)])


if __name__ == "__main__":
    main()
