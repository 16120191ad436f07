from __future__ import annotations

from decimal import Decimal
from typing import Any

from ...common.money import non_negative, round2
from ...core.constants import MINUTES_PER_HOUR, ZERO
from ...timesheets.calculator import month_totals
from ...timesheets.model import MonthSheet, MonthTotals
from ..model import PayrollSummary
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: all worked hours x hourly rate, minus a flat deduction, not below 0."""

    def month_totals(self, sheet: MonthSheet) -> MonthTotals:
        return month_totals(sheet)

    def summarize(self, sheet: MonthSheet, *, hourly_rate: Any, fixed_deduction: Any = ZERO) -> PayrollSummary:
        totals = self.month_totals(sheet)
        rate = non_negative(hourly_rate)
        gross = round2(Decimal(totals.total_minutes) * rate / MINUTES_PER_HOUR)
        deduction = round2(non_negative(fixed_deduction))
        net = max(gross - deduction, ZERO)
        return PayrollSummary(
            normal_minutes=totals.normal_minutes,
            overtime_minutes=totals.overtime_minutes,
            total_minutes=totals.total_minutes,
            hourly_rate=rate,
            gross_value=gross,
            deduction=deduction,
            net_value=round2(net),
        )


def payroll_summary(sheet: MonthSheet, hourly_rate: Any, fixed_deduction: Any = ZERO) -> PayrollSummary:
    return StandardPayrollCalculator().summarize(sheet, hourly_rate=hourly_rate, fixed_deduction=fixed_deduction)
