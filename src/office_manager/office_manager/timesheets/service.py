from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

from loguru import logger

from ..collaborators.repository import CollaboratorRepository
from ..common.datetime_utils import days_in_month, now_local
from ..common.validators import require_month_year
from ..core.auth import AuthContext
from ..core.enums import PaymentStatus
from ..core.exceptions import NotFoundError, SheetLockedError, ValidationError
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator
from ..payroll.model import PayrollSummary
from .model import MonthSheet, PaymentSnapshot, SheetTotals, new_empty_sheet
from .repository import TimesheetRepository


class TimesheetService:
    """Load/save month sheets and run the one-way OPEN -> FINALIZED transition.

    The lock rule lives here and in the repository's guarded writes; callers
    never re-check payment_status themselves.
    """

    def __init__(
        self,
        sheets: TimesheetRepository,
        collaborators: CollaboratorRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._sheets = sheets
        self._collaborators = collaborators
        self._calculator = calculator or StandardPayrollCalculator()
        self._clock = clock

    def load_month_sheet(self, *, auth: AuthContext, collaborator_id: str, month: int, year: int) -> MonthSheet:
        auth.require_self_or_admin(collaborator_id)
        month, year = require_month_year(month, year)
        return self._load(str(collaborator_id), month, year)

    def save_month_sheet(self, *, auth: AuthContext, sheet: MonthSheet) -> None:
        auth.require_self_or_admin(sheet.collaborator_id)
        month, year = require_month_year(sheet.month, sheet.year)
        self._validate_days(sheet, month, year)

        stored = self._sheets.get(collaborator_id=sheet.collaborator_id, month=month, year=year)
        if stored is not None and stored.is_locked:
            if _same_days(stored, sheet):
                logger.debug(f"Sheet {sheet.sheet_id} is paid; unchanged save ignored")
                return
            logger.warning(f"Rejected save of paid sheet {sheet.sheet_id} by user {auth.user_id}")
            raise SheetLockedError("Timesheet is locked: this month has already been paid")

        if not self._sheets.save_days(sheet):
            logger.warning(f"Sheet {sheet.sheet_id} was paid while saving; save rejected")
            raise SheetLockedError("Timesheet is locked: this month has already been paid")

        logger.info(f"Saved timesheet {sheet.sheet_id}")

    def month_totals(self, *, auth: AuthContext, collaborator_id: str, month: int, year: int) -> SheetTotals:
        sheet = self.load_month_sheet(auth=auth, collaborator_id=collaborator_id, month=month, year=year)
        return self.totals_for(sheet)

    def totals_for(self, sheet: MonthSheet) -> SheetTotals:
        """Live totals for an open sheet, the frozen snapshot for a paid one."""
        if sheet.is_locked and sheet.snapshot is not None:
            snap = sheet.snapshot
            return SheetTotals(
                normal_minutes=snap.normal_minutes,
                overtime_minutes=snap.overtime_minutes,
                total_minutes=snap.total_minutes,
                frozen=True,
                snapshot=snap,
            )

        totals = self._calculator.month_totals(sheet)
        return SheetTotals(
            normal_minutes=totals.normal_minutes,
            overtime_minutes=totals.overtime_minutes,
            total_minutes=totals.total_minutes,
            frozen=False,
        )

    def preview_payment(self, *, auth: AuthContext, collaborator_id: str, month: int, year: int) -> PayrollSummary:
        auth.require_admin()
        month, year = require_month_year(month, year)
        collaborator = self._collaborators.get_by_id(str(collaborator_id))
        if not collaborator:
            raise NotFoundError("Collaborator not found")

        sheet = self._load(str(collaborator_id), month, year)
        return self._calculator.summarize(
            sheet,
            hourly_rate=collaborator.hourly_rate,
            fixed_deduction=collaborator.fixed_deduction,
        )

    def finalize_payment(self, *, auth: AuthContext, collaborator_id: str, month: int, year: int) -> MonthSheet:
        auth.require_admin()
        month, year = require_month_year(month, year)

        collaborator = self._collaborators.get_by_id(str(collaborator_id))
        if not collaborator:
            raise NotFoundError("Collaborator not found")

        sheet = self._load(str(collaborator_id), month, year)
        if sheet.is_locked:
            raise SheetLockedError("This month has already been paid")

        summary = self._calculator.summarize(
            sheet,
            hourly_rate=collaborator.hourly_rate,
            fixed_deduction=collaborator.fixed_deduction,
        )
        snapshot = PaymentSnapshot(
            hourly_rate=summary.hourly_rate,
            total_minutes=summary.total_minutes,
            normal_minutes=summary.normal_minutes,
            overtime_minutes=summary.overtime_minutes,
            gross_value=summary.gross_value,
            deduction_value=summary.deduction,
            final_paid_value=summary.net_value,
            paid_at=self._clock(),
        )

        if not self._sheets.finalize(sheet, snapshot):
            logger.warning(f"Finalize of {sheet.sheet_id} lost the race: sheet already paid")
            raise SheetLockedError("This month has already been paid")

        logger.info(
            f"Finalized payment of {sheet.sheet_id}: {summary.total_minutes} min, "
            f"gross={summary.gross_value} deduction={summary.deduction} net={summary.net_value}"
        )
        return replace(sheet, payment_status=PaymentStatus.PAID, snapshot=snapshot)

    def _load(self, collaborator_id: str, month: int, year: int) -> MonthSheet:
        sheet = self._sheets.get(collaborator_id=collaborator_id, month=month, year=year)
        if sheet is None:
            return new_empty_sheet(collaborator_id, month, year)
        return sheet

    @staticmethod
    def _validate_days(sheet: MonthSheet, month: int, year: int) -> None:
        expected = days_in_month(year, month)
        if len(sheet.days) != expected:
            raise ValidationError(f"Expected {expected} days for {month:02d}/{year}, got {len(sheet.days)}")
        for i, day in enumerate(sheet.days, start=1):
            if day.day_number != i:
                raise ValidationError(f"Day {day.day_number} out of order (expected {i})")
            if (day.iso_date.year, day.iso_date.month, day.iso_date.day) != (year, month, i):
                raise ValidationError(f"Day {i} has date {day.iso_date.isoformat()}")


def _same_days(a: MonthSheet, b: MonthSheet) -> bool:
    return len(a.days) == len(b.days) and all(x.same_values(y) for x, y in zip(a.days, b.days))
