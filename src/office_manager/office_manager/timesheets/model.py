from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import days_in_month
from ..common.time_of_day import TimeOfDay
from ..core.enums import PaymentStatus, SheetState


@dataclass(frozen=True)
class DayEntry:
    """One calendar day of a timesheet.

    Normal shift: entrance, lunch start, lunch end, exit.
    Overtime shift: same shape, recorded separately.
    """

    day_number: int
    iso_date: date
    clock_in_1: Optional[TimeOfDay] = None
    clock_out_1: Optional[TimeOfDay] = None
    clock_in_2: Optional[TimeOfDay] = None
    clock_out_2: Optional[TimeOfDay] = None
    extra_in_1: Optional[TimeOfDay] = None
    extra_out_1: Optional[TimeOfDay] = None
    extra_in_2: Optional[TimeOfDay] = None
    extra_out_2: Optional[TimeOfDay] = None
    note: str = ""

    @property
    def normal_fields(self) -> tuple[Optional[TimeOfDay], ...]:
        return (self.clock_in_1, self.clock_out_1, self.clock_in_2, self.clock_out_2)

    @property
    def overtime_fields(self) -> tuple[Optional[TimeOfDay], ...]:
        return (self.extra_in_1, self.extra_out_1, self.extra_in_2, self.extra_out_2)

    def same_values(self, other: "DayEntry") -> bool:
        return (
            self.day_number == other.day_number
            and self.normal_fields == other.normal_fields
            and self.overtime_fields == other.overtime_fields
            and (self.note or "") == (other.note or "")
        )


@dataclass(frozen=True)
class PaymentSnapshot:
    """Values frozen on the sheet when payment is finalized."""

    hourly_rate: Decimal
    total_minutes: int
    gross_value: Decimal
    deduction_value: Decimal
    final_paid_value: Decimal
    normal_minutes: int = 0
    overtime_minutes: int = 0
    paid_at: Optional[datetime] = None


@dataclass(frozen=True)
class MonthSheet:
    collaborator_id: str
    month: int
    year: int
    days: tuple[DayEntry, ...]
    payment_status: PaymentStatus = PaymentStatus.PENDING
    snapshot: Optional[PaymentSnapshot] = None
    updated_at: Optional[datetime] = None

    @property
    def sheet_id(self) -> str:
        return sheet_key(self.collaborator_id, self.month, self.year)

    @property
    def state(self) -> SheetState:
        if self.payment_status == PaymentStatus.PAID:
            return SheetState.FINALIZED
        return SheetState.OPEN

    @property
    def is_locked(self) -> bool:
        return self.state == SheetState.FINALIZED

    def with_days(self, days: tuple[DayEntry, ...]) -> "MonthSheet":
        return replace(self, days=tuple(days))


@dataclass(frozen=True)
class MonthTotals:
    normal_minutes: int
    overtime_minutes: int

    @property
    def total_minutes(self) -> int:
        return self.normal_minutes + self.overtime_minutes


@dataclass(frozen=True)
class SheetTotals:
    """Totals as shown for a sheet: live for open sheets, frozen for paid ones."""

    normal_minutes: int
    overtime_minutes: int
    total_minutes: int
    frozen: bool
    snapshot: Optional[PaymentSnapshot] = field(default=None)


def sheet_key(collaborator_id: str, month: int, year: int) -> str:
    return f"{collaborator_id}_{int(year)}_{int(month)}"


def new_empty_sheet(collaborator_id: str, month: int, year: int) -> MonthSheet:
    """Sheet with every day of the month present and all time fields empty."""
    count = days_in_month(year, month)
    days = tuple(DayEntry(day_number=d, iso_date=date(int(year), int(month), d)) for d in range(1, count + 1))
    return MonthSheet(collaborator_id=str(collaborator_id), month=int(month), year=int(year), days=days)
