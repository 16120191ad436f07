from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any

from ...timesheets.model import MonthSheet, MonthTotals
from ..model import PayrollSummary


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def month_totals(self, sheet: MonthSheet) -> MonthTotals:
        raise NotImplementedError

    @abstractmethod
    def summarize(self, sheet: MonthSheet, *, hourly_rate: Any, fixed_deduction: Any = Decimal("0")) -> PayrollSummary:
        raise NotImplementedError
