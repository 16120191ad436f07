from __future__ import annotations

from typing import Optional, Protocol

from .model import MonthSheet, PaymentSnapshot


class TimesheetRepository(Protocol):
    def get(self, *, collaborator_id: str, month: int, year: int) -> Optional[MonthSheet]:
        raise NotImplementedError

    def save_days(self, sheet: MonthSheet) -> bool:
        """Insert or update the day entries of an unpaid sheet.

        Returns False, without writing, if the stored sheet is already paid.
        """

        raise NotImplementedError

    def finalize(self, sheet: MonthSheet, snapshot: PaymentSnapshot) -> bool:
        """Write the snapshot and flip payment_status to paid.

        Compare-and-swap on payment_status: returns False if the stored
        sheet was already paid.
        """

        raise NotImplementedError
