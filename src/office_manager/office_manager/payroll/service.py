from __future__ import annotations

from typing import Optional

from loguru import logger

from ..collaborators.repository import CollaboratorRepository
from ..common.validators import require_month_year
from ..core.auth import AuthContext
from ..core.enums import PaymentStatus
from ..timesheets.model import new_empty_sheet
from ..timesheets.repository import TimesheetRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PaymentReportRow


class PayrollReportService:
    def __init__(
        self,
        sheets: TimesheetRepository,
        collaborators: CollaboratorRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._sheets = sheets
        self._collaborators = collaborators
        self._calculator = calculator or StandardPayrollCalculator()

    def build_monthly_report(self, *, auth: AuthContext, month: int, year: int) -> list[PaymentReportRow]:
        """One row per collaborator (the admin account excluded).

        Paid months report their frozen snapshot; open months are computed live.
        """

        auth.require_admin()
        month, year = require_month_year(month, year)

        rows: list[PaymentReportRow] = []
        for collab in self._collaborators.list_all():
            if collab.is_admin_account:
                continue

            sheet = self._sheets.get(collaborator_id=collab.collaborator_id, month=month, year=year)
            if sheet is None:
                sheet = new_empty_sheet(collab.collaborator_id, month, year)

            if sheet.is_locked and sheet.snapshot is not None:
                snap = sheet.snapshot
                rows.append(
                    PaymentReportRow(
                        collaborator_id=collab.collaborator_id,
                        collaborator_name=collab.name,
                        month=month,
                        year=year,
                        normal_minutes=snap.normal_minutes,
                        overtime_minutes=snap.overtime_minutes,
                        total_minutes=snap.total_minutes,
                        hourly_rate=snap.hourly_rate,
                        gross_value=snap.gross_value,
                        deduction=snap.deduction_value,
                        net_value=snap.final_paid_value,
                        payment_status=PaymentStatus.PAID,
                        paid_value=snap.final_paid_value,
                    )
                )
                continue

            summary = self._calculator.summarize(
                sheet,
                hourly_rate=collab.hourly_rate,
                fixed_deduction=collab.fixed_deduction,
            )
            rows.append(
                PaymentReportRow(
                    collaborator_id=collab.collaborator_id,
                    collaborator_name=collab.name,
                    month=month,
                    year=year,
                    normal_minutes=summary.normal_minutes,
                    overtime_minutes=summary.overtime_minutes,
                    total_minutes=summary.total_minutes,
                    hourly_rate=summary.hourly_rate,
                    gross_value=summary.gross_value,
                    deduction=summary.deduction,
                    net_value=summary.net_value,
                    payment_status=PaymentStatus.PENDING,
                )
            )

        logger.debug(f"Payment report {month:02d}/{year}: {len(rows)} collaborators")
        return rows
