from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..core.enums import PaymentStatus


@dataclass(frozen=True)
class PayrollSummary:
    normal_minutes: int
    overtime_minutes: int
    total_minutes: int
    hourly_rate: Decimal
    gross_value: Decimal
    deduction: Decimal
    net_value: Decimal


@dataclass(frozen=True)
class PaymentReportRow:
    """Read-model for the monthly payment report (one row per collaborator)."""

    collaborator_id: str
    collaborator_name: str
    month: int
    year: int
    normal_minutes: int
    overtime_minutes: int
    total_minutes: int
    hourly_rate: Decimal
    gross_value: Decimal
    deduction: Decimal
    net_value: Decimal
    payment_status: PaymentStatus
    paid_value: Optional[Decimal] = None
