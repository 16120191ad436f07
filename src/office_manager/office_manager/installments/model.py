from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import InstallmentStatus


@dataclass(frozen=True)
class Installment:
    """One scheduled payment of a project."""

    project_id: str
    installment_number: int
    amount: Decimal
    status: InstallmentStatus = InstallmentStatus.PENDING
    due_date: Optional[date] = None
    received_date: Optional[date] = None
    installment_id: Optional[int] = None

    @property
    def is_received(self) -> bool:
        return self.status == InstallmentStatus.RECEIVED


@dataclass(frozen=True)
class ReceivablesRow:
    """Read-model for the receivables report (one row per project)."""

    project_id: str
    project_name: str
    client_name: str
    total_value: Decimal
    installment_count: int
    received_count: int
    received_value: Decimal
    open_value: Decimal
    all_received: bool
