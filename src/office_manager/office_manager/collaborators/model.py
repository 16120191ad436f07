from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..core.constants import ADMIN_LOGIN


@dataclass(frozen=True)
class Collaborator:
    """Read-only view of a collaborator: what payroll needs to know."""

    collaborator_id: str
    name: str
    login: str
    hourly_rate: Decimal
    fixed_deduction: Decimal = Decimal("0.00")

    @property
    def is_admin_account(self) -> bool:
        return self.login == ADMIN_LOGIN
