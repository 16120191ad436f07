from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Project:
    """Read-only view of a project used by the receivables report."""

    project_id: str
    name: str
    total_value: Decimal
    installment_count: int
    client_name: Optional[str] = None
