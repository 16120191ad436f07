from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization checks."""

    ADMIN = "admin"
    COLLABORATOR = "collaborator"


class PaymentStatus(str, Enum):
    """Payment status of a month sheet as stored in the database."""

    PENDING = "pending"
    PAID = "paid"


class SheetState(str, Enum):
    """Lifecycle of a month sheet. The only transition is OPEN -> FINALIZED."""

    OPEN = "open"
    FINALIZED = "finalized"


class InstallmentStatus(str, Enum):
    PENDING = "pending"
    RECEIVED = "received"
    OVERDUE = "overdue"
