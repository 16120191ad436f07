from __future__ import annotations

from datetime import date
from typing import Collection, Protocol, Sequence

from .model import Installment


class InstallmentRepository(Protocol):
    def list_for_project(self, project_id: str) -> Sequence[Installment]:
        """Ordered by installment_number."""

        raise NotImplementedError

    def list_all(self) -> Sequence[Installment]:
        raise NotImplementedError

    def replace_pending(
        self,
        *,
        project_id: str,
        expected_received_ids: Collection[int],
        new_installments: Sequence[Installment],
    ) -> bool:
        """Atomically delete the project's non-received installments and insert the new ones.

        Received installments are never touched. Returns False, without
        writing, if the set of received installment ids differs from
        ``expected_received_ids`` (they changed since the caller read them).
        """

        raise NotImplementedError

    def mark_received(self, *, installment_ids: Collection[int], received_date: date) -> int:
        """Batch update in one transaction. Returns the number of rows changed."""

        raise NotImplementedError

    def mark_overdue(self, *, project_id: str, today: date) -> int:
        raise NotImplementedError
