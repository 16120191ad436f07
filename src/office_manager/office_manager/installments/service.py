from __future__ import annotations

from datetime import date
from typing import Any, Callable, Iterable, Optional

from loguru import logger

from ..common.datetime_utils import today_local
from ..common.money import round2, sum_amounts
from ..common.validators import require_non_empty, require_non_negative_amount, require_non_negative_int
from ..core.auth import AuthContext
from ..core.exceptions import ConcurrentUpdateError, NotFoundError, ValidationError
from ..projects.model import Project
from ..projects.repository import ProjectRepository
from . import allocator
from .model import Installment, ReceivablesRow
from .repository import InstallmentRepository


class InstallmentService:
    """Installment operations. Every call is admin only."""

    def __init__(
        self,
        installments: InstallmentRepository,
        projects: ProjectRepository,
        *,
        clock: Callable[[], date] = today_local,
    ):
        self._installments = installments
        self._projects = projects
        self._clock = clock

    def list_for_project(self, *, auth: AuthContext, project_id: str) -> list[Installment]:
        auth.require_admin()
        project_id = require_non_empty(project_id, "Project")
        return list(self._installments.list_for_project(project_id))

    def regenerate(
        self,
        *,
        auth: AuthContext,
        project_id: str,
        total_value: Any = None,
        installment_count: Any = None,
    ) -> list[Installment]:
        """Rebuild the pending part of a project's schedule.

        Received installments stay as they are; the unpaid remainder is
        spread over the installments still to be created.
        Missing total_value / installment_count default to the project's own.
        """

        auth.require_admin()
        project = self._require_project(require_non_empty(project_id, "Project"))
        project_id = project.project_id
        if total_value is None:
            total_value = project.total_value
        if installment_count is None:
            installment_count = project.installment_count
        total = require_non_negative_amount(total_value, "Total value")
        count = require_non_negative_int(installment_count, "Installment count")

        existing = list(self._installments.list_for_project(project_id))
        received, _ = allocator.split_received(existing)
        result = allocator.generate(project_id, total, count, existing)
        new_items = [i for i in result if not i.is_received]

        ok = self._installments.replace_pending(
            project_id=project_id,
            expected_received_ids=[i.installment_id for i in received if i.installment_id is not None],
            new_installments=new_items,
        )
        if not ok:
            logger.warning(f"Installments of project {project_id} changed during regeneration")
            raise ConcurrentUpdateError("Installments were updated by someone else, please reload and try again")

        logger.info(
            f"Regenerated installments of project {project_id}: total={round2(total)} count={count} "
            f"received={len(received)} new={len(new_items)} new_sum={sum_amounts(i.amount for i in new_items)}"
        )
        return list(self._installments.list_for_project(project_id))

    def mark_received(
        self,
        *,
        auth: AuthContext,
        installment_ids: Iterable[Any],
        today: Optional[date] = None,
    ) -> int:
        auth.require_admin()
        try:
            ids = sorted({int(i) for i in installment_ids})
        except (TypeError, ValueError):
            raise ValidationError("Invalid installment id")
        if not ids:
            return 0

        changed = self._installments.mark_received(installment_ids=ids, received_date=today or self._clock())
        logger.info(f"Marked {changed} of {len(ids)} installments as received")
        return changed

    def refresh_overdue(self, *, auth: AuthContext, project_id: str, today: Optional[date] = None) -> int:
        auth.require_admin()
        project_id = require_non_empty(project_id, "Project")
        changed = self._installments.mark_overdue(project_id=project_id, today=today or self._clock())
        if changed:
            logger.info(f"{changed} installments of project {project_id} are now overdue")
        return changed

    def receivables_report(self, *, auth: AuthContext) -> list[ReceivablesRow]:
        auth.require_admin()

        by_project: dict[str, list[Installment]] = {}
        for inst in self._installments.list_all():
            by_project.setdefault(inst.project_id, []).append(inst)

        rows: list[ReceivablesRow] = []
        for project in self._projects.list_all():
            items = by_project.get(project.project_id, [])
            received, _ = allocator.split_received(items)
            received_value = allocator.received_total(received)
            total = round2(project.total_value)
            rows.append(
                ReceivablesRow(
                    project_id=project.project_id,
                    project_name=project.name,
                    client_name=project.client_name or "Client not provided",
                    total_value=total,
                    installment_count=project.installment_count,
                    received_count=len(received),
                    received_value=received_value,
                    open_value=round2(total - received_value),
                    all_received=bool(items) and all(i.is_received for i in items),
                )
            )
        return rows

    def _require_project(self, project_id: str) -> Project:
        project = self._projects.get_by_id(project_id)
        if not project:
            raise NotFoundError("Project not found")
        return project
