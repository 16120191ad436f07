"""In-memory repositories shared by the service and API tests."""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import Callable, Optional

from src.office_manager.office_manager.collaborators.model import Collaborator
from src.office_manager.office_manager.core.enums import InstallmentStatus, PaymentStatus
from src.office_manager.office_manager.installments.model import Installment
from src.office_manager.office_manager.projects.model import Project
from src.office_manager.office_manager.timesheets.model import MonthSheet, PaymentSnapshot, sheet_key


class InMemorySheets:
    def __init__(self):
        self.sheets: dict[str, MonthSheet] = {}
        self.save_calls = 0

    def get(self, *, collaborator_id, month, year) -> Optional[MonthSheet]:
        return self.sheets.get(sheet_key(collaborator_id, month, year))

    def save_days(self, sheet: MonthSheet) -> bool:
        self.save_calls += 1
        stored = self.sheets.get(sheet.sheet_id)
        if stored is not None and stored.payment_status == PaymentStatus.PAID:
            return False
        self.sheets[sheet.sheet_id] = replace(sheet, payment_status=PaymentStatus.PENDING, snapshot=None)
        return True

    def finalize(self, sheet: MonthSheet, snapshot: PaymentSnapshot) -> bool:
        stored = self.sheets.get(sheet.sheet_id)
        if stored is not None and stored.payment_status == PaymentStatus.PAID:
            return False
        self.sheets[sheet.sheet_id] = replace(sheet, payment_status=PaymentStatus.PAID, snapshot=snapshot)
        return True


class InMemoryCollaborators:
    def __init__(self, *collaborators: Collaborator):
        self._by_id = {c.collaborator_id: c for c in collaborators}

    def get_by_id(self, collaborator_id):
        return self._by_id.get(str(collaborator_id))

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda c: c.name)


class InMemoryProjects:
    def __init__(self, *projects: Project):
        self._projects = list(projects)

    def get_by_id(self, project_id):
        for p in self._projects:
            if p.project_id == str(project_id):
                return p
        return None

    def list_all(self):
        return list(self._projects)


class InMemoryInstallments:
    def __init__(self):
        self._rows: dict[int, Installment] = {}
        self._next_id = 1
        self.before_replace: Optional[Callable[["InMemoryInstallments"], None]] = None
        self.mark_received_calls = 0

    def add(self, inst: Installment) -> Installment:
        inst = replace(inst, installment_id=self._next_id)
        self._rows[self._next_id] = inst
        self._next_id += 1
        return inst

    def list_for_project(self, project_id):
        rows = [i for i in self._rows.values() if i.project_id == str(project_id)]
        return sorted(rows, key=lambda i: i.installment_number)

    def list_all(self):
        return sorted(self._rows.values(), key=lambda i: (i.project_id, i.installment_number))

    def replace_pending(self, *, project_id, expected_received_ids, new_installments) -> bool:
        if self.before_replace:
            self.before_replace(self)
        received = {i.installment_id for i in self.list_for_project(project_id) if i.is_received}
        if received != set(expected_received_ids):
            return False
        for inst in self.list_for_project(project_id):
            if not inst.is_received:
                del self._rows[inst.installment_id]
        for inst in new_installments:
            self.add(inst)
        return True

    def mark_received(self, *, installment_ids, received_date) -> int:
        self.mark_received_calls += 1
        changed = 0
        for iid in installment_ids:
            inst = self._rows.get(int(iid))
            if inst and not inst.is_received:
                self._rows[inst.installment_id] = replace(
                    inst, status=InstallmentStatus.RECEIVED, received_date=received_date
                )
                changed += 1
        return changed

    def mark_overdue(self, *, project_id, today) -> int:
        changed = 0
        for inst in self.list_for_project(project_id):
            if inst.status == InstallmentStatus.PENDING and inst.due_date and inst.due_date < today:
                self._rows[inst.installment_id] = replace(inst, status=InstallmentStatus.OVERDUE)
                changed += 1
        return changed


def collaborator(cid="c-1", name="Ana", login="ana", rate="25.00", deduction="50.00") -> Collaborator:
    return Collaborator(
        collaborator_id=cid,
        name=name,
        login=login,
        hourly_rate=Decimal(rate),
        fixed_deduction=Decimal(deduction),
    )
