from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.office_manager.office_manager.core.auth import AuthContext
from src.office_manager.office_manager.core.enums import InstallmentStatus, Role
from src.office_manager.office_manager.core.exceptions import (
    AuthorizationError,
    ConcurrentUpdateError,
    NotFoundError,
    ValidationError,
)
from src.office_manager.office_manager.installments.model import Installment
from src.office_manager.office_manager.installments.service import InstallmentService
from src.office_manager.office_manager.projects.model import Project
from tests.fakes import InMemoryInstallments, InMemoryProjects

ADMIN = AuthContext(user_id="admin-1", role=Role.ADMIN)
ANA = AuthContext(user_id="c-1", role=Role.COLLABORATOR)
TODAY = date(2026, 4, 10)

PROJECT = Project(project_id="p-1", name="House", client_name="ACME", total_value=Decimal("1000.00"), installment_count=3)
OTHER = Project(project_id="p-2", name="Shop", client_name=None, total_value=Decimal("500.00"), installment_count=2)


def make_service():
    repo = InMemoryInstallments()
    svc = InstallmentService(repo, InMemoryProjects(PROJECT, OTHER), clock=lambda: TODAY)
    return svc, repo


def test_regenerate_creates_schedule():
    svc, _ = make_service()

    items = svc.regenerate(auth=ADMIN, project_id="p-1", total_value="1000.00", installment_count=3)

    assert [str(i.amount) for i in items] == ["333.33", "333.33", "333.34"]
    assert [i.installment_number for i in items] == [1, 2, 3]
    assert all(i.installment_id is not None for i in items)


def test_regenerate_defaults_to_project_values():
    svc, _ = make_service()

    items = svc.regenerate(auth=ADMIN, project_id="p-2")

    assert [str(i.amount) for i in items] == ["250.00", "250.00"]


def test_amendment_after_one_received():
    svc, repo = make_service()
    first = svc.regenerate(auth=ADMIN, project_id="p-1", total_value=1000, installment_count=3)
    svc.mark_received(auth=ADMIN, installment_ids=[first[0].installment_id])

    items = svc.regenerate(auth=ADMIN, project_id="p-1", total_value=1000, installment_count=4)

    assert items[0].status == InstallmentStatus.RECEIVED
    assert items[0].received_date == TODAY
    assert items[0].installment_id == first[0].installment_id
    pending = items[1:]
    assert [i.installment_number for i in pending] == [2, 3, 4]
    assert sum(i.amount for i in pending) == Decimal("666.67")


def test_regenerate_twice_gives_same_schedule():
    svc, _ = make_service()

    a = svc.regenerate(auth=ADMIN, project_id="p-1", total_value="1000.00", installment_count=7)
    b = svc.regenerate(auth=ADMIN, project_id="p-1", total_value="1000.00", installment_count=7)

    assert [(i.installment_number, i.amount) for i in a] == [(i.installment_number, i.amount) for i in b]


def test_regenerate_detects_concurrent_receipt():
    svc, repo = make_service()
    first = svc.regenerate(auth=ADMIN, project_id="p-1", total_value=1000, installment_count=3)

    def someone_marks_received(r):
        r.before_replace = None
        r.mark_received(installment_ids=[first[1].installment_id], received_date=TODAY)

    repo.before_replace = someone_marks_received

    with pytest.raises(ConcurrentUpdateError):
        svc.regenerate(auth=ADMIN, project_id="p-1", total_value=1000, installment_count=5)

    # Nothing was replaced: the original three are still there.
    assert [i.installment_id for i in repo.list_for_project("p-1")] == [i.installment_id for i in first]


def test_regenerate_validates_input():
    svc, _ = make_service()
    with pytest.raises(ValidationError):
        svc.regenerate(auth=ADMIN, project_id="p-1", total_value=1000, installment_count=-1)
    with pytest.raises(ValidationError):
        svc.regenerate(auth=ADMIN, project_id="p-1", total_value="-5", installment_count=2)
    with pytest.raises(ValidationError):
        svc.regenerate(auth=ADMIN, project_id="p-1", total_value="abc", installment_count=2)


def test_regenerate_unknown_project():
    svc, _ = make_service()
    with pytest.raises(NotFoundError):
        svc.regenerate(auth=ADMIN, project_id="nope", total_value=10, installment_count=1)


def test_installments_are_admin_only():
    svc, _ = make_service()
    with pytest.raises(AuthorizationError):
        svc.regenerate(auth=ANA, project_id="p-1", total_value=1000, installment_count=3)
    with pytest.raises(AuthorizationError):
        svc.mark_received(auth=ANA, installment_ids=[1])
    with pytest.raises(AuthorizationError):
        svc.list_for_project(auth=ANA, project_id="p-1")


def test_mark_received_with_no_ids_is_a_no_op():
    svc, repo = make_service()

    assert svc.mark_received(auth=ADMIN, installment_ids=[]) == 0
    assert repo.mark_received_calls == 0


def test_mark_received_is_idempotent_for_received_rows():
    svc, _ = make_service()
    items = svc.regenerate(auth=ADMIN, project_id="p-1", total_value=1000, installment_count=3)

    assert svc.mark_received(auth=ADMIN, installment_ids=[items[0].installment_id, items[1].installment_id]) == 2
    assert svc.mark_received(auth=ADMIN, installment_ids=[items[0].installment_id]) == 0


def test_mark_received_rejects_bad_ids():
    svc, _ = make_service()
    with pytest.raises(ValidationError):
        svc.mark_received(auth=ADMIN, installment_ids=["x"])


def test_refresh_overdue():
    svc, repo = make_service()
    repo.add(Installment(project_id="p-1", installment_number=1, amount=Decimal("500.00"), due_date=date(2026, 3, 1)))
    repo.add(Installment(project_id="p-1", installment_number=2, amount=Decimal("500.00"), due_date=date(2026, 5, 1)))

    assert svc.refresh_overdue(auth=ADMIN, project_id="p-1") == 1
    statuses = [i.status for i in svc.list_for_project(auth=ADMIN, project_id="p-1")]
    assert statuses == [InstallmentStatus.OVERDUE, InstallmentStatus.PENDING]


def test_receivables_report():
    svc, repo = make_service()
    items = svc.regenerate(auth=ADMIN, project_id="p-1", total_value=1000, installment_count=3)
    svc.mark_received(auth=ADMIN, installment_ids=[items[0].installment_id])
    done = svc.regenerate(auth=ADMIN, project_id="p-2", total_value=500, installment_count=1)
    svc.mark_received(auth=ADMIN, installment_ids=[done[0].installment_id])

    rows = {r.project_id: r for r in svc.receivables_report(auth=ADMIN)}

    house = rows["p-1"]
    assert house.received_count == 1
    assert house.received_value == Decimal("333.33")
    assert house.open_value == Decimal("666.67")
    assert house.all_received is False
    shop = rows["p-2"]
    assert shop.client_name == "Client not provided"
    assert shop.all_received is True
    assert shop.open_value == Decimal("0.00")
