"""Split a project's value into installments.

Received installments are money already in hand: they are returned exactly
as given and only the unpaid remainder is spread over the new ones.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Any, Collection, Iterable, Sequence

from loguru import logger

from ..common.money import floor2, non_negative, round2, sum_amounts, to_cents
from ..core.constants import ALLOCATION_TOLERANCE_CENTS
from ..core.enums import InstallmentStatus
from ..core.exceptions import AllocationIntegrityError
from .model import Installment


def split_received(installments: Iterable[Installment]) -> tuple[list[Installment], list[Installment]]:
    """(received, not received), each ordered by installment number."""
    received: list[Installment] = []
    others: list[Installment] = []
    for inst in installments:
        (received if inst.is_received else others).append(inst)
    received.sort(key=lambda i: i.installment_number)
    others.sort(key=lambda i: i.installment_number)
    return received, others


def received_total(installments: Iterable[Installment]) -> Decimal:
    return sum_amounts(i.amount for i in installments if i.is_received)


def generate(
    project_id: str,
    total_value: Any,
    installment_count: int,
    existing: Sequence[Installment] = (),
) -> list[Installment]:
    """Build the installment set for a project.

    Pending and overdue installments are always discarded and regenerated.
    If ``installment_count`` does not exceed the number of received
    installments, or nothing is left to pay, the received ones are
    returned unchanged.

    New installments take the lowest numbers not already held by a received
    one, so numbers stay unique. When the received ones are 1..k this is
    k+1..N.
    """

    received, _ = split_received(existing)
    received_count = len(received)
    count = _as_count(installment_count)

    if count <= received_count:
        return received

    total = round2(non_negative(total_value))
    remainder = round2(total - received_total(received))
    if remainder <= 0:
        return received

    new_count = count - received_count
    base = floor2(remainder / new_count)
    last = round2(remainder - base * (new_count - 1))

    numbers = _free_numbers({i.installment_number for i in received}, new_count)
    new_items = [
        Installment(
            project_id=str(project_id),
            installment_number=number,
            amount=last if pos == new_count else base,
            status=InstallmentStatus.PENDING,
        )
        for pos, number in enumerate(numbers, start=1)
    ]

    result = sorted(received + new_items, key=lambda i: i.installment_number)
    _check_sum(project_id, result, total)
    return result


def _as_count(value: Any) -> int:
    """Non-numeric or negative counts mean no installments."""
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


def _free_numbers(taken: Collection[int], n: int) -> list[int]:
    out: list[int] = []
    candidate = 1
    while len(out) < n:
        if candidate not in taken:
            out.append(candidate)
        candidate += 1
    return out


def _check_sum(project_id: str, installments: Sequence[Installment], total: Decimal) -> None:
    got = sum(to_cents(i.amount) for i in installments)
    expected = to_cents(total)
    if abs(got - expected) > ALLOCATION_TOLERANCE_CENTS:
        logger.error(f"Installment sum mismatch for project {project_id}: {got} != {expected} cents")
        raise AllocationIntegrityError(
            f"installments of project {project_id} sum to {got} cents, expected {expected}"
        )


def mark_received(installments: Sequence[Installment], ids: Collection[int], *, today: date) -> list[Installment]:
    """Set status=received and received_date=today for the given ids.

    Already received installments are left untouched.
    """

    wanted = {int(i) for i in ids}
    out: list[Installment] = []
    for inst in installments:
        if inst.installment_id is not None and inst.installment_id in wanted and not inst.is_received:
            inst = replace(inst, status=InstallmentStatus.RECEIVED, received_date=today)
        out.append(inst)
    return out


def mark_overdue(installments: Sequence[Installment], *, today: date) -> list[Installment]:
    """Pending installments past their due date become overdue."""
    out: list[Installment] = []
    for inst in installments:
        if inst.status == InstallmentStatus.PENDING and inst.due_date is not None and inst.due_date < today:
            inst = replace(inst, status=InstallmentStatus.OVERDUE)
        out.append(inst)
    return out
