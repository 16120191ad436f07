from __future__ import annotations

from datetime import date
from typing import Collection, Sequence

from ..core.enums import InstallmentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    in_placeholders,
    normalize_mysql_date,
    normalize_mysql_decimal,
)
from .model import Installment
from .repository import InstallmentRepository

_COLUMNS = "installment_id, project_id, installment_number, amount, due_date, received_date, status"


class MySQLInstallmentRepository(InstallmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_project(self, project_id: str) -> Sequence[Installment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM installments WHERE project_id=%s ORDER BY installment_number ASC",
                (str(project_id),),
            )
            return [self._to_installment(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[Installment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM installments ORDER BY project_id, installment_number")
            return [self._to_installment(r) for r in fetchall(cur)]

    def replace_pending(
        self,
        *,
        project_id: str,
        expected_received_ids: Collection[int],
        new_installments: Sequence[Installment],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT installment_id, status FROM installments WHERE project_id=%s FOR UPDATE",
                (str(project_id),),
            )
            rows = fetchall(cur)
            received_ids = {int(r["installment_id"]) for r in rows if r["status"] == InstallmentStatus.RECEIVED.value}
            if received_ids != {int(i) for i in expected_received_ids}:
                return False

            cur.execute(
                "DELETE FROM installments WHERE project_id=%s AND status<>%s",
                (str(project_id), InstallmentStatus.RECEIVED.value),
            )

            if new_installments:
                cur.executemany(
                    """
                    INSERT INTO installments(project_id, installment_number, amount, due_date, received_date, status)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    [
                        (
                            str(project_id),
                            int(i.installment_number),
                            i.amount,
                            i.due_date,
                            i.received_date,
                            i.status.value,
                        )
                        for i in new_installments
                    ],
                )
            return True

    def mark_received(self, *, installment_ids: Collection[int], received_date: date) -> int:
        ids = [int(i) for i in installment_ids]
        if not ids:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE installments
                SET status=%s, received_date=%s
                WHERE installment_id IN ({in_placeholders(ids)}) AND status<>%s
                """,
                (InstallmentStatus.RECEIVED.value, received_date, *ids, InstallmentStatus.RECEIVED.value),
            )
            return int(cur.rowcount)

    def mark_overdue(self, *, project_id: str, today: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE installments
                SET status=%s
                WHERE project_id=%s AND status=%s AND due_date IS NOT NULL AND due_date < %s
                """,
                (InstallmentStatus.OVERDUE.value, str(project_id), InstallmentStatus.PENDING.value, today),
            )
            return int(cur.rowcount)

    @staticmethod
    def _to_installment(r: dict) -> Installment:
        return Installment(
            installment_id=int(r["installment_id"]),
            project_id=str(r["project_id"]),
            installment_number=int(r["installment_number"]),
            amount=normalize_mysql_decimal(r["amount"]),
            due_date=normalize_mysql_date(r.get("due_date")),
            received_date=normalize_mysql_date(r.get("received_date")),
            status=InstallmentStatus(r["status"]),
        )
