from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_decimal
from .model import Collaborator
from .repository import CollaboratorRepository


class MySQLCollaboratorRepository(CollaboratorRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, collaborator_id: str) -> Optional[Collaborator]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT collaborator_id, name, login, hourly_rate, fixed_deduction
                FROM collaborators
                WHERE collaborator_id=%s
                """,
                (str(collaborator_id),),
            )
            r = fetchone(cur)
            return self._to_collaborator(r) if r else None

    def list_all(self) -> Sequence[Collaborator]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT collaborator_id, name, login, hourly_rate, fixed_deduction
                FROM collaborators
                ORDER BY name ASC
                """
            )
            return [self._to_collaborator(r) for r in fetchall(cur)]

    @staticmethod
    def _to_collaborator(r: dict) -> Collaborator:
        return Collaborator(
            collaborator_id=str(r["collaborator_id"]),
            name=r["name"],
            login=r["login"],
            hourly_rate=normalize_mysql_decimal(r.get("hourly_rate")),
            fixed_deduction=normalize_mysql_decimal(r.get("fixed_deduction")),
        )
