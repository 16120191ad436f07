from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_decimal
from .model import Project
from .repository import ProjectRepository


class MySQLProjectRepository(ProjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, project_id: str) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT project_id, name, client_name, total_value, installment_count
                FROM projects
                WHERE project_id=%s
                """,
                (str(project_id),),
            )
            r = fetchone(cur)
            return self._to_project(r) if r else None

    def list_all(self) -> Sequence[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT project_id, name, client_name, total_value, installment_count
                FROM projects
                ORDER BY created_at DESC
                """
            )
            return [self._to_project(r) for r in fetchall(cur)]

    @staticmethod
    def _to_project(r: dict) -> Project:
        return Project(
            project_id=str(r["project_id"]),
            name=r["name"],
            client_name=r.get("client_name"),
            total_value=normalize_mysql_decimal(r.get("total_value")),
            installment_count=int(r.get("installment_count") or 0),
        )
