from __future__ import annotations

import json
from typing import Optional

from ..core.enums import PaymentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, load_json_column, normalize_mysql_decimal
from .codec import days_from_list, days_to_list
from .model import MonthSheet, PaymentSnapshot, new_empty_sheet
from .repository import TimesheetRepository


class MySQLTimesheetRepository(TimesheetRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, collaborator_id: str, month: int, year: int) -> Optional[MonthSheet]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT sheet_id, collaborator_id, month, year, days, payment_status,
                       snapshot_hourly_rate, snapshot_total_minutes, snapshot_normal_minutes,
                       snapshot_overtime_minutes, computed_gross_value, deduction_value,
                       final_paid_value, paid_at, updated_at
                FROM month_sheets
                WHERE collaborator_id=%s AND month=%s AND year=%s
                """,
                (str(collaborator_id), int(month), int(year)),
            )
            r = fetchone(cur)
            if not r:
                return None
            return self._to_sheet(r)

    def save_days(self, sheet: MonthSheet) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # Row lock so a concurrent finalize cannot slip in between.
            cur.execute("SELECT payment_status FROM month_sheets WHERE sheet_id=%s FOR UPDATE", (sheet.sheet_id,))
            r = fetchone(cur)
            if r and r["payment_status"] == PaymentStatus.PAID.value:
                return False

            cur.execute(
                """
                INSERT INTO month_sheets(sheet_id, collaborator_id, month, year, days, payment_status)
                VALUES(%s,%s,%s,%s,%s,'pending')
                ON DUPLICATE KEY UPDATE days=VALUES(days)
                """,
                (
                    sheet.sheet_id,
                    sheet.collaborator_id,
                    int(sheet.month),
                    int(sheet.year),
                    json.dumps(days_to_list(sheet.days)),
                ),
            )
            return True

    def finalize(self, sheet: MonthSheet, snapshot: PaymentSnapshot) -> bool:
        days_json = json.dumps(days_to_list(sheet.days))
        with db_cursor(self._conn_factory) as (_, cur):
            # A never-saved sheet has no row yet.
            cur.execute(
                """
                INSERT IGNORE INTO month_sheets(sheet_id, collaborator_id, month, year, days, payment_status)
                VALUES(%s,%s,%s,%s,%s,'pending')
                """,
                (sheet.sheet_id, sheet.collaborator_id, int(sheet.month), int(sheet.year), days_json),
            )
            cur.execute(
                """
                UPDATE month_sheets
                SET payment_status='paid',
                    days=%s,
                    snapshot_hourly_rate=%s,
                    snapshot_total_minutes=%s,
                    snapshot_normal_minutes=%s,
                    snapshot_overtime_minutes=%s,
                    computed_gross_value=%s,
                    deduction_value=%s,
                    final_paid_value=%s,
                    paid_at=%s
                WHERE sheet_id=%s AND payment_status='pending'
                """,
                (
                    days_json,
                    snapshot.hourly_rate,
                    int(snapshot.total_minutes),
                    int(snapshot.normal_minutes),
                    int(snapshot.overtime_minutes),
                    snapshot.gross_value,
                    snapshot.deduction_value,
                    snapshot.final_paid_value,
                    snapshot.paid_at,
                    sheet.sheet_id,
                ),
            )
            return cur.rowcount == 1

    @staticmethod
    def _to_sheet(r: dict) -> MonthSheet:
        collaborator_id = str(r["collaborator_id"])
        month, year = int(r["month"]), int(r["year"])
        raw_days = load_json_column(r.get("days")) or []
        days = days_from_list(raw_days) if raw_days else new_empty_sheet(collaborator_id, month, year).days

        status = PaymentStatus(r["payment_status"])
        snapshot = None
        if status == PaymentStatus.PAID:
            snapshot = PaymentSnapshot(
                hourly_rate=normalize_mysql_decimal(r.get("snapshot_hourly_rate")),
                total_minutes=int(r.get("snapshot_total_minutes") or 0),
                normal_minutes=int(r.get("snapshot_normal_minutes") or 0),
                overtime_minutes=int(r.get("snapshot_overtime_minutes") or 0),
                gross_value=normalize_mysql_decimal(r.get("computed_gross_value")),
                deduction_value=normalize_mysql_decimal(r.get("deduction_value")),
                final_paid_value=normalize_mysql_decimal(r.get("final_paid_value")),
                paid_at=r.get("paid_at"),
            )

        return MonthSheet(
            collaborator_id=collaborator_id,
            month=month,
            year=year,
            days=days,
            payment_status=status,
            snapshot=snapshot,
            updated_at=r.get("updated_at"),
        )
