from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_auth, to_json
from ..common.time_of_day import format_minutes
from ..container import Container
from ..core.exceptions import ValidationError
from .calculator import day_minutes
from .codec import day_to_dict, days_from_list
from .model import MonthSheet


def register(app: Flask, container: Container) -> None:
    def _sheet_payload(sheet: MonthSheet) -> dict:
        totals = container.timesheet_service.totals_for(sheet)
        days = []
        for day in sheet.days:
            item = day_to_dict(day)
            # Paid months report only the frozen snapshot totals.
            if not sheet.is_locked:
                normal, overtime = day_minutes(day)
                item["normal_minutes"] = normal
                item["overtime_minutes"] = overtime
            days.append(item)

        return {
            "sheet_id": sheet.sheet_id,
            "collaborator_id": sheet.collaborator_id,
            "month": sheet.month,
            "year": sheet.year,
            "payment_status": sheet.payment_status.value,
            "locked": sheet.is_locked,
            "days": days,
            "totals": {
                "normal_minutes": totals.normal_minutes,
                "overtime_minutes": totals.overtime_minutes,
                "total_minutes": totals.total_minutes,
                "normal": format_minutes(totals.normal_minutes),
                "overtime": format_minutes(totals.overtime_minutes),
                "total": format_minutes(totals.total_minutes),
                "frozen": totals.frozen,
            },
            "snapshot": to_json(sheet.snapshot),
        }

    @app.route("/api/timesheets/<collaborator_id>/<int:year>/<int:month>", methods=["GET"], endpoint="timesheet_get")
    def timesheet_get(collaborator_id: str, year: int, month: int):
        sheet = container.timesheet_service.load_month_sheet(
            auth=current_auth(), collaborator_id=collaborator_id, month=month, year=year
        )
        return jsonify(_sheet_payload(sheet))

    @app.route("/api/timesheets/<collaborator_id>/<int:year>/<int:month>", methods=["PUT"], endpoint="timesheet_save")
    def timesheet_save(collaborator_id: str, year: int, month: int):
        auth = current_auth()
        data = request.get_json(silent=True) or {}
        items = data.get("days")
        if not isinstance(items, list):
            raise ValidationError("days must be a list")

        sheet = MonthSheet(
            collaborator_id=str(collaborator_id),
            month=month,
            year=year,
            days=days_from_list(items, strict=True),
        )
        container.timesheet_service.save_month_sheet(auth=auth, sheet=sheet)

        saved = container.timesheet_service.load_month_sheet(
            auth=auth, collaborator_id=collaborator_id, month=month, year=year
        )
        return jsonify(_sheet_payload(saved))

    @app.route(
        "/api/timesheets/<collaborator_id>/<int:year>/<int:month>/payment",
        methods=["GET"],
        endpoint="timesheet_payment_preview",
    )
    def timesheet_payment_preview(collaborator_id: str, year: int, month: int):
        summary = container.timesheet_service.preview_payment(
            auth=current_auth(), collaborator_id=collaborator_id, month=month, year=year
        )
        return jsonify(to_json(summary))

    @app.route(
        "/api/timesheets/<collaborator_id>/<int:year>/<int:month>/finalize",
        methods=["POST"],
        endpoint="timesheet_finalize",
    )
    def timesheet_finalize(collaborator_id: str, year: int, month: int):
        sheet = container.timesheet_service.finalize_payment(
            auth=current_auth(), collaborator_id=collaborator_id, month=month, year=year
        )
        return jsonify(_sheet_payload(sheet))
