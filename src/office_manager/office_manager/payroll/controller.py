from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import today_local
from ..common.http import current_auth, to_json
from ..common.time_of_day import format_minutes
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll/report", methods=["GET"], endpoint="payroll_report")
    def payroll_report():
        auth = current_auth()
        today = today_local()
        month = request.args.get("month") or today.month
        year = request.args.get("year") or today.year

        rows = container.payroll_report_service.build_monthly_report(auth=auth, month=month, year=year)
        out = []
        for row in rows:
            item = to_json(row)
            item["total_hours"] = format_minutes(row.total_minutes)
            out.append(item)
        return jsonify({"month": int(month), "year": int(year), "rows": out})
