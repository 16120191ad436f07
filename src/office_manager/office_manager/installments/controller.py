from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_auth, to_json
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/projects/<project_id>/installments", methods=["GET"], endpoint="installments_list")
    def installments_list(project_id: str):
        items = container.installment_service.list_for_project(auth=current_auth(), project_id=project_id)
        return jsonify({"project_id": project_id, "installments": to_json(items)})

    @app.route("/api/projects/<project_id>/installments/generate", methods=["POST"], endpoint="installments_generate")
    def installments_generate(project_id: str):
        data = request.get_json(silent=True) or {}
        items = container.installment_service.regenerate(
            auth=current_auth(),
            project_id=project_id,
            total_value=data.get("total_value"),
            installment_count=data.get("installment_count"),
        )
        return jsonify({"project_id": project_id, "installments": to_json(items)})

    @app.route("/api/projects/<project_id>/installments/refresh-overdue", methods=["POST"], endpoint="installments_overdue")
    def installments_overdue(project_id: str):
        changed = container.installment_service.refresh_overdue(auth=current_auth(), project_id=project_id)
        return jsonify({"project_id": project_id, "updated": changed})

    @app.route("/api/installments/receive", methods=["POST"], endpoint="installments_receive")
    def installments_receive():
        data = request.get_json(silent=True) or {}
        ids = data.get("ids")
        if not isinstance(ids, list):
            raise ValidationError("ids must be a list")
        changed = container.installment_service.mark_received(auth=current_auth(), installment_ids=ids)
        return jsonify({"updated": changed})

    @app.route("/api/reports/receivables", methods=["GET"], endpoint="receivables_report")
    def receivables_report():
        rows = container.installment_service.receivables_report(auth=current_auth())
        return jsonify({"rows": to_json(rows)})
