from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/relatorios", methods=["GET"], endpoint="list_reports")
    def list_reports():
        return jsonify(container.report_service.list_reports())

    @app.route("/relatorios/<int:report_id>", methods=["DELETE"], endpoint="delete_report")
    def delete_report(report_id: int):
        container.report_service.delete_report(report_id)
        return jsonify({"sucesso": True})

    @app.route("/chamada/verificar", methods=["GET"], endpoint="check_session")
    def check_session():
        report = container.report_service.find_session(
            turma_id=request.args.get("turma_id"),
            data=request.args.get("data"),
        )
        if report is None:
            return jsonify({"encontrada": False})
        return jsonify({"encontrada": True, **report.to_dict()})

    @app.route("/chamada", methods=["POST"], endpoint="record_session")
    def record_session():
        result = container.attendance_recorder.record(request.get_json(silent=True))
        return jsonify(result.to_dict())
