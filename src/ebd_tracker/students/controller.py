from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/alunos", methods=["POST"], endpoint="create_student")
    def create_student():
        student_id = container.student_service.create_student(request.get_json(silent=True))
        return jsonify({"sucesso": True, "id": student_id})

    @app.route("/alunos/<int:student_id>", methods=["PUT"], endpoint="update_student")
    def update_student(student_id: int):
        container.student_service.update_student(student_id, request.get_json(silent=True))
        return jsonify({"sucesso": True})
