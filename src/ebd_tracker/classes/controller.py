from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/turmas", methods=["GET"], endpoint="list_classes")
    def list_classes():
        return jsonify(container.class_service.list_classes())

    @app.route("/turmas", methods=["POST"], endpoint="create_class")
    def create_class():
        class_id = container.class_service.create_class(request.get_json(silent=True))
        return jsonify({"id": class_id, "sucesso": True})

    @app.route("/turmas/<turma_id>/alunos", methods=["GET"], endpoint="list_class_students")
    def list_class_students(turma_id: str):
        return jsonify(container.student_service.list_students(turma_id))
