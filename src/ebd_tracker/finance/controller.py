from __future__ import annotations

from flask import Flask, jsonify, request

from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _parse_year(value: str | None) -> int | None:
        if not value:
            return None
        try:
            year = int(value)
        except ValueError as e:
            raise ValidationError("ano inválido") from e
        # datetime also needs the following year when building the range.
        if not 1 <= year < 9999:
            raise ValidationError("ano inválido")
        return year

    @app.route("/financeiro/resumo", methods=["GET"], endpoint="financial_summary")
    def financial_summary():
        summary = container.quarterly_aggregator.summarize(
            year=_parse_year(request.args.get("ano")),
            turma_id=request.args.get("turma_id") or None,
        )
        return jsonify(summary.to_dict())
