from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Callable, Mapping, Optional

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import coerce_flag, require_mapping, require_max_length, require_non_empty
from ..core.constants import MAX_NAME_LENGTH, MAX_REF_LENGTH
from ..core.exceptions import NotFoundError, ValidationError
from .repository import StudentRepository

logger = logging.getLogger(__name__)

KNOWN_FIELDS = ("nome", "turma_id", "ativo", "data_nascimento")
READ_ONLY_FIELDS = ("id", "criado_em")


def _birth_date(value: Any) -> Optional[date]:
    if value in (None, ""):
        return None
    try:
        return parse_iso_date(str(value).strip())
    except ValueError as e:
        raise ValidationError("data_nascimento inválida (use AAAA-MM-DD)") from e


def _class_ref(value: Any) -> Optional[str]:
    if value is None or str(value).strip() == "":
        return None
    return require_max_length(str(value).strip(), "turma_id", MAX_REF_LENGTH)


def _normalize(field: str, value: Any) -> Any:
    if field == "nome":
        return require_non_empty(value if isinstance(value, str) else "", "nome", MAX_NAME_LENGTH)
    if field == "turma_id":
        return _class_ref(value)
    if field == "ativo":
        return coerce_flag(value, "ativo")
    return _birth_date(value)


class StudentService:
    def __init__(self, students: StudentRepository, *, clock: Callable[[], datetime] = now_local):
        self._students = students
        self._clock = clock

    def list_students(self, turma_id: str) -> list[dict]:
        return [s.to_dict() for s in self._students.list_by_class(str(turma_id))]

    def create_student(self, payload: Any) -> int:
        payload = require_mapping(payload, "Corpo da requisição")
        extras = {k: v for k, v in payload.items() if k not in KNOWN_FIELDS and k not in READ_ONLY_FIELDS}

        student_id = self._students.create(
            nome=_normalize("nome", payload.get("nome")),
            turma_id=_class_ref(payload.get("turma_id")),
            ativo=coerce_flag(payload.get("ativo", True), "ativo"),
            data_nascimento=_birth_date(payload.get("data_nascimento")),
            criado_em=self._clock(),
            extras=extras,
        )
        logger.info("Student %s created in turma=%s", student_id, payload.get("turma_id"))
        return student_id

    def update_student(self, student_id: int, payload: Any) -> None:
        """Partial update: only the supplied fields are overwritten."""
        payload = require_mapping(payload, "Corpo da requisição")
        changes: Mapping[str, Any] = {k: v for k, v in payload.items() if k not in READ_ONLY_FIELDS}
        if not changes:
            raise ValidationError("Nenhum campo para atualizar")

        if self._students.get_by_id(int(student_id)) is None:
            raise NotFoundError("Aluno não encontrado")

        fields = {k: _normalize(k, v) for k, v in changes.items() if k in KNOWN_FIELDS}
        extras = {k: v for k, v in changes.items() if k not in KNOWN_FIELDS}

        self._students.update(student_id=int(student_id), fields=fields, extras=extras)
        logger.info("Student %s updated (%s)", student_id, ", ".join(sorted(changes)))
