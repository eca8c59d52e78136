from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json
from .model import Student
from .repository import StudentRepository

# Column names allowed in UPDATE ... SET; never interpolate anything else.
UPDATABLE_COLUMNS = ("nome", "turma_id", "ativo", "data_nascimento")


def _to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["id"]),
        nome=r["nome"],
        turma_id=r.get("turma_id"),
        ativo=bool(r.get("ativo")),
        data_nascimento=r.get("data_nascimento"),
        criado_em=r["criado_em"],
        extras=load_json(r.get("extras"), {}),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_by_class(self, turma_id: str) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, nome, turma_id, ativo, data_nascimento, criado_em, extras
                FROM alunos
                WHERE turma_id=%s
                ORDER BY nome ASC
                """,
                (turma_id,),
            )
            return [_to_student(r) for r in fetchall(cur)]

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, nome, turma_id, ativo, data_nascimento, criado_em, extras
                FROM alunos
                WHERE id=%s
                """,
                (int(student_id),),
            )
            r = fetchone(cur)
            return _to_student(r) if r else None

    def create(
        self,
        *,
        nome: str,
        turma_id: Optional[str],
        ativo: bool,
        data_nascimento: Optional[date],
        criado_em: datetime,
        extras: Mapping[str, Any],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO alunos(nome, turma_id, ativo, data_nascimento, criado_em, extras)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (nome, turma_id, int(bool(ativo)), data_nascimento, criado_em, dump_json(dict(extras))),
            )
            return int(cur.lastrowid)

    def update(self, *, student_id: int, fields: Mapping[str, Any], extras: Mapping[str, Any]) -> bool:
        assignments: list[str] = []
        params: list[object] = []

        for col in UPDATABLE_COLUMNS:
            if col in fields:
                assignments.append(f"{col}=%s")
                value = fields[col]
                params.append(int(bool(value)) if col == "ativo" else value)

        if extras:
            assignments.append("extras=JSON_MERGE_PATCH(COALESCE(extras, JSON_OBJECT()), %s)")
            params.append(dump_json(dict(extras)))

        if not assignments:
            return False

        params.append(int(student_id))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE alunos SET {', '.join(assignments)} WHERE id=%s", tuple(params))
            return cur.rowcount > 0
