from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json
from .model import AttendanceReport, ReportDraft, SessionSummary, UpsertResult
from .repository import ReportRepository

_COLUMNS = """
    id, turma_id, data_aula, oferta_total, professor, observacoes,
    resumo, detalhes_alunos, criado_em, atualizado_em
"""


def _to_report(r: dict) -> AttendanceReport:
    return AttendanceReport(
        report_id=int(r["id"]),
        turma_id=str(r["turma_id"]),
        data_aula=r["data_aula"],
        oferta_total=Decimal(r["oferta_total"] or 0),
        professor=r.get("professor") or "",
        observacoes=r.get("observacoes") or "",
        resumo=SessionSummary.from_dict(load_json(r.get("resumo"), {})),
        detalhes_alunos=load_json(r.get("detalhes_alunos"), []),
        criado_em=r.get("criado_em"),
        atualizado_em=r.get("atualizado_em"),
    )


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[AttendanceReport]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM relatorios_aula ORDER BY data_aula DESC, id DESC")
            return [_to_report(r) for r in fetchall(cur)]

    def get_by_id(self, report_id: int) -> Optional[AttendanceReport]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM relatorios_aula WHERE id=%s", (int(report_id),))
            r = fetchone(cur)
            return _to_report(r) if r else None

    def find_for_class_between(self, *, turma_id: str, start: datetime, end: datetime) -> Optional[AttendanceReport]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM relatorios_aula
                WHERE turma_id=%s AND data_aula BETWEEN %s AND %s
                ORDER BY data_aula ASC
                LIMIT 1
                """,
                (turma_id, start, end),
            )
            r = fetchone(cur)
            return _to_report(r) if r else None

    def upsert_for_session(self, draft: ReportDraft) -> UpsertResult:
        # uq_relatorio_turma_dia (turma_id, DATE(data_aula)) makes this a single atomic write.
        # Affected rows: 1 = inserted, 2 = updated (atualizado_em always changes).
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO relatorios_aula(
                    turma_id, data_aula, oferta_total, professor, observacoes, resumo, detalhes_alunos
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    id=LAST_INSERT_ID(id),
                    data_aula=VALUES(data_aula),
                    oferta_total=VALUES(oferta_total),
                    professor=VALUES(professor),
                    observacoes=VALUES(observacoes),
                    resumo=VALUES(resumo),
                    detalhes_alunos=VALUES(detalhes_alunos),
                    atualizado_em=CURRENT_TIMESTAMP(6)
                """,
                (
                    draft.turma_id,
                    draft.data_aula,
                    draft.oferta_total,
                    draft.professor,
                    draft.observacoes,
                    dump_json(draft.resumo.to_dict()),
                    dump_json(draft.detalhes_alunos),
                ),
            )
            return UpsertResult(report_id=int(cur.lastrowid), created=cur.rowcount == 1)

    def delete(self, *, report_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM relatorios_aula WHERE id=%s", (int(report_id),))
            return cur.rowcount > 0

    def list_offerings(self, *, year: Optional[int] = None, turma_id: Optional[str] = None) -> Sequence[dict]:
        clauses = ["oferta_total > 0"]
        params: list[object] = []

        if year is not None:
            clauses.append("data_aula >= %s AND data_aula < %s")
            params.extend([datetime(int(year), 1, 1), datetime(int(year) + 1, 1, 1)])
        if turma_id is not None:
            clauses.append("turma_id=%s")
            params.append(turma_id)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, data_aula, oferta_total
                FROM relatorios_aula
                WHERE {where}
                ORDER BY oferta_total DESC
                """,
                tuple(params),
            )
            return [
                {"id": int(r["id"]), "data_aula": r.get("data_aula"), "oferta_total": r.get("oferta_total")}
                for r in fetchall(cur)
            ]
