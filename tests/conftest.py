from __future__ import annotations

import threading
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Mapping, Optional

import pytest

from ebd_tracker import create_app
from ebd_tracker.classes.model import ClassGroup
from ebd_tracker.container import assemble
from ebd_tracker.reports.model import AttendanceReport, ReportDraft, SessionSummary, UpsertResult
from ebd_tracker.students.model import Student

FIXED_NOW = datetime(2024, 4, 15, 9, 30, 0)


class InMemoryClasses:
    def __init__(self):
        self._rows: dict[int, ClassGroup] = {}
        self._id = 0

    def list_all(self):
        return [self._rows[k] for k in sorted(self._rows)]

    def create(self, *, atributos: Mapping[str, Any]) -> int:
        self._id += 1
        self._rows[self._id] = ClassGroup(class_id=self._id, atributos=dict(atributos), criado_em=FIXED_NOW)
        return self._id


class InMemoryStudents:
    def __init__(self):
        self.rows: dict[int, Student] = {}
        self._id = 0

    def list_by_class(self, turma_id: str):
        return [s for s in self.rows.values() if s.turma_id == turma_id]

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self.rows.get(int(student_id))

    def create(self, *, nome, turma_id, ativo, data_nascimento, criado_em, extras) -> int:
        self._id += 1
        self.rows[self._id] = Student(
            student_id=self._id,
            nome=nome,
            turma_id=turma_id,
            ativo=ativo,
            data_nascimento=data_nascimento,
            criado_em=criado_em,
            extras=dict(extras),
        )
        return self._id

    def update(self, *, student_id: int, fields, extras) -> bool:
        current = self.rows.get(int(student_id))
        if current is None:
            return False
        merged_extras = {**current.extras, **extras}
        self.rows[int(student_id)] = Student(
            student_id=current.student_id,
            nome=fields.get("nome", current.nome),
            turma_id=fields.get("turma_id", current.turma_id),
            ativo=fields.get("ativo", current.ativo),
            data_nascimento=fields.get("data_nascimento", current.data_nascimento),
            criado_em=current.criado_em,
            extras=merged_extras,
        )
        return True


class InMemoryReports:
    """Mirrors the unique (turma_id, day) key of the MySQL table."""

    def __init__(self):
        self.rows: dict[int, AttendanceReport] = {}
        self.offering_rows: Optional[list[dict]] = None
        self._id = 0
        self._lock = threading.Lock()

    def list_all(self):
        return sorted(self.rows.values(), key=lambda r: (r.data_aula, r.report_id), reverse=True)

    def get_by_id(self, report_id: int):
        return self.rows.get(int(report_id))

    def find_for_class_between(self, *, turma_id, start, end):
        matches = [r for r in self.rows.values() if r.turma_id == turma_id and start <= r.data_aula <= end]
        return min(matches, key=lambda r: r.data_aula) if matches else None

    def upsert_for_session(self, draft: ReportDraft) -> UpsertResult:
        with self._lock:
            existing = next(
                (
                    r
                    for r in self.rows.values()
                    if r.turma_id == draft.turma_id and r.data_aula.date() == draft.data_aula.date()
                ),
                None,
            )
            if existing:
                report_id, created = existing.report_id, False
            else:
                self._id += 1
                report_id, created = self._id, True

            self.rows[report_id] = AttendanceReport(
                report_id=report_id,
                turma_id=draft.turma_id,
                data_aula=draft.data_aula,
                oferta_total=draft.oferta_total,
                professor=draft.professor,
                observacoes=draft.observacoes,
                resumo=draft.resumo,
                detalhes_alunos=list(draft.detalhes_alunos),
                criado_em=existing.criado_em if existing else FIXED_NOW,
                atualizado_em=FIXED_NOW,
            )
            return UpsertResult(report_id=report_id, created=created)

    def delete(self, *, report_id: int) -> bool:
        return self.rows.pop(int(report_id), None) is not None

    def list_offerings(self, *, year=None, turma_id=None):
        if self.offering_rows is not None:
            return list(self.offering_rows)
        rows = [
            r
            for r in self.rows.values()
            if r.oferta_total > 0
            and (year is None or r.data_aula.year == year)
            and (turma_id is None or r.turma_id == turma_id)
        ]
        rows.sort(key=lambda r: r.oferta_total, reverse=True)
        return [{"id": r.report_id, "data_aula": r.data_aula, "oferta_total": r.oferta_total} for r in rows]


def _make_report(report_id: int, day: date, oferta: str, turma_id: str = "1") -> AttendanceReport:
    return AttendanceReport(
        report_id=report_id,
        turma_id=turma_id,
        data_aula=datetime(day.year, day.month, day.day, 12, 0, 0),
        oferta_total=Decimal(oferta),
        professor="",
        observacoes="",
        resumo=SessionSummary(presentes=0, biblias=0, revistas=0),
        detalhes_alunos=[],
    )


@pytest.fixture
def reports_repo():
    return InMemoryReports()


@pytest.fixture
def students_repo():
    return InMemoryStudents()


@pytest.fixture
def classes_repo():
    return InMemoryClasses()


@pytest.fixture
def container(classes_repo, students_repo, reports_repo):
    return assemble(
        classes_repo=classes_repo,
        students_repo=students_repo,
        reports_repo=reports_repo,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def client(container):
    app = create_app(container=container, settings_module="config.testing")
    return app.test_client()


@pytest.fixture
def make_report():
    return _make_report
