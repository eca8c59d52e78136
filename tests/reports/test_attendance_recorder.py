from __future__ import annotations

import threading
from datetime import datetime
from decimal import Decimal

import pytest

from ebd_tracker.core.exceptions import ValidationError
from ebd_tracker.reports.roster import summarize_roster
from ebd_tracker.reports.service import AttendanceRecorder

NOW = datetime(2024, 4, 15, 21, 45, 0)


def _payload(**overrides):
    data = {
        "turma_id": "7",
        "data_aula": "2024-04-15",
        "oferta": "150.5",
        "alunos": [
            {"id": "a1", "presente": True, "trouxe_biblia": True, "trouxe_revista": False},
            {"id": "a2", "presente": False, "trouxe_biblia": False, "trouxe_revista": False},
            {"id": "a3", "presente": True, "trouxe_biblia": False, "trouxe_revista": True},
        ],
        "professor": "Irmã Ana",
        "observacoes": "Lição 3",
    }
    data.update(overrides)
    return data


@pytest.fixture
def recorder(reports_repo):
    return AttendanceRecorder(reports_repo, clock=lambda: NOW)


def test_first_submission_creates_report(recorder, reports_repo):
    result = recorder.record(_payload())

    assert result.created is True
    assert result.to_dict()["mensagem"] == "Nova chamada salva!"
    report = reports_repo.get_by_id(result.report_id)
    assert report.turma_id == "7"
    assert report.oferta_total == Decimal("150.50")
    assert report.resumo.presentes == 2
    assert report.resumo.biblias == 1
    assert report.resumo.revistas == 1
    assert report.professor == "Irmã Ana"
    assert len(report.detalhes_alunos) == 3


def test_second_submission_same_day_overwrites(recorder, reports_repo):
    first = recorder.record(_payload())
    second = recorder.record(
        _payload(
            oferta="20",
            alunos=[{"presente": True, "trouxe_biblia": True, "trouxe_revista": True}],
        )
    )

    assert second.created is False
    assert second.report_id == first.report_id
    assert second.to_dict()["mensagem"] == "Chamada atualizada!"
    assert len(reports_repo.rows) == 1

    report = reports_repo.get_by_id(first.report_id)
    assert report.resumo.presentes == 1
    assert report.resumo.revistas == 1
    assert report.oferta_total == Decimal("20.00")


def test_other_day_or_class_creates_separate_reports(recorder, reports_repo):
    recorder.record(_payload())
    recorder.record(_payload(data_aula="2024-04-21"))
    recorder.record(_payload(turma_id="8"))

    assert len(reports_repo.rows) == 3


def test_session_date_is_normalized_to_noon(recorder, reports_repo):
    result = recorder.record(_payload(data_aula="2024-12-31"))

    assert reports_repo.get_by_id(result.report_id).data_aula == datetime(2024, 12, 31, 12, 0, 0)


def test_missing_session_date_uses_current_instant(recorder, reports_repo):
    result = recorder.record(_payload(data_aula=None))

    assert reports_repo.get_by_id(result.report_id).data_aula == NOW


@pytest.mark.parametrize("oferta, expected", [
    ("150.5", Decimal("150.50")),
    (42, Decimal("42.00")),
    ("12,75", Decimal("12.75")),
    ("abc", Decimal("0.00")),
    ("", Decimal("0.00")),
    (None, Decimal("0.00")),
    ("NaN", Decimal("0.00")),
    (float("inf"), Decimal("0.00")),
])
def test_offering_coercion_policy(recorder, reports_repo, oferta, expected):
    result = recorder.record(_payload(oferta=oferta))

    assert reports_repo.get_by_id(result.report_id).oferta_total == expected


@pytest.mark.parametrize("oferta", ["-5", "10000000000", "9999999999.995", "1e15", 1e15])
def test_offering_outside_column_range_is_rejected(recorder, reports_repo, oferta):
    with pytest.raises(ValidationError):
        recorder.record(_payload(oferta=oferta))
    assert reports_repo.rows == {}


def test_largest_storable_offering_is_accepted(recorder, reports_repo):
    result = recorder.record(_payload(oferta="9999999999.99"))

    assert reports_repo.get_by_id(result.report_id).oferta_total == Decimal("9999999999.99")


def test_visitors_default_to_zero_and_are_coerced(recorder, reports_repo):
    r1 = recorder.record(_payload())
    r2 = recorder.record(_payload(turma_id="9", visitantes={"quantidade": "3", "biblias": 1, "revistas": "x"}))

    assert reports_repo.get_by_id(r1.report_id).resumo.visitantes.to_dict() == {
        "quantidade": 0,
        "biblias": 0,
        "revistas": 0,
    }
    assert reports_repo.get_by_id(r2.report_id).resumo.visitantes.to_dict() == {
        "quantidade": 3,
        "biblias": 1,
        "revistas": 0,
    }


@pytest.mark.parametrize("overrides", [
    {"turma_id": None},
    {"turma_id": "   "},
    {"alunos": None},
    {"alunos": "a1,a2"},
    {"alunos": [{"presente": True}, "a2"]},
    {"data_aula": "15/04/2024"},
    {"turma_id": "t" * 65},
    {"professor": "P" * 201},
])
def test_invalid_input_raises_validation_error(recorder, reports_repo, overrides):
    with pytest.raises(ValidationError):
        recorder.record(_payload(**overrides))
    assert reports_repo.rows == {}


def test_non_mapping_payload_is_rejected(recorder):
    with pytest.raises(ValidationError):
        recorder.record(None)


def test_roster_counters_stay_within_bounds():
    roster = [
        {"presente": i % 2 == 0, "trouxe_biblia": i % 3 == 0, "trouxe_revista": i % 5 == 0}
        for i in range(17)
    ]
    summary = summarize_roster(roster)
    absent = sum(1 for a in roster if not a["presente"])

    assert summary.presentes + absent == len(roster)
    for value in (summary.presentes, summary.biblias, summary.revistas):
        assert 0 <= value <= len(roster)


def test_roster_example_counts():
    summary = summarize_roster([
        {"presente": True, "trouxe_biblia": True},
        {"presente": False, "trouxe_biblia": False},
        {"presente": True, "trouxe_biblia": False},
    ])

    assert summary.presentes == 2
    assert summary.biblias == 1
    assert summary.revistas == 0


def test_concurrent_submissions_through_locked_in_memory_store_leave_one_report(recorder, reports_repo):
    barrier = threading.Barrier(8)

    def submit():
        barrier.wait()
        recorder.record(_payload())

    threads = [threading.Thread(target=submit) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(reports_repo.rows) == 1
