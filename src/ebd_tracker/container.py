from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .classes.mysql_class_repository import MySQLClassRepository
from .classes.repository import ClassRepository
from .classes.service import ClassService
from .common.datetime_utils import now_local
from .core.constants import DEFAULT_DB_TIMEOUT_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .finance.service import QuarterlyAggregator
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.repository import ReportRepository
from .reports.service import AttendanceRecorder, ReportService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    classes_repo: ClassRepository
    students_repo: StudentRepository
    reports_repo: ReportRepository

    class_service: ClassService
    student_service: StudentService
    report_service: ReportService
    attendance_recorder: AttendanceRecorder
    quarterly_aggregator: QuarterlyAggregator


def assemble(
    *,
    classes_repo: ClassRepository,
    students_repo: StudentRepository,
    reports_repo: ReportRepository,
    conn: Optional[DatabaseConnection] = None,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    return Container(
        conn=conn,
        classes_repo=classes_repo,
        students_repo=students_repo,
        reports_repo=reports_repo,
        class_service=ClassService(classes_repo),
        student_service=StudentService(students_repo, clock=clock),
        report_service=ReportService(reports_repo),
        attendance_recorder=AttendanceRecorder(reports_repo, clock=clock),
        quarterly_aggregator=QuarterlyAggregator(reports_repo),
    )


def build_container(*, db_config: dict) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        timeout=int(db_config.get("timeout", DEFAULT_DB_TIMEOUT_SECONDS)),
    )
    conn = DatabaseConnection.get_instance(config)

    return assemble(
        classes_repo=MySQLClassRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        reports_repo=MySQLReportRepository(conn),
        conn=conn,
    )
