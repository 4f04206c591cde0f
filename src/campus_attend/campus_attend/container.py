from __future__ import annotations

from dataclasses import dataclass

from .attendance.classification import AttendancePolicy
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .buffer.calculator.standard_calculator import StandardBufferCalculator
from .buffer.service import AttendanceBufferService
from .core.constants import DEFAULT_ATTENDANCE_THRESHOLD
from .database.connection import DBConfig, DatabaseConnection
from .requests.mysql_request_repository import MySQLOnDutyRequestRepository
from .requests.service import OnDutyRequestService
from .semesters.mysql_semester_repository import MySQLSemesterRepository
from .semesters.service import SemesterService
from .subjects.mysql_session_repository import MySQLSessionRepository
from .subjects.mysql_subject_repository import MySQLSubjectRepository
from .subjects.service import SubjectService
from .trend.service import TrendService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    semesters_repo: MySQLSemesterRepository
    subjects_repo: MySQLSubjectRepository
    sessions_repo: MySQLSessionRepository
    attendance_repo: MySQLAttendanceRepository
    od_requests_repo: MySQLOnDutyRequestRepository

    semester_service: SemesterService
    subject_service: SubjectService
    buffer_service: AttendanceBufferService
    trend_service: TrendService
    attendance_service: AttendanceService
    od_request_service: OnDutyRequestService


def build_container(
    *,
    db_config: dict,
    default_threshold: float = DEFAULT_ATTENDANCE_THRESHOLD,
    medical_counts_as_present: bool = False,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    policy = AttendancePolicy(medical_counts_as_present=bool(medical_counts_as_present))

    semesters_repo = MySQLSemesterRepository(conn)
    subjects_repo = MySQLSubjectRepository(conn)
    sessions_repo = MySQLSessionRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    od_requests_repo = MySQLOnDutyRequestRepository(conn)

    semester_service = SemesterService(semesters_repo, default_threshold=default_threshold)
    subject_service = SubjectService(subjects_repo, sessions_repo)
    buffer_service = AttendanceBufferService(
        semesters_repo,
        subjects_repo,
        sessions_repo,
        attendance_repo,
        calculator=StandardBufferCalculator(),
        policy=policy,
        default_threshold=default_threshold,
    )
    trend_service = TrendService(attendance_repo, policy=policy)
    attendance_service = AttendanceService(attendance_repo, sessions_repo)
    od_request_service = OnDutyRequestService(od_requests_repo)

    return Container(
        conn=conn,
        semesters_repo=semesters_repo,
        subjects_repo=subjects_repo,
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        od_requests_repo=od_requests_repo,
        semester_service=semester_service,
        subject_service=subject_service,
        buffer_service=buffer_service,
        trend_service=trend_service,
        attendance_service=attendance_service,
        od_request_service=od_request_service,
    )
