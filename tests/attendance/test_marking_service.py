from __future__ import annotations

from datetime import date, datetime, time

import pytest

from src.campus_attend.campus_attend.attendance.model import RecentRecordRow
from src.campus_attend.campus_attend.attendance.service import AttendanceService
from src.campus_attend.campus_attend.core.enums import AttendanceStatus, MarkedBy, Role
from src.campus_attend.campus_attend.core.exceptions import AuthorizationError, ValidationError
from src.campus_attend.campus_attend.subjects.model import ClassSession


class InMemorySessions:
    def __init__(self, sessions):
        self._sessions = {s.session_id: s for s in sessions}

    def get_session(self, session_id):
        return self._sessions.get(int(session_id))


class InMemoryAttendance:
    """One row per (student, session), like the unique key in the database."""

    def __init__(self, recent=None):
        self.rows: dict[tuple[int, int], tuple[AttendanceStatus, MarkedBy]] = {}
        self._recent = recent or []
        self.last_limit = None

    def upsert_marks(self, *, class_session_id, marks, marked_by):
        for m in marks:
            self.rows[(m.student_id, class_session_id)] = (m.status, marked_by)
        return len(marks)

    def get_recent_for_student(self, student_id, limit):
        self.last_limit = limit
        return self._recent[:limit]


def _session(session_id=1, *, cancelled=False):
    return ClassSession(
        session_id=session_id,
        subject_id=1,
        scheduled_date=date(2025, 1, 6),
        start_time=time(9, 0),
        end_time=time(10, 0),
        is_cancelled=cancelled,
    )


def test_faculty_bulk_mark_upserts_one_row_per_student():
    attendance = InMemoryAttendance()
    svc = AttendanceService(attendance, InMemorySessions([_session()]))

    written = svc.bulk_mark(
        current_role=Role.FACULTY,
        session_id=1,
        records=[
            {"student_id": 3, "status": "present"},
            {"student_id": 4, "status": "absent"},
            {"student_id": 3, "status": "medical"},
        ],
    )

    assert written == 2
    assert attendance.rows[(3, 1)] == (AttendanceStatus.MEDICAL, MarkedBy.FACULTY)
    assert attendance.rows[(4, 1)] == (AttendanceStatus.ABSENT, MarkedBy.FACULTY)


def test_remarking_corrects_status_instead_of_appending():
    attendance = InMemoryAttendance()
    svc = AttendanceService(attendance, InMemorySessions([_session()]))

    svc.bulk_mark(current_role=Role.FACULTY, session_id=1, records=[{"student_id": 3, "status": "absent"}])
    svc.bulk_mark(current_role=Role.FACULTY, session_id=1, records=[{"student_id": 3, "status": "on_duty"}])

    assert len(attendance.rows) == 1
    assert attendance.rows[(3, 1)][0] == AttendanceStatus.ON_DUTY


def test_only_faculty_can_bulk_mark():
    svc = AttendanceService(InMemoryAttendance(), InMemorySessions([_session()]))

    with pytest.raises(AuthorizationError):
        svc.bulk_mark(current_role=Role.STUDENT, session_id=1, records=[{"student_id": 3, "status": "present"}])


def test_cancelled_or_missing_session_is_rejected():
    svc = AttendanceService(InMemoryAttendance(), InMemorySessions([_session(2, cancelled=True)]))

    with pytest.raises(ValidationError):
        svc.bulk_mark(current_role=Role.FACULTY, session_id=2, records=[{"student_id": 3, "status": "present"}])
    with pytest.raises(ValidationError):
        svc.bulk_mark(current_role=Role.FACULTY, session_id=9, records=[{"student_id": 3, "status": "present"}])


def test_unknown_status_or_student_is_rejected():
    svc = AttendanceService(InMemoryAttendance(), InMemorySessions([_session()]))

    with pytest.raises(ValidationError):
        svc.bulk_mark(current_role=Role.FACULTY, session_id=1, records=[{"student_id": 3, "status": "late"}])
    with pytest.raises(ValidationError):
        svc.bulk_mark(current_role=Role.FACULTY, session_id=1, records=[{"status": "present"}])
    with pytest.raises(ValidationError):
        svc.bulk_mark(current_role=Role.FACULTY, session_id=1, records=[])


def test_list_recent_formats_rows_and_clamps_limit():
    recent = [
        RecentRecordRow(
            record_id=10,
            status=AttendanceStatus.PRESENT,
            marked_at=datetime(2025, 1, 6, 9, 5),
            marked_by=MarkedBy.FACULTY,
            notes=None,
            scheduled_date=date(2025, 1, 6),
            start_time=time(9, 0),
            subject_name="Operating Systems",
            subject_code="CS501",
        ),
        RecentRecordRow(
            record_id=11,
            status=AttendanceStatus.ON_DUTY,
            marked_at=datetime(2025, 1, 7, 12, 0),
            marked_by=MarkedBy.AI_APPROVED,
            notes="Hackathon",
            scheduled_date=None,
            start_time=None,
            subject_name=None,
            subject_code=None,
        ),
    ]
    attendance = InMemoryAttendance(recent)
    svc = AttendanceService(attendance, InMemorySessions([]))

    rows = svc.list_recent(3, limit=500)

    assert attendance.last_limit == 100
    assert rows[0]["class_session"] == {
        "scheduled_date": "2025-01-06",
        "start_time": "09:00",
        "subject": {"name": "Operating Systems", "code": "CS501"},
    }
    assert rows[1]["class_session"] is None
    assert rows[1]["marked_by"] == "ai_approved"
