from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import List, Optional

from ..core.enums import Role, SessionType
from ..core.exceptions import AuthorizationError, ValidationError
from .model import ClassSession, Subject
from .repository import SessionRepository, SubjectRepository

logger = logging.getLogger(__name__)


def _subject_dict(s: Subject) -> dict:
    return {
        "id": s.subject_id,
        "name": s.name,
        "code": s.code,
        "faculty_id": s.faculty_id,
        "department": s.department,
        "semester": s.semester,
        "credits": s.credits,
        "total_classes_planned": s.total_classes_planned,
    }


def _session_dict(cs: ClassSession) -> dict:
    return {
        "id": cs.session_id,
        "subject_id": cs.subject_id,
        "scheduled_date": cs.scheduled_date.strftime("%Y-%m-%d"),
        "start_time": cs.start_time.strftime("%H:%M"),
        "end_time": cs.end_time.strftime("%H:%M"),
        "venue": cs.venue,
        "session_type": cs.session_type,
    }


class SubjectService:
    """Timetable reads for students and the lookups faculty need before marking."""

    def __init__(self, subjects: SubjectRepository, sessions: SessionRepository):
        self._subjects = subjects
        self._sessions = sessions

    @staticmethod
    def _parse_time(value: str, field_name: str) -> time:
        v = (value or "").strip()
        try:
            return datetime.strptime(v, "%H:%M").time()
        except ValueError:
            raise ValidationError(f"{field_name} must be HH:MM")

    def _owned_subject(self, *, current_role: Role, user_id: int, subject_id: int) -> Subject:
        if current_role not in (Role.FACULTY, Role.ADMIN):
            raise AuthorizationError("Only faculty can manage class sessions")
        subject = self._subjects.get_subject(int(subject_id))
        if not subject:
            raise ValidationError("Subject does not exist")
        if current_role == Role.FACULTY and subject.faculty_id != int(user_id):
            raise AuthorizationError("This subject is taught by another faculty member")
        return subject

    def list_all(self) -> List[dict]:
        return [_subject_dict(s) for s in self._subjects.list_all()]

    def list_for_faculty(self, *, current_role: Role, faculty_id: int) -> List[dict]:
        if current_role != Role.FACULTY:
            raise AuthorizationError("Only faculty have teaching subjects")
        return [_subject_dict(s) for s in self._subjects.list_for_faculty(int(faculty_id))]

    def list_sessions_on(
        self,
        *,
        current_role: Role,
        faculty_id: int,
        subject_id: int,
        on_date: date,
    ) -> List[dict]:
        self._owned_subject(current_role=current_role, user_id=faculty_id, subject_id=subject_id)
        return [_session_dict(cs) for cs in self._sessions.list_for_subject_on(int(subject_id), on_date)]

    def list_enrolled_students(self, *, current_role: Role, faculty_id: int, subject_id: int) -> List[dict]:
        self._owned_subject(current_role=current_role, user_id=faculty_id, subject_id=subject_id)
        return [
            {
                "student_id": st.student_id,
                "full_name": st.full_name,
                "email": st.email,
                "department": st.department,
                "semester": st.semester,
            }
            for st in self._subjects.list_enrolled_students(int(subject_id))
        ]

    def timetable(self, student_id: int) -> List[dict]:
        entries = self._sessions.list_timetable(int(student_id))
        return [
            {
                **_session_dict(e.session),
                "subject": {
                    "id": e.session.subject_id,
                    "name": e.subject_name,
                    "code": e.subject_code,
                    "department": e.department,
                    "faculty_name": e.faculty_name,
                },
            }
            for e in entries
        ]

    def enrol(self, *, current_role: Role, student_id: int, subject_id: int) -> None:
        if current_role != Role.STUDENT:
            raise AuthorizationError("Only students can enrol in subjects")
        if not self._subjects.get_subject(int(subject_id)):
            raise ValidationError("Subject does not exist")
        if not self._subjects.enrol(student_id=int(student_id), subject_id=int(subject_id)):
            raise ValidationError("Already enrolled in this subject")
        logger.info("student %s enrolled in subject %s", student_id, subject_id)

    def add_session(
        self,
        *,
        current_role: Role,
        user_id: int,
        subject_id: int,
        scheduled_date: date,
        start_time: str,
        end_time: str,
        venue: Optional[str] = None,
        session_type: str = SessionType.LECTURE.value,
    ) -> int:
        self._owned_subject(current_role=current_role, user_id=user_id, subject_id=subject_id)

        start_t = self._parse_time(start_time, "start_time")
        end_t = self._parse_time(end_time, "end_time")
        if end_t <= start_t:
            raise ValidationError("end_time must be after start_time")

        try:
            kind = SessionType((session_type or SessionType.LECTURE.value).strip().lower())
        except ValueError:
            raise ValidationError(f"Unknown session type {session_type!r}")

        session_id = self._sessions.create_session(
            subject_id=int(subject_id),
            scheduled_date=scheduled_date,
            start_time=start_t,
            end_time=end_t,
            venue=(venue or "").strip() or None,
            session_type=kind,
        )
        logger.info("session %s added for subject %s on %s", session_id, subject_id, scheduled_date)
        return session_id

    def cancel_session(self, *, current_role: Role, user_id: int, session_id: int) -> None:
        """Cancelled sessions stop counting as held for every enrolled student."""

        cs = self._sessions.get_session(int(session_id))
        if not cs:
            raise ValidationError("Class session does not exist")
        self._owned_subject(current_role=current_role, user_id=user_id, subject_id=cs.subject_id)

        if not self._sessions.cancel_session(int(session_id)):
            raise ValidationError("Class session is already cancelled")
        logger.info("session %s of subject %s cancelled", session_id, cs.subject_id)
