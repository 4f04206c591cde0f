from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import SessionType
from .model import ClassSession, EnrolledStudent, Subject, SubjectPlan, TimetableEntry


class SubjectRepository(Protocol):
    def get_subject_plan(self, subject_id: int) -> SubjectPlan:
        """Plan for the subject; ``total_classes_planned`` is 0 when the subject is unknown."""

        raise NotImplementedError

    def get_subject(self, subject_id: int) -> Optional[Subject]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Subject]:
        raise NotImplementedError

    def list_for_faculty(self, faculty_id: int) -> Sequence[Subject]:
        raise NotImplementedError

    def list_enrolled_subjects(self, student_id: int) -> Sequence[Subject]:
        raise NotImplementedError

    def list_enrolled_students(self, subject_id: int) -> Sequence[EnrolledStudent]:
        raise NotImplementedError

    def enrol(self, *, student_id: int, subject_id: int) -> bool:
        """Returns False when the student was already enrolled."""

        raise NotImplementedError


class SessionRepository(Protocol):
    def count_held_sessions(self, subject_id: int, as_of: date) -> int:
        """Sessions with ``scheduled_date <= as_of`` that are not cancelled."""

        raise NotImplementedError

    def get_session(self, session_id: int) -> Optional[ClassSession]:
        raise NotImplementedError

    def list_for_subject_on(self, subject_id: int, on_date: date) -> Sequence[ClassSession]:
        """Non-cancelled sessions of the subject on one day, by start time."""

        raise NotImplementedError

    def list_timetable(self, student_id: int) -> Sequence[TimetableEntry]:
        """Non-cancelled sessions of every subject the student is enrolled in."""

        raise NotImplementedError

    def create_session(
        self,
        *,
        subject_id: int,
        scheduled_date: date,
        start_time: time,
        end_time: time,
        venue: Optional[str] = None,
        session_type: SessionType = SessionType.LECTURE,
    ) -> int:
        raise NotImplementedError

    def cancel_session(self, session_id: int) -> bool:
        """Soft delete; returns False when the session was already cancelled."""

        raise NotImplementedError
