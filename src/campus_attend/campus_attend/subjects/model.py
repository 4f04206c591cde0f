from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional


@dataclass(frozen=True)
class SubjectPlan:
    """Term target for a subject; ``total_classes_planned`` is never negative."""

    subject_id: int
    total_classes_planned: int = 0


@dataclass(frozen=True)
class Subject:
    subject_id: int
    name: str
    code: str
    faculty_id: Optional[int] = None
    department: Optional[str] = None
    semester: Optional[int] = None
    credits: int = 3
    total_classes_planned: int = 0


@dataclass(frozen=True)
class ClassSession:
    session_id: int
    subject_id: int
    scheduled_date: date
    start_time: time
    end_time: time
    venue: Optional[str] = None
    session_type: str = "lecture"
    is_cancelled: bool = False

    def is_held(self, as_of: date) -> bool:
        return not self.is_cancelled and self.scheduled_date <= as_of


@dataclass(frozen=True)
class EnrolledStudent:
    """Roster row for a subject's marking sheet."""

    student_id: int
    full_name: str
    email: str
    department: Optional[str] = None
    semester: Optional[int] = None


@dataclass(frozen=True)
class TimetableEntry:
    """A non-cancelled session of an enrolled subject, joined with subject and faculty names."""

    session: ClassSession
    subject_name: str
    subject_code: str
    department: Optional[str] = None
    faculty_name: Optional[str] = None
