from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RequestStatus


@dataclass(frozen=True)
class OnDutyRequest:
    request_id: int
    student_id: int
    faculty_id: int
    subject_id: int
    class_session_id: int
    status: RequestStatus
    created_at: datetime
    event_registration_id: Optional[int] = None
    resolved_at: Optional[datetime] = None
    faculty_response: Optional[str] = None


@dataclass(frozen=True)
class OnDutyRequestRow:
    """Read-model for the faculty request list (joined with student, subject and session)."""

    request_id: int
    status: RequestStatus
    created_at: datetime
    resolved_at: Optional[datetime]
    faculty_response: Optional[str]
    student_id: int
    student_name: Optional[str]
    subject_id: int
    subject_name: Optional[str]
    subject_code: Optional[str]
    class_session_id: int
    scheduled_date: Optional[date]
