from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.enums import AttendanceStatus, MarkedBy


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's status for one class session."""

    record_id: int
    student_id: int
    class_session_id: int
    status: AttendanceStatus
    marked_at: datetime
    marked_by: MarkedBy
    on_duty_event_id: Optional[int] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class AttendanceMark:
    """Write-model for a bulk mark: the status to upsert for one student."""

    student_id: int
    status: AttendanceStatus


@dataclass(frozen=True)
class HistoryEntry:
    """One record of the chronological stream fed to the trend fold."""

    status: AttendanceStatus
    effective_date: date


@dataclass(frozen=True)
class RecentRecordRow:
    """Read-model for the "recent attendance" list (joined with session and subject)."""

    record_id: int
    status: AttendanceStatus
    marked_at: datetime
    marked_by: MarkedBy
    notes: Optional[str]
    scheduled_date: Optional[date]
    start_time: Optional[time]
    subject_name: Optional[str]
    subject_code: Optional[str]
