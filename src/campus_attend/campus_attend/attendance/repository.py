from __future__ import annotations

from typing import Collection, Iterable, Protocol, Sequence

from ..core.enums import AttendanceStatus, MarkedBy
from .classification import ATTENDED_STATUSES
from .model import AttendanceMark, HistoryEntry, RecentRecordRow


class AttendanceRepository(Protocol):
    def count_present_records(
        self,
        student_id: int,
        subject_id: int,
        *,
        statuses: Collection[AttendanceStatus] = ATTENDED_STATUSES,
    ) -> int:
        """Records of the student, joined to sessions of the subject, whose status is in ``statuses``."""

        raise NotImplementedError

    def stream_attendance_history(self, student_id: int) -> Iterable[HistoryEntry]:
        """All records of the student, ascending by effective date.

        The MySQL implementation yields rows straight from the cursor, so the
        connection stays open until the iterable is exhausted.
        """

        raise NotImplementedError

    def get_recent_for_student(self, student_id: int, limit: int) -> Sequence[RecentRecordRow]:
        raise NotImplementedError

    def upsert_marks(
        self,
        *,
        class_session_id: int,
        marks: Sequence[AttendanceMark],
        marked_by: MarkedBy,
    ) -> int:
        """Write all marks in one atomic statement; one row per (student, session)."""

        raise NotImplementedError
