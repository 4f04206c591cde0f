from __future__ import annotations

import logging
from typing import Iterable, List, Mapping

from ..common.validators import require_status
from ..core.constants import DEFAULT_RECENT_LIMIT, MAX_RECENT_LIMIT
from ..core.enums import MarkedBy, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..subjects.repository import SessionRepository
from .model import AttendanceMark
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, sessions: SessionRepository):
        self._attendance = attendance
        self._sessions = sessions

    def bulk_mark(
        self,
        *,
        current_role: Role,
        session_id: int,
        records: Iterable[Mapping[str, object]],
    ) -> int:
        """Upsert one status per student for a session; returns the number of rows written."""

        if current_role != Role.FACULTY:
            raise AuthorizationError("Only faculty can mark attendance")

        session = self._sessions.get_session(int(session_id))
        if not session:
            raise ValidationError("Class session does not exist")
        if session.is_cancelled:
            raise ValidationError("Cannot mark attendance for a cancelled session")

        marks: dict[int, AttendanceMark] = {}
        for item in records:
            try:
                student_id = int(item["student_id"])  # type: ignore[arg-type]
            except (KeyError, TypeError, ValueError):
                raise ValidationError("Each record needs a numeric student_id")
            # A repeated student keeps the last status sent.
            marks[student_id] = AttendanceMark(student_id=student_id, status=require_status(item.get("status")))

        if not marks:
            raise ValidationError("No attendance records to save")

        written = self._attendance.upsert_marks(
            class_session_id=session.session_id,
            marks=list(marks.values()),
            marked_by=MarkedBy.FACULTY,
        )
        logger.info("marked %d students for session %s", written, session.session_id)
        return written

    def list_recent(self, student_id: int, *, limit: int = DEFAULT_RECENT_LIMIT) -> List[dict]:
        limit = max(1, min(int(limit), MAX_RECENT_LIMIT))
        rows = self._attendance.get_recent_for_student(int(student_id), limit)
        return [
            {
                "id": r.record_id,
                "status": r.status.value,
                "marked_at": r.marked_at.isoformat(),
                "marked_by": r.marked_by.value,
                "notes": r.notes,
                "class_session": {
                    "scheduled_date": r.scheduled_date.strftime("%Y-%m-%d"),
                    "start_time": r.start_time.strftime("%H:%M") if r.start_time else None,
                    "subject": {"name": r.subject_name, "code": r.subject_code} if r.subject_name else None,
                }
                if r.scheduled_date
                else None,
            }
            for r in rows
        ]
