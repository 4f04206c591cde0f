from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import DEFAULT_REQUEST_LIST_LIMIT
from ..core.enums import AttendanceStatus, MarkedBy, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import OnDutyRequest, OnDutyRequestRow
from .repository import OnDutyRequestRepository


def _to_request(r: dict) -> OnDutyRequest:
    return OnDutyRequest(
        request_id=int(r["request_id"]),
        student_id=int(r["student_id"]),
        faculty_id=int(r["faculty_id"]),
        subject_id=int(r["subject_id"]),
        class_session_id=int(r["class_session_id"]),
        status=RequestStatus(r["status"]),
        created_at=r["created_at"],
        event_registration_id=r.get("event_registration_id"),
        resolved_at=r.get("resolved_at"),
        faculty_response=r.get("faculty_response"),
    )


class MySQLOnDutyRequestRepository(OnDutyRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, request_id: int) -> Optional[OnDutyRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT request_id, student_id, faculty_id, subject_id, class_session_id, status,
                       created_at, event_registration_id, resolved_at, faculty_response
                FROM on_duty_requests
                WHERE request_id=%s
                """,
                (int(request_id),),
            )
            r = fetchone(cur)
            return _to_request(r) if r else None

    def list_for_faculty(
        self,
        *,
        faculty_id: int,
        status: Optional[RequestStatus] = None,
        limit: int = DEFAULT_REQUEST_LIST_LIMIT,
    ) -> Sequence[OnDutyRequestRow]:
        clauses = ["odr.faculty_id=%s"]
        params: list[object] = [int(faculty_id)]
        if status is not None:
            clauses.append("odr.status=%s")
            params.append(status.value)
        params.append(int(limit))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    odr.request_id, odr.status, odr.created_at, odr.resolved_at, odr.faculty_response,
                    odr.student_id, p.full_name AS student_name,
                    odr.subject_id, s.name AS subject_name, s.code AS subject_code,
                    odr.class_session_id, cs.scheduled_date
                FROM on_duty_requests odr
                LEFT JOIN profiles p ON p.user_id = odr.student_id
                LEFT JOIN subjects s ON s.subject_id = odr.subject_id
                LEFT JOIN class_sessions cs ON cs.session_id = odr.class_session_id
                WHERE {where}
                ORDER BY odr.created_at DESC
                LIMIT %s
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            return [
                OnDutyRequestRow(
                    request_id=int(r["request_id"]),
                    status=RequestStatus(r["status"]),
                    created_at=r["created_at"],
                    resolved_at=r.get("resolved_at"),
                    faculty_response=r.get("faculty_response"),
                    student_id=int(r["student_id"]),
                    student_name=r.get("student_name"),
                    subject_id=int(r["subject_id"]),
                    subject_name=r.get("subject_name"),
                    subject_code=r.get("subject_code"),
                    class_session_id=int(r["class_session_id"]),
                    scheduled_date=r.get("scheduled_date"),
                )
                for r in rows
            ]

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        faculty_response: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE on_duty_requests
                SET status=%s, faculty_response=%s, resolved_at=CURRENT_TIMESTAMP
                WHERE request_id=%s AND status=%s
                """,
                (status.value, faculty_response, int(request_id), RequestStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def approve_with_attendance(
        self,
        *,
        request_id: int,
        marked_by: MarkedBy,
        faculty_response: Optional[str] = None,
    ) -> bool:
        # Decision and attendance row commit together; a failed insert rolls back the approval.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE on_duty_requests
                SET status=%s, faculty_response=%s, resolved_at=CURRENT_TIMESTAMP
                WHERE request_id=%s AND status=%s
                """,
                (RequestStatus.APPROVED.value, faculty_response, int(request_id), RequestStatus.PENDING.value),
            )
            if cur.rowcount == 0:
                return False

            cur.execute(
                """
                INSERT INTO attendance_records(student_id, class_session_id, status, marked_by)
                SELECT odr.student_id, odr.class_session_id, %s, %s
                FROM on_duty_requests odr
                WHERE odr.request_id=%s
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status), marked_by=VALUES(marked_by), marked_at=CURRENT_TIMESTAMP
                """,
                (AttendanceStatus.ON_DUTY.value, marked_by.value, int(request_id)),
            )
            return True

    def list_pending_for_session(self, *, faculty_id: int, class_session_id: int) -> Sequence[OnDutyRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT request_id, student_id, faculty_id, subject_id, class_session_id, status,
                       created_at, event_registration_id, resolved_at, faculty_response
                FROM on_duty_requests
                WHERE class_session_id=%s AND faculty_id=%s AND status=%s
                ORDER BY created_at ASC
                """,
                (int(class_session_id), int(faculty_id), RequestStatus.PENDING.value),
            )
            return [_to_request(r) for r in fetchall(cur)]
