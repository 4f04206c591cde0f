from __future__ import annotations

from typing import Collection, Iterator, Sequence

from ..core.enums import AttendanceStatus, MarkedBy
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_count, fetchall, normalize_mysql_time
from .classification import ATTENDED_STATUSES
from .model import AttendanceMark, HistoryEntry, RecentRecordRow
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def count_present_records(
        self,
        student_id: int,
        subject_id: int,
        *,
        statuses: Collection[AttendanceStatus] = ATTENDED_STATUSES,
    ) -> int:
        values = sorted(AttendanceStatus(s).value for s in statuses)
        if not values:
            return 0
        placeholders = ",".join(["%s"] * len(values))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT COUNT(*) AS n
                FROM attendance_records ar
                JOIN class_sessions cs ON cs.session_id = ar.class_session_id
                WHERE ar.student_id=%s
                  AND cs.subject_id=%s
                  AND ar.status IN ({placeholders})
                """,
                (int(student_id), int(subject_id), *values),
            )
            return fetch_count(cur)

    def stream_attendance_history(self, student_id: int) -> Iterator[HistoryEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT ar.status, COALESCE(cs.scheduled_date, DATE(ar.marked_at)) AS effective_date
                FROM attendance_records ar
                LEFT JOIN class_sessions cs ON cs.session_id = ar.class_session_id
                WHERE ar.student_id=%s
                ORDER BY effective_date ASC, ar.marked_at ASC, ar.record_id ASC
                """,
                (int(student_id),),
            )
            for r in cur:
                yield HistoryEntry(status=AttendanceStatus(r["status"]), effective_date=r["effective_date"])

    def get_recent_for_student(self, student_id: int, limit: int) -> Sequence[RecentRecordRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    ar.record_id, ar.status, ar.marked_at, ar.marked_by, ar.notes,
                    cs.scheduled_date, cs.start_time,
                    s.name AS subject_name, s.code AS subject_code
                FROM attendance_records ar
                LEFT JOIN class_sessions cs ON cs.session_id = ar.class_session_id
                LEFT JOIN subjects s ON s.subject_id = cs.subject_id
                WHERE ar.student_id=%s
                ORDER BY ar.marked_at DESC
                LIMIT %s
                """,
                (int(student_id), int(limit)),
            )
            rows = fetchall(cur)
            return [
                RecentRecordRow(
                    record_id=int(r["record_id"]),
                    status=AttendanceStatus(r["status"]),
                    marked_at=r["marked_at"],
                    marked_by=MarkedBy(r["marked_by"]),
                    notes=r.get("notes"),
                    scheduled_date=r.get("scheduled_date"),
                    start_time=normalize_mysql_time(r.get("start_time")),
                    subject_name=r.get("subject_name"),
                    subject_code=r.get("subject_code"),
                )
                for r in rows
            ]

    def upsert_marks(
        self,
        *,
        class_session_id: int,
        marks: Sequence[AttendanceMark],
        marked_by: MarkedBy,
    ) -> int:
        if not marks:
            return 0

        rows = [(int(m.student_id), int(class_session_id), m.status.value, marked_by.value) for m in marks]
        values = ",".join(["(%s,%s,%s,%s)"] * len(rows))
        params = [p for row in rows for p in row]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO attendance_records(student_id, class_session_id, status, marked_by)
                VALUES {values}
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status), marked_by=VALUES(marked_by), marked_at=CURRENT_TIMESTAMP
                """,
                tuple(params),
            )
            return len(rows)
