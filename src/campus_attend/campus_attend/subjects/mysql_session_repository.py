from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..core.enums import SessionType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetch_count, fetchall, fetchone, normalize_mysql_time
from .model import ClassSession, TimetableEntry
from .repository import SessionRepository

_SESSION_COLUMNS = """
    cs.session_id, cs.subject_id, cs.scheduled_date, cs.start_time, cs.end_time,
    cs.venue, cs.session_type, cs.is_cancelled
"""


def _to_session(r: dict) -> ClassSession:
    return ClassSession(
        session_id=int(r["session_id"]),
        subject_id=int(r["subject_id"]),
        scheduled_date=r["scheduled_date"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        venue=r.get("venue"),
        session_type=r.get("session_type") or SessionType.LECTURE.value,
        is_cancelled=bool(r.get("is_cancelled")),
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def count_held_sessions(self, subject_id: int, as_of: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS n
                FROM class_sessions
                WHERE subject_id=%s
                  AND is_cancelled=0
                  AND scheduled_date <= %s
                """,
                (int(subject_id), as_of),
            )
            return fetch_count(cur)

    def get_session(self, session_id: int) -> Optional[ClassSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SESSION_COLUMNS} FROM class_sessions cs WHERE cs.session_id=%s", (int(session_id),))
            r = fetchone(cur)
            return _to_session(r) if r else None

    def list_for_subject_on(self, subject_id: int, on_date: date) -> Sequence[ClassSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SESSION_COLUMNS}
                FROM class_sessions cs
                WHERE cs.subject_id=%s AND cs.scheduled_date=%s AND cs.is_cancelled=0
                ORDER BY cs.start_time ASC
                """,
                (int(subject_id), on_date),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def list_timetable(self, student_id: int) -> Sequence[TimetableEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SESSION_COLUMNS},
                       s.name AS subject_name, s.code AS subject_code, s.department,
                       f.full_name AS faculty_name
                FROM student_subjects ss
                JOIN class_sessions cs ON cs.subject_id = ss.subject_id
                JOIN subjects s ON s.subject_id = cs.subject_id
                LEFT JOIN profiles f ON f.user_id = s.faculty_id
                WHERE ss.student_id=%s AND cs.is_cancelled=0
                ORDER BY cs.scheduled_date ASC, cs.start_time ASC
                """,
                (int(student_id),),
            )
            return [
                TimetableEntry(
                    session=_to_session(r),
                    subject_name=r["subject_name"],
                    subject_code=r["subject_code"],
                    department=r.get("department"),
                    faculty_name=r.get("faculty_name"),
                )
                for r in fetchall(cur)
            ]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO class_sessions(subject_id, scheduled_date, start_time, end_time, venue, session_type)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(subject_id), scheduled_date, start_time, end_time, venue, session_type.value),
            )
            return int(cur.lastrowid)

    def cancel_session(self, session_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE class_sessions SET is_cancelled=1 WHERE session_id=%s AND is_cancelled=0",
                (int(session_id),),
            )
            return cur.rowcount > 0
