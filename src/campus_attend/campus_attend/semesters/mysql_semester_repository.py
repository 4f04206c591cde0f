from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import DEFAULT_ATTENDANCE_THRESHOLD
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_fraction, db_cursor, fetchall, fetchone
from .model import AcademicSemester
from .repository import SemesterRepository

_COLUMNS = """
    semester_id, name, start_date, end_date, total_working_days,
    attendance_threshold, condonation_threshold, is_current
"""


def _to_semester(r: dict) -> AcademicSemester:
    return AcademicSemester(
        semester_id=int(r["semester_id"]),
        name=r["name"],
        start_date=r["start_date"],
        end_date=r["end_date"],
        total_working_days=int(r["total_working_days"]),
        attendance_threshold=as_fraction(r["attendance_threshold"]),
        condonation_threshold=as_fraction(r["condonation_threshold"]),
        is_current=bool(r.get("is_current")),
    )


class MySQLSemesterRepository(SemesterRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_current_threshold(self, *, default: float = DEFAULT_ATTENDANCE_THRESHOLD) -> float:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_threshold
                FROM academic_semesters
                WHERE is_current=1
                ORDER BY semester_id DESC
                LIMIT 1
                """
            )
            r = fetchone(cur)
            threshold = as_fraction(r["attendance_threshold"]) if r else None
            return default if threshold is None else threshold

    def get_by_id(self, semester_id: int) -> Optional[AcademicSemester]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM academic_semesters WHERE semester_id=%s", (int(semester_id),))
            r = fetchone(cur)
            return _to_semester(r) if r else None

    def list_all(self) -> Sequence[AcademicSemester]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM academic_semesters ORDER BY start_date DESC")
            return [_to_semester(r) for r in fetchall(cur)]

    def set_current(self, semester_id: int) -> bool:
        # Both updates share one transaction (db_cursor commits once).
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT semester_id FROM academic_semesters WHERE semester_id=%s FOR UPDATE", (int(semester_id),))
            if not fetchone(cur):
                return False
            cur.execute("UPDATE academic_semesters SET is_current=0 WHERE is_current=1 AND semester_id<>%s", (int(semester_id),))
            cur.execute("UPDATE academic_semesters SET is_current=1 WHERE semester_id=%s", (int(semester_id),))
            return True

    def update_thresholds(
        self,
        *,
        semester_id: int,
        attendance_threshold: float,
        condonation_threshold: float,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE academic_semesters
                SET attendance_threshold=%s, condonation_threshold=%s
                WHERE semester_id=%s
                """,
                (attendance_threshold, condonation_threshold, int(semester_id)),
            )
