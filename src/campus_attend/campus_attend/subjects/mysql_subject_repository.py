from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import EnrolledStudent, Subject, SubjectPlan
from .repository import SubjectRepository

_SUBJECT_COLUMNS = """
    s.subject_id, s.name, s.code, s.faculty_id, s.department, s.semester,
    s.credits, COALESCE(s.total_classes_planned, 0) AS total_classes_planned
"""


def _to_subject(r: dict) -> Subject:
    return Subject(
        subject_id=int(r["subject_id"]),
        name=r["name"],
        code=r["code"],
        faculty_id=int(r["faculty_id"]) if r.get("faculty_id") is not None else None,
        department=r.get("department"),
        semester=r.get("semester"),
        credits=int(r.get("credits") or 0),
        total_classes_planned=int(r["total_classes_planned"]),
    )


class MySQLSubjectRepository(SubjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_subject_plan(self, subject_id: int) -> SubjectPlan:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COALESCE(total_classes_planned, 0) AS total_classes_planned
                FROM subjects
                WHERE subject_id=%s
                """,
                (int(subject_id),),
            )
            r = fetchone(cur)
            planned = int(r["total_classes_planned"]) if r else 0
            return SubjectPlan(subject_id=int(subject_id), total_classes_planned=planned)

    def get_subject(self, subject_id: int) -> Optional[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SUBJECT_COLUMNS} FROM subjects s WHERE s.subject_id=%s", (int(subject_id),))
            r = fetchone(cur)
            return _to_subject(r) if r else None

    def list_all(self) -> Sequence[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SUBJECT_COLUMNS} FROM subjects s ORDER BY s.name ASC")
            return [_to_subject(r) for r in fetchall(cur)]

    def list_for_faculty(self, faculty_id: int) -> Sequence[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_SUBJECT_COLUMNS} FROM subjects s WHERE s.faculty_id=%s ORDER BY s.name ASC",
                (int(faculty_id),),
            )
            return [_to_subject(r) for r in fetchall(cur)]

    def list_enrolled_subjects(self, student_id: int) -> Sequence[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SUBJECT_COLUMNS}
                FROM student_subjects ss
                JOIN subjects s ON s.subject_id = ss.subject_id
                WHERE ss.student_id=%s
                ORDER BY s.name ASC
                """,
                (int(student_id),),
            )
            return [_to_subject(r) for r in fetchall(cur)]

    def list_enrolled_students(self, subject_id: int) -> Sequence[EnrolledStudent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT p.user_id, p.full_name, p.email, p.department, p.semester
                FROM student_subjects ss
                JOIN profiles p ON p.user_id = ss.student_id
                WHERE ss.subject_id=%s
                ORDER BY p.full_name ASC
                """,
                (int(subject_id),),
            )
            return [
                EnrolledStudent(
                    student_id=int(r["user_id"]),
                    full_name=r["full_name"],
                    email=r["email"],
                    department=r.get("department"),
                    semester=r.get("semester"),
                )
                for r in fetchall(cur)
            ]

    def enrol(self, *, student_id: int, subject_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT IGNORE INTO student_subjects(student_id, subject_id) VALUES(%s,%s)",
                (int(student_id), int(subject_id)),
            )
            return cur.rowcount > 0
