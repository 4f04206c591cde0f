from __future__ import annotations

import logging
import re
from datetime import date
from pathlib import Path
from typing import Iterable

import mysql.connector

from ..core.constants import DEFAULT_ATTENDANCE_THRESHOLD, DEFAULT_CONDONATION_THRESHOLD
from .connection import DBConfig

logger = logging.getLogger(__name__)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_line_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _connect(db_config: dict, *, with_database: bool = True):
    target = DBConfig.from_dict(db_config)
    kwargs = {
        "host": target.host,
        "port": target.port,
        "user": target.user,
        "password": target.password,
        "use_pure": True,
    }
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _exec_sql_file(db_config: dict, path: str | Path) -> None:
    sql = _strip_line_comments(_strip_create_db_and_use(Path(path).read_text(encoding="utf-8")))
    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(db_config, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _exec_sql_file(db_config, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _exec_sql_file(db_config, seed_path)


def ensure_current_semester(
    db_config: dict,
    *,
    attendance_threshold: float = DEFAULT_ATTENDANCE_THRESHOLD,
    today: date | None = None,
) -> None:
    """Make sure exactly one semester is flagged current.

    When none is, the most recent semester is promoted, or a placeholder
    covering the current half-year is created.
    """

    today = today or date.today()
    conn = _connect(db_config)
    try:
        cur = conn.cursor(dictionary=True)
        cur.execute("SELECT semester_id FROM academic_semesters WHERE is_current=1 ORDER BY semester_id DESC")
        current = cur.fetchall()
        if len(current) > 1:
            keep = int(current[0]["semester_id"])
            cur.execute("UPDATE academic_semesters SET is_current=0 WHERE is_current=1 AND semester_id<>%s", (keep,))
            logger.warning("several current semesters found; kept semester %s", keep)
        elif not current:
            cur.execute("SELECT semester_id FROM academic_semesters ORDER BY start_date DESC LIMIT 1")
            latest = cur.fetchone()
            if latest:
                cur.execute("UPDATE academic_semesters SET is_current=1 WHERE semester_id=%s", (int(latest["semester_id"]),))
                logger.info("semester %s promoted to current", latest["semester_id"])
            else:
                first_half = today.month <= 6
                start = date(today.year, 1, 1) if first_half else date(today.year, 7, 1)
                end = date(today.year, 6, 30) if first_half else date(today.year, 12, 31)
                cur.execute(
                    """
                    INSERT INTO academic_semesters
                        (name, start_date, end_date, total_working_days,
                         attendance_threshold, condonation_threshold, is_current)
                    VALUES (%s, %s, %s, %s, %s, %s, 1)
                    """,
                    (
                        f"{today.year} {'Spring' if first_half else 'Autumn'}",
                        start,
                        end,
                        90,
                        attendance_threshold,
                        DEFAULT_CONDONATION_THRESHOLD,
                    ),
                )
                logger.info("created placeholder current semester %s..%s", start, end)
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
