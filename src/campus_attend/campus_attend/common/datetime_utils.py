from __future__ import annotations

from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def today_local() -> date:
    """Current local date; services use it when no ``today`` is passed."""
    return date.today()


def iso_week_key(value: date) -> str:
    """Calendar week key such as ``2025-W2``.

    The ISO year is used together with the ISO week so that the days of a
    week straddling New Year share one key.
    """
    iso_year, iso_week, _ = value.isocalendar()
    return f"{iso_year}-W{iso_week}"
