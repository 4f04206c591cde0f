from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class AcademicSemester:
    """An academic term; at most one is current at a time."""

    semester_id: int
    name: str
    start_date: date
    end_date: date
    total_working_days: int
    attendance_threshold: float
    condonation_threshold: float
    is_current: bool = False
