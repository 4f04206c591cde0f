from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.constants import DEFAULT_ATTENDANCE_THRESHOLD
from .model import AcademicSemester


class SemesterRepository(Protocol):
    def get_current_threshold(self, *, default: float = DEFAULT_ATTENDANCE_THRESHOLD) -> float:
        """``attendance_threshold`` of the current semester, or ``default`` when none is current."""

        raise NotImplementedError

    def get_by_id(self, semester_id: int) -> Optional[AcademicSemester]:
        raise NotImplementedError

    def list_all(self) -> Sequence[AcademicSemester]:
        raise NotImplementedError

    def set_current(self, semester_id: int) -> bool:
        """Flag ``semester_id`` as current and clear the flag on every other row, atomically."""

        raise NotImplementedError

    def update_thresholds(
        self,
        *,
        semester_id: int,
        attendance_threshold: float,
        condonation_threshold: float,
    ) -> None:
        raise NotImplementedError
