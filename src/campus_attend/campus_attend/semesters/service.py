from __future__ import annotations

import logging
from typing import Sequence

from ..common.validators import require_fraction
from ..core.constants import DEFAULT_ATTENDANCE_THRESHOLD
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import AcademicSemester
from .repository import SemesterRepository

logger = logging.getLogger(__name__)


class SemesterService:
    def __init__(self, semesters: SemesterRepository, *, default_threshold: float = DEFAULT_ATTENDANCE_THRESHOLD):
        self._semesters = semesters
        self._default_threshold = float(default_threshold)

    @property
    def default_threshold(self) -> float:
        return self._default_threshold

    def current_threshold(self) -> float:
        return self._semesters.get_current_threshold(default=self._default_threshold)

    def list_all(self, *, current_role: Role) -> Sequence[AcademicSemester]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can manage semesters")
        return self._semesters.list_all()

    def set_current(self, *, current_role: Role, semester_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can manage semesters")
        if not self._semesters.set_current(int(semester_id)):
            raise ValidationError("Semester does not exist")
        logger.info("semester %s is now current", semester_id)

    def update_thresholds(
        self,
        *,
        current_role: Role,
        semester_id: int,
        attendance_threshold: object,
        condonation_threshold: object,
    ) -> AcademicSemester:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can manage semesters")

        attendance = require_fraction(attendance_threshold, "attendance_threshold")
        condonation = require_fraction(condonation_threshold, "condonation_threshold")
        if condonation > attendance:
            raise ValidationError("condonation_threshold cannot exceed attendance_threshold")

        if self._semesters.get_by_id(int(semester_id)) is None:
            raise ValidationError("Semester does not exist")

        self._semesters.update_thresholds(
            semester_id=int(semester_id),
            attendance_threshold=attendance,
            condonation_threshold=condonation,
        )

        logger.info(
            "semester %s thresholds set to attendance=%.2f condonation=%.2f",
            semester_id, attendance, condonation,
        )
        return self._semesters.get_by_id(int(semester_id))
