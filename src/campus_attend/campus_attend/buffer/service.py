from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from ..attendance.classification import DEFAULT_POLICY, AttendancePolicy
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import today_local
from ..core.constants import DEFAULT_ATTENDANCE_THRESHOLD
from ..core.enums import AttendanceStatus
from ..semesters.repository import SemesterRepository
from ..subjects.repository import SessionRepository, SubjectRepository
from .calculator.base import BufferCalculator
from .calculator.standard_calculator import StandardBufferCalculator
from .model import BufferInputs, BufferResult, SubjectAttendance

logger = logging.getLogger(__name__)


class AttendanceBufferService:
    """Reads the four inputs from the repositories and hands them to the calculator.

    Repository failures are not caught here: a student must never be shown a
    safety verdict computed from substituted data.
    """

    def __init__(
        self,
        semesters: SemesterRepository,
        subjects: SubjectRepository,
        sessions: SessionRepository,
        attendance: AttendanceRepository,
        *,
        calculator: Optional[BufferCalculator] = None,
        policy: AttendancePolicy = DEFAULT_POLICY,
        default_threshold: float = DEFAULT_ATTENDANCE_THRESHOLD,
    ):
        self._semesters = semesters
        self._subjects = subjects
        self._sessions = sessions
        self._attendance = attendance
        self._calculator = calculator or StandardBufferCalculator()
        self._policy = policy
        self._default_threshold = float(default_threshold)

    def current_threshold(self) -> float:
        return self._semesters.get_current_threshold(default=self._default_threshold)

    def compute_buffer(self, student_id: int, subject_id: int, *, today: Optional[date] = None) -> BufferResult:
        threshold = self.current_threshold()
        return self._compute(student_id, subject_id, threshold=threshold, today=today or today_local())

    def summarize_for_student(self, student_id: int, *, today: Optional[date] = None) -> List[SubjectAttendance]:
        subjects = self._subjects.list_enrolled_subjects(int(student_id))
        if not subjects:
            return []

        threshold = self.current_threshold()
        as_of = today or today_local()

        rows: List[SubjectAttendance] = []
        for subject in subjects:
            buffer = self._compute(student_id, subject.subject_id, threshold=threshold, today=as_of)
            on_duty = self._attendance.count_present_records(
                int(student_id),
                subject.subject_id,
                statuses=[AttendanceStatus.ON_DUTY],
            )
            rows.append(
                SubjectAttendance(
                    subject_id=subject.subject_id,
                    subject_name=subject.name,
                    subject_code=subject.code,
                    buffer=buffer,
                    on_duty_count=on_duty,
                )
            )
        return rows

    def _compute(self, student_id: int, subject_id: int, *, threshold: float, today: date) -> BufferResult:
        plan = self._subjects.get_subject_plan(int(subject_id))
        held = self._sessions.count_held_sessions(int(subject_id), today)
        present = self._attendance.count_present_records(
            int(student_id),
            int(subject_id),
            statuses=self._policy.attended_statuses(),
        )

        result = self._calculator.calculate(
            BufferInputs(
                threshold=threshold,
                total_planned=plan.total_classes_planned,
                held_count=held,
                present_count=present,
            )
        )
        logger.debug(
            "buffer student=%s subject=%s threshold=%s -> %s",
            student_id, subject_id, threshold, result.to_dict(),
        )
        return result
