from __future__ import annotations

import logging
from typing import List

from ..attendance.classification import DEFAULT_POLICY, AttendancePolicy
from ..attendance.repository import AttendanceRepository
from .aggregator import WeeklyTrend
from .model import TrendCheckpoint

logger = logging.getLogger(__name__)


class TrendService:
    def __init__(self, attendance: AttendanceRepository, *, policy: AttendancePolicy = DEFAULT_POLICY):
        self._attendance = attendance
        self._policy = policy

    def weekly_trend(self, student_id: int) -> WeeklyTrend:
        history = self._attendance.stream_attendance_history(int(student_id))
        return WeeklyTrend(history, policy=self._policy)

    def compute_trend(self, student_id: int) -> List[TrendCheckpoint]:
        checkpoints = self.weekly_trend(student_id).to_list()
        logger.debug("trend student=%s weeks=%d", student_id, len(checkpoints))
        return checkpoints
