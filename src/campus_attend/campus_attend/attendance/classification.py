"""Which statuses count as attended.

Both the buffer calculator (through the SQL count) and the trend fold go
through :class:`AttendancePolicy`, so the two always agree.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet

from ..core.enums import AttendanceStatus

ATTENDED_STATUSES: FrozenSet[AttendanceStatus] = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.ON_DUTY})


@dataclass(frozen=True)
class AttendancePolicy:
    # Medical leave is tracked but not counted unless this is switched on.
    medical_counts_as_present: bool = False

    def attended_statuses(self) -> FrozenSet[AttendanceStatus]:
        if self.medical_counts_as_present:
            return ATTENDED_STATUSES | {AttendanceStatus.MEDICAL}
        return ATTENDED_STATUSES


DEFAULT_POLICY = AttendancePolicy()


def counts_as_attended(status: AttendanceStatus, policy: AttendancePolicy = DEFAULT_POLICY) -> bool:
    return AttendanceStatus(status) in policy.attended_statuses()
