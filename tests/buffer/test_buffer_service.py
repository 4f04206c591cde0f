from __future__ import annotations

from datetime import date

import pytest

from src.campus_attend.campus_attend.attendance.classification import AttendancePolicy
from src.campus_attend.campus_attend.buffer.service import AttendanceBufferService
from src.campus_attend.campus_attend.core.enums import AttendanceStatus
from src.campus_attend.campus_attend.core.exceptions import DataUnavailableError
from src.campus_attend.campus_attend.subjects.model import Subject, SubjectPlan


class FakeSemesters:
    def __init__(self, threshold=None):
        self._threshold = threshold

    def get_current_threshold(self, *, default=0.75):
        return default if self._threshold is None else self._threshold


class FakeSubjects:
    def __init__(self, plans=None, enrolled=None):
        self._plans = plans or {}
        self._enrolled = enrolled or {}

    def get_subject_plan(self, subject_id):
        return SubjectPlan(subject_id=subject_id, total_classes_planned=self._plans.get(subject_id, 0))

    def list_enrolled_subjects(self, student_id):
        return self._enrolled.get(student_id, [])


class FakeSessions:
    def __init__(self, held=None):
        self._held = held or {}
        self.last_as_of = None

    def count_held_sessions(self, subject_id, as_of):
        self.last_as_of = as_of
        return self._held.get(subject_id, 0)


class FakeAttendance:
    """Keeps (student, subject) -> list of statuses."""

    def __init__(self, statuses=None):
        self._statuses = statuses or {}
        self.last_statuses = None

    def count_present_records(self, student_id, subject_id, *, statuses=frozenset()):
        self.last_statuses = set(statuses)
        return sum(1 for s in self._statuses.get((student_id, subject_id), []) if s in statuses)


class BrokenSessions:
    def count_held_sessions(self, subject_id, as_of):
        raise DataUnavailableError("Database is unavailable")


def _statuses(present=0, absent=0, on_duty=0, medical=0):
    return (
        [AttendanceStatus.PRESENT] * present
        + [AttendanceStatus.ABSENT] * absent
        + [AttendanceStatus.ON_DUTY] * on_duty
        + [AttendanceStatus.MEDICAL] * medical
    )


def _service(*, threshold=None, plans=None, held=None, statuses=None, enrolled=None, **kwargs):
    return AttendanceBufferService(
        FakeSemesters(threshold),
        FakeSubjects(plans, enrolled),
        FakeSessions(held),
        FakeAttendance(statuses),
        **kwargs,
    )


def test_compute_buffer_uses_repository_counts():
    svc = _service(
        threshold=0.75,
        plans={1: 40},
        held={1: 20},
        statuses={(7, 1): _statuses(present=16, on_duty=2, absent=2)},
    )

    result = svc.compute_buffer(7, 1, today=date(2025, 3, 1))

    assert result.present_count == 18
    assert result.held_count == 20
    assert result.buffer_classes == 8
    assert result.is_safe is True


def test_default_threshold_used_when_no_semester_is_current():
    svc = _service(
        threshold=None,
        plans={1: 40},
        held={1: 20},
        statuses={(7, 1): _statuses(present=14, absent=6)},
        default_threshold=0.7,
    )

    result = svc.compute_buffer(7, 1, today=date(2025, 3, 1))

    assert svc.current_threshold() == 0.7
    assert result.required_total == 28
    assert result.is_safe is True


def test_unknown_subject_counts_as_zero_planned():
    svc = _service(held={}, statuses={})

    result = svc.compute_buffer(7, 99, today=date(2025, 3, 1))

    assert result.total_planned == 0
    assert result.current_pct == 1.0
    assert result.is_safe is True


def test_held_sessions_counted_as_of_given_day():
    sessions = FakeSessions({1: 3})
    svc = AttendanceBufferService(FakeSemesters(0.75), FakeSubjects({1: 10}), sessions, FakeAttendance())

    svc.compute_buffer(7, 1, today=date(2025, 2, 14))

    assert sessions.last_as_of == date(2025, 2, 14)


def test_medical_not_counted_unless_policy_enabled():
    statuses = {(7, 1): _statuses(present=5, medical=5)}

    strict = _service(threshold=0.75, plans={1: 10}, held={1: 10}, statuses=statuses)
    lenient = _service(
        threshold=0.75,
        plans={1: 10},
        held={1: 10},
        statuses=statuses,
        policy=AttendancePolicy(medical_counts_as_present=True),
    )

    assert strict.compute_buffer(7, 1, today=date(2025, 3, 1)).current_pct == 0.5
    assert lenient.compute_buffer(7, 1, today=date(2025, 3, 1)).current_pct == 1.0


def test_repository_failure_propagates_unchanged():
    svc = AttendanceBufferService(FakeSemesters(0.75), FakeSubjects({1: 10}), BrokenSessions(), FakeAttendance())

    with pytest.raises(DataUnavailableError):
        svc.compute_buffer(7, 1, today=date(2025, 3, 1))


def test_summary_lists_every_enrolled_subject_with_on_duty_count():
    enrolled = {
        7: [
            Subject(subject_id=1, name="Operating Systems", code="CS501", total_classes_planned=40),
            Subject(subject_id=2, name="Compiler Design", code="CS503", total_classes_planned=36),
        ]
    }
    svc = _service(
        threshold=0.75,
        plans={1: 40, 2: 36},
        held={1: 20, 2: 0},
        statuses={(7, 1): _statuses(present=16, on_duty=2, absent=2)},
        enrolled=enrolled,
    )

    rows = svc.summarize_for_student(7, today=date(2025, 3, 1))

    assert [r.subject_code for r in rows] == ["CS501", "CS503"]
    assert rows[0].on_duty_count == 2
    assert rows[0].buffer.buffer_classes == 8
    assert rows[1].buffer.current_pct == 1.0
    assert rows[1].to_dict()["buffer"]["is_safe"] is True


def test_summary_for_student_without_enrollments_is_empty():
    assert _service().summarize_for_student(7) == []
