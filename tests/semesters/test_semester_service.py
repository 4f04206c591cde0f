from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from src.campus_attend.campus_attend.core.enums import Role
from src.campus_attend.campus_attend.core.exceptions import AuthorizationError, ValidationError
from src.campus_attend.campus_attend.semesters.model import AcademicSemester
from src.campus_attend.campus_attend.semesters.service import SemesterService


class InMemorySemesters:
    def __init__(self, semesters):
        self._by_id = {s.semester_id: s for s in semesters}

    def get_current_threshold(self, *, default=0.75):
        for s in self._by_id.values():
            if s.is_current:
                return s.attendance_threshold
        return default

    def get_by_id(self, semester_id):
        return self._by_id.get(int(semester_id))

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda s: s.start_date, reverse=True)

    def set_current(self, semester_id):
        if int(semester_id) not in self._by_id:
            return False
        for sid, s in list(self._by_id.items()):
            self._by_id[sid] = replace(s, is_current=(sid == int(semester_id)))
        return True

    def update_thresholds(self, *, semester_id, attendance_threshold, condonation_threshold):
        s = self._by_id[int(semester_id)]
        self._by_id[int(semester_id)] = replace(
            s,
            attendance_threshold=attendance_threshold,
            condonation_threshold=condonation_threshold,
        )


def _semester(semester_id, *, start, threshold=0.75, current=False):
    return AcademicSemester(
        semester_id=semester_id,
        name=f"Term {semester_id}",
        start_date=start,
        end_date=date(start.year, start.month + 4, 28),
        total_working_days=90,
        attendance_threshold=threshold,
        condonation_threshold=0.65,
        is_current=current,
    )


def test_current_threshold_falls_back_to_configured_default():
    svc = SemesterService(InMemorySemesters([_semester(1, start=date(2025, 1, 6))]), default_threshold=0.8)

    assert svc.current_threshold() == 0.8


def test_switching_current_semester_changes_threshold():
    repo = InMemorySemesters(
        [
            _semester(1, start=date(2024, 7, 1), threshold=0.75, current=True),
            _semester(2, start=date(2025, 1, 6), threshold=0.8),
        ]
    )
    svc = SemesterService(repo)

    svc.set_current(current_role=Role.ADMIN, semester_id=2)

    assert svc.current_threshold() == 0.8
    assert [s.semester_id for s in repo.list_all() if s.is_current] == [2]


def test_set_current_for_unknown_semester_fails():
    svc = SemesterService(InMemorySemesters([]))

    with pytest.raises(ValidationError):
        svc.set_current(current_role=Role.ADMIN, semester_id=7)


def test_only_admins_manage_semesters():
    svc = SemesterService(InMemorySemesters([_semester(1, start=date(2025, 1, 6))]))

    with pytest.raises(AuthorizationError):
        svc.set_current(current_role=Role.FACULTY, semester_id=1)
    with pytest.raises(AuthorizationError):
        svc.list_all(current_role=Role.STUDENT)


def test_update_thresholds_validates_fractions():
    svc = SemesterService(InMemorySemesters([_semester(1, start=date(2025, 1, 6))]))

    updated = svc.update_thresholds(
        current_role=Role.ADMIN, semester_id=1, attendance_threshold="0.8", condonation_threshold=0.7
    )
    assert updated.attendance_threshold == 0.8
    assert updated.condonation_threshold == 0.7

    for bad in (0, 1.5, "abc", None):
        with pytest.raises(ValidationError):
            svc.update_thresholds(
                current_role=Role.ADMIN, semester_id=1, attendance_threshold=bad, condonation_threshold=0.5
            )

    with pytest.raises(ValidationError):
        svc.update_thresholds(
            current_role=Role.ADMIN, semester_id=1, attendance_threshold=0.6, condonation_threshold=0.7
        )
