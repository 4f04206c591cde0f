from datetime import date

from src.campus_attend.campus_attend.attendance.classification import AttendancePolicy
from src.campus_attend.campus_attend.attendance.model import HistoryEntry
from src.campus_attend.campus_attend.core.enums import AttendanceStatus
from src.campus_attend.campus_attend.trend.aggregator import WeeklyTrend, iter_checkpoints
from src.campus_attend.campus_attend.trend.model import TrendCheckpoint

P = AttendanceStatus.PRESENT
A = AttendanceStatus.ABSENT
OD = AttendanceStatus.ON_DUTY
MED = AttendanceStatus.MEDICAL


def _h(status, y, m, d):
    return HistoryEntry(status=status, effective_date=date(y, m, d))


def test_two_weeks_collapse_to_one_checkpoint_each():
    history = [_h(P, 2025, 1, 6), _h(A, 2025, 1, 8), _h(P, 2025, 1, 13)]

    trend = list(iter_checkpoints(history))

    assert trend == [
        TrendCheckpoint(week="Week 1", pct=0.5, projected=0.5),
        TrendCheckpoint(week="Week 2", pct=0.6667, projected=0.6667),
    ]


def test_empty_history_has_no_checkpoints():
    assert list(iter_checkpoints([])) == []


def test_calendar_gaps_do_not_create_empty_weeks():
    history = [_h(P, 2025, 1, 6), _h(P, 2025, 3, 3), _h(A, 2025, 5, 5)]

    weeks = [c.week for c in iter_checkpoints(history)]

    assert weeks == ["Week 1", "Week 2", "Week 3"]


def test_week_labels_strictly_increase_without_duplicates():
    history = [
        _h(P, 2025, 1, 6), _h(P, 2025, 1, 7), _h(A, 2025, 1, 10),
        _h(P, 2025, 1, 14), _h(OD, 2025, 1, 15),
        _h(A, 2025, 1, 27),
    ]

    weeks = [int(c.week.split()[1]) for c in iter_checkpoints(history)]

    assert weeks == sorted(set(weeks))
    assert weeks == [1, 2, 3]


def test_checkpoint_keeps_last_cumulative_value_of_the_week():
    history = [_h(P, 2025, 1, 6), _h(P, 2025, 1, 7), _h(A, 2025, 1, 8), _h(A, 2025, 1, 9)]

    (only,) = list(iter_checkpoints(history))

    assert only.week == "Week 1"
    assert only.pct == 0.5
    assert only.projected == only.pct


def test_on_duty_counts_and_medical_does_not_by_default():
    history = [_h(OD, 2025, 1, 6), _h(MED, 2025, 1, 7)]

    (only,) = list(iter_checkpoints(history))

    assert only.pct == 0.5


def test_medical_counts_when_policy_enabled():
    history = [_h(OD, 2025, 1, 6), _h(MED, 2025, 1, 7)]

    (only,) = list(iter_checkpoints(history, policy=AttendancePolicy(medical_counts_as_present=True)))

    assert only.pct == 1.0


def test_week_spanning_new_year_is_a_single_week():
    # 2024-12-30 and 2025-01-02 are both in ISO week 2025-W1.
    history = [_h(P, 2024, 12, 30), _h(A, 2025, 1, 2)]

    trend = list(iter_checkpoints(history))

    assert len(trend) == 1
    assert trend[0].pct == 0.5


def test_checkpoints_are_yielded_lazily():
    emitted = []

    def source():
        yield _h(P, 2025, 1, 6)
        emitted.append("week2")
        yield _h(A, 2025, 1, 13)
        emitted.append("done")

    it = iter_checkpoints(source())
    first = next(it)

    assert first.week == "Week 1"
    assert emitted == ["week2"]


def test_weekly_trend_can_be_iterated_more_than_once():
    trend = WeeklyTrend(iter([_h(P, 2025, 1, 6), _h(A, 2025, 1, 13)]))

    assert trend.to_list() == list(trend)
    assert [c.to_dict() for c in trend] == [
        {"week": "Week 1", "pct": 1.0, "projected": 1.0},
        {"week": "Week 2", "pct": 0.5, "projected": 0.5},
    ]


def test_final_checkpoint_agrees_with_overall_ratio():
    history = [_h(P, 2025, 2, d) for d in (3, 4, 5)] + [_h(A, 2025, 2, 11), _h(OD, 2025, 2, 12)]

    last = list(iter_checkpoints(history))[-1]

    assert last.pct == 0.8
