"""Weekly cumulative-attendance trend.

The history is folded record by record into a :class:`TrendState`. Weeks are
numbered sequentially in the order they are first seen, so calendar gaps do
not show up as empty weeks. Within a week, the last record's cumulative
value wins.

The input must already be sorted ascending by date; nothing is re-sorted here.
"""
from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

from ..attendance.classification import DEFAULT_POLICY, AttendancePolicy, counts_as_attended
from ..attendance.model import HistoryEntry
from ..common.datetime_utils import iso_week_key
from ..common.numbers import round_half_up
from ..core.constants import DISPLAY_PRECISION
from .model import TrendCheckpoint, TrendState


def advance(state: TrendState, entry: HistoryEntry, policy: AttendancePolicy = DEFAULT_POLICY) -> TrendState:
    week_key = iso_week_key(entry.effective_date)
    week_num = state.week_num
    if week_key != state.last_week_key:
        week_num += 1

    return TrendState(
        total_held=state.total_held + 1,
        total_present=state.total_present + (1 if counts_as_attended(entry.status, policy) else 0),
        week_num=week_num,
        last_week_key=week_key,
    )


def checkpoint_for(state: TrendState) -> TrendCheckpoint:
    if state.total_held > 0:
        pct = round_half_up(state.total_present / state.total_held, DISPLAY_PRECISION)
    else:
        pct = 1.0
    # Projection is the cumulative value itself; there is no extrapolation.
    return TrendCheckpoint(week=f"Week {state.week_num}", pct=pct, projected=pct)


def iter_checkpoints(
    entries: Iterable[HistoryEntry],
    *,
    policy: AttendancePolicy = DEFAULT_POLICY,
) -> Iterator[TrendCheckpoint]:
    """Yield one checkpoint per week, each as soon as its week is complete."""

    state = TrendState()
    pending: Optional[TrendCheckpoint] = None

    for entry in entries:
        state = advance(state, entry, policy)
        current = checkpoint_for(state)
        if pending is not None and pending.week != current.week:
            yield pending
        pending = current

    if pending is not None:
        yield pending


class WeeklyTrend:
    """Restartable view over a history: every iteration re-runs the fold."""

    def __init__(self, entries: Iterable[HistoryEntry], *, policy: AttendancePolicy = DEFAULT_POLICY):
        self._entries = tuple(entries)
        self._policy = policy

    def __iter__(self) -> Iterator[TrendCheckpoint]:
        return iter_checkpoints(self._entries, policy=self._policy)

    def to_list(self) -> List[TrendCheckpoint]:
        return list(self)
