from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TrendCheckpoint:
    """Cumulative attendance as of the last record of a week."""

    week: str
    pct: float
    projected: float

    def to_dict(self) -> dict:
        return {"week": self.week, "pct": self.pct, "projected": self.projected}


@dataclass(frozen=True)
class TrendState:
    """Fold accumulator; each record produces a new state."""

    total_held: int = 0
    total_present: int = 0
    week_num: int = 0
    last_week_key: str = ""
