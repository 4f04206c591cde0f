from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BufferInputs:
    """Counts gathered from the repositories for one (student, subject)."""

    threshold: float
    total_planned: int
    held_count: int
    present_count: int


@dataclass(frozen=True)
class BufferResult:
    """Derived, never persisted; recomputed on every request."""

    present_count: int
    held_count: int
    total_planned: int
    current_pct: float
    buffer_classes: int
    projected_pct: float
    is_safe: bool
    remaining: int = 0
    required_total: int = 0

    def to_dict(self) -> dict:
        return {
            "present_count": self.present_count,
            "held_count": self.held_count,
            "total_planned": self.total_planned,
            "current_pct": self.current_pct,
            "buffer_classes": self.buffer_classes,
            "projected_pct": self.projected_pct,
            "is_safe": self.is_safe,
        }


@dataclass(frozen=True)
class SubjectAttendance:
    """Dashboard row: one enrolled subject and its buffer."""

    subject_id: int
    subject_name: str
    subject_code: str
    buffer: BufferResult
    on_duty_count: int

    def to_dict(self) -> dict:
        return {
            "subject_id": self.subject_id,
            "subject_name": self.subject_name,
            "subject_code": self.subject_code,
            "buffer": self.buffer.to_dict(),
            "on_duty_count": self.on_duty_count,
        }
