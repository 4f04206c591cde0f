from __future__ import annotations

from ...common.numbers import ceil_product, round_half_up
from ...core.constants import DISPLAY_PRECISION
from ..model import BufferInputs, BufferResult
from .base import BufferCalculator


class StandardBufferCalculator(BufferCalculator):
    """Standard rule.

    - current = present / held, or 1.0 while nothing has been held yet
    - remaining = max(planned - held, 0)
    - required = ceil(threshold * planned)
    - buffer = max(present + remaining - required, 0)
    - projected = (present + remaining) / planned, or current when planned is 0
    - safe = current >= threshold (inclusive)

    Percentages are fractions rounded half-up to 4 places; ``is_safe`` is
    decided on the unrounded value.
    """

    def calculate(self, inputs: BufferInputs) -> BufferResult:
        present = int(inputs.present_count)
        held = int(inputs.held_count)
        planned = int(inputs.total_planned)
        threshold = float(inputs.threshold)

        current_pct = present / held if held > 0 else 1.0
        remaining = max(planned - held, 0)
        required_total = ceil_product(threshold, planned)
        buffer_classes = max((present + remaining) - required_total, 0)
        projected_pct = (present + remaining) / planned if planned > 0 else current_pct

        return BufferResult(
            present_count=present,
            held_count=held,
            total_planned=planned,
            current_pct=round_half_up(current_pct, DISPLAY_PRECISION),
            buffer_classes=buffer_classes,
            projected_pct=round_half_up(projected_pct, DISPLAY_PRECISION),
            is_safe=current_pct >= threshold,
            remaining=remaining,
            required_total=required_total,
        )
