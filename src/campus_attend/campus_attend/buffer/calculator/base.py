from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import BufferInputs, BufferResult


class BufferCalculator(ABC):
    """Calculator interface (Strategy Pattern for the safe-to-miss projection)."""

    @abstractmethod
    def calculate(self, inputs: BufferInputs) -> BufferResult:
        raise NotImplementedError
