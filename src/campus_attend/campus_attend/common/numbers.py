from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int) -> float:
    """Round like SQL ``ROUND(numeric, n)``: halves go away from zero."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def ceil_product(fraction: float, count: int) -> int:
    """``ceil(fraction * count)`` evaluated in decimal.

    ``0.7 * 10`` is 7.000000000000001 in binary floating point; the decimal
    product is exactly 7.
    """
    return int(math.ceil(Decimal(repr(float(fraction))) * int(count)))
