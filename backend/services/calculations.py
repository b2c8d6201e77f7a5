"""
Cost calculation policy

Every monetary total (line item or model) is rounded to 2 decimal places,
half away from zero, at the point it is computed.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable
import math

from models import MeasuredWork
from services.exceptions import ValidationError

TWO_PLACES = Decimal("0.01")


def round2(value: float) -> float:
    """
    Round to 2 decimal places, half away from zero.

    The float goes through its shortest decimal representation first, so
    1.005 rounds to 1.01 instead of the 1.00 that binary drift would give.

    Raises:
        ValidationError: If the value overflowed to infinity or is NaN
    """
    if not math.isfinite(value):
        raise ValidationError("Cost total is out of range")
    return float(Decimal(str(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def line_total(quantity: float, unit_rate: float) -> float:
    """Total cost of a measured work: quantity × unit rate."""
    return round2(quantity * unit_rate)


def model_total(works: Iterable[MeasuredWork]) -> float:
    """Total cost of a cost model: sum of its works' totals."""
    return round2(sum(work.total_cost for work in works))
