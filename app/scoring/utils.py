"""
Decimal Utilities
app/scoring/utils.py

Provides precision-safe decimal math for scoring calculations.
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, List, Optional


def coerce_number(value: Any) -> Optional[float]:
    """
    Best-effort numeric coercion for model-produced values.

    Accepts ints, finite floats and numeric strings. Booleans, NaN/inf and
    anything else return None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def clamp(
    value: Decimal,
    min_val: Decimal = Decimal("0"),
    max_val: Decimal = Decimal("100"),
) -> Decimal:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, .5 away from zero."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def weighted_mean(
    values: List[Decimal], weights: List[Decimal], places: Optional[int] = 4
) -> Decimal:
    """
    Calculate weighted mean.

    Formula: Σ(value_i × weight_i) / Σ(weight_i)
    Quantized to `places` decimals; places=None returns the unrounded mean.
    Raises ValueError if there is nothing to average.
    """
    if len(values) != len(weights):
        raise ValueError("values and weights must have same length")

    total_weight = sum(weights)
    if not values or total_weight == 0:
        raise ValueError("weighted mean of an empty set is undefined")

    numerator = sum(v * w for v, w in zip(values, weights))
    mean = numerator / total_weight
    if places is None:
        return mean
    return mean.quantize(Decimal(10) ** -places, rounding=ROUND_HALF_UP)
