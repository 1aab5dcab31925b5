"""
Axis Score Normalizer
app/scoring/axis_normalizer.py

Rescales a dimension score from its native -3..+3 range onto 0..100:

    normalized = ((clamp(raw, -3, 3) + 3) / 6) × 100

    -3 → 0,  0 → 50,  +3 → 100

Out-of-range input is clamped first, never rejected.
"""

from decimal import Decimal
from typing import Optional, Union

from app.scoring.scoring_config import SCORE_MAX, SCORE_MIN
from app.scoring.utils import clamp

_MIN = Decimal(SCORE_MIN)
_MAX = Decimal(SCORE_MAX)
_SPAN = _MAX - _MIN


def normalize_axis_score(
    raw: Union[int, float, Decimal], places: Optional[int] = 4
) -> Decimal:
    """
    Map a raw dimension score to [0, 100].

    places=None skips quantization (used when the value feeds further math).

    Examples:
        >>> normalize_axis_score(0)
        Decimal('50.0000')
        >>> normalize_axis_score(7)
        Decimal('100.0000')
    """
    value = clamp(Decimal(str(raw)), _MIN, _MAX)
    normalized = (value - _MIN) / _SPAN * Decimal("100")
    if places is None:
        return normalized
    return normalized.quantize(Decimal(10) ** -places)
