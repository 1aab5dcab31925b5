"""
Band Classification
app/scoring/bands.py

Maps a raw dimension score (-3..+3) into one of five named bands:

    score <= -2    strong_negative
    score <= -0.5  mild_negative
    score <=  0.5  neutral
    score <=  2    mild_positive
    otherwise      strong_positive

Bands are never stored apart from the score that produced them.
"""

from dataclasses import dataclass
from typing import Iterable, Union

from app.models.enumerations import Band, NEGATIVE_BANDS, POSITIVE_BANDS

Number = Union[int, float]

_BAND_THRESHOLDS = (
    (-2.0, Band.STRONG_NEGATIVE),
    (-0.5, Band.MILD_NEGATIVE),
    (0.5, Band.NEUTRAL),
    (2.0, Band.MILD_POSITIVE),
)


def score_to_band(score: Number) -> Band:
    """Convert a numeric score to its band."""
    for upper, band in _BAND_THRESHOLDS:
        if score <= upper:
            return band
    return Band.STRONG_POSITIVE


@dataclass(frozen=True)
class BandDistribution:
    """How many dimensions landed on each side of neutral."""
    positive: int
    negative: int
    neutral: int

    @property
    def total(self) -> int:
        return self.positive + self.negative + self.neutral


def band_distribution(scores: Iterable[Number]) -> BandDistribution:
    positive = negative = neutral = 0
    for score in scores:
        band = score_to_band(score)
        if band in POSITIVE_BANDS:
            positive += 1
        elif band in NEGATIVE_BANDS:
            negative += 1
        else:
            neutral += 1
    return BandDistribution(positive=positive, negative=negative, neutral=neutral)
