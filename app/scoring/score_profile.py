"""
Score Profile & Trend
app/scoring/score_profile.py

Rolls the final scores of a subject's past scans into one cumulative profile
score, and reports the movement between the two most recent scans.

Profile:
    base    = round_half_up(mean(final_score_i))      (50 when there are no scans)
    current = round_half_up(clamp(base − tracking_penalty, 0, 100))

The tracking-compliance penalty lands here, on the profile. Individual
CompositeScores are never modified.

Trend (two most recent scans by scanned_at):
    change  = current − previous
    up      change >  2
    down    change < −2
    flat    otherwise
    change_percent = round_half_up(|change| / previous × 100)   (0 when previous = 0)
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple

import structlog

from app.models.enumerations import TrendDirection
from app.scoring.authority_calculator import CompositeScore
from app.scoring.compliance_penalty import CompliancePenaltyResult
from app.scoring.utils import clamp, round_half_up

logger = structlog.get_logger(__name__)

NEUTRAL_PROFILE_SCORE = 50
FLAT_BAND = 2


@dataclass(frozen=True)
class ScanScore:
    """Final score of one past scan."""
    final_score: int
    scanned_at: datetime

    @classmethod
    def from_composite(cls, score: CompositeScore, scanned_at: datetime) -> "ScanScore":
        return cls(final_score=score.final_score, scanned_at=scanned_at)


@dataclass(frozen=True)
class ScoreProfile:
    """Output of compute_score_profile()."""
    current_score: int                  # [0, 100], after the tracking penalty
    base_score: int                     # mean of scan scores, before the penalty
    scans_count: int
    last_scan_at: Optional[datetime]
    compliance: Optional[CompliancePenaltyResult]
    notes: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currentScore": self.current_score,
            "baseScore": self.base_score,
            "scansCount": self.scans_count,
            "lastScanAt": self.last_scan_at.isoformat() if self.last_scan_at else None,
            "trackingPenalty": (
                float(self.compliance.total_penalty) if self.compliance else None
            ),
            "notes": list(self.notes),
        }


@dataclass(frozen=True)
class ScoreTrend:
    """Output of compute_score_trend()."""
    direction: TrendDirection
    change_amount: int          # absolute change between the two latest scans
    change_percent: int         # absolute, relative to the previous scan

    def to_dict(self) -> Dict[str, Any]:
        return {
            "direction": self.direction.value,
            "changeAmount": self.change_amount,
            "changePercent": self.change_percent,
        }


def _latest_first(scans: Sequence[ScanScore]) -> List[ScanScore]:
    return sorted(scans, key=lambda s: s.scanned_at, reverse=True)


def compute_score_profile(
    scans: Sequence[ScanScore],
    compliance: Optional[CompliancePenaltyResult] = None,
) -> ScoreProfile:
    """
    Cumulative profile over all scans, with the optional tracking penalty.

    Args:
        scans: Past scan scores in any order.
        compliance: Tracking-compliance result to subtract, if the subject
                    tracks goals.

    Returns:
        ScoreProfile; a subject with no scans sits at the neutral 50.
    """
    ordered = _latest_first(scans)
    notes: List[str] = []

    if ordered:
        total = sum(Decimal(s.final_score) for s in ordered)
        base = round_half_up(total / Decimal(len(ordered)))
        last_scan_at = ordered[0].scanned_at
        notes.append(f"Average of {len(ordered)} scan(s): {base}")
    else:
        base = NEUTRAL_PROFILE_SCORE
        last_scan_at = None
        notes.append(f"No scans yet, neutral score {base} used")

    current = base
    if compliance is not None:
        notes.extend(compliance.notes)
        if compliance.total_penalty > 0:
            current = round_half_up(clamp(Decimal(base) - compliance.total_penalty))
            notes.append(f"Final score after tracking penalty: {current}")

    logger.info(
        "score_profile_computed",
        scans_count=len(ordered),
        base_score=base,
        current_score=current,
        tracking_penalty=float(compliance.total_penalty) if compliance else None,
    )

    return ScoreProfile(
        current_score=current,
        base_score=base,
        scans_count=len(ordered),
        last_scan_at=last_scan_at,
        compliance=compliance,
        notes=tuple(notes),
    )


def compute_score_trend(scans: Sequence[ScanScore]) -> Optional[ScoreTrend]:
    """Movement between the two most recent scans; None with fewer than two."""
    if len(scans) < 2:
        return None

    latest, previous = _latest_first(scans)[:2]
    change = latest.final_score - previous.final_score

    if change > FLAT_BAND:
        direction = TrendDirection.UP
    elif change < -FLAT_BAND:
        direction = TrendDirection.DOWN
    else:
        direction = TrendDirection.FLAT

    if previous.final_score == 0:
        change_percent = 0
    else:
        change_percent = round_half_up(
            Decimal(abs(change)) / Decimal(previous.final_score) * Decimal("100")
        )

    return ScoreTrend(
        direction=direction,
        change_amount=abs(change),
        change_percent=change_percent,
    )
