"""
scoring/compliance_penalty.py

Tracking-compliance penalty for a subject who sets their own tracking goals.
The result is subtracted from the cumulative profile score (score_profile.py),
never from an individual CompositeScore.

Formula (per metric i):
    rate_i    = completed_i / tracked_i          (0 when tracked_i = 0)
    failure_i = max(0, threshold − rate_i)
    raw_i     = failure_i × (w_i / Σw) × max_penalty
    ramp_i    = min(1, tracked_i / min_tracked_days)
    final_i   = raw_i × ramp_i

    total = min(max_penalty, round(Σ final_i, 1))

Defaults: threshold = 0.7, max_penalty = 20, min_tracked_days = 7.
The caller supplies the compliance data; nothing is read from storage.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Sequence, Tuple

from app.scoring.utils import clamp, round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetricCompliance:
    """Tracking record for one metric over the lookback window."""
    metric_slug: str
    tracked_days: int
    completed_days: int
    weight: float

    @property
    def compliance_rate(self) -> Decimal:
        if self.tracked_days <= 0:
            return Decimal("0")
        rate = Decimal(self.completed_days) / Decimal(self.tracked_days)
        return clamp(rate, Decimal("0"), Decimal("1"))


@dataclass(frozen=True)
class MetricPenalty:
    metric_slug: str
    compliance_rate: Decimal
    effective_failure: Decimal
    raw_penalty: Decimal
    ramp_up_factor: Decimal
    final_penalty: Decimal


@dataclass(frozen=True)
class CompliancePenaltyResult:
    """Output of CompliancePenaltyCalculator.calculate()."""
    total_penalty: Decimal          # [0, max_penalty], one decimal place
    metric_penalties: Tuple[MetricPenalty, ...]
    notes: Tuple[str, ...]


class CompliancePenaltyCalculator:
    """Calculate the tracking-compliance penalty."""

    def __init__(
        self,
        max_penalty: float = 20.0,
        failure_threshold: float = 0.7,
        min_tracked_days: int = 7,
    ):
        self.max_penalty = Decimal(str(max_penalty))
        self.failure_threshold = Decimal(str(failure_threshold))
        self.min_tracked_days = Decimal(min_tracked_days)

    def calculate(self, metrics: Sequence[MetricCompliance]) -> CompliancePenaltyResult:
        notes: List[str] = []
        weighted = [m for m in metrics if m.weight > 0]

        if not weighted:
            notes.append("No metrics with a score weight defined.")
            return CompliancePenaltyResult(
                total_penalty=Decimal("0"), metric_penalties=(), notes=tuple(notes)
            )

        notes.append(f"Analyzing {len(weighted)} weighted metric(s).")
        total_weight = sum(Decimal(str(m.weight)) for m in weighted)

        penalties: List[MetricPenalty] = []
        for metric in weighted:
            rate = metric.compliance_rate
            failure = max(Decimal("0"), self.failure_threshold - rate)
            share = Decimal(str(metric.weight)) / total_weight
            raw = failure * share * self.max_penalty
            ramp = min(Decimal("1"), Decimal(max(metric.tracked_days, 0)) / self.min_tracked_days)
            penalties.append(
                MetricPenalty(
                    metric_slug=metric.metric_slug,
                    compliance_rate=rate,
                    effective_failure=failure,
                    raw_penalty=raw,
                    ramp_up_factor=ramp,
                    final_penalty=raw * ramp,
                )
            )

        summed = sum(p.final_penalty for p in penalties).quantize(
            Decimal("0.1"), rounding=ROUND_HALF_UP
        )
        total = min(self.max_penalty, summed)

        failing = [p for p in penalties if p.final_penalty > 0]
        if failing:
            threshold_pct = round_half_up(self.failure_threshold * 100)
            notes.append(f"{len(failing)} metric(s) below {threshold_pct}% compliance threshold.")
            for p in failing:
                notes.append(
                    f"  - {p.metric_slug}: {round_half_up(p.compliance_rate * 100)}% "
                    f"compliance → -{p.final_penalty:.1f} points"
                )
        else:
            notes.append("All metrics meeting compliance threshold.")
        notes.append(f"Total tracking penalty: -{total} points")

        logger.info(
            "compliance_penalty_calculated",
            extra={
                "metric_count": len(penalties),
                "failing_count": len(failing),
                "total_penalty": float(total),
            },
        )

        return CompliancePenaltyResult(
            total_penalty=total, metric_penalties=tuple(penalties), notes=tuple(notes)
        )
