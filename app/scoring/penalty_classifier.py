"""
Penalty & Classification Stage
app/scoring/penalty_classifier.py

Applies the relational-state penalty to the weighted mean and derives the
overall three-way label.

Penalty table (points subtracted):
    win_win    0
    neutral    5
    win_lose  15
    lose_lose 30

    final = round_half_up(clamp(weighted_mean − penalty, 0, 100))

Label:
    positive  final ≥ 70 and positive bands are a strict majority
    negative  final ≤ 30 and negative bands are a strict majority
    mixed     otherwise (including exact ties)
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Sequence, Tuple

import structlog

from app.models.enumerations import OverallLabel, RelationalState
from app.scoring.bands import BandDistribution, band_distribution
from app.scoring.domain_weighting import AggregationResult
from app.scoring.utils import clamp, round_half_up

logger = structlog.get_logger(__name__)

RELATIONAL_PENALTIES: Dict[RelationalState, int] = {
    RelationalState.WIN_WIN: 0,
    RelationalState.NEUTRAL: 5,
    RelationalState.WIN_LOSE: 15,
    RelationalState.LOSE_LOSE: 30,
}

POSITIVE_THRESHOLD = 70
NEGATIVE_THRESHOLD = 30


@dataclass(frozen=True)
class ClassificationResult:
    """Output of PenaltyClassifier.classify()."""
    final_score: int
    pre_penalty_score: Decimal
    penalty: int
    relational_state: RelationalState
    overall_label: OverallLabel
    distribution: BandDistribution
    notes: Tuple[str, ...]


def resolve_relational_state(value: str) -> Tuple[RelationalState, bool]:
    """Return (state, recognised). Unknown values resolve to neutral."""
    try:
        return RelationalState(value), True
    except ValueError:
        return RelationalState.NEUTRAL, False


def derive_overall_label(final_score: int, distribution: BandDistribution) -> OverallLabel:
    if distribution.total == 0:
        return OverallLabel.MIXED

    others_than_positive = distribution.total - distribution.positive
    others_than_negative = distribution.total - distribution.negative

    if final_score >= POSITIVE_THRESHOLD and distribution.positive > others_than_positive:
        return OverallLabel.POSITIVE
    if final_score <= NEGATIVE_THRESHOLD and distribution.negative > others_than_negative:
        return OverallLabel.NEGATIVE
    return OverallLabel.MIXED


class PenaltyClassifier:
    """Penalize the aggregated score and classify the assessment."""

    def classify(
        self,
        aggregation: AggregationResult,
        relational_state: str,
        dimensions: Sequence[Mapping[str, Any]],
    ) -> ClassificationResult:
        state, recognised = resolve_relational_state(relational_state)
        penalty = RELATIONAL_PENALTIES[state]

        pre_penalty = aggregation.weighted_mean
        # rounded once, from the unquantized mean
        final_score = round_half_up(clamp(aggregation.unrounded_mean - Decimal(penalty)))

        distribution = band_distribution(d["score"] for d in dimensions)
        label = derive_overall_label(final_score, distribution)

        notes: List[str] = [
            f"Base score before relational-state penalty: {pre_penalty:.1f}",
            f"Penalty applied: -{penalty} (relational state: {state.value})",
            f"Final score after penalty: {final_score}",
            f"Domain: {aggregation.domain}",
        ]
        if aggregation.priority_dimensions:
            notes.append(
                "Priority dimensions for domain: "
                + ", ".join(aggregation.priority_dimensions)
            )
        else:
            notes.append("Priority dimensions for domain: none")
        notes.append(
            f"Band distribution: {distribution.positive} positive, "
            f"{distribution.negative} negative, {distribution.neutral} neutral"
        )
        if not recognised:
            notes.append(
                f"Warning: unknown relational state '{relational_state}', "
                f"neutral penalty tier used"
            )
        if not aggregation.domain_known:
            notes.append(
                f"Warning: unknown domain '{aggregation.domain}', "
                f"no priority weighting applied"
            )

        if not recognised or not aggregation.domain_known:
            logger.warning(
                "scoring_fallback_applied",
                relational_state=relational_state,
                state_recognised=recognised,
                domain=aggregation.domain,
                domain_known=aggregation.domain_known,
            )

        return ClassificationResult(
            final_score=final_score,
            pre_penalty_score=pre_penalty,
            penalty=penalty,
            relational_state=state,
            overall_label=label,
            distribution=distribution,
            notes=tuple(notes),
        )
