"""
scoring/authority_calculator.py

Computes the 0-100 authority composite score from a model assessment.

Pipeline:
    normalize_assessment → normalize_axis_score (per dimension)
        → DomainWeightingAggregator → PenaltyClassifier → CompositeScore

Every intermediate value is returned on the CompositeScore so report builders
can render the breakdown without re-deriving anything.
"""

import copy
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

import structlog

from app.models.enumerations import OverallLabel, RelationalState
from app.scoring.assessment_normalizer import normalize_assessment
from app.scoring.domain_weighting import DomainWeightingAggregator, WeightedDimensionScore
from app.scoring.penalty_classifier import PenaltyClassifier
from app.scoring.scoring_config import ScoringConfig, default_scoring_config

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CompositeScore:
    """Output of AuthorityScoreCalculator.calculate()."""
    final_score: int                                       # [0, 100]
    overall_label: OverallLabel
    relational_state: RelationalState                      # state the penalty used
    domain: str
    modality: str
    dimension_scores: Tuple[Dict[str, Any], ...]           # normalized records, scores untouched
    weighted_scores: Tuple[WeightedDimensionScore, ...]
    pre_penalty_score: Decimal                             # weighted mean, 0.0001
    penalty: int
    notes: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "finalScore": self.final_score,
            "overallLabel": self.overall_label.value,
            "relationalState": self.relational_state.value,
            "domain": self.domain,
            "modality": self.modality,
            "dimensionScores": [dict(d) for d in self.dimension_scores],
            "weightedScores": [w.to_dict() for w in self.weighted_scores],
            "prePenaltyScore": float(self.pre_penalty_score),
            "penalty": self.penalty,
            "notes": list(self.notes),
        }


class AuthorityScoreCalculator:
    """Calculate the authority composite score."""

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or default_scoring_config()
        self.aggregator = DomainWeightingAggregator(self.config)
        self.classifier = PenaltyClassifier()

    def calculate(self, assessment: Any) -> CompositeScore:
        """
        Score one assessment.

        Args:
            assessment: Parsed model document. Normalized here; already
                        normalized input passes through unchanged.

        Returns:
            CompositeScore with final_score and full breakdown.

        Raises:
            InvalidAssessmentError: assessment is not a mapping.
            AggregationPreconditionError: assessment has no dimensions.
        """
        normalized = normalize_assessment(
            assessment, default_dimension_id=self.config.default_dimension_id
        )
        dimensions = normalized["dimensions"]
        domain = normalized["domain"]

        aggregation = self.aggregator.aggregate(domain, dimensions)
        classification = self.classifier.classify(
            aggregation, normalized["relationalState"], dimensions
        )

        logger.info(
            "authority_score_calculated",
            domain=domain,
            modality=normalized["modality"],
            relational_state=classification.relational_state.value,
            pre_penalty_score=float(classification.pre_penalty_score),
            penalty=classification.penalty,
            final_score=classification.final_score,
            overall_label=classification.overall_label.value,
        )

        return CompositeScore(
            final_score=classification.final_score,
            overall_label=classification.overall_label,
            relational_state=classification.relational_state,
            domain=domain,
            modality=normalized["modality"],
            dimension_scores=tuple(copy.deepcopy(d) for d in dimensions),
            weighted_scores=aggregation.weighted_scores,
            pre_penalty_score=classification.pre_penalty_score,
            penalty=classification.penalty,
            notes=classification.notes,
        )


# ---------------------------------------------------------------------------
# Report helpers
# ---------------------------------------------------------------------------

def summarize_score(score: CompositeScore) -> str:
    """One-line summary, e.g. '72/100 • Positive • win-win'."""
    label = score.overall_label.value.capitalize()
    state = score.relational_state.value.replace("_", "-")
    return f"{score.final_score}/100 • {label} • {state}"


def score_severity(final_score: int) -> str:
    if final_score >= 80:
        return "excellent"
    if final_score >= 65:
        return "good"
    if final_score >= 45:
        return "neutral"
    if final_score >= 25:
        return "warning"
    return "critical"


def weakest_dimensions(score: CompositeScore, n: int = 3) -> List[Dict[str, Any]]:
    return sorted(score.dimension_scores, key=lambda d: d["score"])[:n]


def strongest_dimensions(score: CompositeScore, n: int = 3) -> List[Dict[str, Any]]:
    return sorted(score.dimension_scores, key=lambda d: d["score"], reverse=True)[:n]
