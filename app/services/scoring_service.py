"""
Scoring Service — Authority Scoring Orchestrator
app/services/scoring_service.py

Calling layer around the pure scoring engine for a single request:

  1. Locate and parse the JSON document in the model response
  2. Normalize it (inside AuthorityScoreCalculator)
  3. Compute the CompositeScore
  4. On any fatal scoring error, return a degraded outcome instead of raising

It also rolls past scan scores into the cumulative profile, which is where
the tracking-compliance penalty is applied.

Scoring is never retried with the same input; a retry means asking the model
again, which happens outside this service.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

from app.core.exceptions import AssessmentRejectedError, ScoringException
from app.scoring.assessment_normalizer import is_normalized_assessment, normalize_assessment
from app.scoring.authority_calculator import AuthorityScoreCalculator, CompositeScore
from app.scoring.compliance_penalty import CompliancePenaltyCalculator, MetricCompliance
from app.scoring.score_profile import (
    ScanScore,
    ScoreProfile,
    ScoreTrend,
    compute_score_profile,
    compute_score_trend,
)
from app.services.assessment_parser import AssessmentParser

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_DEGRADED = "degraded"


@dataclass(frozen=True)
class ScoringOutcome:
    """Result of one scoring request: a score, or the reason there is none."""
    status: str
    score: Optional[CompositeScore] = None
    error_code: Optional[str] = None
    message: Optional[str] = None
    rejection_reason: Optional[str] = None

    @property
    def is_degraded(self) -> bool:
        return self.status == STATUS_DEGRADED


class ScoringService:
    """Orchestrates parse → normalize → score with a degraded fallback."""

    def __init__(
        self,
        calculator: Optional[AuthorityScoreCalculator] = None,
        parser: Optional[AssessmentParser] = None,
        compliance_calculator: Optional[CompliancePenaltyCalculator] = None,
    ):
        self.calculator = calculator or AuthorityScoreCalculator()
        self.parser = parser or AssessmentParser()
        self.compliance_calculator = compliance_calculator or CompliancePenaltyCalculator()

    def score_text(self, raw_text: str) -> ScoringOutcome:
        """Score a raw model response."""
        try:
            document = self.parser.parse(raw_text)
        except ScoringException as e:
            return self._degraded(e)
        return self.score_document(document)

    def score_document(self, document: Any) -> ScoringOutcome:
        """Score an already-parsed model document."""
        try:
            score = self.calculator.calculate(document)
        except ScoringException as e:
            return self._degraded(e)

        logger.info(
            f"Scored assessment: domain={score.domain} final={score.final_score} "
            f"label={score.overall_label.value}"
        )
        return ScoringOutcome(status=STATUS_OK, score=score)

    def build_profile(
        self,
        scans: Sequence[ScanScore],
        compliance_metrics: Optional[Sequence[MetricCompliance]] = None,
    ) -> Tuple[ScoreProfile, Optional[ScoreTrend]]:
        """Cumulative profile and latest trend; the tracking penalty applies when metrics are given."""
        compliance = None
        if compliance_metrics:
            compliance = self.compliance_calculator.calculate(compliance_metrics)

        profile = compute_score_profile(scans, compliance)
        trend = compute_score_trend(scans)
        logger.info(
            f"Built profile: scans={profile.scans_count} base={profile.base_score} "
            f"current={profile.current_score}"
        )
        return profile, trend

    def normalize(self, document: Any) -> Tuple[Dict[str, Any], bool]:
        """Normalize a document and report whether it was already normalized."""
        already_valid = is_normalized_assessment(document)
        normalized = normalize_assessment(
            document, default_dimension_id=self.calculator.config.default_dimension_id
        )
        return normalized, already_valid

    def _degraded(self, error: ScoringException) -> ScoringOutcome:
        logger.warning(f"Scoring degraded ({error.error_code}): {error}")
        return ScoringOutcome(
            status=STATUS_DEGRADED,
            error_code=error.error_code,
            message=str(error),
            rejection_reason=(
                error.rejection_reason if isinstance(error, AssessmentRejectedError) else None
            ),
        )
