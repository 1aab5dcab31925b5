from pydantic import BaseModel, Field, model_validator
from datetime import datetime
from typing import Any, Dict, List, Optional

from app.models.enumerations import Modality, OverallLabel, RelationalState, TrendDirection


class ComplianceMetricInput(BaseModel):
    """
    Tracking compliance for one metric over the lookback window.
    """

    metric_slug: str = Field(..., min_length=1, max_length=100)
    tracked_days: int = Field(..., ge=0, le=366)
    completed_days: int = Field(..., ge=0, le=366)
    weight: float = Field(default=1.0, ge=0)

    @model_validator(mode="after")
    def validate_completed_within_tracked(self):
        """completed_days can never exceed tracked_days."""
        if self.completed_days > self.tracked_days:
            raise ValueError("completed_days must be <= tracked_days")
        return self


class ScoreRequest(BaseModel):
    """
    Request body for scoring one assessment.

    Exactly one of raw_text (model response as received) or assessment
    (already-parsed document) must be provided.
    """

    raw_text: Optional[str] = Field(
        default=None,
        description="Generative model response containing one JSON document"
    )

    assessment: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Already-parsed assessment document"
    )

    @model_validator(mode="after")
    def validate_single_source(self):
        """Ensure exactly one input source is provided."""
        if (self.raw_text is None) == (self.assessment is None):
            raise ValueError("Provide exactly one of raw_text or assessment")
        return self


class ScanScoreInput(BaseModel):
    """
    Final score of one past scan.
    """

    final_score: int = Field(..., ge=0, le=100)
    scanned_at: datetime


class ProfileRequest(BaseModel):
    """
    Request body for the cumulative profile of one subject.
    """

    scans: List[ScanScoreInput] = Field(
        default_factory=list,
        description="Past scan scores in any order; empty gives the neutral profile"
    )

    compliance_metrics: List[ComplianceMetricInput] = Field(
        default_factory=list,
        description="Optional tracking data; applies the compliance penalty to the profile"
    )


class ScoreTrendResponse(BaseModel):
    direction: TrendDirection
    changeAmount: int = Field(..., ge=0, le=100)
    changePercent: int = Field(..., ge=0)


class ScoreProfileResponse(BaseModel):
    """
    Cumulative profile. baseScore is the scan average; currentScore has the
    tracking penalty subtracted.
    """

    currentScore: int = Field(..., ge=0, le=100)
    baseScore: int = Field(..., ge=0, le=100)
    scansCount: int = Field(..., ge=0)
    lastScanAt: Optional[datetime] = None
    trackingPenalty: Optional[float] = None
    notes: List[str]
    trend: Optional[ScoreTrendResponse] = None


class WeightedScoreResponse(BaseModel):
    dimensionId: str
    normalizedScore: float = Field(..., ge=0, le=100)
    weight: int = Field(..., ge=1, le=2)


class CompositeScoreResponse(BaseModel):
    """
    Composite score with its full derivation.
    """

    finalScore: int = Field(..., ge=0, le=100)
    overallLabel: OverallLabel
    relationalState: RelationalState
    domain: str
    modality: str
    dimensionScores: List[Dict[str, Any]]
    weightedScores: List[WeightedScoreResponse]
    prePenaltyScore: float
    penalty: int
    notes: List[str]
    summary: str
    severity: str


class ScoreResponse(BaseModel):
    """
    Scoring outcome. status is "ok" with a score, or "degraded" with the
    reason scoring could not complete.
    """

    status: str
    score: Optional[CompositeScoreResponse] = None
    error_code: Optional[str] = None
    message: Optional[str] = None
    rejection_reason: Optional[str] = None
    scored_at: datetime


class NormalizeRequest(BaseModel):
    assessment: Any = Field(..., description="Document to normalize")


class NormalizeResponse(BaseModel):
    assessment: Dict[str, Any]
    was_normalized: bool = Field(
        ...,
        description="True if the input already satisfied every structural guarantee"
    )


class DomainProfileResponse(BaseModel):
    id: str
    modality: Modality
    description: str
    priority_dimensions: List[str]


class ErrorResponse(BaseModel):
    """
    Standard error response model.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[dict] = Field(default=None, description="Additional error details")
    timestamp: datetime = Field(..., description="Error occurrence timestamp")
