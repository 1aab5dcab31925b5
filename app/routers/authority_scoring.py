"""
routers/authority_scoring.py — Authority Scoring Endpoints

Endpoints:
  POST /api/v1/authority/score       — Score one model assessment (text or parsed document)
  POST /api/v1/authority/normalize   — Normalize a document without scoring it
  POST /api/v1/authority/profile     — Cumulative profile and trend over past scan scores
  GET  /api/v1/authority/domains     — List configured domain profiles (optionally by modality)

A scoring failure is reported as status="degraded" with HTTP 200 so the
report UI always has something to render.
"""

from datetime import datetime, timezone
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.exceptions import HTTPException

from app.config import get_settings
from app.core.dependencies import get_scoring_config, get_scoring_service
from app.core.exceptions import InvalidAssessmentError
from app.models.assessment import (
    CompositeScoreResponse,
    DomainProfileResponse,
    ErrorResponse,
    NormalizeRequest,
    NormalizeResponse,
    ProfileRequest,
    ScoreProfileResponse,
    ScoreRequest,
    ScoreResponse,
    ScoreTrendResponse,
)
from app.models.enumerations import Modality
from app.scoring.authority_calculator import CompositeScore, score_severity, summarize_score
from app.scoring.compliance_penalty import MetricCompliance
from app.scoring.score_profile import ScanScore
from app.scoring.scoring_config import ScoringConfig
from app.services.scoring_service import ScoringService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/authority", tags=["Authority Scoring"])


#  Exception Helpers


def raise_error(status_code: int, error_code: str, message: str):
    raise HTTPException(
        status_code=status_code,
        detail=ErrorResponse(
            error_code=error_code,
            message=message,
            timestamp=datetime.now(timezone.utc),
        ).model_dump(mode="json"),
    )


def _to_response(score: CompositeScore) -> CompositeScoreResponse:
    return CompositeScoreResponse(
        **score.to_dict(),
        summary=summarize_score(score),
        severity=score_severity(score.final_score),
    )


#  Endpoints


@router.post(
    "/score",
    response_model=ScoreResponse,
    summary="Score one authority assessment",
)
async def score_assessment(
    request: ScoreRequest,
    service: ScoringService = Depends(get_scoring_service),
):
    if request.raw_text is not None:
        limit = get_settings().MAX_RAW_TEXT_CHARS
        if len(request.raw_text) > limit:
            logger.warning(f"Rejected raw_text of {len(request.raw_text)} chars (limit {limit})")
            raise_error(
                status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                "RAW_TEXT_TOO_LARGE",
                f"raw_text exceeds {limit} characters",
            )
        outcome = service.score_text(request.raw_text)
    else:
        outcome = service.score_document(request.assessment)

    return ScoreResponse(
        status=outcome.status,
        score=_to_response(outcome.score) if outcome.score else None,
        error_code=outcome.error_code,
        message=outcome.message,
        rejection_reason=outcome.rejection_reason,
        scored_at=datetime.now(timezone.utc),
    )


@router.post(
    "/profile",
    response_model=ScoreProfileResponse,
    summary="Cumulative profile over past scan scores",
)
async def score_profile(
    request: ProfileRequest,
    service: ScoringService = Depends(get_scoring_service),
):
    scans = [ScanScore(final_score=s.final_score, scanned_at=s.scanned_at) for s in request.scans]
    metrics = [
        MetricCompliance(
            metric_slug=m.metric_slug,
            tracked_days=m.tracked_days,
            completed_days=m.completed_days,
            weight=m.weight,
        )
        for m in request.compliance_metrics
    ]

    profile, trend = service.build_profile(scans, metrics)
    return ScoreProfileResponse(
        **profile.to_dict(),
        trend=ScoreTrendResponse(**trend.to_dict()) if trend else None,
    )


@router.post(
    "/normalize",
    response_model=NormalizeResponse,
    summary="Normalize a model assessment without scoring",
)
async def normalize_assessment_document(
    request: NormalizeRequest,
    service: ScoringService = Depends(get_scoring_service),
):
    try:
        normalized, was_normalized = service.normalize(request.assessment)
    except InvalidAssessmentError as e:
        logger.info(f"Normalize rejected non-mapping document: {e.received_type}")
        raise_error(status.HTTP_422_UNPROCESSABLE_ENTITY, e.error_code.upper(), str(e))
    return NormalizeResponse(assessment=normalized, was_normalized=was_normalized)


@router.get(
    "/domains",
    response_model=list[DomainProfileResponse],
    summary="List configured domain profiles",
)
async def list_domains(
    modality: Optional[Modality] = Query(default=None, description="Only domains for this modality"),
    config: ScoringConfig = Depends(get_scoring_config),
):
    domains = config.domains_for(modality) if modality else config.domains
    return [
        DomainProfileResponse(
            id=d.id,
            modality=d.modality,
            description=d.description,
            priority_dimensions=list(d.priority_dimensions),
        )
        for d in domains
    ]
