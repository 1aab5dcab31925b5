"""
Health Check Router - Authority Scoring Engine
app/routers/health.py

Reports whether the static scoring configuration loads and the engine
produces a score for a canned assessment.
"""
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing import Dict
from datetime import datetime, timezone

from app.config import get_settings
from app.core.dependencies import get_authority_calculator, get_scoring_config
from app.core.exceptions import ScoringException

router = APIRouter(tags=["Health"])



#  Schemas


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    dependencies: Dict[str, str]



#  Dependency Health Checks


def check_scoring_config() -> str:
    """Check the dimension/domain configuration loads."""
    try:
        config = get_scoring_config()
        return f"healthy ({len(config.dimensions)} dimensions, {len(config.domains)} domains)"
    except ScoringException as e:
        return f"unhealthy: {e}"


def check_engine() -> str:
    """Score a canned neutral assessment end to end."""
    try:
        calculator = get_authority_calculator()
        sample = {
            "domain": calculator.config.domains[0].id if calculator.config.domains else "generic",
            "relationalState": "win_win",
            "dimensions": [
                {"dimensionId": dim_id, "score": 0} for dim_id in calculator.config.dimension_ids
            ],
        }
        score = calculator.calculate(sample)
        if score.final_score != 50:
            return f"unhealthy: self-test scored {score.final_score}, expected 50"
        return "healthy"
    except ScoringException as e:
        return f"unhealthy: {e}"



#  Main Health Check Route


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        200: {"description": "Engine healthy"},
        503: {"description": "Configuration or engine unhealthy"},
    },
    summary="Health check",
    description="Check scoring configuration and engine self-test.",
)
async def health_check():
    """Check health of the scoring engine."""
    dependencies = {
        "scoring_config": check_scoring_config(),
        "engine": check_engine(),
    }

    all_healthy = all(v.startswith("healthy") for v in dependencies.values())

    response = HealthResponse(
        status="healthy" if all_healthy else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=get_settings().APP_VERSION,
        dependencies=dependencies,
    )

    if all_healthy:
        return response
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json"),
    )
