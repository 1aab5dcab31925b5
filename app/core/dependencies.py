"""
Dependencies - Authority Scoring Engine
app/core/dependencies.py

FastAPI dependency injection for the scoring engine.
"""

from functools import lru_cache

from app.config import get_settings
from app.scoring.authority_calculator import AuthorityScoreCalculator
from app.scoring.compliance_penalty import CompliancePenaltyCalculator
from app.scoring.scoring_config import (
    ScoringConfig,
    default_scoring_config,
    load_scoring_config,
)
from app.services.scoring_service import ScoringService


@lru_cache()
def get_scoring_config() -> ScoringConfig:
    """Load the static scoring config once (file if configured, else built-in)."""
    path = get_settings().SCORING_CONFIG_PATH
    if path:
        return load_scoring_config(path)
    return default_scoring_config()


@lru_cache()
def get_authority_calculator() -> AuthorityScoreCalculator:
    """Get cached AuthorityScoreCalculator instance."""
    return AuthorityScoreCalculator(get_scoring_config())


@lru_cache()
def get_scoring_service() -> ScoringService:
    """Get cached ScoringService instance."""
    settings = get_settings()
    return ScoringService(
        calculator=get_authority_calculator(),
        compliance_calculator=CompliancePenaltyCalculator(
            max_penalty=settings.COMPLIANCE_MAX_PENALTY,
            failure_threshold=settings.COMPLIANCE_FAILURE_THRESHOLD,
            min_tracked_days=settings.COMPLIANCE_MIN_TRACKED_DAYS,
        ),
    )
