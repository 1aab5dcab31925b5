# tests/conftest.py

"""
Pytest Fixtures - Shared assessments, configurations and clients for all tests

DOMAIN REFERENCE (built-in configuration):
- generic:       assumptive_state, buyer_seller_position, win_win_integrity
- sales_email:   buyer_seller_position, internal_sale, win_win_integrity, persuasion_style
- profile_photo: assumptive_state, pedestalization, field_strength, buyer_seller_position
"""

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models.enumerations import Dimension
from app.scoring.authority_calculator import AuthorityScoreCalculator
from app.scoring.scoring_config import (
    DimensionDefinition,
    DomainProfile,
    ScoringConfig,
    default_scoring_config,
)

ALL_DIMENSION_IDS = [d.value for d in Dimension]


def make_dimensions(scores):
    """Build dimension records from a {dimension_id: score} mapping."""
    return [
        {"dimensionId": dim_id, "score": score, "notes": f"{dim_id} note"}
        for dim_id, score in scores.items()
    ]


def uniform_assessment(score, domain="generic", relational_state="win_win"):
    return {
        "modality": "text",
        "domain": domain,
        "overallLabel": "mixed",
        "relationalState": relational_state,
        "dimensions": make_dimensions({d: score for d in ALL_DIMENSION_IDS}),
    }


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture(scope="module")
def client():
    """Create a TestClient for FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# CONFIGURATION FIXTURES
# =============================================================================

@pytest.fixture
def default_config():
    return default_scoring_config()


@pytest.fixture
def plain_config():
    """Built-in dimensions plus a domain with no priority dimensions."""
    base = default_scoring_config()
    return ScoringConfig(
        dimensions=base.dimensions,
        domains=base.domains + (DomainProfile(id="plain", description="No priorities"),),
    )


@pytest.fixture
def small_config():
    """Three-dimension configuration for swapping in alternate dimension sets."""
    return ScoringConfig(
        dimensions=(
            DimensionDefinition(id="clarity", label="Clarity"),
            DimensionDefinition(id="confidence", label="Confidence"),
            DimensionDefinition(id="warmth", label="Warmth"),
        ),
        domains=(
            DomainProfile(id="pitch", priority_dimensions=("confidence",)),
        ),
    )


@pytest.fixture
def calculator():
    return AuthorityScoreCalculator()


# =============================================================================
# ASSESSMENT FIXTURES
# =============================================================================

@pytest.fixture
def full_assessment():
    """A complete, well-formed sales email assessment."""
    return {
        "modality": "text",
        "domain": "sales_email",
        "overallLabel": "positive",
        "relationalState": "win_win",
        "dimensions": make_dimensions({
            "assumptive_state": 2,
            "buyer_seller_position": 3,
            "identity_vs_tactic": 1,
            "internal_sale": 2,
            "win_win_integrity": 3,
            "persuasion_style": 2,
            "pedestalization": 1,
            "self_trust_vs_permission": 2,
            "field_strength": 2,
        }),
        "diagnostics": {
            "primaryPatterns": ["buyer posture", "clear terms"],
            "supportingEvidence": ["'We work with a few teams each quarter.'"],
        },
        "corrections": {
            "topShifts": [
                {
                    "dimensionId": "pedestalization",
                    "shift": "Drop the opening compliment",
                    "protocolSteps": ["Lead with the offer", "Cut superlatives"],
                }
            ],
            "sampleRewrites": [
                {"purpose": "opening line", "rewrite": "Here is what we do."}
            ],
        },
    }


@pytest.fixture
def sparse_assessment():
    """Model output with corrections missing and null diagnostics lists."""
    return {
        "modality": "text",
        "domain": "generic",
        "relationalState": "neutral",
        "dimensions": make_dimensions({d: 0 for d in ALL_DIMENSION_IDS}),
        "diagnostics": {"primaryPatterns": None},
    }
