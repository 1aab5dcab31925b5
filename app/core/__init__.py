"""
Core Package - Authority Scoring Engine
app/core/__init__.py

Core infrastructure: exceptions. Dependency providers are in
app.core.dependencies (not re-exported; they import app.scoring).
"""

from app.core.exceptions import (
    AggregationPreconditionError,
    AssessmentParseError,
    AssessmentRejectedError,
    InvalidAssessmentError,
    ScoringConfigurationError,
    ScoringException,
)

__all__ = [
    "AggregationPreconditionError",
    "AssessmentParseError",
    "AssessmentRejectedError",
    "InvalidAssessmentError",
    "ScoringConfigurationError",
    "ScoringException",
]
