"""
Services module for the Authority Scoring Engine.
"""

from app.services.assessment_parser import AssessmentParser
from app.services.scoring_service import ScoringOutcome, ScoringService

__all__ = [
    "AssessmentParser",
    "ScoringOutcome",
    "ScoringService",
]
