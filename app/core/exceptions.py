"""
Custom Exceptions - Authority Scoring Engine
app/core/exceptions.py

Exception classes for the scoring pipeline and its calling layer.
"""

from typing import Optional


class ScoringException(Exception):
    """Base exception for scoring operations."""

    error_code = "scoring_error"

    pass


class InvalidAssessmentError(ScoringException):
    """The supposed assessment is not a mapping at all."""

    error_code = "invalid_assessment"

    def __init__(self, received_type: str):
        self.received_type = received_type
        super().__init__(f"Assessment must be a mapping, got {received_type}")


class AggregationPreconditionError(ScoringException):
    """Aggregation attempted over an empty dimension set."""

    error_code = "empty_dimension_set"

    def __init__(self, domain: str, message: str = "No scoreable dimensions in assessment"):
        self.domain = domain
        self.message = message
        super().__init__(f"{message} (domain={domain})")


class ScoringConfigurationError(ScoringException):
    """Static dimension/domain configuration is inconsistent."""

    error_code = "invalid_configuration"

    def __init__(self, message: str = "Scoring configuration is invalid"):
        self.message = message
        super().__init__(message)


class AssessmentParseError(ScoringException):
    """Model output contained no parseable JSON object."""

    error_code = "unparseable_assessment"

    def __init__(self, excerpt: str = "", message: Optional[str] = None):
        self.excerpt = excerpt
        super().__init__(message or f"Failed to parse JSON from response: {excerpt}")


class AssessmentRejectedError(ScoringException):
    """The model declined to assess the submitted content."""

    error_code = "assessment_rejected"

    def __init__(self, rejection_reason: str):
        self.rejection_reason = rejection_reason
        super().__init__(f"Assessment rejected: {self.rejection_reason}")
