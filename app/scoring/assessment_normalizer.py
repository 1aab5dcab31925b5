"""
Raw Assessment Normalizer
app/scoring/assessment_normalizer.py

Repairs the structured assessment produced by the generative model so every
downstream stage can rely on its shape.

Guarantees after normalize_assessment():
  - every list field exists (possibly empty), including the nested
    protocolSteps inside every top shift
  - every dimension record has dimensionId, numeric score, band and notes
  - modality / domain / overallLabel / relationalState are non-empty strings

Normalization is idempotent and never mutates its input. Only a non-mapping
input is rejected (InvalidAssessmentError); everything else is defaulted.
"""

from collections.abc import Mapping
from typing import Any, Dict, List

from app.core.exceptions import InvalidAssessmentError
from app.models.enumerations import Dimension, Modality, OverallLabel, RelationalState
from app.scoring.bands import score_to_band
from app.scoring.utils import coerce_number

NORMALIZED_LIST_FIELDS = (
    "dimensions",
    "diagnostics.primaryPatterns",
    "diagnostics.supportingEvidence",
    "corrections.topShifts",
    "corrections.topShifts[].protocolSteps",
    "corrections.sampleRewrites",
)

SCALAR_DEFAULTS: Dict[str, str] = {
    "modality": Modality.TEXT.value,
    "domain": "generic",
    "overallLabel": OverallLabel.MIXED.value,
    "relationalState": RelationalState.NEUTRAL.value,
}

UNKNOWN_DIMENSION_ID = "unknown"
MALFORMED_SHIFT_TEXT = "Malformed shift data"


def _as_list(value: Any) -> List[Any]:
    return list(value) if isinstance(value, list) else []


def _as_mapping(value: Any) -> Mapping:
    return value if isinstance(value, Mapping) else {}


def _scalar(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return default


def _normalize_dimension(record: Mapping) -> Dict[str, Any]:
    score = coerce_number(record.get("score"))
    if score is None:
        score = 0

    notes = record.get("notes")
    if not isinstance(notes, str):
        notes = "" if notes is None else str(notes)

    dimension_id = record.get("dimensionId")
    if isinstance(dimension_id, (int, float)) and not isinstance(dimension_id, bool):
        dimension_id = str(dimension_id)
    elif not isinstance(dimension_id, str) or not dimension_id:
        dimension_id = UNKNOWN_DIMENSION_ID

    return {
        **record,
        "dimensionId": dimension_id,
        "score": score,
        "band": score_to_band(score).value,
        "notes": notes,
    }


def _normalize_shift(shift: Any, default_dimension_id: str) -> Dict[str, Any]:
    if not isinstance(shift, Mapping):
        return {
            "dimensionId": default_dimension_id,
            "shift": MALFORMED_SHIFT_TEXT,
            "protocolSteps": [],
        }
    return {**shift, "protocolSteps": _as_list(shift.get("protocolSteps"))}


def normalize_assessment(
    raw: Any,
    default_dimension_id: str = Dimension.ASSUMPTIVE_STATE.value,
) -> Dict[str, Any]:
    """
    Normalize a raw assessment parsed from model output.

    Args:
        raw: Parsed model document (may be partial or malformed).
        default_dimension_id: Dimension attached to unrecoverable shift entries.

    Returns:
        A new dict satisfying is_normalized_assessment().

    Raises:
        InvalidAssessmentError: raw is not a mapping.
    """
    if not isinstance(raw, Mapping):
        raise InvalidAssessmentError(type(raw).__name__)

    dimensions = [
        _normalize_dimension(item)
        for item in _as_list(raw.get("dimensions"))
        if isinstance(item, Mapping)
    ]

    diagnostics = _as_mapping(raw.get("diagnostics"))
    corrections = _as_mapping(raw.get("corrections"))

    normalized: Dict[str, Any] = {
        key: _scalar(raw.get(key), default) for key, default in SCALAR_DEFAULTS.items()
    }
    normalized.update(
        {
            "dimensions": dimensions,
            "diagnostics": {
                "primaryPatterns": _as_list(diagnostics.get("primaryPatterns")),
                "supportingEvidence": _as_list(diagnostics.get("supportingEvidence")),
            },
            "corrections": {
                "topShifts": [
                    _normalize_shift(shift, default_dimension_id)
                    for shift in _as_list(corrections.get("topShifts"))
                ],
                "sampleRewrites": _as_list(corrections.get("sampleRewrites")),
            },
        }
    )
    return normalized


def is_normalized_assessment(value: Any) -> bool:
    """True if value already satisfies every structural guarantee above."""
    if not isinstance(value, Mapping):
        return False

    for key in SCALAR_DEFAULTS:
        scalar = value.get(key)
        if not isinstance(scalar, str) or not scalar.strip():
            return False

    dimensions = value.get("dimensions")
    if not isinstance(dimensions, list):
        return False
    for record in dimensions:
        if not isinstance(record, Mapping):
            return False
        if not isinstance(record.get("dimensionId"), str):
            return False
        if coerce_number(record.get("score")) is None or isinstance(record.get("score"), str):
            return False
        if not isinstance(record.get("band"), str) or not isinstance(record.get("notes"), str):
            return False

    diagnostics = value.get("diagnostics")
    if not isinstance(diagnostics, Mapping):
        return False
    if not isinstance(diagnostics.get("primaryPatterns"), list):
        return False
    if not isinstance(diagnostics.get("supportingEvidence"), list):
        return False

    corrections = value.get("corrections")
    if not isinstance(corrections, Mapping):
        return False
    if not isinstance(corrections.get("topShifts"), list):
        return False
    if not isinstance(corrections.get("sampleRewrites"), list):
        return False
    for shift in corrections["topShifts"]:
        if not isinstance(shift, Mapping) or not isinstance(shift.get("protocolSteps"), list):
            return False

    return True
