"""
Assessment Parser
app/services/assessment_parser.py

Turns raw generative-model text into a parsed assessment document.

The model is asked for a single JSON object, but responses sometimes arrive
wrapped in markdown fences or commentary. Parsing tries the whole text first,
then the substring from the first '{' to the last '}'.

A document with "status": "rejected" means the model declined to assess the
content; that is surfaced as AssessmentRejectedError rather than scored. A
rejection without a non-empty rejectionReason is malformed output and raises
AssessmentParseError.
"""

import json
import logging
from typing import Any, Dict

from app.core.exceptions import AssessmentParseError, AssessmentRejectedError

logger = logging.getLogger(__name__)

EXCERPT_CHARS = 200


class AssessmentParser:
    """Locate and parse the assessment document in model output."""

    def parse(self, raw: str) -> Dict[str, Any]:
        """
        Args:
            raw: Model response text.

        Returns:
            The parsed JSON object (not yet normalized).

        Raises:
            AssessmentParseError: no JSON object could be recovered, or a
                rejection carried no reason.
            AssessmentRejectedError: the model rejected the content.
        """
        document = self._parse_json_object(raw)

        if document.get("status") == "rejected":
            reason = document.get("rejectionReason")
            reason = reason.strip() if isinstance(reason, str) else ""
            if not reason:
                logger.warning("Model rejected assessment without a reason")
                raise AssessmentParseError(
                    raw[:EXCERPT_CHARS],
                    "Rejected scans must include a non-empty rejectionReason",
                )
            logger.info(f"Model rejected assessment: {reason}")
            raise AssessmentRejectedError(reason)

        return document

    def _parse_json_object(self, raw: str) -> Dict[str, Any]:
        text = (raw or "").strip()
        if not text:
            raise AssessmentParseError("")

        try:
            obj = json.loads(text)
            if isinstance(obj, dict):
                return obj
        except json.JSONDecodeError:
            pass

        start = text.find("{")
        end = text.rfind("}")
        if start >= 0 and end > start:
            try:
                obj = json.loads(text[start : end + 1])
                if isinstance(obj, dict):
                    return obj
            except json.JSONDecodeError:
                pass

        logger.warning(f"No JSON object found in model response ({len(text)} chars)")
        raise AssessmentParseError(text[:EXCERPT_CHARS])
