"""
Response extraction for grammar check model replies.

The model is asked for a single JSON object but may wrap it in prose or
code fences. Only a missing or unparseable object is fatal; every field
inside a parsed object is reduced to the expected shape independently.
"""

import json
import math
import re
from typing import Any

from models.enums import DetectedLanguage
from models.grammar import MAX_SUGGESTIONS, GrammarCheckResponse, Suggestion
from services.grammar_check.errors import MalformedModelResponse

# First "{" to last "}", across newlines
JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


def find_json_object(raw_text: str) -> dict[str, Any]:
    """Locate and parse the JSON object embedded in a model reply."""
    match = JSON_OBJECT_PATTERN.search(raw_text or "")
    if not match:
        raise MalformedModelResponse("Model response does not contain a JSON object")

    try:
        parsed = json.loads(match.group(0))
    except ValueError as e:
        raise MalformedModelResponse(f"Model response JSON could not be parsed: {e!s}") from e

    if not isinstance(parsed, dict):
        raise MalformedModelResponse("Model response JSON is not an object")
    return parsed


def coerce_text(value: Any) -> str:
    if not value:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def coerce_index(value: Any) -> int:
    if isinstance(value, bool) or value is None:
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    if not math.isfinite(number):
        return 0
    return int(number)


def coerce_suggestion(item: Any) -> Suggestion:
    fields = item if isinstance(item, dict) else {}
    start = max(0, coerce_index(fields.get("startIndex")))
    end = max(start, coerce_index(fields.get("endIndex")))
    return Suggestion(
        original=coerce_text(fields.get("original")),
        suggestion=coerce_text(fields.get("suggestion")),
        explanation=coerce_text(fields.get("explanation")),
        start_index=start,
        end_index=end,
    )


def coerce_language(value: Any, fallback: DetectedLanguage) -> DetectedLanguage:
    try:
        return DetectedLanguage(value)
    except (TypeError, ValueError):
        return fallback


def coerce_processed_text(value: Any, original_text: str) -> str:
    if isinstance(value, str) and value:
        return value
    return original_text


def extract_response(
    raw_text: str,
    original_text: str,
    detected_language: DetectedLanguage,
) -> GrammarCheckResponse:
    """
    Build a GrammarCheckResponse from a raw model reply.

    Args:
        raw_text: Model output expected to contain one JSON object
        original_text: The text that was checked, used when processedText is absent
        detected_language: Heuristic language, used when detectedLanguage is absent

    Returns:
        Response with at most MAX_SUGGESTIONS suggestions, in model order

    Raises:
        MalformedModelResponse: If no JSON object can be located or parsed
    """
    parsed = find_json_object(raw_text)

    raw_suggestions = parsed.get("suggestions")
    if not isinstance(raw_suggestions, list):
        raw_suggestions = []

    return GrammarCheckResponse(
        suggestions=[coerce_suggestion(item) for item in raw_suggestions[:MAX_SUGGESTIONS]],
        detected_language=coerce_language(parsed.get("detectedLanguage"), detected_language),
        processed_text=coerce_processed_text(parsed.get("processedText"), original_text),
    )
