"""Best-effort JSON recovery from free-form model output.

Two explicit stages:

1. ``slice_json_object`` keeps the text between the first ``{`` and the last
   ``}``, dropping commentary a model prepends or appends.
2. ``parse_json_object`` parses the slice strictly.

This is a heuristic over untrusted text, not a grammar. Failure surfaces as
``MalformedSuggestionPayloadError``.
"""

import json
import logging
from typing import Any

from app.core.exceptions import MalformedSuggestionPayloadError
from app.core.metrics import increment_json_extraction_failure

logger = logging.getLogger(__name__)

_PREVIEW_CHARS = 200


def slice_json_object(text: str) -> str:
    """Slice from the first opening brace to the last closing brace.

    Text without a usable brace pair is returned unchanged so the strict
    parse reports the failure.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        increment_json_extraction_failure("slice")
        return text
    return text[start : end + 1]


def parse_json_object(text: str) -> dict[str, Any]:
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        increment_json_extraction_failure("parse")
        logger.warning("json_parse_failed error=%s preview=%s", exc, text[:_PREVIEW_CHARS])
        raise MalformedSuggestionPayloadError(
            f"Malformed suggestion payload: {exc.msg}",
            preview=text[:_PREVIEW_CHARS],
        ) from exc

    if not isinstance(parsed, dict):
        increment_json_extraction_failure("shape")
        raise MalformedSuggestionPayloadError(
            f"Malformed suggestion payload: expected a JSON object, got {type(parsed).__name__}",
            preview=text[:_PREVIEW_CHARS],
        )
    return parsed


def extract_json_object(text: str) -> dict[str, Any]:
    return parse_json_object(slice_json_object(text))
