"""Map provider responses onto the uniform result records."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import NoImageGeneratedError, UpstreamFormatError
from app.services.confidence import clamp_confidence
from app.services.json_extraction import extract_json_object
from app.services.types import PanelGenerationResult, ShotSuggestion, ShotSuggestionsResult

logger = logging.getLogger(__name__)


def _first_image_entry(raw: Mapping[str, Any]) -> Mapping[str, Any] | None:
    data = raw.get("data")
    if not isinstance(data, list) or not data:
        return None
    first = data[0]
    return first if isinstance(first, Mapping) else None


def normalize_image_response(
    raw: Mapping[str, Any],
    prompt: str,
    confidence: float,
) -> PanelGenerationResult:
    entry = _first_image_entry(raw)
    image_url = entry.get("url") if entry else None
    if not isinstance(image_url, str) or not image_url.strip():
        raise NoImageGeneratedError()

    seed = entry.get("seed")
    return PanelGenerationResult(
        image_url=image_url,
        confidence=clamp_confidence(confidence),
        prompt_used=prompt,
        seed=seed if isinstance(seed, int) and not isinstance(seed, bool) else None,
    )


def _as_confidence(value: object) -> float | None:
    # Zero and negatives count as "not supplied".
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value <= 0:
        return None
    return clamp_confidence(value)


def _normalize_suggestion(item: Mapping[str, Any], position: int, overall: float) -> ShotSuggestion | None:
    data = dict(item)
    if data.get("shot_number") is None and data.get("shotNumber") is None:
        data["shot_number"] = position
    per_shot = _as_confidence(data.pop("confidence", None))
    data["confidence"] = per_shot if per_shot is not None else overall
    try:
        return ShotSuggestion.model_validate(data)
    except PydanticValidationError as exc:
        logger.warning("suggestion_skipped position=%s errors=%s", position, exc.error_count())
        return None


def normalize_suggestions(text: str | None, default_confidence: float) -> ShotSuggestionsResult:
    """Normalize a text-model answer into shot suggestions.

    A payload without ``suggestions`` is still a success with zero shots;
    callers decide whether that is acceptable.
    """
    if not text or not text.strip():
        raise UpstreamFormatError("No response from AI service")

    payload = extract_json_object(text)

    confidence = _as_confidence(payload.get("overall_confidence"))
    if confidence is None:
        confidence = clamp_confidence(default_confidence)

    raw_suggestions = payload.get("suggestions") or []
    if not isinstance(raw_suggestions, list):
        logger.warning("suggestions_not_a_list type=%s", type(raw_suggestions).__name__)
        raw_suggestions = []

    suggestions: list[ShotSuggestion] = []
    for position, item in enumerate(raw_suggestions, start=1):
        if not isinstance(item, Mapping):
            continue
        suggestion = _normalize_suggestion(item, position, confidence)
        if suggestion is not None:
            suggestions.append(suggestion)

    reasoning = payload.get("reasoning")
    return ShotSuggestionsResult(
        suggestions=suggestions,
        confidence=confidence,
        reasoning=reasoning if isinstance(reasoning, str) else None,
    )
