"""Heuristic confidence for generation results.

The score is a proxy for how complete the caller's input was. It is not a
calibrated probability and should not be presented to users as one.
"""

from __future__ import annotations

IMAGE_BASE_CONFIDENCE = 0.85
GEMINI_TEXT_BASE_CONFIDENCE = 0.85
OPENAI_TEXT_BASE_CONFIDENCE = 0.7
REFINEMENT_CONFIDENCE = 0.82

CONFIDENCE_CEILING = 0.98
DESCRIPTION_LENGTH_THRESHOLD = 20
DESCRIPTION_BONUS = 0.05
SHOT_SPEC_BONUS = 0.05


def estimate_confidence(
    description: str | None,
    shot_type: str | None = None,
    camera_angle: str | None = None,
    base: float = IMAGE_BASE_CONFIDENCE,
) -> float:
    confidence = base
    if description and len(description) > DESCRIPTION_LENGTH_THRESHOLD:
        confidence += DESCRIPTION_BONUS
    if shot_type and camera_angle:
        confidence += SHOT_SPEC_BONUS
    return round(min(confidence, CONFIDENCE_CEILING), 4)


def clamp_confidence(value: float) -> float:
    return max(0.0, min(1.0, float(value)))
