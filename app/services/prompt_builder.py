"""Deterministic prompt construction for panel, refinement and shot-list requests.

All builders are pure: the same input always yields the same prompt, and an
absent optional field contributes nothing to the output.
"""

from __future__ import annotations

from app.prompts.loader import get_prompt, render_prompt
from app.services.types import RefinementInput, ShotDescriptionInput, ShotSuggestionInput

PANEL_PREAMBLE = (
    "Production-Grade Storyboard Frame. "
    "Professional film pre-visualization quality. Black & white ink style."
)
PANEL_REQUIREMENTS = (
    "REQUIREMENTS: No text overlays, no speech bubbles. No color (grayscale only). "
    "No detailed UI. Capture specific movement if described."
)
DEFAULT_VISUAL_STYLE = "Noir / High Contrast"
DEFAULT_MOOD = "Neutral"
DEFAULT_SHOT_LIST_STYLE = "Cinematic"
DIRECTOR_OVERRIDE_SUFFIX = "THIS RULE TAKES PRECEDENCE OVER ALL OTHERS."


def _panel_sections(input: ShotDescriptionInput) -> list[str]:
    sections = [PANEL_PREAMBLE]

    # Scene context
    if input.character_references:
        sections.append(f"CHARACTERS: {', '.join(input.character_references)}.")
    if input.environment_references:
        sections.append(f"LOCATION: {', '.join(input.environment_references)}.")

    # Shot specification
    if input.shot_type:
        sections.append(f"SHOT TYPE: {input.shot_type}.")
    if input.camera_angle:
        sections.append(f"CAMERA ANGLE: {input.camera_angle}.")
    sections.append(f"ACTION: {input.shot_description}.")

    # Caller directives
    sections.append(f"VISUAL STYLE: {input.visual_style or input.style or DEFAULT_VISUAL_STYLE}.")
    sections.append(f"MOOD: {input.mood or DEFAULT_MOOD}.")
    if input.aspect_ratio:
        sections.append(f"ASPECT RATIO: {input.aspect_ratio}.")

    # Highest precedence is expressed by position: always the last directive.
    if input.director_notes:
        sections.append(f"DIRECTOR OVERRIDE: {input.director_notes}. {DIRECTOR_OVERRIDE_SUFFIX}")

    sections.append(PANEL_REQUIREMENTS)
    return sections


def build_panel_prompt(input: ShotDescriptionInput) -> str:
    return " ".join(_panel_sections(input))


def build_refinement_prompt(input: RefinementInput) -> str:
    """Text-only refinement guidance.

    The previous panel URL is not forwarded to the image backend; the
    refinement is layered onto a fresh generation.
    """
    return " ".join(
        [
            f"Refine this storyboard panel: {input.refinement_prompt}.",
            "Maintain the same style, composition, and visual consistency as the original panel.",
            "Only change what is specified in the refinement request.",
            "Keep it as a professional storyboard sketch, draft quality.",
        ]
    )


def build_shot_suggestion_prompt(input: ShotSuggestionInput) -> str:
    return render_prompt(
        "prompt_shot_suggestions",
        validate=True,
        scene_text=input.scene_text,
        previous_shots=list(input.previous_shots),
        style=input.style or DEFAULT_SHOT_LIST_STYLE,
    )


def shot_suggestion_system_prompt() -> str:
    return get_prompt("system_prompt_shot_supervisor").strip()
