"""Value objects flowing through the prompt, routing and normalization layers.

Wire format is camelCase; snake_case keys are accepted as well because the
shot-suggestion prompt asks models to answer in snake_case.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _number_to_str(value: object) -> object:
    # Models often answer "duration": 4 instead of "4s".
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class ShotSuggestion(CamelModel):
    shot_number: int
    shot_type: str = ""
    camera_angle: str = ""
    camera_movement: str | None = None
    description: str = ""
    duration: str | None = None
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)

    @field_validator("shot_type", "camera_angle", "description", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value

    _stringify = field_validator("camera_movement", "duration", mode="before")(_number_to_str)


class PreviousShot(CamelModel):
    """A shot already on the board, echoed back for continuity. Every field is optional."""

    shot_number: int | None = None
    shot_type: str | None = None
    camera_angle: str | None = None
    camera_movement: str | None = None
    description: str | None = None
    duration: str | None = None

    _stringify = field_validator("camera_movement", "duration", mode="before")(_number_to_str)


class ShotSuggestionsResult(CamelModel):
    suggestions: list[ShotSuggestion] = Field(default_factory=list)
    confidence: float = Field(ge=0.0, le=1.0)
    reasoning: str | None = None


class PanelGenerationResult(CamelModel):
    image_url: str = Field(min_length=1)
    confidence: float = Field(ge=0.0, le=1.0)
    prompt_used: str
    seed: int | None = None


class ShotDescriptionInput(CamelModel):
    """Everything the image prompt is built from. Immutable for one request."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    shot_description: str
    style: str | None = None
    character_references: tuple[str, ...] = ()
    environment_references: tuple[str, ...] = ()
    shot_type: str | None = None
    camera_angle: str | None = None
    director_notes: str | None = None
    visual_style: str | None = None
    mood: str | None = None
    aspect_ratio: str | None = None


class RefinementInput(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    refinement_prompt: str
    previous_panel_url: str
    style_reference_id: str | None = None


class ShotSuggestionInput(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    scene_text: str
    previous_shots: tuple[PreviousShot, ...] = ()
    style: str | None = None
