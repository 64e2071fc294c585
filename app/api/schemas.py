from typing import Generic, TypeVar

from pydantic import BaseModel

from app.services.types import CamelModel, PreviousShot

T = TypeVar("T")


class DataEnvelope(BaseModel, Generic[T]):
    data: T


class ErrorBody(BaseModel):
    message: str
    code: str


class ErrorEnvelope(BaseModel):
    error: ErrorBody


# Required fields are typed optional here so a missing value is reported as
# a VALIDATION_ERROR with the field name rather than a generic schema error.


class SuggestShotsRequest(CamelModel):
    scene_id: str | None = None
    scene_text: str | None = None
    previous_shots: list[PreviousShot] | None = None
    style: str | None = None
    model_id: str | None = None


class GeneratePanelRequest(CamelModel):
    shot_id: str | None = None
    shot_description: str | None = None
    style: str | None = None
    character_references: list[str] | None = None
    environment_references: list[str] | None = None
    shot_type: str | None = None
    camera_angle: str | None = None
    model_id: str | None = None
    director_notes: str | None = None
    visual_style: str | None = None
    mood: str | None = None
    aspect_ratio: str | None = None


class RefinePanelRequest(CamelModel):
    panel_id: str | None = None
    refinement_prompt: str | None = None
    previous_panel_url: str | None = None
    style_reference_id: str | None = None
    model_id: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    service: str = "ai-service"


class ModelRouteRead(CamelModel):
    family: str
    image_model: str
    image_quality: str
    text_backend: str | None = None
    text_model: str | None = None
    supported: bool
