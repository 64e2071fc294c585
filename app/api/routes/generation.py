import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import APIRouter

from app.api.deps import ProviderRouterDep
from app.api.schemas import DataEnvelope, GeneratePanelRequest, RefinePanelRequest, SuggestShotsRequest
from app.core.exceptions import AIServiceError, AppError, ValidationError
from app.services.model_selector import resolve_model_selector
from app.services.panel_generation import generate_panel_image
from app.services.panel_refinement import refine_panel_image
from app.services.provider_router import ProviderRouter
from app.services.shot_suggestions import generate_shot_suggestions
from app.services.types import (
    PanelGenerationResult,
    RefinementInput,
    ShotDescriptionInput,
    ShotSuggestionInput,
    ShotSuggestionsResult,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["generation"])

DEFAULT_REQUEST_STYLE = "live-action"


@contextmanager
def _ai_service_errors(fallback_message: str) -> Iterator[None]:
    """Funnel unexpected failures into the AI_SERVICE_ERROR envelope."""
    try:
        yield
    except AppError:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.exception("ai_service_error")
        raise AIServiceError(str(exc) or fallback_message) from exc


@router.post("/suggest-shots", response_model=DataEnvelope[ShotSuggestionsResult], response_model_exclude_none=True)
def suggest_shots(payload: SuggestShotsRequest, providers: ProviderRouter = ProviderRouterDep):
    if not payload.scene_text:
        raise ValidationError("sceneText is required")

    with _ai_service_errors("Failed to generate shot suggestions"):
        result = generate_shot_suggestions(
            providers,
            ShotSuggestionInput(
                scene_text=payload.scene_text,
                previous_shots=tuple(payload.previous_shots or ()),
                style=payload.style or DEFAULT_REQUEST_STYLE,
            ),
            resolve_model_selector(payload.model_id),
        )
    return DataEnvelope(data=result)


@router.post("/generate-panel", response_model=DataEnvelope[PanelGenerationResult], response_model_exclude_none=True)
def generate_panel(payload: GeneratePanelRequest, providers: ProviderRouter = ProviderRouterDep):
    if not payload.shot_description:
        raise ValidationError("shotDescription is required")

    with _ai_service_errors("Failed to generate panel"):
        result = generate_panel_image(
            providers,
            ShotDescriptionInput(
                shot_description=payload.shot_description,
                style=payload.style or DEFAULT_REQUEST_STYLE,
                character_references=tuple(payload.character_references or ()),
                environment_references=tuple(payload.environment_references or ()),
                shot_type=payload.shot_type,
                camera_angle=payload.camera_angle,
                director_notes=payload.director_notes,
                visual_style=payload.visual_style,
                mood=payload.mood,
                aspect_ratio=payload.aspect_ratio,
            ),
            resolve_model_selector(payload.model_id),
        )
    return DataEnvelope(data=result)


@router.post("/refine-panel", response_model=DataEnvelope[PanelGenerationResult], response_model_exclude_none=True)
def refine_panel(payload: RefinePanelRequest, providers: ProviderRouter = ProviderRouterDep):
    if not payload.refinement_prompt or not payload.previous_panel_url:
        raise ValidationError("refinementPrompt and previousPanelUrl are required")

    with _ai_service_errors("Failed to refine panel"):
        result = refine_panel_image(
            providers,
            RefinementInput(
                refinement_prompt=payload.refinement_prompt,
                previous_panel_url=payload.previous_panel_url,
                style_reference_id=payload.style_reference_id,
            ),
            resolve_model_selector(payload.model_id),
        )
    return DataEnvelope(data=result)
