import logging

from app.core.metrics import observe_confidence
from app.core.request_context import log_context
from app.services.confidence import IMAGE_BASE_CONFIDENCE, estimate_confidence
from app.services.model_selector import ModelSelector
from app.services.normalizer import normalize_image_response
from app.services.prompt_builder import build_panel_prompt
from app.services.provider_router import ProviderRouter
from app.services.types import PanelGenerationResult, ShotDescriptionInput

logger = logging.getLogger(__name__)


def generate_panel_image(
    router: ProviderRouter,
    input: ShotDescriptionInput,
    selector: ModelSelector,
) -> PanelGenerationResult:
    """Generate a storyboard panel for one shot description."""
    with log_context(operation="generate_panel"):
        prompt = build_panel_prompt(input)
        route = router.route_image(selector)
        raw = router.dispatch_image(route, prompt)

        confidence = estimate_confidence(
            input.shot_description,
            shot_type=input.shot_type,
            camera_angle=input.camera_angle,
            base=IMAGE_BASE_CONFIDENCE,
        )
        result = normalize_image_response(raw, prompt=prompt, confidence=confidence)

        observe_confidence("generate_panel", result.confidence)
        logger.info("panel_generated model=%s quality=%s confidence=%s", route.model, route.quality, result.confidence)
        return result
