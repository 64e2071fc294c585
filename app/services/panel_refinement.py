import logging

from app.core.metrics import observe_confidence
from app.core.request_context import log_context
from app.services.confidence import REFINEMENT_CONFIDENCE
from app.services.model_selector import ModelSelector
from app.services.normalizer import normalize_image_response
from app.services.prompt_builder import build_refinement_prompt
from app.services.provider_router import ProviderRouter
from app.services.types import PanelGenerationResult, RefinementInput

logger = logging.getLogger(__name__)


def refine_panel_image(
    router: ProviderRouter,
    input: RefinementInput,
    selector: ModelSelector,
) -> PanelGenerationResult:
    """Regenerate a panel from refinement guidance.

    The previous panel is referenced only through the prompt text; the
    image itself is never sent to the backend.
    """
    with log_context(operation="refine_panel"):
        prompt = build_refinement_prompt(input)
        route = router.route_image(selector)
        raw = router.dispatch_image(route, prompt)
        result = normalize_image_response(raw, prompt=prompt, confidence=REFINEMENT_CONFIDENCE)

        observe_confidence("refine_panel", result.confidence)
        logger.info(
            "panel_refined model=%s style_reference_id=%s",
            route.model,
            input.style_reference_id,
        )
        return result
