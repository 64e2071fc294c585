import logging

from app.core.metrics import observe_confidence
from app.core.request_context import log_context
from app.services.model_selector import ModelSelector
from app.services.normalizer import normalize_suggestions
from app.services.prompt_builder import build_shot_suggestion_prompt, shot_suggestion_system_prompt
from app.services.provider_router import ProviderRouter
from app.services.types import ShotSuggestionInput, ShotSuggestionsResult

logger = logging.getLogger(__name__)


def generate_shot_suggestions(
    router: ProviderRouter,
    input: ShotSuggestionInput,
    selector: ModelSelector,
) -> ShotSuggestionsResult:
    """Break a scene into suggested shots with the selected text model.

    Routing happens before the prompt is sent, so an unsupported provider
    fails without any network call.
    """
    with log_context(operation="suggest_shots"):
        route = router.route_text(selector)
        user_prompt = build_shot_suggestion_prompt(input)
        text = router.dispatch_text(route, shot_suggestion_system_prompt(), user_prompt)
        result = normalize_suggestions(text, default_confidence=route.base_confidence)

        observe_confidence("suggest_shots", result.confidence)
        logger.info(
            "shot_suggestions_ready model=%s count=%s confidence=%s",
            route.model,
            len(result.suggestions),
            result.confidence,
        )
        return result
