import logging

from google import genai
from google.genai import types

from app.core.exceptions import UpstreamProviderError
from app.core.metrics import track_provider_call
from app.core.request_context import log_context

logger = logging.getLogger(__name__)

PROVIDER_NAME = "gemini"


class GeminiClient:
    """Text generation through the Gemini API.

    One instance per process, built at startup. A missing API key does not
    prevent startup; calls fail with ``UpstreamProviderError`` instead.
    """

    provider = PROVIDER_NAME

    def __init__(self, api_key: str | None, text_model: str, client: genai.Client | None = None):
        self._text_model = text_model

        if client is not None:
            self._client = client
        elif api_key:
            self._client = genai.Client(api_key=api_key)
        else:
            self._client = None

    @property
    def configured(self) -> bool:
        return self._client is not None

    def _classify_error(self, error_text: str) -> str:
        if "RESOURCE_EXHAUSTED" in error_text or "429" in error_text:
            return "rate_limit"
        if "SAFETY" in error_text.upper() or "blocked" in error_text.lower():
            return "content_filter"
        if "timeout" in error_text.lower() or "deadline" in error_text.lower():
            return "timeout"
        if "unavailable" in error_text.lower() or "503" in error_text:
            return "model_unavailable"
        if "invalid" in error_text.lower() or "400" in error_text:
            return "invalid_request"
        return "unknown"

    def _check_response_safety(self, response: types.GenerateContentResponse, model_name: str) -> None:
        """Raise if the response was blocked by safety filters."""
        candidate = (response.candidates or [None])[0]
        if candidate is None:
            return

        finish_reason = getattr(candidate, "finish_reason", None)
        if finish_reason and "SAFETY" in str(finish_reason).upper():
            blocked_categories = []
            for rating in getattr(candidate, "safety_ratings", None) or []:
                if getattr(rating, "blocked", False):
                    blocked_categories.append(str(getattr(rating, "category", "UNKNOWN")))
            raise UpstreamProviderError(
                f"Content blocked by safety filters: {blocked_categories}",
                provider=PROVIDER_NAME,
                model=model_name,
            )

    def _extract_text_from_response(self, response: types.GenerateContentResponse) -> str:
        candidate = (response.candidates or [None])[0]
        if candidate is None or not candidate.content or not candidate.content.parts:
            return ""

        texts = [part.text for part in candidate.content.parts if part.text]
        return "\n".join(texts).strip()

    def generate_text(self, prompt: str, model: str | None = None) -> str:
        """Generate text for a single user prompt.

        Raises:
            UpstreamProviderError: On missing configuration, transport or API failure.
        """
        model_name = model or self._text_model
        if self._client is None:
            raise UpstreamProviderError(
                "Gemini is not configured. Set GEMINI_API_KEY.",
                provider=PROVIDER_NAME,
                model=model_name,
            )

        with log_context(provider=PROVIDER_NAME):
            try:
                with track_provider_call(PROVIDER_NAME, "generate_text"):
                    response = self._client.models.generate_content(model=model_name, contents=[prompt])
            except Exception as exc:  # noqa: BLE001
                error_type = self._classify_error(str(exc))
                logger.error(
                    "gemini.generate_text failed model=%s type=%s error=%s",
                    model_name,
                    error_type,
                    repr(exc),
                )
                raise UpstreamProviderError(
                    str(exc) or "Gemini request failed",
                    provider=PROVIDER_NAME,
                    model=model_name,
                ) from exc

            self._check_response_safety(response, model_name)
            usage = response.usage_metadata.model_dump() if response.usage_metadata else None
            logger.info("gemini.generate_text ok model=%s usage=%s", model_name, usage)
            return self._extract_text_from_response(response)
