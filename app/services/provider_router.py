"""Map resolved model selectors onto concrete backends and models.

There is no independent Imagen backend yet: Google-family image requests are
served by the high-fidelity variant of the OpenAI image backend, and the
requested aesthetic is carried by the prompt.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from app.core.exceptions import UnsupportedProviderError
from app.services.confidence import GEMINI_TEXT_BASE_CONFIDENCE, OPENAI_TEXT_BASE_CONFIDENCE
from app.services.gemini_client import GeminiClient
from app.services.model_selector import ModelFamily, ModelSelector
from app.services.openai_client import OpenAIClient

logger = logging.getLogger(__name__)

ANTHROPIC_NOT_IMPLEMENTED = "Anthropic Claude integration not yet implemented"


class TextBackend(str, Enum):
    GEMINI = "gemini"
    OPENAI = "openai"


@dataclass(frozen=True)
class ModelCatalog:
    image_model: str = "dall-e-3"
    image_size: str = "1792x1024"
    gemini_text_model: str = "gemini-1.5-flash"
    openai_large_text_model: str = "gpt-4-turbo"
    openai_small_text_model: str = "gpt-3.5-turbo"
    text_temperature: float = 0.7


@dataclass(frozen=True)
class ImageRoute:
    provider: str
    model: str
    size: str
    quality: str
    style: str | None = None


@dataclass(frozen=True)
class TextRoute:
    backend: TextBackend
    model: str
    base_confidence: float


class ProviderRouter:
    """Route and dispatch generation calls.

    Provider clients are injected once at startup and never mutated.
    """

    def __init__(self, openai: OpenAIClient, gemini: GeminiClient, catalog: ModelCatalog | None = None):
        self._openai = openai
        self._gemini = gemini
        self._catalog = catalog or ModelCatalog()

    @property
    def catalog(self) -> ModelCatalog:
        return self._catalog

    def route_image(self, selector: ModelSelector) -> ImageRoute:
        if selector.is_google:
            return ImageRoute(
                provider=self._openai.provider,
                model=self._catalog.image_model,
                size=self._catalog.image_size,
                quality="hd",
                style="natural",
            )
        return ImageRoute(
            provider=self._openai.provider,
            model=self._catalog.image_model,
            size=self._catalog.image_size,
            quality="standard",
        )

    def route_text(self, selector: ModelSelector) -> TextRoute:
        if selector.is_default or selector.matches(ModelFamily.GEMINI, ModelFamily.GOOGLE):
            return TextRoute(TextBackend.GEMINI, self._catalog.gemini_text_model, GEMINI_TEXT_BASE_CONFIDENCE)
        if selector.matches(ModelFamily.CLAUDE):
            raise UnsupportedProviderError("anthropic", ANTHROPIC_NOT_IMPLEMENTED)
        if selector.matches(ModelFamily.GPT4):
            return TextRoute(TextBackend.OPENAI, self._catalog.openai_large_text_model, OPENAI_TEXT_BASE_CONFIDENCE)
        return TextRoute(TextBackend.OPENAI, self._catalog.openai_small_text_model, OPENAI_TEXT_BASE_CONFIDENCE)

    def dispatch_image(self, route: ImageRoute, prompt: str) -> dict[str, Any]:
        logger.info("dispatch_image model=%s quality=%s", route.model, route.quality)
        return self._openai.generate_image(
            prompt,
            model=route.model,
            size=route.size,
            quality=route.quality,
            style=route.style,
        )

    def dispatch_text(self, route: TextRoute, system_prompt: str, user_prompt: str) -> str | None:
        logger.info("dispatch_text backend=%s model=%s", route.backend.value, route.model)
        if route.backend is TextBackend.GEMINI:
            # The Gemini path sends the user prompt alone.
            return self._gemini.generate_text(user_prompt, model=route.model)
        return self._openai.complete_json(
            system_prompt,
            user_prompt,
            model=route.model,
            temperature=self._catalog.text_temperature,
        )

    def describe(self) -> list[dict[str, Any]]:
        """Summarize the route each known model family resolves to."""
        routes = []
        for family in ModelFamily:
            selector = ModelSelector.for_family(family)
            image = self.route_image(selector)
            try:
                text = self.route_text(selector)
            except UnsupportedProviderError:
                text = None
            routes.append(
                {
                    "family": family.value,
                    "imageModel": image.model,
                    "imageQuality": image.quality,
                    "textBackend": text.backend.value if text else None,
                    "textModel": text.model if text else None,
                    "supported": text is not None,
                }
            )
        return routes
