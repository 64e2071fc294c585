"""
Centralized provider construction.

Builds the process-wide provider clients and the router from application
settings. Called once from the application lifespan.
"""

from __future__ import annotations

import logging

from app.core.settings import Settings, settings as default_settings
from app.services.gemini_client import GeminiClient
from app.services.openai_client import OpenAIClient
from app.services.provider_router import ModelCatalog, ProviderRouter

logger = logging.getLogger(__name__)


def build_openai_client(config: Settings | None = None) -> OpenAIClient:
    config = config or default_settings
    if not config.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set; OpenAI requests will fail")
    return OpenAIClient(
        api_key=config.openai_api_key,
        base_url=config.openai_base_url,
        timeout_seconds=config.openai_timeout_seconds,
    )


def build_gemini_client(config: Settings | None = None) -> GeminiClient:
    config = config or default_settings
    if not config.gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set; Gemini requests will fail")
    return GeminiClient(api_key=config.gemini_api_key, text_model=config.gemini_text_model)


def build_model_catalog(config: Settings | None = None) -> ModelCatalog:
    config = config or default_settings
    return ModelCatalog(
        image_model=config.openai_image_model,
        image_size=config.openai_image_size,
        gemini_text_model=config.gemini_text_model,
        openai_large_text_model=config.openai_large_text_model,
        openai_small_text_model=config.openai_small_text_model,
        text_temperature=config.openai_text_temperature,
    )


def build_provider_router(config: Settings | None = None) -> ProviderRouter:
    """Build the router with freshly constructed provider clients."""
    return ProviderRouter(
        openai=build_openai_client(config),
        gemini=build_gemini_client(config),
        catalog=build_model_catalog(config),
    )
