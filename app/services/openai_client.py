from __future__ import annotations

import logging
from typing import Any

from openai import OpenAI

from app.core.exceptions import UpstreamProviderError
from app.core.metrics import track_provider_call
from app.core.request_context import log_context

logger = logging.getLogger(__name__)

PROVIDER_NAME = "openai"


def _error_message(exc: Exception) -> str:
    return getattr(exc, "message", None) or str(exc) or "OpenAI request failed"


class OpenAIClient:
    """Image synthesis and JSON chat completions through the OpenAI API.

    Responses are returned as plain dicts / strings; shaping them into
    results is the normalizer's job.
    """

    provider = PROVIDER_NAME

    def __init__(
        self,
        api_key: str | None,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
        client: OpenAI | None = None,
    ):
        if client is not None:
            self._client = client
        elif api_key:
            options: dict[str, Any] = {"api_key": api_key}
            if base_url:
                options["base_url"] = base_url
            if timeout_seconds is not None:
                options["timeout"] = timeout_seconds
            self._client = OpenAI(**options)
        else:
            self._client = None

    @property
    def configured(self) -> bool:
        return self._client is not None

    def _require_client(self, model: str) -> OpenAI:
        if self._client is None:
            raise UpstreamProviderError(
                "OpenAI is not configured. Set OPENAI_API_KEY.",
                provider=PROVIDER_NAME,
                model=model,
            )
        return self._client

    def generate_image(
        self,
        prompt: str,
        *,
        model: str,
        size: str,
        quality: str,
        style: str | None = None,
    ) -> dict[str, Any]:
        client = self._require_client(model)
        request: dict[str, Any] = {
            "model": model,
            "prompt": prompt,
            "size": size,
            "quality": quality,
            "n": 1,
        }
        if style:
            request["style"] = style

        with log_context(provider=PROVIDER_NAME):
            try:
                with track_provider_call(PROVIDER_NAME, "generate_image"):
                    response = client.images.generate(**request)
            except Exception as exc:  # noqa: BLE001
                logger.error("openai.generate_image failed model=%s quality=%s error=%s", model, quality, repr(exc))
                raise UpstreamProviderError(_error_message(exc), provider=PROVIDER_NAME, model=model) from exc

            logger.info("openai.generate_image ok model=%s quality=%s", model, quality)
            return response.model_dump()

    def complete_json(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        model: str,
        temperature: float,
    ) -> str | None:
        """Chat completion in JSON mode. Returns the first choice's content."""
        client = self._require_client(model)

        with log_context(provider=PROVIDER_NAME):
            try:
                with track_provider_call(PROVIDER_NAME, "complete_json"):
                    response = client.chat.completions.create(
                        model=model,
                        messages=[
                            {"role": "system", "content": system_prompt},
                            {"role": "user", "content": user_prompt},
                        ],
                        temperature=temperature,
                        response_format={"type": "json_object"},
                    )
            except Exception as exc:  # noqa: BLE001
                logger.error("openai.complete_json failed model=%s error=%s", model, repr(exc))
                raise UpstreamProviderError(_error_message(exc), provider=PROVIDER_NAME, model=model) from exc

            if not response.choices:
                return None
            logger.info("openai.complete_json ok model=%s", model)
            return response.choices[0].message.content
