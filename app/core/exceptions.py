"""
Application-level exception types.

Every error raised by the AI service derives from `AppError`, which carries
the HTTP status and the stable `code` rendered in the JSON error envelope.
"""

from __future__ import annotations


class AppError(Exception):
    """Base exception for all application errors."""

    status_code: int = 500
    code: str = "AI_SERVICE_ERROR"

    def __init__(self, message: str, *, detail: str | None = None) -> None:
        self.detail = detail or message
        super().__init__(message)


class ValidationError(AppError):
    """Raised when the caller omitted a required field."""

    status_code = 400
    code = "VALIDATION_ERROR"


class AIServiceError(AppError):
    """Raised for any unexpected failure while serving a generation request."""


class UpstreamProviderError(AppError):
    """Raised on network failure, non-2xx or explicit provider-side error."""

    def __init__(self, message: str, *, provider: str, model: str | None = None) -> None:
        super().__init__(message)
        self.provider = provider
        self.model = model


class UpstreamFormatError(AppError):
    """Raised when a provider response cannot be normalized."""


class NoImageGeneratedError(UpstreamFormatError):
    """Raised when an image response carries no usable image URL."""

    def __init__(self) -> None:
        super().__init__("No image generated")


class MalformedSuggestionPayloadError(UpstreamFormatError):
    """Raised when shot suggestions are not valid JSON after recovery."""

    def __init__(self, message: str, *, preview: str = "") -> None:
        super().__init__(message)
        self.preview = preview


class UnsupportedProviderError(AppError):
    """Raised when a selector maps to a known but unimplemented backend."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(message)
        self.provider = provider
