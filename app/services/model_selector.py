"""Resolve the caller's opaque ``modelId`` into model-family tags.

Resolution happens once at the API boundary. Every family whose marker occurs
in the id (case-sensitive substring) is recorded, so the image and text paths
can each apply their own precedence to the same selector. Unrecognized ids
carry no tags and fall back to a default route instead of erroring. Only the
Anthropic tag is rejected later, by the text router.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ModelFamily(str, Enum):
    GEMINI = "gemini"
    GOOGLE = "google"
    CLAUDE = "claude"
    IMAGEN = "imagen"
    GPT4 = "gpt-4"
    OPENAI = "openai"
    DEFAULT = "default"


# Ordered by precedence for the primary ``family`` label.
_FAMILY_MARKERS: tuple[tuple[ModelFamily, tuple[str, ...]], ...] = (
    (ModelFamily.GEMINI, ("gemini",)),
    (ModelFamily.GOOGLE, ("google",)),
    (ModelFamily.CLAUDE, ("claude", "anthropic")),
    (ModelFamily.IMAGEN, ("imagen",)),
    (ModelFamily.GPT4, ("gpt-4",)),
)

GOOGLE_FAMILIES = frozenset({ModelFamily.IMAGEN, ModelFamily.GEMINI, ModelFamily.GOOGLE})


@dataclass(frozen=True)
class ModelSelector:
    tags: frozenset[ModelFamily] = frozenset()
    raw: str | None = None

    @classmethod
    def for_family(cls, family: ModelFamily) -> ModelSelector:
        """Selector equivalent to an id naming only ``family``."""
        if family is ModelFamily.DEFAULT:
            return cls()
        if family is ModelFamily.OPENAI:
            return cls(raw=family.value)
        return cls(tags=frozenset({family}), raw=family.value)

    @property
    def is_default(self) -> bool:
        return not self.raw

    @property
    def family(self) -> ModelFamily:
        """Single label for logs and listings; routing reads ``tags``."""
        for family, _ in _FAMILY_MARKERS:
            if family in self.tags:
                return family
        return ModelFamily.DEFAULT if self.is_default else ModelFamily.OPENAI

    def matches(self, *families: ModelFamily) -> bool:
        return any(family in self.tags for family in families)

    @property
    def is_google(self) -> bool:
        return self.matches(*GOOGLE_FAMILIES)


def resolve_model_selector(raw: str | None) -> ModelSelector:
    value = (raw or "").strip()
    if not value:
        return ModelSelector(raw=None)

    tags = frozenset(
        family for family, markers in _FAMILY_MARKERS if any(marker in value for marker in markers)
    )
    return ModelSelector(tags=tags, raw=raw)
