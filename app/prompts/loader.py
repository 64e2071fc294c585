"""
Prompt loader for the versioned YAML prompt pack.

Prompts live under a version directory, grouped by domain:

    v1/
    ├── shared/           # System prompts shared by every text request
    └── shot_planning/    # Shot-suggestion user prompt

Each YAML file maps prompt names to either a template string or a mapping
with ``template`` and ``required_variables``. Templates are Jinja2.

Usage:
    from app.prompts.loader import get_prompt, render_prompt

    system = get_prompt("system_prompt_shot_supervisor")
    rendered = render_prompt("prompt_shot_suggestions", scene_text="...", previous_shots=[], style="Noir")
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from jinja2 import Environment, StrictUndefined, meta

logger = logging.getLogger(__name__)

_PROMPTS_DIR = Path(__file__).resolve().parent
_VERSION = "v1"

_DOMAIN_DIRS = [
    "shared",
    "shot_planning",
]


@lru_cache(maxsize=1)
def _load_versioned_prompts() -> dict[str, Any]:
    """Load prompts from the versioned directory structure."""
    prompts: dict[str, Any] = {}
    version_dir = _PROMPTS_DIR / _VERSION

    if not version_dir.exists():
        return prompts

    for domain in _DOMAIN_DIRS:
        domain_dir = version_dir / domain
        if not domain_dir.exists():
            continue

        for yaml_file in sorted(domain_dir.glob("*.yaml")):
            with yaml_file.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}

            if not isinstance(data, dict):
                logger.warning("Skipping %s: top level is not a mapping", yaml_file)
                continue

            # Fail fast on template syntax errors
            for key, value in data.items():
                template = value.get("template") if isinstance(value, dict) else value
                if isinstance(template, str):
                    try:
                        _jinja_env().parse(template)
                    except Exception as e:  # TemplateSyntaxError or others
                        raise ValueError(f"Invalid Jinja2 template in {yaml_file}:{key}: {e}") from e

            prompts.update(data)

    return prompts


def get_prompt(name: str) -> str:
    """
    Get a prompt template by name.

    Raises:
        KeyError: If prompt not found or not a string
    """
    value = _load_versioned_prompts().get(name)
    if isinstance(value, str):
        return value
    if isinstance(value, dict) and "template" in value:
        return value["template"]
    raise KeyError(f"Prompt '{name}' not found or not a string")


@lru_cache(maxsize=1)
def _jinja_env() -> Environment:
    """Create Jinja2 environment for prompt rendering."""
    return Environment(
        undefined=StrictUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def extract_template_variables(template: str) -> set[str]:
    """Top-level names a template reads from its render context."""
    return set(meta.find_undeclared_variables(_jinja_env().parse(template)))


def check_required_variables(name: str, context: dict[str, Any]) -> list[str]:
    """Return the variables a prompt needs that are missing from ``context``."""
    entry = _load_versioned_prompts().get(name)
    if isinstance(entry, dict) and entry.get("required_variables"):
        return [v for v in entry["required_variables"] if v not in context]

    variables = extract_template_variables(get_prompt(name))
    return sorted(v for v in variables if v not in context)


def render_prompt(name: str, validate: bool = False, **context: Any) -> str:
    """
    Render a prompt template with the given context.

    Raises:
        ValueError: If validate=True and required variables are missing
    """
    if validate:
        missing = check_required_variables(name, context)
        if missing:
            raise ValueError(f"Missing required variables for '{name}': {missing}")

    template = get_prompt(name)
    return _jinja_env().from_string(template).render(**context)
