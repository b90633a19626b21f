"""Prompt registry: loads prompt templates from Python modules on disk.

Module path convention: ``consentlab.prompts.templates.{category}``. Each
module exposes a ``_PROMPT_DATA: dict[str, str]`` mapping constant names to
template strings.

Usage::

    prompt = get_prompt("analysis", "ANALYSIS_PROMPT")

    # Replace a template at runtime (e.g. a hospital-specific tone):
    override_prompt("qa", "QA_PROMPT", "... {language} {fallback} {document} {question}")
"""

from __future__ import annotations

import importlib
import logging
import string
from typing import Any

logger = logging.getLogger(__name__)

_modules: dict[str, Any] = {}
_overrides: dict[tuple[str, str], str] = {}


def get_prompt(category: str, name: str) -> str:
    """Return the prompt template ``name`` from ``templates/{category}.py``.

    Raises:
        KeyError: If the module or prompt does not exist.
    """
    override = _overrides.get((category, name))
    if override is not None:
        return override
    return _builtin_prompt(category, name)


def _builtin_prompt(category: str, name: str) -> str:
    if category not in _modules:
        module_path = f"consentlab.prompts.templates.{category}"
        try:
            _modules[category] = importlib.import_module(module_path)
        except ModuleNotFoundError as exc:
            raise KeyError(f"Prompt module not found: {module_path}") from exc

    data: dict[str, str] | None = getattr(_modules[category], "_PROMPT_DATA", None)
    if data is not None and name in data:
        return data[name]

    raise KeyError(f"Prompt {name!r} not found in {category}")


def _placeholders(template: str) -> set[str]:
    """Named ``str.format`` fields in ``template``.

    Raises:
        ValueError: On unbalanced braces or positional fields.
    """
    try:
        fields = {field for _, field, _, _ in string.Formatter().parse(template) if field is not None}
    except ValueError as exc:
        raise ValueError(f"Malformed prompt template: {exc}") from exc
    positional = sorted(f for f in fields if not f or f.isdigit())
    if positional:
        raise ValueError(f"Prompt templates take named placeholders only, got {positional}")
    return fields


def override_prompt(category: str, name: str, template: str) -> None:
    """Replace a template for the rest of the process lifetime.

    The override must use exactly the placeholders of the built-in template;
    literal braces are written doubled (``{{`` and ``}}``).

    Raises:
        KeyError: If the prompt does not exist.
        ValueError: If the template is malformed or its placeholders differ.
    """
    expected = _placeholders(_builtin_prompt(category, name))
    found = _placeholders(template)
    if found != expected:
        missing = sorted(expected - found)
        unknown = sorted(found - expected)
        raise ValueError(
            f"Override for {category}/{name} must use placeholders {sorted(expected)}; "
            f"missing {missing}, unknown {unknown}"
        )
    logger.info("Prompt override registered", extra={"category": category, "prompt": name})
    _overrides[(category, name)] = template


def reset_overrides() -> None:
    """Drop all runtime overrides."""
    _overrides.clear()
