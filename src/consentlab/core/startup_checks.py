"""Startup validation: fail-fast on critical misconfigurations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from consentlab.core.config import AppSettings

log = logging.getLogger(__name__)

# Providers that run locally and do not require an API key
_NO_KEY_PROVIDERS = frozenset({"ollama"})


def validate_settings(settings: AppSettings) -> None:
    """Validate application settings at startup. Raises ValueError on fatal misconfig."""
    _check_api_key(settings)
    _check_model(settings)


def _check_api_key(settings: AppSettings) -> None:
    """Reject placeholder API keys for hosted providers."""
    if settings.llm.provider not in _NO_KEY_PROVIDERS:
        if settings.llm.api_key in ("no-key", ""):
            raise ValueError(
                f"CONSENTLAB_LLM_API_KEY is required for provider '{settings.llm.provider}'. "
                f"Set it via environment variable or secrets manager."
            )


def _check_model(settings: AppSettings) -> None:
    """Warn when the model id carries no LiteLLM provider prefix."""
    if settings.llm.backend == "litellm" and "/" not in settings.llm.model:
        log.warning(
            "CONSENTLAB_LLM_MODEL=%s has no provider prefix; LiteLLM will guess the provider.",
            settings.llm.model,
        )
