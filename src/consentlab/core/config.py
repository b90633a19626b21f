"""Nested pydantic-settings configuration for the application.

Each sub-config reads its own ``CONSENTLAB_<GROUP>_*`` env vars::

    export CONSENTLAB_LLM_MODEL=gemini/gemini-2.0-flash
    export CONSENTLAB_LLM_API_KEY=...
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class LLMConfig(BaseSettings):
    """Generative backend configuration.

    Env vars use ``CONSENTLAB_LLM_`` prefix::

        export CONSENTLAB_LLM_PROVIDER=gemini
        export CONSENTLAB_LLM_MODEL=gemini/gemini-2.0-flash
    """

    model_config = {"env_prefix": "CONSENTLAB_LLM_"}

    provider: Literal["gemini", "openai", "anthropic", "ollama", "litellm"] = "gemini"
    backend: str = "litellm"
    base_url: str = ""
    api_key: str = "no-key"
    model: str = "gemini/gemini-2.0-flash"
    temperature: float = 0.2
    timeout: float = Field(default=60.0, gt=0.0)


class AnalysisConfig(BaseSettings):
    """Document analysis configuration.

    Env vars use ``CONSENTLAB_ANALYSIS_`` prefix.
    """

    model_config = {"env_prefix": "CONSENTLAB_ANALYSIS_"}

    max_document_chars: int = Field(default=30_000, ge=1_000)


class TranslationConfig(BaseSettings):
    """Summary translation configuration.

    Env vars use ``CONSENTLAB_TRANSLATION_`` prefix.
    """

    model_config = {"env_prefix": "CONSENTLAB_TRANSLATION_"}

    cache_enabled: bool = False
    cache_max_size: int = Field(default=256, ge=1)


class ObservabilityConfig(BaseSettings):
    """Observability configuration.

    Env vars use ``CONSENTLAB_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "CONSENTLAB_OBSERVABILITY_"}

    service_name: str = "consentlab"
    log_level: str = "INFO"


class APIConfig(BaseSettings):
    """HTTP API configuration.

    Env vars use ``CONSENTLAB_API_`` prefix.
    """

    model_config = {"env_prefix": "CONSENTLAB_API_"}

    title: str = "ConsentLab"
    description: str = "Consent form analysis, translation and grounded Q&A"
    port: int = 8080
    max_upload_bytes: int = Field(default=10 * 1024 * 1024, ge=1024)


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs."""

    llm: LLMConfig = LLMConfig()
    analysis: AnalysisConfig = AnalysisConfig()
    translation: TranslationConfig = TranslationConfig()
    observability: ObservabilityConfig = ObservabilityConfig()
    api: APIConfig = APIConfig()
