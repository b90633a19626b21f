"""Pluggable generation backend layer.

Usage::

    from consentlab.inference import (
        GenerationClient,
        IGenerationBackend,
        LiteLLMBackend,
        create_generation_client,
    )
"""

from __future__ import annotations

from consentlab.inference.client import GenerationClient
from consentlab.inference.factory import create_generation_backend, create_generation_client
from consentlab.inference.protocols import (
    GenerationRequest,
    GenerationResult,
    IGenerationBackend,
    InlineImage,
)
from consentlab.inference.realtime import LiteLLMBackend

__all__ = [
    "GenerationClient",
    "GenerationRequest",
    "GenerationResult",
    "IGenerationBackend",
    "InlineImage",
    "LiteLLMBackend",
    "create_generation_backend",
    "create_generation_client",
]
