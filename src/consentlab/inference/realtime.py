"""LiteLLM generation backend wrapping litellm.acompletion()."""

from __future__ import annotations

import base64
import logging
from typing import Any

from consentlab.core.config import LLMConfig
from consentlab.inference.protocols import GenerationRequest, GenerationResult

log = logging.getLogger(__name__)


class LiteLLMBackend:
    """Generation via litellm.acompletion().

    Supports ``gemini/``, ``openai/``, ``anthropic/`` and ``ollama/`` model
    prefixes transparently. Inline images are sent as base64 data-URL
    ``image_url`` content blocks.
    """

    def __init__(self, config: LLMConfig) -> None:
        self._config = config

    @property
    def model(self) -> str:
        return self._config.model

    @staticmethod
    def build_messages(request: GenerationRequest) -> list[dict[str, Any]]:
        """Build the OpenAI-format message list for a request."""
        if request.inline_image is None:
            return [{"role": "user", "content": request.prompt}]

        encoded = base64.b64encode(request.inline_image.data).decode("ascii")
        content: list[dict[str, Any]] = [
            {"type": "text", "text": request.prompt},
            {
                "type": "image_url",
                "image_url": {"url": f"data:{request.inline_image.mime_type};base64,{encoded}"},
            },
        ]
        return [{"role": "user", "content": content}]

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Single completion via litellm.acompletion()."""
        from litellm import acompletion

        kwargs: dict[str, Any] = {
            "model": self._config.model,
            "messages": self.build_messages(request),
            "temperature": self._config.temperature,
            "timeout": self._config.timeout,
        }
        if self._config.api_key not in ("", "no-key"):
            kwargs["api_key"] = self._config.api_key
        if self._config.base_url:
            kwargs["api_base"] = self._config.base_url

        response = await acompletion(**kwargs)
        content = response.choices[0].message.content or ""
        reason = response.choices[0].finish_reason
        mapped_reason = "max_output_reached" if reason == "length" else "finished"

        usage: dict[str, int] = {}
        if hasattr(response, "usage") and response.usage:
            usage = {
                "prompt_tokens": getattr(response.usage, "prompt_tokens", 0),
                "completion_tokens": getattr(response.usage, "completion_tokens", 0),
                "total_tokens": getattr(response.usage, "total_tokens", 0),
            }

        return GenerationResult(text=content, finish_reason=mapped_reason, usage=usage)
