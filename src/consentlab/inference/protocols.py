"""Generation backend protocol: the single contract every AI call goes through.

Extraction from images, analysis, translation and Q&A all use the same
request shape: a prompt plus an optional inline image, answered with text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class InlineImage:
    """Image bytes sent alongside a prompt."""

    data: bytes
    mime_type: str = "image/jpeg"


@dataclass
class GenerationRequest:
    """A single generate-content request."""

    prompt: str
    inline_image: InlineImage | None = None
    operation: str = "generate"


@dataclass
class GenerationResult:
    """Result from a single generation call."""

    text: str
    finish_reason: str = "finished"
    usage: dict[str, int] = field(default_factory=dict)


@runtime_checkable
class IGenerationBackend(Protocol):
    """Protocol for pluggable generation backends."""

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Run one generation call.

        Args:
            request: Prompt and optional inline image.

        Returns:
            GenerationResult with the response text and usage metadata.
        """
        ...
