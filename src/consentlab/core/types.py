"""Shared type aliases and the typed outcome returned by pipeline entry points."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from consentlab.core.exceptions import PipelineError

# JSON-like dict returned by LLM parsing
JsonDict = dict[str, Any]

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a value or a typed pipeline failure.

    ``fallback`` carries the last-good value a caller should keep showing
    when the step fails (e.g. the untranslated summary).
    """

    value: T | None = None
    error: PipelineError | None = None
    fallback: T | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: PipelineError, *, fallback: T | None = None) -> Outcome[T]:
        return cls(error=error, fallback=fallback)

    def unwrap(self) -> T:
        """Return the value or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
