"""Usage accounting: accumulates generation calls and tokens per context.

Every pipeline call is metered by the AI provider, so the generation client
records each call here. Read totals with ``get_current_usage()``.
"""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field


@dataclass
class UsageSummary:
    """Accumulated generation usage for the current context."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    call_count: int = 0
    failed_call_count: int = 0
    calls_by_operation: dict[str, int] = field(default_factory=dict)

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens

    @property
    def failure_rate(self) -> float:
        return self.failed_call_count / self.call_count if self.call_count > 0 else 0.0


_usage: ContextVar[UsageSummary] = ContextVar("consentlab_usage")


def get_current_usage() -> UsageSummary:
    """Get the usage summary for the current context."""
    try:
        return _usage.get()
    except LookupError:
        summary = UsageSummary()
        _usage.set(summary)
        return summary


def reset_usage() -> UsageSummary:
    """Reset and return a fresh usage tracker for the current context."""
    summary = UsageSummary()
    _usage.set(summary)
    return summary


def record_call(operation: str, usage: dict[str, int] | None = None, *, failed: bool = False) -> None:
    """Add one generation call to the current summary."""
    summary = get_current_usage()
    summary.call_count += 1
    summary.calls_by_operation[operation] = summary.calls_by_operation.get(operation, 0) + 1
    if failed:
        summary.failed_call_count += 1
    if usage:
        summary.prompt_tokens += usage.get("prompt_tokens", 0)
        summary.completion_tokens += usage.get("completion_tokens", 0)
