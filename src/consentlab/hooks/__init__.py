"""Cross-cutting hooks: structured logging and usage accounting."""

from __future__ import annotations

from consentlab.hooks.logging_config import setup_logging
from consentlab.hooks.usage import UsageSummary, get_current_usage, record_call, reset_usage

__all__ = [
    "UsageSummary",
    "get_current_usage",
    "record_call",
    "reset_usage",
    "setup_logging",
]
