"""Prompt templates and the registry that serves them."""

from __future__ import annotations

from consentlab.prompts.registry import get_prompt, override_prompt, reset_overrides

__all__ = ["get_prompt", "override_prompt", "reset_overrides"]
