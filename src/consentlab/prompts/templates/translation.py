"""Prompts for summary translation."""

from __future__ import annotations

_PROMPT_DATA: dict[str, str] = {
    "TRANSLATION_PROMPT": """Translate the following medical consent text to {language}. Maintain medical accuracy and clarity.
Return only the translated text.

{text}""",
}
