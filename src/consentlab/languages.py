"""Supported output languages for translation and Q&A.

The set is configuration rather than logic: English plus eleven Indian
languages, each addressable by its English name or ISO 639-1 code.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Language:
    code: str
    name: str
    native_name: str = ""

    @property
    def label(self) -> str:
        return f"{self.name} ({self.native_name})" if self.native_name else self.name


ENGLISH = Language("en", "English")

SUPPORTED_LANGUAGES: tuple[Language, ...] = (
    ENGLISH,
    Language("hi", "Hindi", "हिंदी"),
    Language("bn", "Bengali", "বাংলা"),
    Language("te", "Telugu", "తెలుగు"),
    Language("mr", "Marathi", "मराठी"),
    Language("ta", "Tamil", "தமிழ்"),
    Language("gu", "Gujarati", "ગુજરાતી"),
    Language("kn", "Kannada", "ಕನ್ನಡ"),
    Language("ml", "Malayalam", "മലയാളം"),
    Language("pa", "Punjabi", "ਪੰਜਾਬੀ"),
    Language("or", "Odia", "ଓଡ଼ିଆ"),
    Language("as", "Assamese", "অসমীয়া"),
)

_BY_KEY: dict[str, Language] = {}
for _lang in SUPPORTED_LANGUAGES:
    _BY_KEY[_lang.code] = _lang
    _BY_KEY[_lang.name.lower()] = _lang
    if _lang.native_name:
        _BY_KEY[_lang.native_name] = _lang


def resolve_language(value: str) -> Language:
    """Look up a supported language by name, code, or native name.

    Raises:
        KeyError: If the language is not supported.
    """
    key = value.strip()
    # Accept UI labels such as "Hindi (हिंदी)"
    if key.endswith(")") and "(" in key:
        key = key.split("(", 1)[0].strip()
    lang = _BY_KEY.get(key.lower()) or _BY_KEY.get(key)
    if lang is None:
        raise KeyError(f"Unsupported language: {value!r}")
    return lang


def is_english(value: str) -> bool:
    try:
        return resolve_language(value) is ENGLISH
    except KeyError:
        return False


def language_names() -> list[str]:
    return [lang.name for lang in SUPPORTED_LANGUAGES]
