"""Tests for supported-language resolution."""

from __future__ import annotations

import pytest

from consentlab.languages import ENGLISH, SUPPORTED_LANGUAGES, is_english, language_names, resolve_language


def test_twelve_languages_english_first():
    assert len(SUPPORTED_LANGUAGES) == 12
    assert SUPPORTED_LANGUAGES[0] is ENGLISH
    assert "Assamese" in language_names()


@pytest.mark.parametrize("value", ["Hindi", "hindi", " HINDI ", "hi", "हिंदी", "Hindi (हिंदी)"])
def test_resolve_by_name_code_native_or_label(value):
    assert resolve_language(value).code == "hi"


@pytest.mark.parametrize("value", ["French", "", "xx", "Klingon (tlhIngan)"])
def test_unsupported_raises_key_error(value):
    with pytest.raises(KeyError):
        resolve_language(value)


def test_is_english():
    assert is_english("en")
    assert is_english("English")
    assert not is_english("Tamil")
    assert not is_english("French")
