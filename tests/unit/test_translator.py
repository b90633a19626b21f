"""Tests for the summary Translator."""

from __future__ import annotations

import pytest

from consentlab.core.exceptions import BackendError, TranslationError
from consentlab.inference.client import GenerationClient
from consentlab.services.translator import Translator
from tests.fakes.fake_backend import FakeGenerationBackend

SUMMARY = "You are agreeing to keyhole surgery to remove your gallbladder."


@pytest.mark.asyncio
async def test_english_returns_input_without_backend_call(fake_backend, client):
    translator = Translator(client)
    assert await translator.translate(SUMMARY, "English") == SUMMARY
    assert await translator.translate(SUMMARY, "en") == SUMMARY
    assert fake_backend.calls == []


@pytest.mark.asyncio
async def test_translates_to_hindi():
    backend = FakeGenerationBackend().queue("  आप पित्ताशय निकालने की सर्जरी के लिए सहमति दे रहे हैं।\n")
    translator = Translator(GenerationClient(backend))

    result = await translator.translate(SUMMARY, "hi")

    assert result == "आप पित्ताशय निकालने की सर्जरी के लिए सहमति दे रहे हैं।"
    assert backend.calls[0].operation == "translation"
    assert "Hindi" in backend.calls[0].prompt
    assert SUMMARY in backend.calls[0].prompt


@pytest.mark.asyncio
async def test_unsupported_language(fake_backend, client):
    with pytest.raises(TranslationError) as exc_info:
        await Translator(client).translate(SUMMARY, "French")
    assert exc_info.value.reason == "unsupported-language"
    assert fake_backend.calls == []


@pytest.mark.asyncio
async def test_backend_failure():
    backend = FakeGenerationBackend(error=BackendError("boom"))
    with pytest.raises(TranslationError) as exc_info:
        await Translator(GenerationClient(backend)).translate(SUMMARY, "Tamil")
    assert exc_info.value.reason == "backend-failure"
    assert exc_info.value.message == "Failed to translate. Please try again."


@pytest.mark.asyncio
async def test_empty_translation_is_a_failure():
    backend = FakeGenerationBackend().queue("   ")
    with pytest.raises(TranslationError) as exc_info:
        await Translator(GenerationClient(backend)).translate(SUMMARY, "Tamil")
    assert exc_info.value.reason == "backend-failure"


@pytest.mark.asyncio
async def test_cache_disabled_by_default():
    backend = FakeGenerationBackend(default_text="அனுவாதம்")
    translator = Translator(GenerationClient(backend))
    await translator.translate(SUMMARY, "Tamil")
    await translator.translate(SUMMARY, "Tamil")
    assert len(backend.calls) == 2


@pytest.mark.asyncio
async def test_cache_hits_and_eviction():
    backend = FakeGenerationBackend(default_text="translated")
    translator = Translator(GenerationClient(backend), cache_enabled=True, cache_max_size=1)

    await translator.translate(SUMMARY, "Tamil")
    await translator.translate(SUMMARY, "ta")
    assert len(backend.calls) == 1

    await translator.translate(SUMMARY, "Telugu")  # evicts Tamil
    await translator.translate(SUMMARY, "Tamil")
    assert len(backend.calls) == 3

    translator.clear_cache()
    await translator.translate(SUMMARY, "Tamil")
    assert len(backend.calls) == 4
