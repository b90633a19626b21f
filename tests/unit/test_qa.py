"""Tests for GroundedQAEngine."""

from __future__ import annotations

import pytest

from consentlab.core.exceptions import BackendTimeoutError, QAError
from consentlab.inference.client import GenerationClient
from consentlab.models import Conversation, ConversationRole
from consentlab.services.qa import APOLOGY_MESSAGE, UNSURE_MESSAGE, GroundedQAEngine
from tests.fakes.fake_backend import FakeGenerationBackend


@pytest.mark.asyncio
async def test_prompt_carries_document_question_language_and_fallback(sample_consent_text):
    backend = FakeGenerationBackend().queue("Yes, bleeding is listed as a risk.")
    engine = GroundedQAEngine(GenerationClient(backend))

    answer = await engine.ask("Is bleeding a risk?", sample_consent_text, "Marathi")

    assert answer == "Yes, bleeding is listed as a risk."
    prompt = backend.calls[0].prompt
    assert backend.calls[0].operation == "qa"
    assert "Is bleeding a risk?" in prompt
    assert "gallbladder" in prompt
    assert "Marathi" in prompt
    assert UNSURE_MESSAGE in prompt


@pytest.mark.asyncio
async def test_empty_question_rejected(fake_backend, client, sample_consent_text):
    with pytest.raises(QAError) as exc_info:
        await GroundedQAEngine(client).ask("   ", sample_consent_text)
    assert exc_info.value.reason == "empty-question"
    assert fake_backend.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("document", ["", "  \n\t"])
async def test_blank_document_answers_unsure_without_backend_call(fake_backend, client, document):
    answer = await GroundedQAEngine(client).ask("Is bleeding a risk?", document)
    assert answer == UNSURE_MESSAGE
    assert fake_backend.calls == []


@pytest.mark.asyncio
async def test_backend_failure_becomes_apology(sample_consent_text):
    backend = FakeGenerationBackend(error=BackendTimeoutError("slow"))
    answer = await GroundedQAEngine(GenerationClient(backend)).ask("Is it safe?", sample_consent_text)
    assert answer == APOLOGY_MESSAGE


@pytest.mark.asyncio
async def test_unexpected_backend_exception_becomes_apology(sample_consent_text):
    backend = FakeGenerationBackend(error=RuntimeError("socket closed"))
    answer = await GroundedQAEngine(GenerationClient(backend)).ask("Is it safe?", sample_consent_text)
    assert answer == APOLOGY_MESSAGE


@pytest.mark.asyncio
async def test_empty_answer_becomes_apology(sample_consent_text):
    backend = FakeGenerationBackend().queue("")
    answer = await GroundedQAEngine(GenerationClient(backend)).ask("Is it safe?", sample_consent_text)
    assert answer == APOLOGY_MESSAGE


@pytest.mark.asyncio
async def test_unsupported_language_answers_in_english(sample_consent_text):
    backend = FakeGenerationBackend().queue("answer")
    await GroundedQAEngine(GenerationClient(backend)).ask("Is it safe?", sample_consent_text, "Klingon")
    assert "English" in backend.calls[0].prompt


@pytest.mark.asyncio
async def test_ask_turn_appends_both_turns(sample_consent_text):
    backend = FakeGenerationBackend().queue("About one hour.", RuntimeError("down"))
    engine = GroundedQAEngine(GenerationClient(backend))
    conversation = Conversation()

    reply = await engine.ask_turn(conversation, " How long is surgery? ", sample_consent_text)
    assert reply.role is ConversationRole.ASSISTANT
    assert [t.content for t in conversation.turns] == ["How long is surgery?", "About one hour."]

    failed = await engine.ask_turn(conversation, "Can I eat before?", sample_consent_text)
    assert failed.content == APOLOGY_MESSAGE
    assert len(conversation) == 4


@pytest.mark.asyncio
async def test_each_question_is_independent_of_history(sample_consent_text):
    backend = FakeGenerationBackend(default_text="ok")
    engine = GroundedQAEngine(GenerationClient(backend))
    conversation = Conversation()
    await engine.ask_turn(conversation, "First question?", sample_consent_text)
    await engine.ask_turn(conversation, "Second question?", sample_consent_text)
    assert "First question?" not in backend.calls[1].prompt
