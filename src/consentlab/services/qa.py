"""Grounded Q&A over a consent form.

Each question is answered from the current question and the document text
only; conversation history stays with the caller. Backend failures never
reach the user as errors: they become a scripted apology turn.
"""

from __future__ import annotations

import logging

from consentlab.core.exceptions import BackendError, QAError
from consentlab.inference.client import GenerationClient
from consentlab.languages import ENGLISH, resolve_language
from consentlab.models import Conversation, ConversationRole, ConversationTurn
from consentlab.prompts.registry import get_prompt

log = logging.getLogger(__name__)

APOLOGY_MESSAGE = "Sorry, I encountered an error. Please try again."
UNSURE_MESSAGE = "I'm not sure about that specific detail"


class GroundedQAEngine:
    """Answers patient questions using only the consent form text."""

    def __init__(self, client: GenerationClient, *, max_document_chars: int = 30_000) -> None:
        self._client = client
        self._max_document_chars = max_document_chars

    async def ask(self, question: str, document_text: str, language: str = ENGLISH.name) -> str:
        """Answer ``question`` in ``language``.

        Returns the apology message instead of raising when the backend
        fails or returns nothing. Blank document text gets the unsure
        reply without a backend call.

        Raises:
            QAError: ``empty-question`` when there is nothing to ask.
        """
        if not question or not question.strip():
            raise QAError("empty-question")
        if not document_text or not document_text.strip():
            log.warning("Q&A asked without consent form text")
            return UNSURE_MESSAGE

        try:
            language_name = resolve_language(language).name
        except KeyError:
            log.warning("Unsupported Q&A language %r, answering in English", language)
            language_name = ENGLISH.name

        prompt = get_prompt("qa", "QA_PROMPT").format(
            language=language_name,
            fallback=UNSURE_MESSAGE,
            document=document_text[: self._max_document_chars],
            question=question.strip(),
        )
        try:
            answer = await self._client.generate(prompt, operation="qa")
        except BackendError as e:
            log.error("Q&A call failed: %s", e)
            return APOLOGY_MESSAGE

        answer = answer.strip()
        if not answer:
            log.warning("Q&A backend returned an empty answer")
            return APOLOGY_MESSAGE
        return answer

    async def ask_turn(
        self,
        conversation: Conversation,
        question: str,
        document_text: str,
        language: str = ENGLISH.name,
    ) -> ConversationTurn:
        """Record the user's question and the assistant's reply in ``conversation``."""
        answer = await self.ask(question, document_text, language)
        conversation.add(ConversationRole.USER, question.strip())
        return conversation.add(ConversationRole.ASSISTANT, answer)
