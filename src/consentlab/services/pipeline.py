"""Consent pipeline: the entry points used by the API and CLI.

Components raise typed errors; this facade turns them into ``Outcome``
failures so no pipeline error escapes to the enclosing application.
Extraction failures short-circuit, so the analyzer is never called with
empty input.
"""

from __future__ import annotations

import logging

from consentlab.core.config import AppSettings
from consentlab.core.exceptions import (
    AnalysisError,
    ExtractionError,
    QAError,
    ReportExtractionError,
    TranslationError,
)
from consentlab.core.types import Outcome
from consentlab.inference.client import GenerationClient
from consentlab.inference.factory import create_generation_client
from consentlab.inference.protocols import IGenerationBackend
from consentlab.languages import ENGLISH
from consentlab.models import (
    ConsentAnalysis,
    Conversation,
    ConversationTurn,
    DocumentOrigin,
    DocumentText,
    PatientReportDetails,
    RiskAssessment,
)
from consentlab.services.analyzer import DocumentAnalyzer
from consentlab.services.qa import GroundedQAEngine
from consentlab.services.report_extractor import ReportExtractor
from consentlab.services.text_source import TextSource, TextSourceAdapter
from consentlab.services.translator import Translator
from consentlab.session import SessionContext, session_scope

log = logging.getLogger(__name__)


class ConsentPipeline:
    """Wires the text source adapter, analyzer, translator, Q&A engine and report extractor."""

    def __init__(self, settings: AppSettings, client: GenerationClient) -> None:
        self._settings = settings
        self._client = client
        max_chars = settings.analysis.max_document_chars
        self.sources = TextSourceAdapter(client)
        self.analyzer = DocumentAnalyzer(client, max_document_chars=max_chars)
        self.translator = Translator(
            client,
            cache_enabled=settings.translation.cache_enabled,
            cache_max_size=settings.translation.cache_max_size,
        )
        self.qa = GroundedQAEngine(client, max_document_chars=max_chars)
        self.reports = ReportExtractor(client, max_document_chars=max_chars)

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings | None = None,
        *,
        backend: IGenerationBackend | None = None,
    ) -> ConsentPipeline:
        settings = settings or AppSettings()
        return cls(settings, create_generation_client(settings, backend))

    # ── Analysis ─────────────────────────────────────────────────────

    async def process_document(
        self,
        source: TextSource,
        session: SessionContext | None = None,
    ) -> Outcome[ConsentAnalysis]:
        """Extract text from ``source`` then analyze it."""
        with session_scope(session):
            try:
                document = await self.sources.extract(source)
            except ExtractionError as e:
                log.warning("Extraction failed: %s", e.reason)
                return Outcome.failure(e)
            return await self._analyze(document)

    async def analyze_text(
        self,
        text: str,
        session: SessionContext | None = None,
        *,
        origin: DocumentOrigin = DocumentOrigin.UPLOAD,
    ) -> Outcome[ConsentAnalysis]:
        """Analyze consent text the caller already has (e.g. a hospital template)."""
        with session_scope(session):
            try:
                document = self.sources.from_text(text, origin)
            except ExtractionError as e:
                return Outcome.failure(e)
            return await self._analyze(document)

    async def _analyze(self, document: DocumentText) -> Outcome[ConsentAnalysis]:
        try:
            assessment = await self.analyzer.analyze(document.content)
        except AnalysisError as e:
            log.warning("Analysis failed: %s", e.reason)
            return Outcome.failure(e)
        log.info(
            "Consent analyzed",
            extra={"risk_level": assessment.risk_level.value, "origin": document.origin.value},
        )
        return Outcome.success(ConsentAnalysis(document=document, assessment=assessment))

    # ── Translation ──────────────────────────────────────────────────

    async def translate_summary(
        self,
        assessment: RiskAssessment | str,
        language: str,
        session: SessionContext | None = None,
    ) -> Outcome[str]:
        """Translate the summary; on failure ``fallback`` holds the original summary."""
        summary = assessment.summary if isinstance(assessment, RiskAssessment) else assessment
        with session_scope(session):
            try:
                return Outcome.success(await self.translator.translate(summary, language))
            except TranslationError as e:
                log.warning("Translation failed: %s", e.reason)
                return Outcome.failure(e, fallback=summary)

    # ── Q&A ──────────────────────────────────────────────────────────

    async def ask(
        self,
        question: str,
        document_text: str,
        language: str | None = None,
        session: SessionContext | None = None,
    ) -> Outcome[str]:
        """Answer a question.

        Backend failures come back as the apology answer; a blank question
        is an ``empty-question`` failure.
        """
        with session_scope(session):
            try:
                answer = await self.qa.ask(
                    question, document_text, self._language(language, session)
                )
            except QAError as e:
                return Outcome.failure(e)
            return Outcome.success(answer)

    async def ask_turn(
        self,
        conversation: Conversation,
        question: str,
        document_text: str,
        language: str | None = None,
        session: SessionContext | None = None,
    ) -> Outcome[ConversationTurn]:
        """Like ``ask``, recording both turns in ``conversation`` on success."""
        with session_scope(session):
            try:
                turn = await self.qa.ask_turn(
                    conversation, question, document_text, self._language(language, session)
                )
            except QAError as e:
                return Outcome.failure(e)
            return Outcome.success(turn)

    # ── Report extraction ────────────────────────────────────────────

    async def extract_patient_details(
        self,
        source: TextSource | str,
        session: SessionContext | None = None,
    ) -> Outcome[PatientReportDetails]:
        """Prefill patient registration fields from a report PDF, image or text."""
        with session_scope(session):
            if isinstance(source, str):
                text = source
            else:
                try:
                    text = (await self.sources.extract(source)).content
                except ExtractionError as e:
                    return Outcome.failure(e)
            try:
                return Outcome.success(await self.reports.extract_details(text))
            except ReportExtractionError as e:
                log.warning("Report extraction failed: %s", e.reason)
                return Outcome.failure(e)

    @staticmethod
    def _language(language: str | None, session: SessionContext | None) -> str:
        if language:
            return language
        if session is not None:
            return session.language
        return ENGLISH.name
