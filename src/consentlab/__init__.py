"""consentlab: consent form analysis, translation and grounded Q&A.

Usage::

    from consentlab import AppSettings, ConsentPipeline, PdfSource

    pipeline = ConsentPipeline.from_settings(AppSettings())
    outcome = await pipeline.process_document(PdfSource(pdf_bytes))
    if outcome.ok:
        print(outcome.value.assessment.risk_level)
"""

from __future__ import annotations

from consentlab.core.config import AppSettings
from consentlab.core.exceptions import (
    AnalysisError,
    BackendError,
    ConsentLabError,
    ExtractionError,
    QAError,
    ReportExtractionError,
    TranslationError,
)
from consentlab.core.types import Outcome
from consentlab.inference import GenerationClient, IGenerationBackend, LiteLLMBackend
from consentlab.languages import SUPPORTED_LANGUAGES, resolve_language
from consentlab.models import (
    ConsentAnalysis,
    ConsentRecord,
    Conversation,
    ConversationTurn,
    DocumentOrigin,
    DocumentText,
    PatientReportDetails,
    RiskAssessment,
    RiskLevel,
)
from consentlab.services import (
    ConsentPipeline,
    DocumentAnalyzer,
    GroundedQAEngine,
    ImageSource,
    PdfSource,
    ReportExtractor,
    TextSourceAdapter,
    Translator,
)
from consentlab.session import SessionContext, SessionRole

__all__ = [
    "AppSettings",
    "Outcome",
    # Errors
    "ConsentLabError",
    "BackendError",
    "ExtractionError",
    "AnalysisError",
    "TranslationError",
    "QAError",
    "ReportExtractionError",
    # Models
    "DocumentOrigin",
    "DocumentText",
    "RiskLevel",
    "RiskAssessment",
    "ConsentRecord",
    "ConsentAnalysis",
    "Conversation",
    "ConversationTurn",
    "PatientReportDetails",
    "SessionContext",
    "SessionRole",
    "SUPPORTED_LANGUAGES",
    "resolve_language",
    # Inference
    "GenerationClient",
    "IGenerationBackend",
    "LiteLLMBackend",
    # Services
    "ConsentPipeline",
    "TextSourceAdapter",
    "DocumentAnalyzer",
    "Translator",
    "GroundedQAEngine",
    "ReportExtractor",
    "PdfSource",
    "ImageSource",
]
