"""Pipeline services: text sources, analysis, translation, Q&A and records."""

from __future__ import annotations

from consentlab.services.analyzer import DocumentAnalyzer
from consentlab.services.consent_records import (
    assemble_consent_record,
    generate_patient_id,
    issue_signature_token,
    sign_consent,
    validate_otp,
)
from consentlab.services.pipeline import ConsentPipeline
from consentlab.services.qa import APOLOGY_MESSAGE, GroundedQAEngine
from consentlab.services.report_extractor import ReportExtractor
from consentlab.services.text_source import ImageSource, PdfSource, TextSourceAdapter
from consentlab.services.translator import Translator

__all__ = [
    "APOLOGY_MESSAGE",
    "ConsentPipeline",
    "DocumentAnalyzer",
    "GroundedQAEngine",
    "ImageSource",
    "PdfSource",
    "ReportExtractor",
    "TextSourceAdapter",
    "Translator",
    "assemble_consent_record",
    "generate_patient_id",
    "issue_signature_token",
    "sign_consent",
    "validate_otp",
]
