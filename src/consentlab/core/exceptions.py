"""Exception hierarchy for consentlab.

Pipeline errors carry a machine-readable ``reason`` and a human ``message``
suitable for showing to the end user.
"""

from __future__ import annotations


class ConsentLabError(Exception):
    """Base exception for all consentlab errors."""


class BackendError(ConsentLabError):
    """Raised when a generation call to the AI backend fails."""


class BackendTimeoutError(BackendError):
    """The generation call did not complete within the configured timeout."""


class JSONParseError(ConsentLabError):
    """LLM response did not contain a parseable JSON object."""

    def __init__(self, message: str, raw_response: str = "") -> None:
        super().__init__(message)
        self.raw_response = raw_response


class PipelineError(ConsentLabError):
    """A pipeline step failed with a typed reason."""

    default_message = "The request could not be completed. Please try again."

    def __init__(self, reason: str, message: str | None = None) -> None:
        self.reason = reason
        self.message = message or self.default_message
        super().__init__(f"{reason}: {self.message}")


class ExtractionError(PipelineError):
    """No readable text could be obtained from the source."""

    default_message = "Could not read any text from the document."


class AnalysisError(PipelineError):
    """The document could not be analyzed into a risk assessment."""

    default_message = "Failed to analyze consent form. Please try again."

    def __init__(self, reason: str, message: str | None = None, raw_response: str = "") -> None:
        super().__init__(reason, message)
        self.raw_response = raw_response


class TranslationError(PipelineError):
    """The summary could not be translated."""

    default_message = "Failed to translate. Please try again."


class QAError(PipelineError):
    """The question could not be submitted."""

    default_message = "Please enter a question."


class ReportExtractionError(PipelineError):
    """Patient details could not be parsed from a medical report."""

    default_message = "Could not parse patient details from report."


class ConsentRecordError(ConsentLabError):
    """A consent record violates its signature invariants."""


class SignatureError(ConsentLabError):
    """Identity details for a signing ceremony are invalid."""


class SessionClosedError(ConsentLabError):
    """A pipeline call was made with a session that has already ended."""


__all__ = [
    "ConsentLabError",
    "BackendError",
    "BackendTimeoutError",
    "JSONParseError",
    "PipelineError",
    "ExtractionError",
    "AnalysisError",
    "TranslationError",
    "QAError",
    "ReportExtractionError",
    "ConsentRecordError",
    "SignatureError",
    "SessionClosedError",
]
