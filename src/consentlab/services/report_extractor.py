"""Patient detail extraction from medical reports, used to prefill registration."""

from __future__ import annotations

import logging

from consentlab.core.exceptions import BackendError, JSONParseError, ReportExtractionError
from consentlab.inference.client import GenerationClient
from consentlab.models import PatientReportDetails
from consentlab.parsing import extract_json_object
from consentlab.prompts.registry import get_prompt

log = logging.getLogger(__name__)


class ReportExtractor:
    """Parses ``patient_name, age, gender, disease, treatment_course, notes``."""

    def __init__(self, client: GenerationClient, *, max_document_chars: int = 30_000) -> None:
        self._client = client
        self._max_document_chars = max_document_chars

    async def extract_details(self, report_text: str) -> PatientReportDetails:
        """Extract patient details. Missing fields come back as empty strings.

        Raises:
            ReportExtractionError: ``empty-input``, ``backend-failure`` or
                ``unparseable-response``.
        """
        if not report_text or not report_text.strip():
            raise ReportExtractionError("empty-input", "The report contains no readable text.")

        prompt = get_prompt("extraction", "REPORT_DETAILS_PROMPT").format(
            report=report_text.strip()[: self._max_document_chars]
        )
        try:
            response = await self._client.generate(prompt, operation="report_details")
        except BackendError as e:
            log.error("Report extraction call failed: %s", e)
            raise ReportExtractionError("backend-failure", "Failed to extract patient details.") from e

        try:
            payload = extract_json_object(response)
        except JSONParseError as e:
            raise ReportExtractionError("unparseable-response") from e

        details = PatientReportDetails.from_payload(payload)
        missing = [k for k, v in details.as_form_fields().items() if not v]
        if missing:
            log.info("Report extraction left fields empty", extra={"fields": missing})
        return details
