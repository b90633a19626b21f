"""Document analyzer: consent text → validated ``RiskAssessment``."""

from __future__ import annotations

import logging
from typing import Any

from consentlab.core.exceptions import AnalysisError, BackendError, JSONParseError
from consentlab.core.types import JsonDict
from consentlab.inference.client import GenerationClient
from consentlab.models import RiskAssessment, RiskLevel
from consentlab.parsing import extract_json_object
from consentlab.prompts.registry import get_prompt

log = logging.getLogger(__name__)


class DocumentAnalyzer:
    """Single-shot structured extraction of summary, risk level and risk factors.

    One generation call per ``analyze``; failures are raised to the caller
    and never retried here.
    """

    def __init__(self, client: GenerationClient, *, max_document_chars: int = 30_000) -> None:
        self._client = client
        self._max_document_chars = max_document_chars

    async def analyze(self, text: str) -> RiskAssessment:
        """Analyze consent form ``text``.

        Raises:
            AnalysisError: with ``reason`` one of ``empty-input``,
                ``backend-failure``, ``unparseable-response``,
                ``invalid-schema`` or ``invalid-risk-level``.
        """
        if not text or not text.strip():
            raise AnalysisError("empty-input", "There is no consent form text to analyze.")

        document = text.strip()
        if len(document) > self._max_document_chars:
            log.warning(
                "Consent text truncated for analysis",
                extra={"chars": len(document), "limit": self._max_document_chars},
            )
            document = document[: self._max_document_chars]

        prompt = get_prompt("analysis", "ANALYSIS_PROMPT").format(document=document)
        try:
            response = await self._client.generate(prompt, operation="analysis")
        except BackendError as e:
            log.error("Consent analysis call failed: %s", e)
            raise AnalysisError("backend-failure") from e

        return self.parse_response(response)

    @classmethod
    def parse_response(cls, response: str) -> RiskAssessment:
        """Validate a raw model response into a ``RiskAssessment``."""
        try:
            payload = extract_json_object(response)
        except JSONParseError as e:
            raise AnalysisError("unparseable-response", raw_response=response) from e

        summary = payload.get("summary")
        if not isinstance(summary, str) or not summary.strip():
            raise AnalysisError("invalid-schema", raw_response=response)

        raw_level = payload.get("riskLevel", payload.get("risk_level"))
        try:
            level = RiskLevel.parse(raw_level)
        except ValueError as e:
            log.warning("Rejected risk level %r", raw_level)
            raise AnalysisError("invalid-risk-level", raw_response=response) from e

        factors = cls._coerce_factors(payload)
        if factors is None:
            raise AnalysisError("invalid-schema", raw_response=response)

        return RiskAssessment(summary=summary.strip(), risk_level=level, risk_factors=factors)

    @staticmethod
    def _coerce_factors(payload: JsonDict) -> list[str] | None:
        """Return risk factors as non-blank strings, or None if not a list."""
        raw: Any = payload.get("riskFactors", payload.get("risk_factors", []))
        if raw is None:
            return []
        if not isinstance(raw, list):
            return None
        factors: list[str] = []
        for item in raw:
            if item is None:
                continue
            text = item if isinstance(item, str) else str(item)
            if text.strip():
                factors.append(text.strip())
        return factors
