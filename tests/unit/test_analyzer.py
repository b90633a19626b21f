"""Tests for DocumentAnalyzer: prompt dispatch and response validation."""

from __future__ import annotations

import json

import pytest

from consentlab.core.exceptions import AnalysisError, BackendError
from consentlab.inference.client import GenerationClient
from consentlab.models import RiskLevel
from consentlab.services.analyzer import DocumentAnalyzer
from tests.fakes.fake_backend import FakeGenerationBackend


def _analyzer(*responses, **kwargs) -> tuple[DocumentAnalyzer, FakeGenerationBackend]:
    backend = FakeGenerationBackend().queue(*responses)
    return DocumentAnalyzer(GenerationClient(backend), **kwargs), backend


class TestAnalyze:
    @pytest.mark.asyncio
    async def test_valid_response(self, sample_consent_text, analysis_json):
        analyzer, backend = _analyzer(analysis_json)
        assessment = await analyzer.analyze(sample_consent_text)

        assert assessment.risk_level is RiskLevel.MEDIUM
        assert assessment.risk_factors == ["Bleeding", "Infection", "Bile duct injury"]
        assert len(backend.calls) == 1
        assert backend.calls[0].operation == "analysis"
        assert "gallbladder" in backend.calls[0].prompt

    @pytest.mark.asyncio
    async def test_empty_input_never_calls_backend(self):
        analyzer, backend = _analyzer()
        with pytest.raises(AnalysisError) as exc_info:
            await analyzer.analyze("  \n ")
        assert exc_info.value.reason == "empty-input"
        assert backend.calls == []

    @pytest.mark.asyncio
    async def test_backend_failure(self, sample_consent_text):
        analyzer, _ = _analyzer(BackendError("503"))
        with pytest.raises(AnalysisError) as exc_info:
            await analyzer.analyze(sample_consent_text)
        assert exc_info.value.reason == "backend-failure"
        assert exc_info.value.message == "Failed to analyze consent form. Please try again."

    @pytest.mark.asyncio
    async def test_long_document_truncated(self):
        analyzer, backend = _analyzer('{"summary": "s", "riskLevel": "low", "riskFactors": []}', max_document_chars=1000)
        await analyzer.analyze("A" * 1000 + "TAIL_MARKER")
        assert "TAIL_MARKER" not in backend.calls[0].prompt

    @pytest.mark.asyncio
    async def test_same_text_twice_calls_backend_twice(self, sample_consent_text, analysis_json):
        analyzer, backend = _analyzer(analysis_json, analysis_json)
        await analyzer.analyze(sample_consent_text)
        await analyzer.analyze(sample_consent_text)
        assert len(backend.calls) == 2


class TestParseResponse:
    def test_fenced_json_with_surrounding_prose(self):
        response = 'Sure!\n```json\n{"summary": "Plain summary", "riskLevel": "HIGH", "riskFactors": ["Stroke"]}\n```'
        assessment = DocumentAnalyzer.parse_response(response)
        assert assessment.summary == "Plain summary"
        assert assessment.risk_level is RiskLevel.HIGH

    def test_no_json(self):
        with pytest.raises(AnalysisError) as exc_info:
            DocumentAnalyzer.parse_response("I am unable to analyze this document.")
        assert exc_info.value.reason == "unparseable-response"
        assert exc_info.value.raw_response.startswith("I am unable")

    def test_nested_example_inside_malformed_payload_is_not_used(self):
        response = (
            '{"summary": "Outer", riskLevel: "low", "riskFactors": [], '
            '"example": {"summary": "inner example", "riskLevel": "high", "riskFactors": []}}'
        )
        with pytest.raises(AnalysisError) as exc_info:
            DocumentAnalyzer.parse_response(response)
        assert exc_info.value.reason == "unparseable-response"

    def test_out_of_enum_risk_level(self):
        response = json.dumps({"summary": "s", "riskLevel": "critical", "riskFactors": ["x"]})
        with pytest.raises(AnalysisError) as exc_info:
            DocumentAnalyzer.parse_response(response)
        assert exc_info.value.reason == "invalid-risk-level"

    def test_missing_risk_level(self):
        with pytest.raises(AnalysisError) as exc_info:
            DocumentAnalyzer.parse_response('{"summary": "s", "riskFactors": []}')
        assert exc_info.value.reason == "invalid-risk-level"

    @pytest.mark.parametrize("payload", [{"riskLevel": "low"}, {"summary": "  ", "riskLevel": "low"}, {"summary": 5, "riskLevel": "low"}])
    def test_missing_summary(self, payload):
        with pytest.raises(AnalysisError) as exc_info:
            DocumentAnalyzer.parse_response(json.dumps(payload))
        assert exc_info.value.reason == "invalid-schema"

    def test_risk_factors_not_a_list(self):
        response = json.dumps({"summary": "s", "riskLevel": "low", "riskFactors": "Bleeding"})
        with pytest.raises(AnalysisError) as exc_info:
            DocumentAnalyzer.parse_response(response)
        assert exc_info.value.reason == "invalid-schema"

    def test_risk_factors_coerced_and_blanks_dropped(self):
        response = json.dumps({"summary": "s", "riskLevel": "low", "riskFactors": [" Bleeding ", "", None, 3]})
        assert DocumentAnalyzer.parse_response(response).risk_factors == ["Bleeding", "3"]

    def test_empty_risk_factors_accepted(self):
        response = json.dumps({"summary": "s", "riskLevel": "low", "riskFactors": []})
        assessment = DocumentAnalyzer.parse_response(response)
        assert not assessment.has_risk_factors

    def test_snake_case_keys_accepted(self):
        response = json.dumps({"summary": "s", "risk_level": "Medium", "risk_factors": ["x"]})
        assert DocumentAnalyzer.parse_response(response).risk_level is RiskLevel.MEDIUM
