"""Tests for patient detail extraction from medical reports."""

from __future__ import annotations

import json

import pytest

from consentlab.core.exceptions import BackendError, ReportExtractionError
from consentlab.inference.client import GenerationClient
from consentlab.services.report_extractor import ReportExtractor
from tests.fakes.fake_backend import FakeGenerationBackend

REPORT = "DISCHARGE SUMMARY\nName: Sita Devi, 45 F\nDiagnosis: Cholelithiasis\nPlan: Laparoscopic cholecystectomy"


@pytest.mark.asyncio
async def test_extracts_details():
    payload = {
        "patient_name": "Sita Devi",
        "age": 45,
        "gender": "Female",
        "disease": "Cholelithiasis",
        "treatment_course": "Laparoscopic cholecystectomy",
        "notes": "",
    }
    backend = FakeGenerationBackend().queue(f"```json\n{json.dumps(payload)}\n```")
    details = await ReportExtractor(GenerationClient(backend)).extract_details(REPORT)

    assert details.patient_name == "Sita Devi"
    assert details.age == 45
    assert details.as_form_fields()["age"] == "45"
    assert backend.calls[0].operation == "report_details"
    assert "Cholelithiasis" in backend.calls[0].prompt


@pytest.mark.asyncio
async def test_partial_payload_leaves_fields_empty():
    backend = FakeGenerationBackend().queue('{"patient_name": "Sita Devi"}')
    details = await ReportExtractor(GenerationClient(backend)).extract_details(REPORT)
    assert details.disease == ""
    assert details.age is None


@pytest.mark.asyncio
async def test_empty_report(fake_backend, client):
    with pytest.raises(ReportExtractionError) as exc_info:
        await ReportExtractor(client).extract_details("")
    assert exc_info.value.reason == "empty-input"
    assert fake_backend.calls == []


@pytest.mark.asyncio
async def test_unparseable_response():
    backend = FakeGenerationBackend().queue("No details found.")
    with pytest.raises(ReportExtractionError) as exc_info:
        await ReportExtractor(GenerationClient(backend)).extract_details(REPORT)
    assert exc_info.value.reason == "unparseable-response"


@pytest.mark.asyncio
async def test_backend_failure():
    backend = FakeGenerationBackend(error=BackendError("down"))
    with pytest.raises(ReportExtractionError) as exc_info:
        await ReportExtractor(GenerationClient(backend)).extract_details(REPORT)
    assert exc_info.value.reason == "backend-failure"
