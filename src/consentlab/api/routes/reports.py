"""Patient report extraction endpoint (registration prefill)."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from consentlab.api.routes._documents import DocumentPayload

router = APIRouter(tags=["reports"])


class ReportExtractRequest(BaseModel):
    """Either plain ``text`` or an uploaded ``document``."""

    text: str | None = None
    document: DocumentPayload | None = None


class ReportExtractResponse(BaseModel):
    patient_name: str = ""
    age: str = ""
    gender: str = ""
    disease: str = ""
    treatment_course: str = ""
    notes: str = ""


@router.post("/reports/extract", response_model=ReportExtractResponse)
async def extract_report(request: ReportExtractRequest, req: Request) -> ReportExtractResponse:
    """Extract patient details; fields the report lacks come back empty."""
    if request.document is not None:
        source = request.document.to_source(req.app.state.settings.api.max_upload_bytes)
    elif request.text is not None:
        source = request.text
    else:
        raise HTTPException(status_code=400, detail="Provide either text or document")

    outcome = await req.app.state.pipeline.extract_patient_details(source)
    return ReportExtractResponse(**outcome.unwrap().as_form_fields())
