"""Consent analysis endpoints: raw text or an uploaded PDF / image."""

from __future__ import annotations

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from consentlab.api.routes._documents import DocumentPayload
from consentlab.models import ConsentAnalysis, DocumentOrigin

router = APIRouter(tags=["analysis"])


class AnalyzeTextRequest(BaseModel):
    """Consent text to analyze."""

    text: str
    origin: DocumentOrigin = DocumentOrigin.UPLOAD


class AnalyzeResponse(BaseModel):
    """Risk assessment plus the text it was derived from."""

    summary: str
    risk_level: str
    risk_factors: list[str] = Field(default_factory=list)
    content: str
    origin: str
    analyzed_at: str


def _to_response(analysis: ConsentAnalysis) -> AnalyzeResponse:
    return AnalyzeResponse(
        summary=analysis.assessment.summary,
        risk_level=analysis.assessment.risk_level.value,
        risk_factors=list(analysis.assessment.risk_factors),
        content=analysis.document.content,
        origin=analysis.document.origin.value,
        analyzed_at=analysis.analyzed_at.isoformat(),
    )


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_text(request: AnalyzeTextRequest, req: Request) -> AnalyzeResponse:
    """Analyze consent text into a summary, risk level and risk factors."""
    outcome = await req.app.state.pipeline.analyze_text(request.text, origin=request.origin)
    return _to_response(outcome.unwrap())


@router.post("/analyze/document", response_model=AnalyzeResponse)
async def analyze_document(request: DocumentPayload, req: Request) -> AnalyzeResponse:
    """Extract text from a PDF or image, then analyze it."""
    source = request.to_source(req.app.state.settings.api.max_upload_bytes)
    outcome = await req.app.state.pipeline.process_document(source)
    return _to_response(outcome.unwrap())
