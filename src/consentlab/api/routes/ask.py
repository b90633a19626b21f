"""Grounded Q&A endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Request
from pydantic import BaseModel

from consentlab.languages import ENGLISH

router = APIRouter(tags=["qa"])


class AskRequest(BaseModel):
    question: str
    document_text: str
    language: str = ENGLISH.name


class AskResponse(BaseModel):
    role: str = "assistant"
    answer: str


@router.post("/ask", response_model=AskResponse)
async def ask(request: AskRequest, req: Request) -> AskResponse:
    """Answer a patient question from the consent form text only."""
    outcome = await req.app.state.pipeline.ask(
        request.question, request.document_text, request.language
    )
    return AskResponse(answer=outcome.unwrap())
