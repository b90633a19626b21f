"""Summary translation endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from consentlab.languages import resolve_language

router = APIRouter(tags=["translation"])


class TranslateRequest(BaseModel):
    summary: str
    language: str


class TranslateResponse(BaseModel):
    language: str
    text: str


@router.post("/translate", response_model=TranslateResponse)
async def translate(request: TranslateRequest, req: Request) -> TranslateResponse | JSONResponse:
    """Translate a summary.

    On failure the response carries ``fallback`` (the untranslated summary)
    so the client can keep showing the last good text.
    """
    outcome = await req.app.state.pipeline.translate_summary(request.summary, request.language)
    if not outcome.ok:
        err = outcome.error
        return JSONResponse(
            status_code=502 if err.reason == "backend-failure" else 422,
            content={
                "error": err.message,
                "type": "translation_error",
                "reason": err.reason,
                "fallback": outcome.fallback,
            },
        )
    return TranslateResponse(language=resolve_language(request.language).name, text=outcome.value)
