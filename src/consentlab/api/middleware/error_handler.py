"""Global exception handlers mapping pipeline exceptions to HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from consentlab.core.exceptions import (
    AnalysisError,
    ConsentLabError,
    ExtractionError,
    PipelineError,
    QAError,
    ReportExtractionError,
    SessionClosedError,
    TranslationError,
)

log = logging.getLogger(__name__)

_BACKEND_REASONS = frozenset({"backend-failure"})


def _pipeline_response(exc: PipelineError, error_type: str) -> JSONResponse:
    status = 502 if exc.reason in _BACKEND_REASONS else 422
    content: dict[str, object] = {"error": exc.message, "type": error_type, "reason": exc.reason}
    return JSONResponse(status_code=status, content=content)


def register_error_handlers(app: FastAPI) -> None:
    """Register exception-to-HTTP-status mappings."""

    @app.exception_handler(ExtractionError)
    async def handle_extraction_error(request: Request, exc: ExtractionError) -> JSONResponse:
        return _pipeline_response(exc, "extraction_error")

    @app.exception_handler(AnalysisError)
    async def handle_analysis_error(request: Request, exc: AnalysisError) -> JSONResponse:
        return _pipeline_response(exc, "analysis_error")

    @app.exception_handler(TranslationError)
    async def handle_translation_error(request: Request, exc: TranslationError) -> JSONResponse:
        return _pipeline_response(exc, "translation_error")

    @app.exception_handler(QAError)
    async def handle_qa_error(request: Request, exc: QAError) -> JSONResponse:
        return _pipeline_response(exc, "qa_error")

    @app.exception_handler(ReportExtractionError)
    async def handle_report_error(request: Request, exc: ReportExtractionError) -> JSONResponse:
        return _pipeline_response(exc, "report_extraction_error")

    @app.exception_handler(SessionClosedError)
    async def handle_session_closed(request: Request, exc: SessionClosedError) -> JSONResponse:
        return JSONResponse(status_code=401, content={"error": str(exc), "type": "session_closed"})

    @app.exception_handler(ConsentLabError)
    async def handle_generic_error(request: Request, exc: ConsentLabError) -> JSONResponse:
        log.error("Unhandled consentlab error: %s", exc)
        return JSONResponse(status_code=500, content={"error": str(exc), "type": "consentlab_error"})
