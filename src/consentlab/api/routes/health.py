"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe: 200 whenever the process is up."""
    return {"status": "ok"}


@router.get("/ready")
async def ready(req: Request) -> dict[str, str]:
    """Readiness probe. Reports the configured generation model."""
    return {"status": "ready", "model": req.app.state.settings.llm.model}
