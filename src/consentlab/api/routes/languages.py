"""Supported language listing."""

from __future__ import annotations

from fastapi import APIRouter

from consentlab.languages import SUPPORTED_LANGUAGES

router = APIRouter(tags=["languages"])


@router.get("/languages")
async def languages() -> list[dict[str, str]]:
    return [
        {"code": lang.code, "name": lang.name, "label": lang.label}
        for lang in SUPPORTED_LANGUAGES
    ]
