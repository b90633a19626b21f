"""Shared request model for base64-encoded document uploads."""

from __future__ import annotations

import base64
import binascii
from typing import Literal

from fastapi import HTTPException
from pydantic import BaseModel

from consentlab.models import DocumentOrigin
from consentlab.services.text_source import ImageSource, PdfSource, TextSource


class DocumentPayload(BaseModel):
    """A PDF or image sent as base64."""

    kind: Literal["pdf", "image"]
    content_base64: str
    origin: DocumentOrigin | None = None
    mime_type: str = ""
    filename: str = ""

    def to_source(self, max_bytes: int) -> TextSource:
        try:
            data = base64.b64decode(self.content_base64, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise HTTPException(status_code=400, detail="content_base64 is not valid base64") from exc
        if not data:
            raise HTTPException(status_code=400, detail="Document is empty")
        if len(data) > max_bytes:
            raise HTTPException(status_code=413, detail=f"Document exceeds {max_bytes} bytes")

        if self.kind == "pdf":
            return PdfSource(data=data, filename=self.filename)
        origin = self.origin if self.origin in (DocumentOrigin.SCAN, DocumentOrigin.CAPTURE) else DocumentOrigin.CAPTURE
        return ImageSource(data=data, origin=origin, mime_type=self.mime_type)
