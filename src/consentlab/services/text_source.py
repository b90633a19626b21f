"""Text source adapter: normalizes PDFs, scans and camera captures into ``DocumentText``.

PDFs are read from their embedded text layer only (no OCR fallback).
Images are sent to the generation backend with a text-recognition prompt.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from io import BytesIO

from PIL import Image, UnidentifiedImageError
from pypdf import PdfReader
from pypdf.errors import PyPdfError

from consentlab.core.exceptions import BackendError, ExtractionError
from consentlab.inference.client import GenerationClient
from consentlab.inference.protocols import InlineImage
from consentlab.models import DocumentOrigin, DocumentText
from consentlab.prompts.registry import get_prompt

log = logging.getLogger(__name__)

NO_TEXT_LAYER_MESSAGE = (
    "Could not extract text from PDF. Please ensure the PDF contains readable text."
)

_PIL_MIME_TYPES = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "WEBP": "image/webp",
    "GIF": "image/gif",
    "BMP": "image/bmp",
    "TIFF": "image/tiff",
}


@dataclass(frozen=True)
class PdfSource:
    """An uploaded PDF byte stream."""

    data: bytes
    filename: str = ""


@dataclass(frozen=True)
class ImageSource:
    """A still image from a scanner or camera capture."""

    data: bytes
    origin: DocumentOrigin = DocumentOrigin.CAPTURE
    mime_type: str = ""


TextSource = PdfSource | ImageSource


def sniff_image_mime(data: bytes) -> str:
    """Identify an image's MIME type with Pillow.

    Raises:
        ExtractionError: The bytes are not a decodable image.
    """
    try:
        with Image.open(BytesIO(data)) as img:
            img.verify()
            fmt = img.format or ""
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ExtractionError(
            "unreadable-image",
            "Could not read the image. Please retake the photo or upload a clearer scan.",
        ) from e
    mime = _PIL_MIME_TYPES.get(fmt.upper())
    if mime is None:
        raise ExtractionError("unreadable-image", f"Unsupported image format: {fmt or 'unknown'}")
    return mime


def read_pdf_text(data: bytes) -> str:
    """Concatenate the text layer of every page, separated by blank lines.

    Raises:
        ExtractionError: The PDF cannot be opened.
    """
    try:
        reader = PdfReader(BytesIO(data))
        parts: list[str] = []
        for page in reader.pages:
            text = page.extract_text() or ""
            if text.strip():
                parts.append(text.strip())
    except (PyPdfError, ValueError, OSError) as e:
        raise ExtractionError("unreadable-pdf", "The file is not a readable PDF.") from e
    return "\n\n".join(parts)


class TextSourceAdapter:
    """Turns a ``TextSource`` into non-empty ``DocumentText``."""

    def __init__(self, client: GenerationClient) -> None:
        self._client = client

    async def extract(self, source: TextSource) -> DocumentText:
        """Extract plain text from ``source``.

        Raises:
            ExtractionError: No readable text was found, or the source is unreadable.
        """
        if isinstance(source, PdfSource):
            return self._extract_pdf(source)
        if isinstance(source, ImageSource):
            return await self._extract_image(source)
        raise TypeError(f"Unsupported text source: {type(source).__name__}")

    @staticmethod
    def from_text(content: str, origin: DocumentOrigin = DocumentOrigin.UPLOAD) -> DocumentText:
        """Wrap text the caller already has, enforcing the non-empty invariant."""
        if not content or not content.strip():
            raise ExtractionError("empty-text", "Please provide the consent form text.")
        return DocumentText(content=content.strip(), origin=origin)

    def _extract_pdf(self, source: PdfSource) -> DocumentText:
        text = read_pdf_text(source.data)
        if not text.strip():
            log.info("PDF has no text layer", extra={"filename": source.filename})
            raise ExtractionError("no-text-layer", NO_TEXT_LAYER_MESSAGE)
        log.debug("Extracted %d chars from PDF", len(text))
        return DocumentText(content=text, origin=DocumentOrigin.UPLOAD)

    async def _extract_image(self, source: ImageSource) -> DocumentText:
        mime_type = source.mime_type or sniff_image_mime(source.data)
        try:
            text = await self._client.generate(
                get_prompt("extraction", "IMAGE_TEXT_PROMPT"),
                inline_image=InlineImage(data=source.data, mime_type=mime_type),
                operation="image_text",
            )
        except BackendError as e:
            log.error("Image text recognition failed: %s", e)
            raise ExtractionError(
                "backend-failure", "Failed to read the consent form image. Please try again."
            ) from e

        if not text.strip():
            raise ExtractionError(
                "no-text-recognized",
                "No text was found in the image. Please retake the photo with the form in focus.",
            )
        return DocumentText(content=text.strip(), origin=source.origin)
