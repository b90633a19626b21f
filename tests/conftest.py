"""Shared fixtures for consentlab tests."""

from __future__ import annotations

import json
from io import BytesIO

import pytest
from PIL import Image
from pypdf import PdfWriter

from consentlab.core.config import AppSettings, LLMConfig
from consentlab.hooks.usage import reset_usage
from consentlab.inference.client import GenerationClient
from consentlab.prompts.registry import reset_overrides
from consentlab.services.pipeline import ConsentPipeline
from tests.fakes.fake_backend import FakeGenerationBackend

SAMPLE_CONSENT_TEXT = """INFORMED CONSENT FOR LAPAROSCOPIC CHOLECYSTECTOMY
Patient: Ramesh Kumar   Age: 52
I authorize Dr. Anjali Rao to perform removal of the gallbladder under general anesthesia.
Risks explained to me include bleeding, infection, injury to the bile duct, and a possible
conversion to open surgery. Anesthesia risks include allergic reaction and breathing problems.
I understand that I may withdraw consent at any time before the procedure.
"""

SAMPLE_ANALYSIS_JSON = json.dumps(
    {
        "summary": "You are agreeing to keyhole surgery to remove your gallbladder.",
        "riskLevel": "medium",
        "riskFactors": ["Bleeding", "Infection", "Bile duct injury"],
    }
)


@pytest.fixture(autouse=True)
def _reset_state() -> None:  # type: ignore[misc]
    """Fresh usage counters and prompt templates for every test."""
    reset_usage()
    reset_overrides()
    yield  # type: ignore[misc]
    reset_overrides()


@pytest.fixture
def settings() -> AppSettings:
    """Test settings pointing at a fake model (never contacted)."""
    return AppSettings(llm=LLMConfig(provider="gemini", api_key="test-key", model="gemini/test-model"))


@pytest.fixture
def fake_backend() -> FakeGenerationBackend:
    return FakeGenerationBackend()


@pytest.fixture
def client(fake_backend: FakeGenerationBackend) -> GenerationClient:
    return GenerationClient(fake_backend, timeout=5.0)


@pytest.fixture
def pipeline(settings: AppSettings, fake_backend: FakeGenerationBackend) -> ConsentPipeline:
    return ConsentPipeline.from_settings(settings, backend=fake_backend)


@pytest.fixture
def sample_consent_text() -> str:
    return SAMPLE_CONSENT_TEXT


@pytest.fixture
def analysis_json() -> str:
    return SAMPLE_ANALYSIS_JSON


@pytest.fixture
def blank_pdf_bytes() -> bytes:
    """A valid one-page PDF with no text layer (what a scanned upload looks like)."""
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buf = BytesIO()
    writer.write(buf)
    return buf.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    """A tiny real PNG image."""
    buf = BytesIO()
    Image.new("RGB", (8, 8), color="white").save(buf, format="PNG")
    return buf.getvalue()


def make_text_pdf(lines: list[str]) -> bytes:
    """Build a one-page PDF whose text layer holds ``lines`` (Helvetica, ASCII only)."""
    escaped = [line.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)") for line in lines]
    stream = "BT /F1 12 Tf 14 TL 72 720 Td " + " ".join(f"({line}) Tj T*" for line in escaped) + " ET"
    objects = [
        "<< /Type /Catalog /Pages 2 0 R >>",
        "<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R "
        "/Resources << /Font << /F1 5 0 R >> >> >>",
        f"<< /Length {len(stream)} >>\nstream\n{stream}\nendstream",
        "<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    out = BytesIO()
    out.write(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(out.tell())
        out.write(f"{number} 0 obj\n{body}\nendobj\n".encode("latin-1"))
    xref_at = out.tell()
    out.write(f"xref\n0 {len(objects) + 1}\n0000000000 65535 f \n".encode("latin-1"))
    for offset in offsets:
        out.write(f"{offset:010d} 00000 n \n".encode("latin-1"))
    out.write(
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref_at}\n%%EOF\n".encode("latin-1")
    )
    return out.getvalue()


@pytest.fixture
def consent_pdf_bytes() -> bytes:
    return make_text_pdf(
        [
            "INFORMED CONSENT FOR LAPAROSCOPIC CHOLECYSTECTOMY",
            "Risks include bleeding, infection and bile duct injury.",
        ]
    )
