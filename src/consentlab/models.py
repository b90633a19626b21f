"""Pydantic data models for consentlab.

Values that flow between pipeline stages (``DocumentText``,
``RiskAssessment``, ``ConversationTurn``) are frozen; a new document
produces a new assessment rather than mutating an old one.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

log = logging.getLogger(__name__)


# ── Document text ────────────────────────────────────────────────────


class DocumentOrigin(str, Enum):
    """Where a consent form's text came from."""

    UPLOAD = "upload"
    SCAN = "scan"
    CAPTURE = "capture"


class DocumentText(BaseModel):
    """Raw extracted text of a consent form. Never empty."""

    model_config = ConfigDict(frozen=True)

    content: str
    origin: DocumentOrigin = DocumentOrigin.UPLOAD

    @field_validator("content")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("document text must not be empty")
        return value


# ── Risk assessment ──────────────────────────────────────────────────


class RiskLevel(str, Enum):
    """Coarse three-way classification of a consent form's overall risk."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, value: Any) -> RiskLevel:
        """Canonicalize ``value`` (trimmed, case-insensitive) to a member.

        Raises:
            ValueError: If the value is not one of low / medium / high.
        """
        if isinstance(value, RiskLevel):
            return value
        if not isinstance(value, str):
            raise ValueError(f"risk level must be a string, got {type(value).__name__}")
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"unknown risk level {value!r}") from None


class RiskAssessment(BaseModel):
    """Structured output of document analysis."""

    model_config = ConfigDict(frozen=True)

    summary: str
    risk_level: RiskLevel
    risk_factors: list[str] = Field(default_factory=list)

    @field_validator("risk_level", mode="before")
    @classmethod
    def _canonical_level(cls, value: Any) -> RiskLevel:
        return RiskLevel.parse(value)

    @model_validator(mode="after")
    def _flag_empty_factors(self) -> RiskAssessment:
        if not self.risk_factors:
            log.warning("Risk assessment has no risk factors")
        return self

    @property
    def has_risk_factors(self) -> bool:
        return bool(self.risk_factors)


# ── Consent record (external store shape) ────────────────────────────


class ConsentRecord(BaseModel):
    """A consent form as persisted by the external record store."""

    model_config = ConfigDict(frozen=True)

    consent_id: Optional[str] = None
    patient_id: str
    form_type: str
    content: str
    summary: str
    risk_level: RiskLevel
    risk_factors: list[str] = Field(default_factory=list)
    doctor_signature: str
    patient_signature: Optional[str] = None
    signed_at: Optional[datetime] = None

    @field_validator("risk_level", mode="before")
    @classmethod
    def _canonical_level(cls, value: Any) -> RiskLevel:
        return RiskLevel.parse(value)

    @field_validator("doctor_signature")
    @classmethod
    def _doctor_signed(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("doctor signature is required")
        return value

    @model_validator(mode="after")
    def _signature_pairing(self) -> ConsentRecord:
        if (self.patient_signature is None) != (self.signed_at is None):
            raise ValueError("patient_signature and signed_at must both be set or both be empty")
        return self

    @property
    def is_signed(self) -> bool:
        return self.patient_signature is not None


# ── Conversation ─────────────────────────────────────────────────────


class ConversationRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ConversationTurn(BaseModel):
    """One message in an interactive Q&A session. Never persisted."""

    model_config = ConfigDict(frozen=True)

    role: ConversationRole
    content: str


class Conversation(BaseModel):
    """Caller-side accumulation of turns for a single session."""

    turns: list[ConversationTurn] = Field(default_factory=list)

    def add(self, role: ConversationRole, content: str) -> ConversationTurn:
        turn = ConversationTurn(role=role, content=content)
        self.turns.append(turn)
        return turn

    def clear(self) -> None:
        self.turns.clear()

    def __len__(self) -> int:
        return len(self.turns)


# ── Patient report ───────────────────────────────────────────────────

_AGE_RE = re.compile(r"\d{1,3}")


class PatientReportDetails(BaseModel):
    """Patient details parsed out of a medical report.

    All text fields default to empty strings so partially extracted reports
    can still prefill a registration form.
    """

    patient_name: str = ""
    age: Optional[int] = None
    gender: str = ""
    disease: str = ""
    treatment_course: str = ""
    notes: str = ""

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> PatientReportDetails:
        """Build from a loosely-typed LLM payload. Never raises on bad fields."""

        def _text(key: str) -> str:
            raw = payload.get(key)
            if raw is None:
                return ""
            if isinstance(raw, list):
                return ", ".join(str(item) for item in raw)
            return str(raw).strip()

        return cls(
            patient_name=_text("patient_name"),
            age=_coerce_age(payload.get("age")),
            gender=_text("gender"),
            disease=_text("disease"),
            treatment_course=_text("treatment_course"),
            notes=_text("notes"),
        )

    def as_form_fields(self) -> dict[str, str]:
        """String-only view for form population (age rendered as text)."""
        data = self.model_dump()
        data["age"] = "" if self.age is None else str(self.age)
        return data


def _coerce_age(raw: Any) -> int | None:
    """Coerce ``45``, ``"45"``, ``"45 years"`` to an int; anything else to None."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if 0 <= raw < 150 else None
    if isinstance(raw, float):
        return int(raw) if 0 <= raw < 150 else None
    m = _AGE_RE.search(str(raw))
    if not m:
        return None
    age = int(m.group(0))
    return age if age < 150 else None


# ── Analysis result bundle ───────────────────────────────────────────


class ConsentAnalysis(BaseModel):
    """A document together with its assessment, as handed to the UI."""

    model_config = ConfigDict(frozen=True)

    document: DocumentText
    assessment: RiskAssessment
    analyzed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
