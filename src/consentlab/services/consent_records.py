"""Consent record assembly and signing at the external-store boundary.

These helpers build and transition ``ConsentRecord`` values; persisting
them is the caller's job.
"""

from __future__ import annotations

import re
import secrets
from datetime import datetime, timezone

from consentlab.core.exceptions import ConsentRecordError, SignatureError
from consentlab.models import ConsentRecord, DocumentText, RiskAssessment

_PATIENT_ID_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
PATIENT_ID_PREFIX = "CNLB-"

_AADHAAR_RE = re.compile(r"\d{12}")
_OTP_RE = re.compile(r"\d{6}")


def generate_patient_id() -> str:
    """Return a new patient identifier like ``CNLB-7K2Q9XAB``."""
    return PATIENT_ID_PREFIX + "".join(secrets.choice(_PATIENT_ID_ALPHABET) for _ in range(8))


def assemble_consent_record(
    *,
    patient_id: str,
    form_type: str,
    document: DocumentText,
    assessment: RiskAssessment,
    doctor_signature: str,
) -> ConsentRecord:
    """Combine a document and its assessment with identity metadata.

    The record starts unsigned by the patient.
    """
    if not doctor_signature or not doctor_signature.strip():
        raise ConsentRecordError("A doctor signature is required to create a consent form")
    return ConsentRecord(
        patient_id=patient_id,
        form_type=form_type,
        content=document.content,
        summary=assessment.summary,
        risk_level=assessment.risk_level,
        risk_factors=list(assessment.risk_factors),
        doctor_signature=doctor_signature.strip(),
    )


def sign_consent(
    record: ConsentRecord,
    signature: str,
    signed_at: datetime | None = None,
) -> ConsentRecord:
    """Return a copy of ``record`` carrying the patient signature and timestamp."""
    if record.consent_id is None:
        raise ConsentRecordError("This consent form cannot be signed digitally at this time.")
    if record.is_signed:
        raise ConsentRecordError(f"Consent {record.consent_id} is already signed")
    if not signature or not signature.strip():
        raise ConsentRecordError("Signature token is empty")
    return record.model_copy(
        update={
            "patient_signature": signature.strip(),
            "signed_at": signed_at or datetime.now(timezone.utc),
        }
    )


def validate_otp(otp: str) -> str:
    """Check a 6-digit one-time password."""
    otp = (otp or "").strip()
    if not _OTP_RE.fullmatch(otp):
        raise SignatureError("Please enter a valid 6-digit OTP")
    return otp


def issue_signature_token(aadhaar_number: str, now: datetime | None = None) -> str:
    """Build the opaque signature token for a completed signing ceremony.

    Format: ``DIGILOCKER_<last four digits>_<epoch milliseconds>``.
    """
    digits = (aadhaar_number or "").replace(" ", "")
    if not _AADHAAR_RE.fullmatch(digits):
        raise SignatureError("Please enter a valid 12-digit Aadhaar number")
    moment = now or datetime.now(timezone.utc)
    return f"DIGILOCKER_{digits[-4:]}_{int(moment.timestamp() * 1000)}"
