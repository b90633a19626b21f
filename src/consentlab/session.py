"""Explicit session context for the signed-in user.

A ``SessionContext`` is created at login, passed into every pipeline call,
and ended at logout. Nothing in the pipeline reads a global "current user".

Usage::

    session = SessionContext(user_id="u-1", role=SessionRole.DOCTOR, display_name="Dr. Rao")
    outcome = await pipeline.analyze_text(text, session=session)
    session.end()
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Generator

import structlog

from consentlab.core.exceptions import SessionClosedError
from consentlab.languages import ENGLISH, resolve_language


class SessionRole(str, Enum):
    ADMIN = "admin"
    DOCTOR = "doctor"
    CONSENT_OFFICER = "consent_officer"
    PATIENT = "patient"


@dataclass
class SessionContext:
    """Identity and preferences for one signed-in user."""

    user_id: str
    role: SessionRole
    display_name: str = ""
    hospital_name: str = ""
    language: str = ENGLISH.name
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    ended_at: datetime | None = None

    @property
    def active(self) -> bool:
        return self.ended_at is None

    def set_language(self, language: str) -> None:
        """Switch the preferred output language (raises KeyError if unsupported)."""
        self.language = resolve_language(language).name

    def end(self) -> None:
        """Close the session (logout). Further pipeline calls are rejected."""
        if self.ended_at is None:
            self.ended_at = datetime.now(timezone.utc)

    def ensure_active(self) -> None:
        if not self.active:
            raise SessionClosedError(f"Session {self.session_id} has ended")


@contextmanager
def session_scope(session: SessionContext | None) -> Generator[None, None, None]:
    """Bind session fields to structlog's context for the duration of a call."""
    if session is None:
        yield
        return
    session.ensure_active()
    with structlog.contextvars.bound_contextvars(
        session_id=session.session_id,
        user_id=session.user_id,
        role=session.role.value,
    ):
        yield
