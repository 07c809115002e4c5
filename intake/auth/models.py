"""
Auth models.

Identities live only in the identity repository; session tokens are
stateless, so TokenClaims is what a verified token decodes to.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_email(email: str) -> str:
    """Canonical form used as the identity key."""
    return (email or "").strip().lower()


class Identity(BaseModel):
    """Registered account (email + bcrypt hash)."""

    email: str
    password_hash: str = Field(repr=False)
    created_at: datetime = Field(default_factory=_utcnow)

    model_config = {"frozen": True}

    @property
    def key(self) -> str:
        return normalize_email(self.email)


class TokenClaims(BaseModel):
    """Decoded session token."""

    subject: str
    issued_at: datetime
    expires_at: datetime

    model_config = {"frozen": True}
