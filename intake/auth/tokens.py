"""
Session tokens.

Tokens are HMAC-signed JWTs carrying the subject email, issue time and
expiry. Nothing is stored server-side: verification depends only on the
token and the signing secret.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt.exceptions import InvalidTokenError

from ..utils.exceptions import AuthInvalidError
from ..utils.logger import get_logger
from .models import TokenClaims

logger = get_logger(__name__)

DEFAULT_TTL = timedelta(hours=1)


class TokenService:
    """Issues and verifies signed, time-limited session tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = DEFAULT_TTL):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, subject: str, now: Optional[datetime] = None) -> str:
        """Return a token for ``subject`` that expires ``ttl`` after ``now``."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": subject,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and check a token.

        Raises AuthInvalidError when the token is malformed, signed with a
        different secret or algorithm, missing claims, or expired.
        """
        if not token:
            raise AuthInvalidError()
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "iat", "exp"]},
            )
        except InvalidTokenError as e:
            logger.info("Token rejected", reason=type(e).__name__)
            raise AuthInvalidError() from e

        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject:
            raise AuthInvalidError()
        return TokenClaims(
            subject=subject,
            issued_at=datetime.fromtimestamp(claims["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
        )
