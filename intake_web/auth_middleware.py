"""
Auth gate.

require_token() is a FastAPI dependency that:
- Reads the bearer token from the Authorization header
- Verifies it with the TokenService held on app state
- Returns a RequestContext carrying the verified subject

No token -> 401, invalid or expired token -> 403.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Request
from fastapi.concurrency import run_in_threadpool

from intake.auth.tokens import TokenService
from intake.core.request_context import RequestContext
from intake.utils.exceptions import AuthMissingError


def _extract_token(request: Request) -> Optional[str]:
    """
    Token from an ``Authorization: Bearer <token>`` header.

    Only the Bearer scheme is read. A bare token or another scheme
    (``Basic ...``) counts as no token at all, so it gets 401 rather than
    reaching verification.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None
    if auth_header.lower().startswith("bearer "):
        return auth_header[7:].strip() or None
    return None


async def require_token(request: Request) -> RequestContext:
    """Dependency for protected routes."""
    token = _extract_token(request)
    if not token:
        raise AuthMissingError()
    tokens: TokenService = request.app.state.tokens
    claims = await run_in_threadpool(tokens.verify, token)
    return RequestContext(subject=claims.subject, claims=claims)
