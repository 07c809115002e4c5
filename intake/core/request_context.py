"""
Per-request authentication context.

The auth gate builds one RequestContext per admitted request and hands it
to the route explicitly; nothing downstream re-reads the Authorization header.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..auth.models import TokenClaims


@dataclass(frozen=True)
class RequestContext:
    """Verified caller identity for a single request."""
    subject: str
    claims: TokenClaims
