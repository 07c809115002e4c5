"""
Identity storage.

Services receive an IdentityRepository; the in-memory implementation keeps
identities for the life of the process and enforces email uniqueness under
a lock, so concurrent signups for one email cannot both succeed.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Dict, Optional

from ..utils.exceptions import DuplicateIdentityError
from .models import Identity, normalize_email


class IdentityRepository(ABC):
    """Append-only identity storage keyed by normalized email."""

    @abstractmethod
    def add(self, identity: Identity) -> Identity:
        """Store a new identity. Raises DuplicateIdentityError if the email is taken."""

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[Identity]:
        """Return the identity registered under ``email``, or None."""

    @abstractmethod
    def count(self) -> int:
        """Number of registered identities."""


class InMemoryIdentityRepository(IdentityRepository):
    """Process-local repository; contents are lost on restart."""

    def __init__(self):
        self._lock = threading.Lock()
        self._identities: Dict[str, Identity] = {}

    def add(self, identity: Identity) -> Identity:
        key = identity.key
        with self._lock:
            if key in self._identities:
                raise DuplicateIdentityError()
            self._identities[key] = identity
        return identity

    def find_by_email(self, email: str) -> Optional[Identity]:
        with self._lock:
            return self._identities.get(normalize_email(email))

    def count(self) -> int:
        with self._lock:
            return len(self._identities)
