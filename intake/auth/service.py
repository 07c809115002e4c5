"""
Signup and login.

AuthService composes the password hasher, the identity repository and the
token service. Methods are synchronous; the web layer runs them in the
threadpool because bcrypt is deliberately slow.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, EmailStr, ValidationError

from ..utils.exceptions import CredentialMismatchError, ValidationFailedError
from ..utils.logger import get_logger
from .models import Identity, normalize_email
from .passwords import DEFAULT_ROUNDS, hash_password, verify_password
from .store import IdentityRepository
from .tokens import TokenService

logger = get_logger(__name__)

MISSING_CREDENTIALS = "Email and password are required."
INVALID_EMAIL = "A valid email address is required."


class _EmailCheck(BaseModel):
    email: EmailStr


class AuthService:
    """Registers identities and exchanges credentials for session tokens."""

    def __init__(
        self,
        repository: IdentityRepository,
        tokens: TokenService,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
    ):
        self.repository = repository
        self.tokens = tokens
        self.bcrypt_rounds = bcrypt_rounds
        # Compared against when the email is unknown so both login failures cost the same
        self._dummy_hash = hash_password("intake-dummy-password", rounds=bcrypt_rounds)

    def signup(self, email: Optional[str], password: Optional[str]) -> Identity:
        """
        Create a new identity.

        - Email and password must both be present.
        - Email must be well formed and not already registered.
        - Password is stored only as a bcrypt hash.
        """
        if not email or not email.strip() or not password:
            raise ValidationFailedError([MISSING_CREDENTIALS], message=MISSING_CREDENTIALS)
        try:
            _EmailCheck(email=email.strip())
        except ValidationError:
            raise ValidationFailedError([INVALID_EMAIL], message=INVALID_EMAIL)

        identity = Identity(
            email=normalize_email(email),
            password_hash=hash_password(password, rounds=self.bcrypt_rounds),
        )
        self.repository.add(identity)
        logger.info("User registered", email=identity.email)
        return identity

    def authenticate(self, email: Optional[str], password: Optional[str]) -> Identity:
        """Return the identity if credentials match, else raise CredentialMismatchError."""
        identity = self.repository.find_by_email(email or "")
        if identity is None:
            verify_password(password or "", self._dummy_hash)
            raise CredentialMismatchError()
        if not verify_password(password or "", identity.password_hash):
            raise CredentialMismatchError()
        return identity

    def login(self, email: Optional[str], password: Optional[str]) -> str:
        """Authenticate and issue a session token."""
        try:
            identity = self.authenticate(email, password)
        except CredentialMismatchError:
            logger.info("Login rejected")
            raise
        token = self.tokens.issue(identity.email)
        logger.info("User logged in", email=identity.email)
        return token
