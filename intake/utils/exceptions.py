"""Custom exceptions for the document intake service"""

from typing import List, Optional


class IntakeError(Exception):
    """Base exception for the intake service"""

    status_code: int = 500
    message: str = "Unknown error occurred"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)

    def to_body(self) -> dict:
        """JSON body returned to the client"""
        return {"error": self.message}


class ConfigError(IntakeError):
    """Configuration error"""
    pass


class AuthMissingError(IntakeError):
    """Request carried no bearer token"""

    status_code = 401
    message = "Access Denied: No token provided."


class AuthInvalidError(IntakeError):
    """Bearer token is malformed, badly signed or expired"""

    status_code = 403
    message = "Access Denied: Invalid token."


class CredentialMismatchError(IntakeError):
    """Unknown email or wrong password. Deliberately does not say which."""

    status_code = 400
    message = "Invalid email or password."


class DuplicateIdentityError(IntakeError):
    """An identity with the same email already exists"""

    status_code = 409
    message = "Email is already registered."


class FileMissingError(IntakeError):
    """Upload endpoint invoked without a binary part"""

    status_code = 400
    message = "No file uploaded."


class ValidationFailedError(IntakeError):
    """One or more submitted fields are invalid.

    ``errors`` holds every human-readable message, ``missing`` the wire names
    of fields that were absent or empty.
    """

    status_code = 400
    message = "Validation failed."

    def __init__(
        self,
        errors: List[str],
        missing: Optional[List[str]] = None,
        message: Optional[str] = None,
    ):
        self.errors = list(errors)
        self.missing = list(missing or [])
        self.summary = message
        super().__init__(message)

    def to_body(self) -> dict:
        # Without a summary the client gets the full list as "error"
        if self.summary is None:
            return {"error": self.errors}
        body: dict = {"error": self.summary}
        if self.missing:
            body["missing"] = self.missing
        if self.errors != [self.summary]:
            body["details"] = self.errors
        return body
