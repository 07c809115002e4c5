"""Unit tests for the in-memory identity repository and AuthService"""

import threading

import pytest

from intake.auth.models import Identity
from intake.auth.service import AuthService
from intake.auth.store import InMemoryIdentityRepository
from intake.utils.exceptions import (
    CredentialMismatchError,
    DuplicateIdentityError,
    ValidationFailedError,
)


def _identity(email: str) -> Identity:
    return Identity(email=email, password_hash="$2b$04$placeholder")


class TestInMemoryIdentityRepository:
    """Test cases for InMemoryIdentityRepository"""

    def test_add_and_find(self):
        repo = InMemoryIdentityRepository()
        repo.add(_identity("user@example.com"))

        found = repo.find_by_email("user@example.com")
        assert found is not None
        assert found.email == "user@example.com"
        assert repo.count() == 1

    def test_find_unknown_returns_none(self):
        repo = InMemoryIdentityRepository()
        assert repo.find_by_email("nobody@example.com") is None

    def test_email_lookup_ignores_case_and_whitespace(self):
        repo = InMemoryIdentityRepository()
        repo.add(_identity("user@example.com"))
        assert repo.find_by_email("  USER@Example.com ") is not None

    def test_duplicate_email_rejected(self):
        repo = InMemoryIdentityRepository()
        repo.add(_identity("user@example.com"))
        with pytest.raises(DuplicateIdentityError):
            repo.add(_identity("User@Example.com"))
        assert repo.count() == 1

    def test_concurrent_adds_keep_one_identity(self):
        repo = InMemoryIdentityRepository()
        results = []
        start = threading.Barrier(8)

        def worker():
            start.wait()
            try:
                repo.add(_identity("race@example.com"))
                results.append("ok")
            except DuplicateIdentityError:
                results.append("duplicate")

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count("ok") == 1
        assert results.count("duplicate") == 7
        assert repo.count() == 1


class TestAuthService:
    """Test cases for AuthService"""

    @pytest.fixture
    def service(self, tokens):
        return AuthService(InMemoryIdentityRepository(), tokens, bcrypt_rounds=4)

    def test_signup_then_login(self, service, tokens):
        service.signup("user@example.com", "password123")
        token = service.login("user@example.com", "password123")
        assert tokens.verify(token).subject == "user@example.com"

    def test_signup_stores_hash_only(self, service):
        identity = service.signup("user@example.com", "password123")
        assert identity.password_hash != "password123"
        assert identity.password_hash.startswith("$2")

    @pytest.mark.parametrize(
        "email,password",
        [(None, "password123"), ("user@example.com", None), ("", ""), ("   ", "password123")],
    )
    def test_signup_requires_both_fields(self, service, email, password):
        with pytest.raises(ValidationFailedError) as exc:
            service.signup(email, password)
        assert exc.value.to_body() == {"error": "Email and password are required."}

    def test_signup_rejects_malformed_email(self, service):
        with pytest.raises(ValidationFailedError):
            service.signup("not-an-email", "password123")

    def test_login_failures_are_indistinguishable(self, service):
        service.signup("user@example.com", "password123")

        with pytest.raises(CredentialMismatchError) as wrong_password:
            service.login("user@example.com", "wrong")
        with pytest.raises(CredentialMismatchError) as unknown_email:
            service.login("nobody@example.com", "password123")

        assert wrong_password.value.to_body() == unknown_email.value.to_body()
        assert wrong_password.value.status_code == unknown_email.value.status_code
