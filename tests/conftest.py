from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from intake.core.config import Settings
from intake.auth.tokens import TokenService
from intake_web.main import create_app


TEST_SECRET = "test-signing-secret-0123456789abcdef"
OTHER_SECRET = "other-signing-secret-fedcba9876543210"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        upload_dir=tmp_path / "uploads",
    )


@pytest.fixture
def client(settings: Settings) -> TestClient:
    return TestClient(create_app(settings))


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(TEST_SECRET)


@pytest.fixture
def auth_headers(client: TestClient) -> dict:
    """Register and log in a user, returning the bearer header."""
    creds = {"email": "writer@example.com", "password": "password123"}
    res = client.post("/api/signup", json=creds)
    assert res.status_code == 201, res.text
    res = client.post("/api/login", json=creds)
    assert res.status_code == 200, res.text
    return {"Authorization": f"Bearer {res.json()['token']}"}
