"""API tests for /api/signup and /api/login"""

import pytest

from intake.auth.tokens import TokenService

from .conftest import TEST_SECRET


CREDS = {"email": "user1@example.com", "password": "password123"}


def test_signup_and_login_flow(client):
    res = client.post("/api/signup", json=CREDS)
    assert res.status_code == 201, res.text
    assert res.json() == {"message": "User created successfully."}

    res = client.post("/api/login", json=CREDS)
    assert res.status_code == 200, res.text
    token = res.json()["token"]
    assert TokenService(TEST_SECRET).verify(token).subject == CREDS["email"]


def test_form_encoded_credentials(client):
    res = client.post("/api/signup", data=CREDS)
    assert res.status_code == 201, res.text

    res = client.post("/api/login", data=CREDS)
    assert res.status_code == 200, res.text
    assert "token" in res.json()


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"email": "user1@example.com"},
        {"password": "password123"},
        {"email": "", "password": ""},
        {"email": 123, "password": ["x"]},
    ],
)
def test_signup_requires_email_and_password(client, body):
    res = client.post("/api/signup", json=body)
    assert res.status_code == 400
    assert res.json() == {"error": "Email and password are required."}


def test_signup_with_invalid_json(client):
    res = client.post(
        "/api/signup",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json() == {"error": "Email and password are required."}


def test_signup_rejects_malformed_email(client):
    res = client.post("/api/signup", json={"email": "not-an-email", "password": "password123"})
    assert res.status_code == 400
    assert res.json() == {"error": "A valid email address is required."}


def test_duplicate_signup_conflicts(client):
    assert client.post("/api/signup", json=CREDS).status_code == 201

    res = client.post(
        "/api/signup",
        json={"email": CREDS["email"].upper(), "password": "different"},
    )
    assert res.status_code == 409
    assert res.json() == {"error": "Email is already registered."}

    # The original password still works
    assert client.post("/api/login", json=CREDS).status_code == 200


def test_invalid_login_is_indistinguishable(client):
    client.post("/api/signup", json=CREDS)

    wrong_password = client.post(
        "/api/login", json={"email": CREDS["email"], "password": "wrong-password"}
    )
    unknown_email = client.post(
        "/api/login", json={"email": "nobody@example.com", "password": "password123"}
    )

    assert wrong_password.status_code == unknown_email.status_code == 400
    assert wrong_password.json() == unknown_email.json() == {"error": "Invalid email or password."}


def test_login_with_missing_fields(client):
    res = client.post("/api/login", json={})
    assert res.status_code == 400
    assert res.json() == {"error": "Invalid email or password."}


def test_health(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.json() == {"status": "healthy"}
