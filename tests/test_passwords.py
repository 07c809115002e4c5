"""Unit tests for bcrypt password hashing"""

from intake.auth.passwords import hash_password, verify_password


def test_hash_is_salted_and_verifies():
    first = hash_password("password123", rounds=4)
    second = hash_password("password123", rounds=4)

    assert first != second
    assert first.startswith("$2")
    assert verify_password("password123", first)
    assert verify_password("password123", second)


def test_wrong_password_does_not_verify():
    hashed = hash_password("password123", rounds=4)
    assert not verify_password("password124", hashed)
    assert not verify_password("", hashed)


def test_cost_factor_is_embedded():
    hashed = hash_password("secret", rounds=5)
    assert hashed.split("$")[2] == "05"


def test_malformed_hash_fails_closed():
    assert verify_password("password123", "not-a-bcrypt-hash") is False
    assert verify_password("password123", "") is False


def test_long_passwords_do_not_raise():
    long_password = "x" * 200
    hashed = hash_password(long_password, rounds=4)
    assert verify_password(long_password, hashed)
