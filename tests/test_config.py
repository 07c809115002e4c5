"""Unit tests for settings loading"""

from datetime import timedelta
from pathlib import Path

import pytest

from intake.core.config import Settings
from intake.utils.exceptions import ConfigError

from .conftest import TEST_SECRET

ENV_VARS = [
    "INTAKE_JWT_SECRET",
    "INTAKE_JWT_ALGORITHM",
    "INTAKE_TOKEN_TTL_MINUTES",
    "INTAKE_BCRYPT_ROUNDS",
    "INTAKE_UPLOAD_DIR",
    "INTAKE_ENFORCE_OPTIONS",
    "LOG_LEVEL",
    "LOG_FORMAT",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep load_dotenv from picking up a developer's .env
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def test_missing_secret_fails_fast(clean_env):
    with pytest.raises(ConfigError):
        Settings.from_env()


def test_short_secret_rejected(clean_env):
    clean_env.setenv("INTAKE_JWT_SECRET", "short")
    with pytest.raises(ConfigError):
        Settings.from_env()


def test_defaults(clean_env):
    clean_env.setenv("INTAKE_JWT_SECRET", TEST_SECRET)
    settings = Settings.from_env()

    assert settings.jwt_algorithm == "HS256"
    assert settings.token_ttl == timedelta(hours=1)
    assert settings.bcrypt_rounds == 10
    assert settings.upload_dir == Path("uploads")
    assert settings.enforce_options is False


def test_overrides(clean_env, tmp_path):
    clean_env.setenv("INTAKE_JWT_SECRET", TEST_SECRET)
    clean_env.setenv("INTAKE_JWT_ALGORITHM", "hs512")
    clean_env.setenv("INTAKE_TOKEN_TTL_MINUTES", "15")
    clean_env.setenv("INTAKE_BCRYPT_ROUNDS", "12")
    clean_env.setenv("INTAKE_UPLOAD_DIR", str(tmp_path / "files"))
    clean_env.setenv("INTAKE_ENFORCE_OPTIONS", "true")
    clean_env.setenv("LOG_FORMAT", "JSON")

    settings = Settings.from_env()
    assert settings.jwt_algorithm == "HS512"
    assert settings.token_ttl == timedelta(minutes=15)
    assert settings.bcrypt_rounds == 12
    assert settings.upload_dir == tmp_path / "files"
    assert settings.enforce_options is True
    assert settings.log_format == "json"


@pytest.mark.parametrize(
    "name,value",
    [
        ("INTAKE_JWT_ALGORITHM", "RS256"),
        ("INTAKE_TOKEN_TTL_MINUTES", "0"),
        ("INTAKE_TOKEN_TTL_MINUTES", "soon"),
        ("INTAKE_BCRYPT_ROUNDS", "3"),
        ("LOG_FORMAT", "xml"),
    ],
)
def test_invalid_values_rejected(clean_env, name, value):
    clean_env.setenv("INTAKE_JWT_SECRET", TEST_SECRET)
    clean_env.setenv(name, value)
    with pytest.raises(ConfigError):
        Settings.from_env()


def test_secret_not_in_repr():
    assert TEST_SECRET not in repr(Settings(jwt_secret=TEST_SECRET))
