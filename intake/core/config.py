"""
Intake service configuration.

All values are loaded from environment variables (typically via .env):

- INTAKE_JWT_SECRET        (required; HMAC signing secret, at least 32 chars)
- INTAKE_JWT_ALGORITHM     (HS256 | HS384 | HS512, default HS256)
- INTAKE_TOKEN_TTL_MINUTES (session token lifetime, default 60)
- INTAKE_BCRYPT_ROUNDS     (bcrypt cost factor, default 10)
- INTAKE_UPLOAD_DIR        (destination for stored files, default "uploads")
- INTAKE_ENFORCE_OPTIONS   ("true" to reject select values outside the form options)
- LOG_LEVEL / LOG_FORMAT   (logging; LOG_FORMAT is "console" or "json")
"""

from __future__ import annotations

import os
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from ..utils.exceptions import ConfigError

SUPPORTED_ALGORITHMS = ("HS256", "HS384", "HS512")
MIN_SECRET_LENGTH = 32


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


class Settings(BaseModel):
    """Process-wide settings, validated once at startup"""

    jwt_secret: str = Field(repr=False)
    jwt_algorithm: str = "HS256"
    token_ttl_minutes: int = 60
    bcrypt_rounds: int = 10
    upload_dir: Path = Path("uploads")
    enforce_options: bool = False
    log_level: str = "INFO"
    log_format: str = "console"

    model_config = {"frozen": True}

    @property
    def token_ttl(self) -> timedelta:
        return timedelta(minutes=self.token_ttl_minutes)

    def check(self) -> "Settings":
        """Raise ConfigError for values the service cannot run with."""
        if not self.jwt_secret or not self.jwt_secret.strip():
            raise ConfigError("INTAKE_JWT_SECRET must be set to sign session tokens.")
        if len(self.jwt_secret) < MIN_SECRET_LENGTH:
            raise ConfigError(
                f"INTAKE_JWT_SECRET must be at least {MIN_SECRET_LENGTH} characters long."
            )
        if self.jwt_algorithm not in SUPPORTED_ALGORITHMS:
            raise ConfigError(
                f"INTAKE_JWT_ALGORITHM must be one of {', '.join(SUPPORTED_ALGORITHMS)}."
            )
        if self.token_ttl_minutes <= 0:
            raise ConfigError("INTAKE_TOKEN_TTL_MINUTES must be positive.")
        if not 4 <= self.bcrypt_rounds <= 31:
            raise ConfigError("INTAKE_BCRYPT_ROUNDS must be between 4 and 31.")
        if self.log_format not in ("console", "json"):
            raise ConfigError("LOG_FORMAT must be 'console' or 'json'.")
        return self

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from the environment (and .env), failing fast."""
        load_dotenv()
        settings = cls(
            jwt_secret=os.getenv("INTAKE_JWT_SECRET") or "",
            jwt_algorithm=(os.getenv("INTAKE_JWT_ALGORITHM") or "HS256").strip().upper(),
            token_ttl_minutes=_env_int("INTAKE_TOKEN_TTL_MINUTES", 60),
            bcrypt_rounds=_env_int("INTAKE_BCRYPT_ROUNDS", 10),
            upload_dir=Path(os.getenv("INTAKE_UPLOAD_DIR") or "uploads"),
            enforce_options=_env_bool("INTAKE_ENFORCE_OPTIONS"),
            log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
            log_format=(os.getenv("LOG_FORMAT") or "console").strip().lower(),
        )
        return settings.check()
