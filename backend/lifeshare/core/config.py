"""
config.py — Centralized Application Configuration Loader

Purpose:
- Define a single source of truth for application settings.
- Load and validate environment variables from `.env` or OS environment.

Covers:
- Token signing (JWT secret, algorithm, lifetime)
- Password hashing cost
- CORS origins for the browser client
- Donor directory defaults

This module does NOT:
- Open any storage or network connections.
- Modify runtime settings.
"""

import json
from pathlib import Path
from typing import Annotated, Any, List

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# config.py is at: backend/lifeshare/core/config.py
# .env should be at: backend/.env
_CONFIG_DIR = Path(__file__).parent  # backend/lifeshare/core
_BACKEND_DIR = _CONFIG_DIR.parent.parent  # backend
_ENV_FILE = _BACKEND_DIR / ".env"

if _ENV_FILE.exists():
    _ENV_FILE_PATH = str(_ENV_FILE.resolve())
else:
    # Fallback: pydantic looks in CWD
    _ENV_FILE_PATH = ".env"

DEFAULT_JWT_SECRET = "lifeshare-secret"


class Settings(BaseSettings):
    """
    Settings container for the donor registry service.

    Storage is in-memory, so there is no database URL here.
    """
    APP_NAME: str = Field(
        "LifeShare Donor Registry",
        description="Title shown in the OpenAPI docs",
    )
    ENVIRONMENT: str = Field(
        "development",
        description="'development' or 'production'",
    )
    LOG_LEVEL: str = Field(
        "INFO",
        description="Root log level passed to configure_logging()",
    )

    # Authentication
    JWT_SECRET_KEY: str = Field(
        DEFAULT_JWT_SECRET,
        description="Secret used to sign access tokens (override in production)",
    )
    JWT_ALGORITHM: str = Field(
        "HS256",
        description="JWT signing algorithm",
    )
    JWT_EXPIRE_MINUTES: int = Field(
        60 * 24,
        description="Access token lifetime in minutes",
    )
    BCRYPT_ROUNDS: int = Field(
        12,
        ge=4,
        le=31,
        description="bcrypt cost factor for password hashing",
    )

    # CORS
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Allowed browser origins (comma-separated in the environment)",
    )

    # Donor directory
    LATEST_DONORS_DEFAULT_LIMIT: int = Field(
        3,
        gt=0,
        description="Number of donors returned by /donors/latest when no valid limit is given",
    )

    @field_validator('JWT_SECRET_KEY', mode='before')
    @classmethod
    def strip_secret(cls, v: Any) -> str:
        """Strip whitespace from the signing secret."""
        if isinstance(v, str):
            return v.strip()
        return v or ""

    @field_validator('CORS_ORIGINS', mode='before')
    @classmethod
    def split_origins(cls, v: Any) -> Any:
        """Accept `CORS_ORIGINS=http://a,http://b` as well as a JSON list."""
        if isinstance(v, str):
            if v.strip().startswith("["):
                return json.loads(v)
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @model_validator(mode='after')
    def require_real_secret_in_production(self) -> 'Settings':
        """Refuse to sign tokens with the built-in secret in production."""
        if self.is_production and self.JWT_SECRET_KEY in ("", DEFAULT_JWT_SECRET):
            raise ValueError("JWT_SECRET_KEY must be set to a non-default value when ENVIRONMENT=production")
        return self

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE_PATH,
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Singleton pattern — settings imported anywhere will reference same object.
settings = Settings()
