"""Application configuration helpers."""
from __future__ import annotations

import os
from functools import lru_cache
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from pydantic import BaseModel, Field, field_validator
from dotenv import load_dotenv

load_dotenv()

_POSTGRES_SCHEMES = {"postgres", "postgresql", "postgresql+psycopg", "postgresql+psycopg2"}


def _env_flag(name: str, default: bool = False) -> bool:
    """Return a boolean flag read from the environment."""

    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def normalize_database_url(value: str | None) -> str:
    """Normalize a database URL for SQLAlchemy usage.

    PostgreSQL URLs are rewritten to the psycopg2 driver and forced to
    ``sslmode=require``. Any other URL (SQLite for local runs and tests) is
    returned untouched apart from surrounding whitespace.
    """

    if not value:
        return ""

    value = value.strip()
    if not value:
        return ""

    parsed = urlsplit(value)
    if parsed.scheme.lower() not in _POSTGRES_SCHEMES:
        return value

    query_params = parse_qsl(parsed.query, keep_blank_values=True)
    filtered_params = [(key, item) for key, item in query_params if key != "sslmode"]
    filtered_params.append(("sslmode", "require"))

    return urlunsplit(
        (
            "postgresql+psycopg2",
            parsed.netloc,
            parsed.path,
            urlencode(filtered_params, doseq=True),
            parsed.fragment,
        )
    )


class Settings(BaseModel):
    """Runtime configuration loaded from environment variables."""

    database_url: str = Field(default_factory=lambda: os.getenv("DATABASE_URL", ""))
    db_schema: str = Field(default_factory=lambda: os.getenv("DB_SCHEMA", ""))
    allowed_origins_raw: str = Field(
        default_factory=lambda: os.getenv("ALLOWED_ORIGINS", "")
    )
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    picklist_drop_non_positive: bool = Field(
        default_factory=lambda: _env_flag("PICKLIST_DROP_NON_POSITIVE", default=False)
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def _normalize_database_url(cls, value: str | None) -> str:
        """Normalize the DATABASE_URL for SQLAlchemy usage."""

        return normalize_database_url(value)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: str | None) -> str:
        if not value or not value.strip():
            return "INFO"
        return value.strip().upper()

    @property
    def is_postgres(self) -> bool:
        """Return whether the configured database is PostgreSQL."""

        return self.database_url.startswith("postgresql")

    @property
    def allowed_origins(self) -> list[str]:
        """Return a sanitized list of allowed CORS origins."""

        default_origins = [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]

        if not self.allowed_origins_raw:
            return default_origins

        parts = [part.strip() for part in self.allowed_origins_raw.split(",")]
        origins = [part for part in parts if part]

        return origins or default_origins

    model_config: dict[str, Any] = {"frozen": True}


@lru_cache(1)
def get_settings() -> Settings:
    """Return a cached :class:`Settings` instance."""

    return Settings()


settings = get_settings()
