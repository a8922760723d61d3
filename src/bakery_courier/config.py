"""Application configuration and settings management."""

from typing import Annotated, Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_PATHAO_BASE_URL = "https://api-hermes.pathao.com"


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="BAKERY_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Probashi Bakery Courier API"
    api_prefix: str = "/api"
    log_level: str = Field(default="info", description="Log level passed to uvicorn.")
    # NoDecode hands the raw env string to the validator below
    frontend_allowed_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:5000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


class PathaoSettings(BaseSettings):
    """Pathao merchant credentials, read from ``PATHAO_*`` variables."""

    model_config = SettingsConfigDict(
        env_prefix="PATHAO_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    client_id: str = ""
    client_secret: str = ""
    username: str = Field(default="merchant@probashibakery.com", description="Merchant account email.")
    password: str = Field(default="changeme", description="Merchant account password.")
    base_url: str = Field(
        default=DEFAULT_PATHAO_BASE_URL,
        description="Base URL of the Pathao merchant API (e.g., https://api-hermes.pathao.com).",
    )
    store_id: Optional[int] = Field(
        default=None,
        description="Default merchant store used when a request does not name one.",
    )
    request_timeout_seconds: float = Field(default=30.0, gt=0.0)

    @field_validator("base_url", mode="before")
    @classmethod
    def _default_base_url(cls, value: Any) -> str:
        if value is None or not str(value).strip():
            return DEFAULT_PATHAO_BASE_URL
        return str(value).strip().rstrip("/")

    @field_validator("store_id", mode="before")
    @classmethod
    def _blank_store_id(cls, value: Any) -> Any:
        # PATHAO_STORE_ID= in a .env file means "not configured"
        if isinstance(value, str) and not value.strip():
            return None
        return value


settings = Settings()
