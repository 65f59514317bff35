"""
Application configuration models and helpers.

Centralizes settings management so the routes, the callback handler and the
session helpers share a consistent configuration surface.
"""

from functools import lru_cache
from typing import Annotated, Literal, Optional

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_ENV_FILE = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


class WorkOSSettings(BaseSettings):
    """Configuration required for interacting with the WorkOS User Management API."""

    model_config = _ENV_FILE

    client_id: str = Field(..., validation_alias="WORKOS_CLIENT_ID")
    api_key: str = Field(..., validation_alias="WORKOS_API_KEY")
    redirect_uri: AnyHttpUrl = Field(..., validation_alias="WORKOS_REDIRECT_URI")
    api_base_url: str = Field(
        "https://api.workos.com",
        validation_alias="WORKOS_API_BASE_URL",
        description="Override for self-hosted proxies and test doubles.",
    )
    timeout_seconds: float = Field(10.0, validation_alias="WORKOS_TIMEOUT")


class SessionSettings(BaseSettings):
    """Cookie and encryption settings for the sign-in session."""

    model_config = _ENV_FILE

    cookie_password: str = Field(
        ...,
        validation_alias="WORKOS_COOKIE_PASSWORD",
        description="Secret used to encrypt and sign the session cookie.",
    )
    cookie_name: str = Field("wos-session", validation_alias="WORKOS_COOKIE_NAME")
    cookie_max_age: int = Field(
        60 * 60 * 24 * 400,
        validation_alias="WORKOS_COOKIE_MAX_AGE",
        description="Cookie lifetime in seconds; browsers cap this at 400 days.",
    )
    cookie_secure: bool = Field(True, validation_alias="WORKOS_COOKIE_SECURE")
    cookie_samesite: Literal["lax", "strict", "none"] = Field(
        "lax", validation_alias="WORKOS_COOKIE_SAMESITE"
    )
    cookie_domain: Optional[str] = Field(None, validation_alias="WORKOS_COOKIE_DOMAIN")
    cookie_path: str = Field("/", validation_alias="WORKOS_COOKIE_PATH")

    @field_validator("cookie_password")
    @classmethod
    def _require_long_password(cls, value: str) -> str:
        """Reject passwords too short to derive a trustworthy key from."""
        if len(value) < 32:
            raise ValueError("WORKOS_COOKIE_PASSWORD must be at least 32 characters long.")
        return value


class CallbackSettings(BaseSettings):
    """Post-login redirect behaviour."""

    model_config = _ENV_FILE

    return_pathname: str = Field("/", validation_alias="AUTH_RETURN_PATHNAME")
    allowed_redirect_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        (),
        validation_alias="AUTH_ALLOWED_REDIRECT_ORIGINS",
        description="Origins an absolute return URL carried in state may point to.",
    )
    hook_failure_policy: Literal["abort", "ignore"] = Field(
        "abort", validation_alias="AUTH_HOOK_FAILURE_POLICY"
    )

    @field_validator("allowed_redirect_origins", mode="before")
    @classmethod
    def _split_origins(
        cls, value: str | tuple[str, ...] | list[str]
    ) -> tuple[str, ...]:
        """Support providing origins as a comma-separated string."""
        if isinstance(value, str):
            value = value.split(",")
        return tuple(origin.strip().rstrip("/") for origin in value if origin.strip())


class AppSettings(BaseSettings):
    """Root settings object for the FastAPI application."""

    model_config = _ENV_FILE

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    workos: WorkOSSettings = Field(default_factory=WorkOSSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)
    callback: CallbackSettings = Field(default_factory=CallbackSettings)


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()  # type: ignore[call-arg]


__all__ = [
    "AppSettings",
    "CallbackSettings",
    "SessionSettings",
    "WorkOSSettings",
    "get_settings",
]
