"""Pytest configuration shared across the suite."""

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from login_callback.core.config import SessionSettings
from login_callback.schemas import AuthenticationResponse
from login_callback.services import CookieSessionStorage, SessionCipherService

COOKIE_PASSWORD = "another-cookie-password-0123456789abcdef"


class FakeIdentityClient:
    """Records exchanged codes and returns a canned token bundle."""

    def __init__(
        self,
        response: AuthenticationResponse | None = None,
        error: Exception | None = None,
    ) -> None:
        self.response = response
        self.error = error
        self.codes: list[str] = []

    async def authenticate_with_code(self, code: str) -> AuthenticationResponse:
        self.codes.append(code)
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response


def build_auth_response(**overrides) -> AuthenticationResponse:
    payload = {
        "access_token": "access-token-plaintext",
        "refresh_token": "refresh-token-plaintext",
        "user": {
            "object": "user",
            "id": "user_01HXYZ",
            "email": "ada@example.com",
            "email_verified": True,
            "first_name": "Ada",
            "last_name": "Lovelace",
        },
        "impersonator": {"email": "admin@example.com", "reason": "support ticket"},
        "oauth_tokens": {
            "provider": "GoogleOAuth",
            "access_token": "google-access",
            "refresh_token": "google-refresh",
            "expires_at": 1735689600,
            "scopes": ["openid", "email"],
        },
    }
    payload.update(overrides)
    return AuthenticationResponse.model_validate(payload)


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture
def auth_response() -> AuthenticationResponse:
    return build_auth_response()


@pytest.fixture
def identity_client(auth_response) -> FakeIdentityClient:
    return FakeIdentityClient(response=auth_response)


@pytest.fixture
def session_settings() -> SessionSettings:
    return SessionSettings(
        WORKOS_COOKIE_PASSWORD=COOKIE_PASSWORD,
        WORKOS_COOKIE_NAME="test-session",
    )


@pytest.fixture
def session_cipher() -> SessionCipherService:
    return SessionCipherService(secret=COOKIE_PASSWORD)


@pytest.fixture
def session_storage(session_settings) -> CookieSessionStorage:
    return CookieSessionStorage(session_settings, secrets=[COOKIE_PASSWORD])


@pytest.fixture
def make_auth_response():
    return build_auth_response


@pytest.fixture
def make_identity_client():
    return FakeIdentityClient
