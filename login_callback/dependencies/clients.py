"""
Factory functions to provide shared clients and services as FastAPI dependencies.
"""

from functools import lru_cache
from typing import Annotated, Any

from fastapi import Depends, Request

from login_callback.clients import ReturnStateCodec, WorkOSClient
from login_callback.core.config import get_settings
from login_callback.dependencies.config import application_origin, get_app_settings
from login_callback.services import (
    AuthSessionService,
    CallbackHandler,
    CallbackOptions,
    CookieSessionStorage,
    SessionCipherService,
)


@lru_cache()
def get_workos_client() -> WorkOSClient:
    """Create a singleton WorkOS client."""
    return WorkOSClient(get_settings().workos)


@lru_cache()
def get_return_state_codec() -> ReturnStateCodec:
    """Provide the codec for the return path carried in OAuth state."""
    return ReturnStateCodec()


@lru_cache()
def get_session_cipher_service() -> SessionCipherService:
    """Provide symmetric encryption helper for the session cookie."""
    return SessionCipherService(secret=get_settings().session.cookie_password)


@lru_cache()
def get_session_storage() -> CookieSessionStorage:
    """Provide the signed cookie session storage."""
    settings = get_settings().session
    return CookieSessionStorage(settings, secrets=[settings.cookie_password])


def get_auth_session_service(
    session_cipher: Annotated[Any, Depends(get_session_cipher_service)],
    session_storage: Annotated[Any, Depends(get_session_storage)],
) -> AuthSessionService:
    """Build the session reader used by the session and logout routes."""
    return AuthSessionService(
        session_cipher=session_cipher,
        session_storage=session_storage,
    )


def get_callback_options(
    request: Request,
    settings: Annotated[Any, Depends(get_app_settings)],
) -> CallbackOptions:
    """Build handler options from settings and the hook registered on the app."""
    return CallbackOptions.from_settings(
        settings.callback,
        base_url=application_origin(settings),
        on_success=getattr(request.app.state, "on_success", None),
    )


def get_callback_handler(
    options: Annotated[CallbackOptions, Depends(get_callback_options)],
    identity_client: Annotated[Any, Depends(get_workos_client)],
    session_cipher: Annotated[Any, Depends(get_session_cipher_service)],
    session_storage: Annotated[Any, Depends(get_session_storage)],
    state_codec: Annotated[Any, Depends(get_return_state_codec)],
) -> CallbackHandler:
    """Build a callback handler wired to the shared collaborators."""
    return CallbackHandler(
        identity_client=identity_client,
        session_cipher=session_cipher,
        session_storage=session_storage,
        options=options,
        state_codec=state_codec,
    )


__all__ = [
    "get_auth_session_service",
    "get_callback_handler",
    "get_callback_options",
    "get_return_state_codec",
    "get_session_cipher_service",
    "get_session_storage",
    "get_workos_client",
]
