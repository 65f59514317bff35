"""Service layer exports."""

from .auth_session import AuthSessionService
from .callback import (
    CallbackError,
    CallbackHandler,
    CallbackOptions,
    CallbackStage,
    error_response,
    resolve_redirect_url,
)
from .cookie_session import CookieSession, CookieSessionStorage
from .session_cipher import SessionCipherService

__all__ = [
    "AuthSessionService",
    "CallbackError",
    "CallbackHandler",
    "CallbackOptions",
    "CallbackStage",
    "CookieSession",
    "CookieSessionStorage",
    "SessionCipherService",
    "error_response",
    "resolve_redirect_url",
]
