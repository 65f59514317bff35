"""Public schema exports."""

from .auth import (
    AuthenticationResponse,
    ErrorDetail,
    ErrorResponse,
    Impersonator,
    OAuthTokens,
    ReturnState,
    SessionData,
    SessionInfo,
    SuccessPayload,
    User,
)

__all__ = [
    "AuthenticationResponse",
    "ErrorDetail",
    "ErrorResponse",
    "Impersonator",
    "OAuthTokens",
    "ReturnState",
    "SessionData",
    "SessionInfo",
    "SuccessPayload",
    "User",
]
