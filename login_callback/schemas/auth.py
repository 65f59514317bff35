"""Schemas describing identity provider payloads and the sign-in session."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """WorkOS user record returned by the authenticate endpoint."""

    model_config = ConfigDict(extra="allow")

    id: str
    email: str
    email_verified: bool = False
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_picture_url: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class Impersonator(BaseModel):
    """Admin acting on behalf of the signed-in user."""

    email: str
    reason: Optional[str] = None


class OAuthTokens(BaseModel):
    """Upstream provider tokens, present when the user signed in with OAuth."""

    model_config = ConfigDict(extra="allow")

    provider: Optional[str] = None
    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None
    scopes: List[str] = Field(default_factory=list)


class AuthenticationResponse(BaseModel):
    """Token bundle produced by exchanging an authorization code."""

    model_config = ConfigDict(extra="ignore")

    access_token: str
    refresh_token: str
    user: User
    impersonator: Optional[Impersonator] = None
    oauth_tokens: Optional[OAuthTokens] = None
    organization_id: Optional[str] = None
    authentication_method: Optional[str] = None


class SessionData(BaseModel):
    """Plaintext session payload sealed into the session cookie."""

    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(..., alias="accessToken")
    refresh_token: str = Field(..., alias="refreshToken")
    user: User
    impersonator: Optional[Impersonator] = None
    headers: Dict[str, str] = Field(default_factory=dict)


class SuccessPayload(BaseModel):
    """Arguments handed to the post-login hook."""

    access_token: str
    refresh_token: str
    user: User
    impersonator: Optional[Impersonator] = None
    oauth_tokens: Optional[OAuthTokens] = None


class ReturnState(BaseModel):
    """Decoded OAuth ``state`` carrying the post-login destination."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    return_pathname: Optional[str] = Field(None, alias="returnPathname")


class ErrorDetail(BaseModel):
    message: str
    description: str


class ErrorResponse(BaseModel):
    """Body of the generic sign-in failure response."""

    error: ErrorDetail


class SessionInfo(BaseModel):
    """Public view of the current session; never carries tokens."""

    user: User
    impersonator: Optional[Impersonator] = None


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
