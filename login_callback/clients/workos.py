"""
WorkOS User Management utilities.

These helpers build the hosted sign-in URL and exchange authorization codes
returned to the callback route.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx
from fastapi import status
from pydantic import ValidationError

from login_callback.core.config import WorkOSSettings
from login_callback.schemas import AuthenticationResponse, ReturnState


class InvalidStateError(ValueError):
    """Raised when an OAuth state value cannot be decoded."""


class IdentityExchangeError(Exception):
    """Raised when the authenticate endpoint rejects an authorization code."""


class ReturnStateCodec:
    """Encode and decode the post-login destination carried in OAuth state."""

    def encode(self, return_pathname: Optional[str]) -> str:
        serialized = json.dumps({"returnPathname": return_pathname}, separators=(",", ":"))
        return base64.b64encode(serialized.encode("utf-8")).decode("ascii")

    def decode(self, token: str) -> ReturnState:
        # Accept both alphabets and missing padding.
        padded = token.strip() + "=" * (-len(token.strip()) % 4)
        normalized = padded.replace("-", "+").replace("_", "/")
        try:
            raw = base64.b64decode(normalized.encode("ascii"), validate=True)
            payload = json.loads(raw.decode("utf-8"))
        except (binascii.Error, UnicodeError, ValueError) as exc:
            raise InvalidStateError("OAuth state is not base64-encoded JSON.") from exc
        if not isinstance(payload, dict):
            raise InvalidStateError("OAuth state must decode to a JSON object.")
        return_pathname = payload.get("returnPathname")
        if not isinstance(return_pathname, str):
            return_pathname = None
        return ReturnState(return_pathname=return_pathname)


class WorkOSClient:
    """Build WorkOS authorization URLs and exchange authorization codes."""

    AUTHORIZE_PATH = "/user_management/authorize"
    AUTHENTICATE_PATH = "/user_management/authenticate"

    def __init__(
        self,
        settings: WorkOSSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._base_url = settings.api_base_url.rstrip("/")
        self._transport = transport

    def build_authorization_url(
        self,
        state: str,
        *,
        provider: str = "authkit",
        screen_hint: str | None = None,
    ) -> str:
        """Construct the hosted AuthKit sign-in URL."""
        params: Dict[str, Any] = {
            "client_id": self._settings.client_id,
            "redirect_uri": str(self._settings.redirect_uri),
            "response_type": "code",
            "provider": provider,
            "state": state,
        }
        if screen_hint:
            params["screen_hint"] = screen_hint
        return f"{self._base_url}{self.AUTHORIZE_PATH}?{urlencode(params)}"

    async def authenticate_with_code(self, code: str) -> AuthenticationResponse:
        """
        Exchange an authorization code for the user's tokens.

        Transport failures propagate as ``httpx.HTTPError``.
        """
        payload = {
            "client_id": self._settings.client_id,
            "client_secret": self._settings.api_key,
            "grant_type": "authorization_code",
            "code": code,
        }

        async with httpx.AsyncClient(
            timeout=self._settings.timeout_seconds,
            transport=self._transport,
        ) as client:
            response = await client.post(
                f"{self._base_url}{self.AUTHENTICATE_PATH}",
                json=payload,
                headers={"Authorization": f"Bearer {self._settings.api_key}"},
            )

        if response.status_code != status.HTTP_200_OK:
            raise IdentityExchangeError(
                f"WorkOS rejected the authorization code (HTTP {response.status_code})."
            )

        try:
            return AuthenticationResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise IdentityExchangeError(
                "Incomplete authentication payload returned from WorkOS."
            ) from exc


__all__ = [
    "IdentityExchangeError",
    "InvalidStateError",
    "ReturnStateCodec",
    "WorkOSClient",
]
