"""
Signed cookie session storage.

Session data is serialized to JSON, base64-encoded and signed with
HMAC-SHA256 so the browser can hold it without being able to alter it.
"""

from __future__ import annotations

import base64
import binascii
import hmac
import json
import logging
from hashlib import sha256
from typing import Any, Dict, Iterator, Optional, Sequence

from starlette.requests import cookie_parser
from starlette.responses import Response

from login_callback.core.config import SessionSettings

logger = logging.getLogger(__name__)


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def _b64decode(value: str) -> bytes:
    return base64.urlsafe_b64decode(value + "=" * (-len(value) % 4))


class CookieSession:
    """Mutable key/value bag persisted in a single cookie."""

    def __init__(self, data: Optional[Dict[str, Any]] = None) -> None:
        self._data: Dict[str, Any] = dict(data or {})

    @property
    def data(self) -> Dict[str, Any]:
        return dict(self._data)

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def has(self, key: str) -> bool:
        return key in self._data

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def unset(self, key: str) -> None:
        self._data.pop(key, None)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)


class CookieSessionStorage:
    """Read and write :class:`CookieSession` objects to a named cookie."""

    def __init__(self, settings: SessionSettings, *, secrets: Sequence[str]) -> None:
        if not secrets:
            raise ValueError("At least one cookie signing secret must be provided.")
        self._settings = settings
        self._secrets = [secret.encode("utf-8") for secret in secrets]

    @property
    def cookie_name(self) -> str:
        return self._settings.cookie_name

    def get_session(self, cookie_header: Optional[str] = None) -> CookieSession:
        """
        Load the session from a ``Cookie`` request header.

        A missing, unsigned or tampered cookie yields a fresh empty session.
        """
        if not cookie_header:
            return CookieSession()
        value = cookie_parser(cookie_header).get(self.cookie_name)
        if not value:
            return CookieSession()
        data = self._unsign(value)
        if data is None:
            logger.warning("Discarding session cookie with an invalid signature.")
            return CookieSession()
        return CookieSession(data)

    def commit_session(self, session: CookieSession) -> str:
        """Serialize the session into a ``Set-Cookie`` header value."""
        response = Response()
        response.set_cookie(
            key=self.cookie_name,
            value=self._sign(session.data),
            max_age=self._settings.cookie_max_age,
            path=self._settings.cookie_path,
            domain=self._settings.cookie_domain,
            secure=self._settings.cookie_secure,
            httponly=True,
            samesite=self._settings.cookie_samesite,
        )
        return response.headers["set-cookie"]

    def destroy_session(self, session: CookieSession) -> str:
        """Return a ``Set-Cookie`` header value that expires the cookie."""
        response = Response()
        response.delete_cookie(
            key=self.cookie_name,
            path=self._settings.cookie_path,
            domain=self._settings.cookie_domain,
            secure=self._settings.cookie_secure,
            httponly=True,
            samesite=self._settings.cookie_samesite,
        )
        return response.headers["set-cookie"]

    def _sign(self, data: Dict[str, Any]) -> str:
        serialized = json.dumps(data, separators=(",", ":"), sort_keys=True)
        encoded = _b64encode(serialized.encode("utf-8"))
        signature = hmac.new(self._secrets[0], encoded.encode("ascii"), sha256).digest()
        return f"{encoded}.{_b64encode(signature)}"

    def _unsign(self, value: str) -> Optional[Dict[str, Any]]:
        encoded, sep, signature = value.rpartition(".")
        if not sep or not encoded:
            return None
        try:
            provided = _b64decode(signature)
        except (binascii.Error, ValueError):
            return None
        # First secret signs; any configured secret verifies.
        for secret in self._secrets:
            expected = hmac.new(secret, encoded.encode("utf-8"), sha256).digest()
            if hmac.compare_digest(provided, expected):
                break
        else:
            return None
        try:
            payload = json.loads(_b64decode(encoded).decode("utf-8"))
        except (binascii.Error, UnicodeError, ValueError):
            return None
        return payload if isinstance(payload, dict) else None


__all__ = ["CookieSession", "CookieSessionStorage"]
