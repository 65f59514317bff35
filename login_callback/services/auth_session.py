"""
Helpers for reading the sign-in session back out of the cookie.
"""

from __future__ import annotations

import logging
from typing import Optional

from login_callback.schemas import SessionData
from login_callback.services.callback import SESSION_FIELD
from login_callback.services.cookie_session import CookieSessionStorage
from login_callback.services.session_cipher import SessionCipherService

logger = logging.getLogger(__name__)


class AuthSessionService:
    """Load and clear the session written by the callback handler."""

    def __init__(
        self,
        *,
        session_cipher: SessionCipherService,
        session_storage: CookieSessionStorage,
    ) -> None:
        self._cipher = session_cipher
        self._storage = session_storage

    def load(self, cookie_header: Optional[str]) -> Optional[SessionData]:
        """Return the decrypted session, or ``None`` when there is no usable one."""
        session = self._storage.get_session(cookie_header)
        encrypted = session.get(SESSION_FIELD)
        if not isinstance(encrypted, str):
            return None
        try:
            return self._cipher.decrypt_session(encrypted)
        except ValueError as exc:
            logger.warning("Ignoring unreadable session cookie: %s", exc)
            return None

    def sign_out(self, cookie_header: Optional[str]) -> str:
        """Return a ``Set-Cookie`` header value that removes the session."""
        session = self._storage.get_session(cookie_header)
        return self._storage.destroy_session(session)


__all__ = ["AuthSessionService"]
