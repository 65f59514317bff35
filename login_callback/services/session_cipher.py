"""Symmetric encryption utilities for sealing the sign-in session."""

from __future__ import annotations

import base64
import hashlib

from cryptography.fernet import Fernet, InvalidToken
from pydantic import ValidationError

from login_callback.schemas import SessionData


class SessionCipherService:
    """Encrypt and decrypt session payloads using a derived Fernet key."""

    def __init__(self, *, secret: str) -> None:
        if not secret:
            raise ValueError("Session encryption secret must be provided.")
        digest = hashlib.sha256(secret.encode("utf-8")).digest()
        key = base64.urlsafe_b64encode(digest)
        self._fernet = Fernet(key)

    def encrypt(self, plaintext: str) -> str:
        """Encrypt a plaintext string and return the ciphertext."""
        token = self._fernet.encrypt(plaintext.encode("utf-8"))
        return token.decode("utf-8")

    def decrypt(self, ciphertext: str) -> str:
        """Decrypt a ciphertext string and return the plaintext."""
        try:
            plaintext = self._fernet.decrypt(ciphertext.encode("utf-8"))
        except InvalidToken as exc:
            raise ValueError(
                "Failed to decrypt session; invalid ciphertext provided."
            ) from exc
        return plaintext.decode("utf-8")

    def encrypt_session(self, session: SessionData) -> str:
        """Seal a session payload into an opaque string."""
        return self.encrypt(session.model_dump_json(by_alias=True))

    def decrypt_session(self, ciphertext: str) -> SessionData:
        """Reverse :meth:`encrypt_session`."""
        plaintext = self.decrypt(ciphertext)
        try:
            return SessionData.model_validate_json(plaintext)
        except ValidationError as exc:
            raise ValueError("Decrypted session payload is malformed.") from exc


__all__ = ["SessionCipherService"]
