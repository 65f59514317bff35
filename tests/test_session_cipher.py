try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from login_callback.schemas import SessionData
from login_callback.services.session_cipher import SessionCipherService


def test_cipher_roundtrip() -> None:
    cipher = SessionCipherService(secret="super-secret-key")
    plaintext = "sensitive-token"

    encrypted = cipher.encrypt(plaintext)
    assert encrypted != plaintext

    assert cipher.decrypt(encrypted) == plaintext


def test_cipher_rejects_bad_ciphertext() -> None:
    cipher = SessionCipherService(secret="another-secret")

    with pytest.raises(ValueError):
        cipher.decrypt("not-valid")


def test_cipher_requires_secret() -> None:
    with pytest.raises(ValueError):
        SessionCipherService(secret="")


def test_session_payload_survives_encryption(auth_response) -> None:
    cipher = SessionCipherService(secret="session-secret")
    session = SessionData(
        access_token=auth_response.access_token,
        refresh_token=auth_response.refresh_token,
        user=auth_response.user,
        impersonator=auth_response.impersonator,
    )

    sealed = cipher.encrypt_session(session)
    assert auth_response.access_token not in sealed
    assert auth_response.refresh_token not in sealed

    restored = cipher.decrypt_session(sealed)
    assert restored.access_token == auth_response.access_token
    assert restored.refresh_token == auth_response.refresh_token
    assert restored.user == auth_response.user
    assert restored.impersonator == auth_response.impersonator
    assert restored.headers == {}


def test_session_plaintext_uses_camel_case_keys(auth_response) -> None:
    cipher = SessionCipherService(secret="session-secret")
    session = SessionData(
        access_token="a",
        refresh_token="r",
        user=auth_response.user,
    )

    plaintext = cipher.decrypt(cipher.encrypt_session(session))

    assert '"accessToken":"a"' in plaintext
    assert '"refreshToken":"r"' in plaintext
    assert '"impersonator":null' in plaintext


def test_session_from_other_secret_is_rejected(auth_response) -> None:
    sealed = SessionCipherService(secret="first").encrypt_session(
        SessionData(access_token="a", refresh_token="r", user=auth_response.user)
    )

    with pytest.raises(ValueError):
        SessionCipherService(secret="second").decrypt_session(sealed)
