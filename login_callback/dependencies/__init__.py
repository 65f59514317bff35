"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    get_auth_session_service,
    get_callback_handler,
    get_callback_options,
    get_return_state_codec,
    get_session_cipher_service,
    get_session_storage,
    get_workos_client,
)
from .config import application_origin, get_app_settings

__all__ = [
    "application_origin",
    "get_app_settings",
    "get_auth_session_service",
    "get_callback_handler",
    "get_callback_options",
    "get_return_state_codec",
    "get_session_cipher_service",
    "get_session_storage",
    "get_workos_client",
]
