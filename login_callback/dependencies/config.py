"""
FastAPI dependency utilities for injecting configuration.
"""

from urllib.parse import urlsplit

from login_callback.core.config import AppSettings, get_settings


def get_app_settings() -> AppSettings:
    """FastAPI dependency returning the process-wide settings."""
    return get_settings()


def application_origin(settings: AppSettings) -> str:
    """Origin of the configured callback URL, used as the trusted redirect base."""
    parts = urlsplit(str(settings.workos.redirect_uri))
    return f"{parts.scheme}://{parts.netloc}"


__all__ = ["application_origin", "get_app_settings"]
