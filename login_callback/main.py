"""
FastAPI application entrypoint for the sign-in callback service.
"""

from __future__ import annotations

from fastapi import FastAPI

from login_callback.api.routes import router as api_router
from login_callback.core.config import get_settings
from login_callback.core.logging import configure_logging
from login_callback.services.callback import SuccessHook


def create_app(*, on_success: SuccessHook | None = None) -> FastAPI:
    """
    Factory for the FastAPI application.

    ``on_success`` is awaited after every successful sign-in, before the
    browser is redirected.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Sign-in Callback Service",
        version="0.1.0",
        description="Completes WorkOS AuthKit sign-ins and manages the session cookie.",
    )
    app.state.on_success = on_success
    app.include_router(api_router)
    return app


app = create_app()

__all__ = ["app", "create_app"]
