"""
FastAPI routes for the sign-in flow.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated, Any, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response

from login_callback.dependencies import (
    get_auth_session_service,
    get_callback_handler,
    get_return_state_codec,
    get_workos_client,
)
from login_callback.schemas import SessionInfo

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck() -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok"}


@router.get("/auth/login")
async def start_sign_in(
    workos_client: Annotated[Any, Depends(get_workos_client)],
    state_codec: Annotated[Any, Depends(get_return_state_codec)],
    return_pathname: str | None = Query(
        default=None,
        alias="returnPathname",
        description="Where to send the browser once sign-in completes.",
    ),
    screen_hint: Literal["sign-in", "sign-up"] | None = Query(default=None),
) -> Response:
    """Redirect the browser to the hosted AuthKit sign-in page."""
    state = state_codec.encode(return_pathname)
    authorization_url = workos_client.build_authorization_url(
        state=state, screen_hint=screen_hint
    )
    return RedirectResponse(url=authorization_url, status_code=HTTPStatus.TEMPORARY_REDIRECT)


@router.get("/auth/callback")
async def handle_sign_in_callback(
    request: Request,
    handler: Annotated[Any, Depends(get_callback_handler)],
) -> Response:
    """Exchange the authorization code and set the session cookie."""
    return await handler.handle(request)


@router.get("/auth/session", response_model=SessionInfo)
async def read_session(
    request: Request,
    sessions: Annotated[Any, Depends(get_auth_session_service)],
) -> SessionInfo:
    """Describe the signed-in user without exposing tokens."""
    session = sessions.load(request.headers.get("cookie"))
    if session is None:
        raise HTTPException(status_code=HTTPStatus.UNAUTHORIZED, detail="Not signed in.")
    return SessionInfo(user=session.user, impersonator=session.impersonator)


@router.post("/auth/logout", status_code=HTTPStatus.OK)
async def sign_out(
    request: Request,
    sessions: Annotated[Any, Depends(get_auth_session_service)],
) -> Response:
    """Clear the session cookie."""
    cookie = sessions.sign_out(request.headers.get("cookie"))
    logger.info("Cleared sign-in session cookie")
    return JSONResponse(content={"status": "signed_out"}, headers={"set-cookie": cookie})
