"""
Authorization-code callback handling.

Completes a WorkOS sign-in: exchanges the code returned by the hosted login
page, seals the resulting tokens into the session cookie and sends the
browser on to its post-login destination.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus
from typing import Any, Awaitable, Callable, Literal, Optional, Sequence
from urllib.parse import parse_qsl, urlencode, urljoin, urlsplit, urlunsplit

from fastapi import Request, Response
from fastapi.responses import JSONResponse, RedirectResponse

from login_callback.clients.workos import ReturnStateCodec
from login_callback.core.config import CallbackSettings
from login_callback.schemas import (
    AuthenticationResponse,
    ErrorDetail,
    ErrorResponse,
    SessionData,
    SuccessPayload,
)

logger = logging.getLogger(__name__)

SESSION_FIELD = "jwt"

GENERIC_ERROR = ErrorResponse(
    error=ErrorDetail(
        message="Something went wrong",
        description=(
            "Couldn’t sign in. If you are not sure what happened, "
            "please contact your organization admin."
        ),
    )
)

SuccessHook = Callable[[SuccessPayload], Awaitable[None]]


class CallbackStage(str, Enum):
    """Step of the callback at which a sign-in failed."""

    STATE = "state"
    MISSING_CODE = "missing_code"
    EXCHANGE = "exchange"
    REDIRECT = "redirect"
    SESSION = "session"
    HOOK = "hook"


class CallbackError(Exception):
    """A sign-in failure tagged with the stage that produced it."""

    def __init__(self, stage: CallbackStage, message: str) -> None:
        super().__init__(message)
        self.stage = stage


@dataclass(frozen=True)
class CallbackOptions:
    """
    Caller-facing knobs for :class:`CallbackHandler`.

    ``base_url`` is the application's own origin. Relative return paths are
    resolved against it and absolute return URLs on it are always allowed;
    the request's ``Host`` header is never consulted.
    """

    base_url: str
    return_pathname: str = "/"
    on_success: Optional[SuccessHook] = None
    hook_failure_policy: Literal["abort", "ignore"] = "abort"
    allowed_redirect_origins: tuple[str, ...] = ()

    @classmethod
    def from_settings(
        cls,
        settings: CallbackSettings,
        *,
        base_url: str,
        on_success: Optional[SuccessHook] = None,
    ) -> "CallbackOptions":
        return cls(
            base_url=base_url,
            return_pathname=settings.return_pathname,
            on_success=on_success,
            hook_failure_policy=settings.hook_failure_policy,
            allowed_redirect_origins=settings.allowed_redirect_origins,
        )


def error_response() -> JSONResponse:
    """The only response a failed sign-in ever produces."""
    return JSONResponse(
        content=GENERIC_ERROR.model_dump(),
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
    )


def _origin(scheme: str, netloc: str) -> str:
    return f"{scheme.lower()}://{netloc.lower()}"


def resolve_redirect_url(
    request_url: str,
    target: str,
    *,
    base_url: str,
    allowed_origins: Sequence[str] = (),
) -> str:
    """
    Compute the post-login URL.

    Only the query of ``request_url`` is used, minus ``code`` and ``state``.
    A path target is placed on the origin of ``base_url`` and its own query
    parameters are appended to the ones left on the request. An absolute
    target is returned verbatim, but only when its origin is that of
    ``base_url`` or one of ``allowed_origins``.
    """
    try:
        return _resolve(request_url, target, base_url, allowed_origins)
    except ValueError as exc:
        raise CallbackError(
            CallbackStage.REDIRECT, f"Unparsable return URL {target!r}: {exc}"
        ) from exc


def _resolve(
    request_url: str, target: str, base_url: str, allowed_origins: Sequence[str]
) -> str:
    base = urlsplit(base_url)
    origin = _origin(base.scheme, base.netloc)
    query = [
        (key, value)
        for key, value in parse_qsl(urlsplit(request_url).query, keep_blank_values=True)
        if key not in ("code", "state")
    ]

    if not target.startswith("/") or target.startswith("//"):
        absolute = urljoin(f"{origin}/", target) if target.startswith("//") else target
        target_parts = urlsplit(absolute)
        if target_parts.scheme not in ("http", "https") or not target_parts.netloc:
            raise CallbackError(CallbackStage.REDIRECT, f"Unsupported return URL {target!r}.")
        target_origin = _origin(target_parts.scheme, target_parts.netloc)
        trusted = {origin, *(item.lower().rstrip("/") for item in allowed_origins)}
        if target_origin not in trusted:
            raise CallbackError(
                CallbackStage.REDIRECT,
                f"Return URL origin {target_origin} is not allowed.",
            )
        return absolute

    resolved = urlsplit(urljoin(f"{origin}/", target))
    query.extend(parse_qsl(resolved.query, keep_blank_values=True))
    return urlunsplit((base.scheme, base.netloc, resolved.path, urlencode(query), ""))


class CallbackHandler:
    """Complete the authorization-code flow for a single request."""

    def __init__(
        self,
        *,
        identity_client: Any,
        session_cipher: Any,
        session_storage: Any,
        options: CallbackOptions,
        state_codec: ReturnStateCodec | None = None,
    ) -> None:
        self._identity = identity_client
        self._cipher = session_cipher
        self._storage = session_storage
        self._options = options
        self._state_codec = state_codec or ReturnStateCodec()

    async def handle(self, request: Request) -> Response:
        """Run the callback; every failure collapses to :func:`error_response`."""
        try:
            return await self._complete_sign_in(request)
        except CallbackError as exc:
            logger.error("Sign-in callback failed (stage=%s): %s", exc.stage.value, exc)
            return error_response()

    async def _complete_sign_in(self, request: Request) -> Response:
        code = request.query_params.get("code")
        state = request.query_params.get("state")

        return_pathname = self._decode_state(state)

        if not code:
            raise CallbackError(CallbackStage.MISSING_CODE, "No authorization code in callback.")

        auth = await self._exchange(code)

        if return_pathname is not None:
            target = return_pathname
        else:
            target = self._options.return_pathname or "/"
        redirect_url = resolve_redirect_url(
            str(request.url),
            target,
            base_url=self._options.base_url,
            allowed_origins=self._options.allowed_redirect_origins,
        )

        cookie = self._seal_session(auth)
        await self._run_hook(auth)

        logger.info("Signed in user %s", auth.user.id)
        return RedirectResponse(
            url=redirect_url,
            status_code=HTTPStatus.FOUND,
            headers={"set-cookie": cookie},
        )

    def _decode_state(self, state: Optional[str]) -> Optional[str]:
        if not state or state == "null":
            return None
        try:
            return self._state_codec.decode(state).return_pathname
        except ValueError as exc:
            raise CallbackError(CallbackStage.STATE, str(exc)) from exc

    async def _exchange(self, code: str) -> AuthenticationResponse:
        try:
            return await self._identity.authenticate_with_code(code)
        except Exception as exc:
            raise CallbackError(CallbackStage.EXCHANGE, str(exc) or type(exc).__name__) from exc

    def _seal_session(self, auth: AuthenticationResponse) -> str:
        try:
            encrypted = self._cipher.encrypt_session(
                SessionData(
                    access_token=auth.access_token,
                    refresh_token=auth.refresh_token,
                    user=auth.user,
                    impersonator=auth.impersonator,
                    headers={},
                )
            )
            session = self._storage.get_session()
            session.set(SESSION_FIELD, encrypted)
            return self._storage.commit_session(session)
        except Exception as exc:
            raise CallbackError(CallbackStage.SESSION, str(exc) or type(exc).__name__) from exc

    async def _run_hook(self, auth: AuthenticationResponse) -> None:
        hook = self._options.on_success
        if hook is None:
            return
        payload = SuccessPayload(
            access_token=auth.access_token,
            refresh_token=auth.refresh_token,
            user=auth.user,
            impersonator=auth.impersonator,
            oauth_tokens=auth.oauth_tokens,
        )
        try:
            await hook(payload)
        except Exception as exc:
            if self._options.hook_failure_policy == "ignore":
                logger.warning("Post-login hook failed; continuing with redirect: %s", exc)
                return
            raise CallbackError(CallbackStage.HOOK, str(exc) or type(exc).__name__) from exc


__all__ = [
    "CallbackError",
    "CallbackHandler",
    "CallbackOptions",
    "CallbackStage",
    "GENERIC_ERROR",
    "SESSION_FIELD",
    "SuccessHook",
    "error_response",
    "resolve_redirect_url",
]
