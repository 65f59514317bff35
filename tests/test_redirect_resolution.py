try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

from urllib.parse import parse_qsl, urlsplit

import pytest

from login_callback.services.callback import (
    CallbackError,
    CallbackStage,
    resolve_redirect_url,
)

BASE_URL = "https://app.example.com"
CALLBACK_URL = "https://app.example.com/auth/callback?code=abc&state=xyz&ref=email"


def test_default_path_drops_code_and_state() -> None:
    url = resolve_redirect_url(CALLBACK_URL, "/", base_url=BASE_URL)

    assert url == "https://app.example.com/?ref=email"


def test_relative_target_appends_its_query() -> None:
    url = resolve_redirect_url(CALLBACK_URL, "/dashboard?x=1&ref=state", base_url=BASE_URL)

    parts = urlsplit(url)
    assert parts.netloc == "app.example.com"
    assert parts.path == "/dashboard"
    assert parse_qsl(parts.query) == [("ref", "email"), ("x", "1"), ("ref", "state")]


def test_relative_target_without_residual_params() -> None:
    url = resolve_redirect_url(
        "http://localhost:8000/auth/callback?code=abc",
        "/settings/profile",
        base_url="http://localhost:8000",
    )

    assert url == "http://localhost:8000/settings/profile"


def test_relative_target_ignores_request_host() -> None:
    url = resolve_redirect_url(
        "http://evil.example/auth/callback?code=abc&tab=2", "/home", base_url=BASE_URL
    )

    assert url == "https://app.example.com/home?tab=2"


def test_same_origin_absolute_url_is_allowed() -> None:
    target = "https://app.example.com/welcome?new=1"

    assert resolve_redirect_url(CALLBACK_URL, target, base_url=BASE_URL) == target


def test_request_host_is_not_trusted_for_absolute_urls() -> None:
    with pytest.raises(CallbackError) as excinfo:
        resolve_redirect_url(
            "http://evil.example/auth/callback?code=abc",
            "http://evil.example/x",
            base_url=BASE_URL,
        )

    assert excinfo.value.stage is CallbackStage.REDIRECT


def test_allow_listed_absolute_url_is_returned_verbatim() -> None:
    target = "https://docs.example.com/start"

    url = resolve_redirect_url(
        CALLBACK_URL,
        target,
        base_url=BASE_URL,
        allowed_origins=["https://docs.example.com/"],
    )

    assert url == target


@pytest.mark.parametrize(
    "target",
    [
        "https://evil.example/",
        "//evil.example/path",
        "http://app.example.com/downgraded",
        "javascript:alert(1)",
        "not a url",
        "https://[evil",
        "//[evil/path",
        "",
    ],
)
def test_untrusted_absolute_targets_are_rejected(target: str) -> None:
    with pytest.raises(CallbackError) as excinfo:
        resolve_redirect_url(
            CALLBACK_URL,
            target,
            base_url=BASE_URL,
            allowed_origins=["https://docs.example.com"],
        )

    assert excinfo.value.stage is CallbackStage.REDIRECT
