"""Validate sign-in configuration before the service starts.

Loads every settings group from the given ``.env`` file (process environment
variables still take precedence) and reports missing or malformed values,
such as an absent WorkOS API key or a cookie password shorter than 32
characters.

Example usage::

    python -m scripts.check_env --env-file /srv/login/.env
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from login_callback.core.config import (
    AppSettings,
    CallbackSettings,
    SessionSettings,
    WorkOSSettings,
)

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_RUNTIME_ERROR = 5


def _load_settings(env_file: Path) -> AppSettings:
    """Build the full settings tree from ``env_file``."""
    return AppSettings(
        workos=WorkOSSettings(_env_file=env_file),  # type: ignore[call-arg]
        session=SessionSettings(_env_file=env_file),  # type: ignore[call-arg]
        callback=CallbackSettings(_env_file=env_file),  # type: ignore[call-arg]
        _env_file=env_file,  # type: ignore[call-arg]
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate WorkOS, session cookie and redirect settings."
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        type=Path,
        help="Path to the environment file (default: .env in the repo root).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    env_file: Path = args.env_file

    if not env_file.exists():
        print(
            f"Environment file {env_file} does not exist. "
            "Ensure the path is correct or create it before running this tool.",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    try:
        settings = _load_settings(env_file)
    except ValidationError as exc:
        print(
            "Settings validation failed. Missing or invalid values detected:\n"
            f"{exc.json(indent=2)}",
            file=sys.stderr,
        )
        return EXIT_VALIDATION_ERROR

    if not settings.session.cookie_secure and settings.environment == "production":
        print("Warning: WORKOS_COOKIE_SECURE is disabled in production.", file=sys.stderr)

    origins = ", ".join(settings.callback.allowed_redirect_origins) or "(request origin only)"
    print(f"Configuration OK. Absolute return URLs allowed for: {origins}")
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
