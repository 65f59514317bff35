"""Expose constructed client wrappers."""

from .workos import (
    IdentityExchangeError,
    InvalidStateError,
    ReturnStateCodec,
    WorkOSClient,
)

__all__ = [
    "IdentityExchangeError",
    "InvalidStateError",
    "ReturnStateCodec",
    "WorkOSClient",
]
