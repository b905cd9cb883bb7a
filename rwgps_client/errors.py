"""Central error types used across the client."""

from __future__ import annotations


class RideWithGPSError(RuntimeError):
    """Base error for RideWithGPS client failures."""


class ConfigError(RideWithGPSError):
    """Raised when the credentials file cannot be read or parsed."""


class TransportError(RideWithGPSError):
    """Raised on network failures or a non-200 HTTP status."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        status_code: int | None = None,
        status: str | None = None,
        snippet: str | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.status_code = status_code
        self.status = status
        self.snippet = snippet


class DecodeError(RideWithGPSError):
    """Raised when a response body does not match the expected shape.

    ``payload`` holds the (possibly truncated) raw body so callers can tell a
    plain-text error page from malformed JSON.
    """

    def __init__(self, message: str, *, payload: str = "") -> None:
        super().__init__(message)
        self.payload = payload


class AuthError(RideWithGPSError):
    """Raised when logging in fails or yields no auth token."""


class ValidationError(RideWithGPSError):
    """Raised when a well-formed response is not the requested resource."""


__all__ = [
    "RideWithGPSError",
    "ConfigError",
    "TransportError",
    "DecodeError",
    "AuthError",
    "ValidationError",
]
