"""Errors raised by the Prefect API client layer.

The resource layer never lets these escape: it turns them into diagnostics,
using `str(exc)` verbatim as the detail text.
"""

from __future__ import annotations

from typing import Any, Optional


class PrefectAPIError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ClientConfigurationError(PrefectAPIError):
    """Raised when a per-resource client cannot be built from the given IDs."""


class RequestError(PrefectAPIError):
    """Raised when the HTTP request itself cannot be constructed."""

    def __init__(self, reason: str):
        super().__init__(f"error creating request: {reason}", details={"reason": reason})


class TransportError(PrefectAPIError):
    """Raised when the HTTP call fails before a response is received."""

    def __init__(self, reason: str):
        super().__init__(f"http error: {reason}", details={"reason": reason})


class StatusCodeError(PrefectAPIError):
    """Raised when the API answers with an unexpected status code."""

    def __init__(self, status_code: int, reason_phrase: str = "", body: str = ""):
        status = f"{status_code} {reason_phrase}".strip()
        message = f"status code {status}"
        if body:
            message += f", error={body}"
        self.status_code = status_code
        super().__init__(
            message=message,
            details={"status_code": status_code, "reason": reason_phrase, "body": body},
        )


class DecodeError(PrefectAPIError):
    """Raised when a response body is not the JSON shape we expect."""

    def __init__(self, reason: str):
        super().__init__(f"failed to decode response: {reason}", details={"reason": reason})


class EncodeError(PrefectAPIError):
    """Raised when a request payload cannot be serialized to JSON."""

    def __init__(self, reason: str):
        super().__init__(f"failed to encode data: {reason}", details={"reason": reason})
