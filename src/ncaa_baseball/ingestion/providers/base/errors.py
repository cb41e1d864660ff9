from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    NETWORK = "network"
    HTTP = "http"
    PARSE = "parse"
    EMPTY = "empty"
    UNEXPECTED = "unexpected"


class ProviderError(RuntimeError):
    """Base exception for provider-related failures."""

    kind: ErrorKind = ErrorKind.UNEXPECTED


class ProviderRequestError(ProviderError):
    """HTTP/network/transport layer failures (timeouts, connection errors, non-2xx, etc.)."""

    kind = ErrorKind.NETWORK


class ProviderNetworkError(ProviderRequestError):
    """No response was received (timeout, DNS, connection refused)."""


class ProviderHTTPError(ProviderRequestError):
    """Provider answered with a non-2xx status."""

    kind = ErrorKind.HTTP

    def __init__(self, message: str, *, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProviderRateLimited(ProviderHTTPError):
    """Provider throttled the request (e.g., HTTP 429)."""


class ProviderParseError(ProviderError):
    """Response body was not JSON or did not have the expected shape."""

    kind = ErrorKind.PARSE


# Failures that a SourceClient may answer with a stale cache entry.
STALE_FALLBACK_ERRORS: tuple[type[ProviderError], ...] = (
    ProviderRequestError,
    ProviderParseError,
)


def error_kind(exc: BaseException) -> ErrorKind:
    if isinstance(exc, ProviderError):
        return exc.kind
    return ErrorKind.UNEXPECTED
