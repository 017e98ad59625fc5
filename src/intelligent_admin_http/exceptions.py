"""Error taxonomy for outbound HTTP calls."""

from __future__ import annotations


class HttpClientError(Exception):
    """Base exception for all outbound HTTP client failures."""

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class HttpClientValidationError(HttpClientError):
    """Raised when client configuration or per-call options are invalid."""


class HttpTimeoutError(HttpClientError):
    """Raised when an attempt exceeds its configured deadline."""

    def __init__(self, timeout_ms: int, *, cause: BaseException | None = None) -> None:
        super().__init__(f"HTTP request timeout after {timeout_ms}ms", cause=cause)
        self.timeout_ms = timeout_ms


class HttpError(HttpClientError):
    """Raised for non-2xx responses. The body is kept as raw text."""

    def __init__(
        self,
        status: int,
        status_text: str,
        message: str | None = None,
        raw_body: str | None = None,
    ) -> None:
        super().__init__(message or f"HTTP {status}: {status_text}")
        self.status = status
        self.status_text = status_text
        self.raw_body = raw_body


class TransportError(HttpClientError):
    """Raised for transport-level failures like DNS and TCP errors."""


class DecodeError(HttpClientError):
    """Raised when a JSON response body cannot be parsed."""

    def __init__(
        self,
        message: str,
        *,
        raw_body: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.raw_body = raw_body
