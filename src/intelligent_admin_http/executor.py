"""Single timed, cancellable request attempt."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from .decoding import decode_body
from .exceptions import DecodeError, HttpError, HttpTimeoutError, TransportError
from .models import AttemptResult, RequestSpec, ResponseEnvelope

logger = logging.getLogger(__name__)


class AttemptDeadline:
    """Deadline owned by exactly one attempt.

    Expiry cancels the task awaiting the transport, so httpx tears down the
    in-flight connection rather than leaving it running in the background.
    """

    def __init__(self, timeout_ms: int) -> None:
        self.timeout_ms = timeout_ms
        self.cleared = False
        self._timeout: asyncio.Timeout | None = None

    async def __aenter__(self) -> "AttemptDeadline":
        self._timeout = asyncio.timeout(self.timeout_ms / 1000)
        await self._timeout.__aenter__()
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> bool | None:
        if self._timeout is None:
            raise RuntimeError("AttemptDeadline exited before it was entered")
        try:
            return await self._timeout.__aexit__(exc_type, exc, tb)
        finally:
            self.cleared = True

    def expired(self) -> bool:
        return self._timeout is not None and self._timeout.expired()


def _capture_headers(response: httpx.Response) -> dict[str, str]:
    headers: dict[str, str] = {}
    for key, value in response.headers.items():
        headers[key] = value
    return headers


async def execute_attempt(
    client: httpx.AsyncClient,
    prepared: RequestSpec,
    timeout_ms: int,
) -> AttemptResult:
    """Run one attempt and report its outcome as a value.

    Expected failures (timeouts, transport errors, non-2xx statuses and
    malformed JSON) come back as ``AttemptResult.failure``. Cancellation of
    the calling task still propagates.
    """
    try:
        async with AttemptDeadline(timeout_ms):
            response = await client.request(
                prepared.method,
                prepared.url,
                headers=dict(prepared.headers),
                content=prepared.content,
                timeout=timeout_ms / 1000,
            )
    except TimeoutError as exc:
        logger.debug("%s %s timed out after %dms", prepared.method, prepared.url, timeout_ms)
        return AttemptResult.failure(HttpTimeoutError(timeout_ms, cause=exc))
    except httpx.TimeoutException as exc:
        logger.debug("%s %s transport timeout after %dms", prepared.method, prepared.url, timeout_ms)
        return AttemptResult.failure(HttpTimeoutError(timeout_ms, cause=exc))
    except httpx.TransportError as exc:
        logger.debug("%s %s transport failure: %s", prepared.method, prepared.url, exc)
        return AttemptResult.failure(
            TransportError(f"{prepared.method} {prepared.url} failed: {exc}", cause=exc)
        )

    if not response.is_success:
        error = HttpError(
            response.status_code,
            response.reason_phrase,
            f"HTTP {response.status_code}: {response.reason_phrase}",
            response.text,
        )
        logger.debug("%s %s responded %s", prepared.method, prepared.url, error)
        return AttemptResult.failure(error)

    try:
        data = decode_body(response)
    except DecodeError as exc:
        logger.debug("%s %s returned a malformed body: %s", prepared.method, prepared.url, exc)
        return AttemptResult.failure(exc)

    return AttemptResult.success(
        ResponseEnvelope(
            data=data,
            status=response.status_code,
            status_text=response.reason_phrase,
            headers=_capture_headers(response),
        )
    )
