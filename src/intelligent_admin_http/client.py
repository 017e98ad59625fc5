"""Asynchronous HTTP client with per-attempt deadlines and selective retries."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping

import httpx

from .classifier import Classification, classify
from .config import (
    SERVICE_USER_AGENT,
    ClientConfig,
    HttpTimeoutSettings,
    resolve_options,
)
from .executor import execute_attempt
from .models import RequestSpec, ResponseEnvelope
from .request_options import RequestOptions

logger = logging.getLogger(__name__)

REDACTED_HEADERS = frozenset({"authorization", "cookie", "proxy-authorization", "x-api-key"})


def _loggable_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {key: "[REDACTED]" if key.lower() in REDACTED_HEADERS else value for key, value in headers.items()}


def _encode_body(body: Any) -> bytes | None:
    if body is None:
        return None
    return json.dumps(body).encode("utf-8")


class AsyncHttpClient:
    """Client used for every outbound call.

    The instance holds only immutable defaults and the transport, so any
    number of calls may run through it concurrently.
    """

    def __init__(
        self,
        timeout_ms: int | None = None,
        headers: Mapping[str, str] | None = None,
        *,
        httpx_client: httpx.AsyncClient | None = None,
    ) -> None:
        if timeout_ms is None:
            timeout_ms = HttpTimeoutSettings.from_env().http_request_timeout
        self._config = ClientConfig.build(timeout_ms, headers)
        self._httpx = httpx_client or httpx.AsyncClient(trust_env=False)

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def __aenter__(self) -> "AsyncHttpClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._httpx.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        body: Any = None,
        options: RequestOptions | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> ResponseEnvelope[Any]:
        resolved = resolve_options(self._config, options, method_headers=headers)
        prepared = RequestSpec(
            method=method.upper(),
            url=url,
            headers=resolved.headers,
            content=_encode_body(body),
        )
        logger.debug(
            "%s %s timeout=%dms retries=%d headers=%s",
            prepared.method,
            prepared.url,
            resolved.timeout_ms,
            resolved.max_retries,
            _loggable_headers(prepared.headers),
        )

        attempt = 0
        while True:
            result = await execute_attempt(self._httpx, prepared, resolved.timeout_ms)
            if result.envelope is not None:
                return result.envelope

            error = result.error
            if error is None:
                raise RuntimeError("attempt finished without an envelope or an error")
            if classify(error) is Classification.PERMANENT:
                raise error
            if attempt >= resolved.max_retries:
                if resolved.max_retries:
                    logger.warning(
                        "%s %s failed after %d attempts: %s",
                        prepared.method,
                        prepared.url,
                        attempt + 1,
                        error,
                    )
                raise error

            attempt += 1
            logger.warning(
                "%s %s attempt %d/%d failed (%s); retrying in %dms",
                prepared.method,
                prepared.url,
                attempt,
                resolved.max_retries + 1,
                error,
                resolved.retry_delay_ms,
            )
            await asyncio.sleep(resolved.retry_delay_ms / 1000)

    async def get(self, url: str, *, options: RequestOptions | None = None) -> ResponseEnvelope[Any]:
        return await self.request("GET", url, options=options)

    async def post(self, url: str, body: Any = None, *, options: RequestOptions | None = None) -> ResponseEnvelope[Any]:
        return await self.request("POST", url, body=body, options=options)

    async def put(self, url: str, body: Any = None, *, options: RequestOptions | None = None) -> ResponseEnvelope[Any]:
        return await self.request("PUT", url, body=body, options=options)

    async def patch(self, url: str, body: Any = None, *, options: RequestOptions | None = None) -> ResponseEnvelope[Any]:
        return await self.request("PATCH", url, body=body, options=options)

    async def delete(self, url: str, *, options: RequestOptions | None = None) -> ResponseEnvelope[Any]:
        return await self.request("DELETE", url, options=options)


def create_http_client(
    timeout_ms: int,
    headers: Mapping[str, str] | None = None,
    *,
    httpx_client: httpx.AsyncClient | None = None,
) -> AsyncHttpClient:
    return AsyncHttpClient(timeout_ms, headers, httpx_client=httpx_client)


@dataclass(frozen=True)
class ServiceClients:
    """Clients built once at process start and handed to collaborators."""

    default: AsyncHttpClient
    openai: AsyncHttpClient
    gmail: AsyncHttpClient

    async def __aenter__(self) -> "ServiceClients":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await asyncio.gather(self.default.aclose(), self.openai.aclose(), self.gmail.aclose())


def build_service_clients(
    settings: HttpTimeoutSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ServiceClients:
    settings = settings or HttpTimeoutSettings.from_env()
    agent = {"User-Agent": SERVICE_USER_AGENT}

    def _httpx_client() -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=transport, trust_env=False)

    return ServiceClients(
        default=AsyncHttpClient(settings.http_request_timeout, httpx_client=_httpx_client()),
        openai=AsyncHttpClient(settings.openai_timeout, agent, httpx_client=_httpx_client()),
        gmail=AsyncHttpClient(settings.http_request_timeout, agent, httpx_client=_httpx_client()),
    )
