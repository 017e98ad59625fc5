"""Client configuration and per-call option resolution."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import HttpClientValidationError
from .request_options import RequestOptions

DEFAULT_TIMEOUT_MS = 30_000
DEFAULT_OPENAI_TIMEOUT_MS = 60_000
DEFAULT_RETRIES = 0
DEFAULT_RETRY_DELAY_MS = 1_000
DEFAULT_HEADERS: Mapping[str, str] = MappingProxyType({"Content-Type": "application/json"})
SERVICE_USER_AGENT = "Intelligent-Admin/1.0"


def _normalize_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    if not headers:
        return {}
    clean: dict[str, str] = {}
    for key, value in headers.items():
        clean[str(key)] = str(value)
    return clean


@dataclass(frozen=True)
class ClientConfig:
    """Immutable defaults owned by one client instance."""

    timeout_ms: int = DEFAULT_TIMEOUT_MS
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.timeout_ms <= 0:
            raise HttpClientValidationError("timeout_ms must be greater than 0")
        object.__setattr__(self, "headers", MappingProxyType(_normalize_headers(self.headers)))

    @classmethod
    def build(cls, timeout_ms: int = DEFAULT_TIMEOUT_MS, headers: Mapping[str, str] | None = None) -> "ClientConfig":
        merged = dict(DEFAULT_HEADERS)
        merged.update(_normalize_headers(headers))
        return cls(timeout_ms=timeout_ms, headers=merged)


@dataclass(frozen=True)
class ResolvedOptions:
    timeout_ms: int
    headers: Mapping[str, str]
    max_retries: int
    retry_delay_ms: int


def resolve_options(
    config: ClientConfig,
    options: RequestOptions | None = None,
    method_headers: Mapping[str, str] | None = None,
) -> ResolvedOptions:
    """Merge client defaults with per-call overrides.

    Headers are layered defaults < method-specific < call options, so the
    call always wins on a conflicting key.
    """
    options = options or RequestOptions()
    headers = dict(config.headers)
    headers.update(_normalize_headers(method_headers))
    headers.update(_normalize_headers(options.headers))
    return ResolvedOptions(
        timeout_ms=options.timeout if options.timeout is not None else config.timeout_ms,
        headers=MappingProxyType(headers),
        max_retries=options.retries if options.retries is not None else DEFAULT_RETRIES,
        retry_delay_ms=options.retry_delay if options.retry_delay is not None else DEFAULT_RETRY_DELAY_MS,
    )


class HttpTimeoutSettings(BaseModel):
    """Process-wide timeout defaults read from the environment."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    http_request_timeout: int = Field(default=DEFAULT_TIMEOUT_MS, ge=5_000, le=180_000)
    openai_timeout: int = Field(default=DEFAULT_OPENAI_TIMEOUT_MS, ge=10_000, le=300_000)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        http_timeout_env_var: str = "HTTP_REQUEST_TIMEOUT",
        openai_timeout_env_var: str = "OPENAI_TIMEOUT",
    ) -> "HttpTimeoutSettings":
        env = os.environ if environ is None else environ
        values: dict[str, str] = {}
        if env.get(http_timeout_env_var):
            values["http_request_timeout"] = env[http_timeout_env_var].strip()
        if env.get(openai_timeout_env_var):
            values["openai_timeout"] = env[openai_timeout_env_var].strip()
        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise HttpClientValidationError(f"invalid timeout settings: {exc}", cause=exc) from exc
