"""Per-call overrides for the HTTP client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .exceptions import HttpClientValidationError


@dataclass(frozen=True)
class RequestOptions:
    timeout: int | None = None
    headers: Mapping[str, str] | None = None
    retries: int | None = None
    retry_delay: int | None = None

    def __post_init__(self) -> None:
        if self.timeout is not None and self.timeout <= 0:
            raise HttpClientValidationError("timeout must be greater than 0")
        if self.retries is not None and self.retries < 0:
            raise HttpClientValidationError("retries must be non-negative")
        if self.retry_delay is not None and self.retry_delay < 0:
            raise HttpClientValidationError("retry_delay must be non-negative")
