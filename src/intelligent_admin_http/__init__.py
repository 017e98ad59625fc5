"""Outbound HTTP client for the Intelligent Admin backend."""

from .classifier import Classification, classify
from .client import AsyncHttpClient, ServiceClients, build_service_clients, create_http_client
from .config import ClientConfig, HttpTimeoutSettings, ResolvedOptions, resolve_options
from .exceptions import (
    DecodeError,
    HttpClientError,
    HttpClientValidationError,
    HttpError,
    HttpTimeoutError,
    TransportError,
)
from .models import AttemptResult, RequestSpec, ResponseEnvelope
from .request_options import RequestOptions

__all__ = [
    "AsyncHttpClient",
    "AttemptResult",
    "Classification",
    "ClientConfig",
    "DecodeError",
    "HttpClientError",
    "HttpClientValidationError",
    "HttpError",
    "HttpTimeoutError",
    "HttpTimeoutSettings",
    "RequestOptions",
    "RequestSpec",
    "ResolvedOptions",
    "ResponseEnvelope",
    "ServiceClients",
    "TransportError",
    "build_service_clients",
    "classify",
    "create_http_client",
    "resolve_options",
]
