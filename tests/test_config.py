from __future__ import annotations

import dataclasses

import pytest

from intelligent_admin_http.config import (
    DEFAULT_RETRY_DELAY_MS,
    ClientConfig,
    HttpTimeoutSettings,
    resolve_options,
)
from intelligent_admin_http.exceptions import HttpClientValidationError
from intelligent_admin_http.request_options import RequestOptions


def test_build_seeds_json_content_type_and_lets_caller_override() -> None:
    config = ClientConfig.build(5000, {"User-Agent": "Intelligent-Admin/1.0"})
    assert config.headers == {
        "Content-Type": "application/json",
        "User-Agent": "Intelligent-Admin/1.0",
    }

    override = ClientConfig.build(5000, {"Content-Type": "text/plain"})
    assert override.headers["Content-Type"] == "text/plain"


def test_client_config_is_read_only() -> None:
    config = ClientConfig.build(5000)
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.timeout_ms = 10  # type: ignore[misc]
    with pytest.raises(TypeError):
        config.headers["X-Extra"] = "1"  # type: ignore[index]


def test_client_config_rejects_non_positive_timeout() -> None:
    with pytest.raises(HttpClientValidationError, match="timeout_ms"):
        ClientConfig.build(0)


def test_resolve_options_uses_client_defaults_without_overrides() -> None:
    config = ClientConfig.build(2500, {"X-Tenant": "acme"})
    resolved = resolve_options(config)

    assert resolved.timeout_ms == 2500
    assert resolved.max_retries == 0
    assert resolved.retry_delay_ms == DEFAULT_RETRY_DELAY_MS
    assert resolved.headers == {"Content-Type": "application/json", "X-Tenant": "acme"}


def test_resolve_options_call_headers_win_over_method_and_defaults() -> None:
    config = ClientConfig.build(2500, {"X-Tenant": "acme", "Accept": "text/html"})
    options = RequestOptions(timeout=100, headers={"X-Tenant": "globex"}, retries=2, retry_delay=50)

    resolved = resolve_options(config, options, method_headers={"X-Tenant": "initech", "X-Method": "yes"})

    assert resolved.timeout_ms == 100
    assert resolved.max_retries == 2
    assert resolved.retry_delay_ms == 50
    assert resolved.headers["X-Tenant"] == "globex"
    assert resolved.headers["X-Method"] == "yes"
    assert resolved.headers["Accept"] == "text/html"
    assert config.headers["X-Tenant"] == "acme"


def test_resolve_options_keeps_header_key_case() -> None:
    config = ClientConfig.build(2500, {"x-trace": "a"})
    resolved = resolve_options(config, RequestOptions(headers={"X-Trace": "b"}))
    assert resolved.headers["x-trace"] == "a"
    assert resolved.headers["X-Trace"] == "b"


@pytest.mark.parametrize(
    "kwargs, field",
    [
        ({"timeout": 0}, "timeout"),
        ({"retries": -1}, "retries"),
        ({"retry_delay": -5}, "retry_delay"),
    ],
)
def test_request_options_reject_invalid_values(kwargs, field) -> None:
    with pytest.raises(HttpClientValidationError, match=field):
        RequestOptions(**kwargs)


def test_timeout_settings_defaults_when_env_is_empty() -> None:
    settings = HttpTimeoutSettings.from_env({})
    assert settings.http_request_timeout == 30_000
    assert settings.openai_timeout == 60_000
    assert settings.openai_timeout >= settings.http_request_timeout


def test_timeout_settings_read_from_env() -> None:
    settings = HttpTimeoutSettings.from_env({"HTTP_REQUEST_TIMEOUT": "15000", "OPENAI_TIMEOUT": " 90000 "})
    assert settings.http_request_timeout == 15_000
    assert settings.openai_timeout == 90_000


def test_timeout_settings_use_process_env(monkeypatch) -> None:
    monkeypatch.setenv("HTTP_REQUEST_TIMEOUT", "20000")
    monkeypatch.delenv("OPENAI_TIMEOUT", raising=False)
    settings = HttpTimeoutSettings.from_env()
    assert settings.http_request_timeout == 20_000
    assert settings.openai_timeout == 60_000


@pytest.mark.parametrize(
    "env",
    [
        {"HTTP_REQUEST_TIMEOUT": "100"},
        {"HTTP_REQUEST_TIMEOUT": "999999"},
        {"OPENAI_TIMEOUT": "soon"},
    ],
)
def test_timeout_settings_reject_out_of_range_values(env) -> None:
    with pytest.raises(HttpClientValidationError, match="invalid timeout settings"):
        HttpTimeoutSettings.from_env(env)
