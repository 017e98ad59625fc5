"""Content-type driven response body decoding."""

from __future__ import annotations

import json
from typing import Any

import httpx

from .exceptions import DecodeError


def is_json_content_type(content_type: str | None) -> bool:
    return "application/json" in (content_type or "").lower()


def decode_body(response: httpx.Response) -> Any:
    """Return parsed JSON for JSON responses, raw text for everything else."""
    text = response.text
    if not is_json_content_type(response.headers.get("content-type")):
        return text
    try:
        return json.loads(text)
    except (ValueError, RecursionError) as exc:
        raise DecodeError(f"Invalid JSON response body: {exc}", raw_body=text, cause=exc) from exc
