"""Retry classification for attempt failures."""

from __future__ import annotations

import enum

from .exceptions import DecodeError, HttpError


class Classification(str, enum.Enum):
    PERMANENT = "permanent"
    RETRYABLE = "retryable"


def is_client_error_status(status: int) -> bool:
    return 400 <= status < 500


def classify(error: BaseException) -> Classification:
    # A malformed body arrives after the HTTP exchange already succeeded.
    if isinstance(error, DecodeError):
        return Classification.PERMANENT
    if isinstance(error, HttpError) and is_client_error_status(error.status):
        return Classification.PERMANENT
    return Classification.RETRYABLE
