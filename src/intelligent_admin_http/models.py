"""Typed values exchanged between the executor and the caller."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import HttpClientError

T = TypeVar("T")


class ResponseEnvelope(BaseModel, Generic[T]):
    model_config = ConfigDict(frozen=True)

    data: T
    status: int
    status_text: str = ""
    headers: dict[str, str] = Field(default_factory=dict)


@dataclass(frozen=True)
class RequestSpec:
    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    content: bytes | None = None


@dataclass(frozen=True)
class AttemptResult:
    """Outcome of a single attempt: exactly one of ``envelope`` or ``error``."""

    envelope: ResponseEnvelope[Any] | None = None
    error: HttpClientError | None = None

    def __post_init__(self) -> None:
        if (self.envelope is None) == (self.error is None):
            raise ValueError("AttemptResult requires exactly one of envelope or error")

    @property
    def succeeded(self) -> bool:
        return self.envelope is not None

    @classmethod
    def success(cls, envelope: ResponseEnvelope[Any]) -> "AttemptResult":
        return cls(envelope=envelope)

    @classmethod
    def failure(cls, error: HttpClientError) -> "AttemptResult":
        return cls(error=error)
