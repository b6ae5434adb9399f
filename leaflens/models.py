"""Value types flowing through the request pipeline."""
import base64
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from leaflens.constants import (
    BACKOFF_MULTIPLIER,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MEDIA_TYPE,
    DEFAULT_RATE_LIMIT_BASE_DELAY_MS,
    DEFAULT_TRANSPORT_BASE_DELAY_MS,
    HTTP_METHOD_POST,
)


@dataclass(frozen=True)
class BinaryAsset:
    """Image bytes held in memory or on disk, plus their media type."""

    media_type: str
    data: Optional[bytes] = None
    path: Optional[Path] = None

    def __post_init__(self) -> None:
        match self.path:
            case str() as raw:
                object.__setattr__(self, "path", Path(raw))
            case _:
                pass

    @classmethod
    def from_path(cls, path: str | Path) -> "BinaryAsset":
        p = Path(path)
        guessed, _ = mimetypes.guess_type(p.name)
        return cls(media_type=guessed or DEFAULT_MEDIA_TYPE, path=p)

    @property
    def name(self) -> str:
        match self.path:
            case None:
                return f"<{len(self.data or b'')} bytes>"
            case p:
                return p.name


@dataclass(frozen=True)
class EncodedPayload:
    media_type: str
    data: str

    def decode(self) -> bytes:
        return base64.b64decode(self.data, validate=True)


@dataclass(frozen=True)
class RequestSpec:
    url: str
    body: Any
    method: str = HTTP_METHOD_POST
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt budget and backoff bases. Delays are in seconds."""

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    rate_limit_base_delay: float = DEFAULT_RATE_LIMIT_BASE_DELAY_MS / 1000
    transport_base_delay: float = DEFAULT_TRANSPORT_BASE_DELAY_MS / 1000
    multiplier: float = BACKOFF_MULTIPLIER

    def __post_init__(self) -> None:
        match self.max_attempts:
            case int() as n if n >= 1:
                pass
            case _:
                raise ValueError("max_attempts must be a positive integer")
        if self.rate_limit_base_delay < 0 or self.transport_base_delay < 0:
            raise ValueError("backoff base delays must not be negative")

    def rate_limit_delay(self, retry_index: int) -> float:
        return self.rate_limit_base_delay * self.multiplier ** retry_index

    def transport_delay(self, retry_index: int) -> float:
        return self.transport_base_delay * self.multiplier ** retry_index
