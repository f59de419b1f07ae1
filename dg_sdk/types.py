from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, AsyncIterator, Awaitable, BinaryIO, Callable, Dict, Mapping, Optional, Sequence, Union

import httpx

from .errors import DeepgramError

Fetch = Callable[[httpx.Request], Awaitable[httpx.Response]]

OptionValue = Union[str, int, float, bool, None]
TranscriptionOptions = Mapping[str, Union[OptionValue, Sequence[OptionValue]]]


# =============================================================================
# Sources
# =============================================================================

@dataclass(frozen=True)
class UrlSource:
    url: str


@dataclass(frozen=True)
class BufferSource:
    buffer: bytes
    mimetype: Optional[str] = None


@dataclass(frozen=True)
class StreamSource:
    # anything with a .read(n) method (open file, BytesIO) or an async iterator of bytes
    stream: Union[BinaryIO, AsyncIterator[bytes]]
    mimetype: Optional[str] = None


TranscriptionSource = Union[UrlSource, BufferSource, StreamSource]


# =============================================================================
# Client configuration
# =============================================================================

@dataclass
class ClientOptions:
    """
    Optional overrides passed to DeepgramClient.

    - url: API base URL, e.g. an on-prem deployment. Scheme defaults to https.
    - headers: extra headers sent with every request.
    - fetch: custom transport. An async callable taking an httpx.Request and
      returning an httpx.Response, or an httpx.AsyncClient.
    """
    url: Optional[str] = None
    headers: Optional[Dict[str, str]] = None
    fetch: Optional[Union[Fetch, httpx.AsyncClient]] = None


@dataclass(frozen=True)
class ClientConfig:
    url: str
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    fetch: Optional[Fetch] = None


# =============================================================================
# Response envelope
# =============================================================================

@dataclass(frozen=True)
class DeepgramResponse:
    """
    Envelope returned by every public call: exactly one of result/error is set.

    Per-call failures are returned here instead of raised, so callers check
    `error` (or use `unwrap()` to get exception semantics back).
    """
    result: Optional[Any] = None
    error: Optional[DeepgramError] = None

    def __post_init__(self):
        if (self.result is None) == (self.error is None):
            raise ValueError("DeepgramResponse needs exactly one of result or error")

    @classmethod
    def success(cls, result: Any) -> "DeepgramResponse":
        return cls(result=result, error=None)

    @classmethod
    def failure(cls, error: DeepgramError) -> "DeepgramResponse":
        return cls(result=None, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.result

    def __iter__(self):
        # allows `result, error = await client.listen().transcribe(...)`
        yield self.result
        yield self.error
