"""
Transcription source classification.

A source is one of UrlSource, BufferSource or StreamSource. Plain mappings and
other objects carrying the same field names are accepted too, e.g.
``{"url": "https://..."}`` or ``{"buffer": data, "mimetype": "audio/wav"}``.
Nothing is ever coerced: a value that fits none of the shapes is UNKNOWN.
"""
from __future__ import annotations

import enum
from typing import Any, Mapping, Optional

_MISSING = object()

BYTES_TYPES = (bytes, bytearray, memoryview)


class SourceKind(enum.Enum):
    URL = "url"
    BUFFER = "buffer"
    STREAM = "stream"
    UNKNOWN = "unknown"

    @property
    def is_bytes(self) -> bool:
        return self in (SourceKind.BUFFER, SourceKind.STREAM)


def _field(source: Any, name: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(name, _MISSING)
    return getattr(source, name, _MISSING)


def _is_readable(stream: Any) -> bool:
    return callable(getattr(stream, "read", None)) or hasattr(stream, "__aiter__")


def is_url_source(source: Any) -> bool:
    url = _field(source, "url")
    return isinstance(url, str) and bool(url)


def is_buffer_source(source: Any) -> bool:
    return isinstance(_field(source, "buffer"), BYTES_TYPES)


def is_stream_source(source: Any) -> bool:
    stream = _field(source, "stream")
    return stream is not _MISSING and _is_readable(stream)


def classify_source(source: Any) -> SourceKind:
    if source is None or isinstance(source, (str,) + BYTES_TYPES):
        return SourceKind.UNKNOWN
    if is_url_source(source):
        return SourceKind.URL
    if is_buffer_source(source):
        return SourceKind.BUFFER
    if is_stream_source(source):
        return SourceKind.STREAM
    return SourceKind.UNKNOWN


def source_field(source: Any, name: str) -> Any:
    value = _field(source, name)
    return None if value is _MISSING else value


def source_mimetype(source: Any) -> Optional[str]:
    mimetype = source_field(source, "mimetype")
    if not isinstance(mimetype, str) or not mimetype.strip():
        return None
    return mimetype.strip()
