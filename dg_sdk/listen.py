# listen.py
# -----------------------------------------------------------------------------
# Pre-recorded transcription client.
# - URL sources: JSON body {"url": ...}
# - Buffer / stream sources: raw bytes with Content-Type = mimetype
# - Every outcome comes back as a DeepgramResponse envelope
# -----------------------------------------------------------------------------
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, AsyncIterator, Dict, Mapping, Optional, Union

from .constants import LISTEN_ENDPOINT, MSG_CALLBACK_REQUIRED, MSG_MIMETYPE_REQUIRED, MSG_UNKNOWN_SOURCE
from .errors import DeepgramError
from .rest import AbstractRestfulClient
from .sources import SourceKind, classify_source, source_field, source_mimetype
from .types import (
    BufferSource,
    DeepgramResponse,
    StreamSource,
    TranscriptionOptions,
    TranscriptionSource,
    UrlSource,
)

logger = logging.getLogger(__name__)

STREAM_CHUNK_SIZE = 64 * 1024


def _as_bytes(chunk: Any) -> bytes:
    if not isinstance(chunk, (bytes, bytearray, memoryview)):
        raise DeepgramError(f"Stream must yield bytes, got {type(chunk).__name__} (open files in binary mode)")
    return bytes(chunk)


async def _iter_stream(stream: Any, chunk_size: int = STREAM_CHUNK_SIZE) -> AsyncIterator[bytes]:
    if hasattr(stream, "__aiter__"):
        async for chunk in stream:
            yield _as_bytes(chunk)
        return
    # sync reads go to a worker thread so a slow file never blocks the loop
    while True:
        chunk = await asyncio.to_thread(stream.read, chunk_size)
        if not chunk:
            break
        yield _as_bytes(chunk)


class ListenClient(AbstractRestfulClient):
    """
    Usage:
        client = DeepgramClient("<key>")
        result, error = await client.listen().transcribe_url("https://.../a.wav", {"model": "nova-2"})
    """

    async def transcribe(
        self,
        source: Union[TranscriptionSource, Mapping[str, Any]],
        options: Optional[TranscriptionOptions] = None,
        endpoint: str = LISTEN_ENDPOINT,
    ) -> DeepgramResponse:
        kind = classify_source(source)
        if kind is SourceKind.UNKNOWN:
            return DeepgramResponse.failure(DeepgramError(MSG_UNKNOWN_SOURCE))

        if not kind.is_bytes:
            content: Any = json.dumps({"url": source_field(source, "url")}).encode("utf-8")
            headers = {"Content-Type": "application/json"}
        else:
            mimetype = source_mimetype(source)
            if not mimetype:
                return DeepgramResponse.failure(DeepgramError(MSG_MIMETYPE_REQUIRED))
            headers = {"Content-Type": mimetype}
            if kind is SourceKind.BUFFER:
                content = bytes(source_field(source, "buffer"))
            else:
                content = _iter_stream(source_field(source, "stream"))

        try:
            result = await self._post(endpoint, options, content=content, headers=headers)
        except DeepgramError as e:
            return DeepgramResponse.failure(e)
        return DeepgramResponse.success(result)

    # ---- convenience wrappers ----
    async def transcribe_url(self, url: str, options: Optional[TranscriptionOptions] = None) -> DeepgramResponse:
        return await self.transcribe(UrlSource(url=url), options)

    async def transcribe_file(
        self,
        file: Union[bytes, bytearray, memoryview, Any],
        mimetype: Optional[str],
        options: Optional[TranscriptionOptions] = None,
    ) -> DeepgramResponse:
        """Transcribe raw bytes or a readable stream (open file, BytesIO, async iterator)."""
        if isinstance(file, (bytes, bytearray, memoryview)):
            source: Any = BufferSource(buffer=bytes(file), mimetype=mimetype)
        else:
            source = StreamSource(stream=file, mimetype=mimetype)
        return await self.transcribe(source, options)

    async def transcribe_url_callback(
        self,
        url: str,
        callback: str,
        options: Optional[TranscriptionOptions] = None,
    ) -> DeepgramResponse:
        """Ask the API to POST the result to `callback`; the reply only carries a request_id."""
        if not callback:
            return DeepgramResponse.failure(DeepgramError(MSG_CALLBACK_REQUIRED))
        return await self.transcribe_url(url, _with_callback(options, callback))

    async def transcribe_file_callback(
        self,
        file: Any,
        mimetype: Optional[str],
        callback: str,
        options: Optional[TranscriptionOptions] = None,
    ) -> DeepgramResponse:
        if not callback:
            return DeepgramResponse.failure(DeepgramError(MSG_CALLBACK_REQUIRED))
        return await self.transcribe_file(file, mimetype, _with_callback(options, callback))


def _with_callback(options: Optional[TranscriptionOptions], callback: str) -> Dict[str, Any]:
    return {**(options or {}), "callback": callback}
