# rest.py
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from . import __version__
from .errors import DeepgramError, DeepgramUnknownError, api_error_from_response
from .helpers import serialize_options
from .types import ClientConfig, TranscriptionOptions

logger = logging.getLogger(__name__)

USER_AGENT = f"dg-sdk/{__version__} (python-httpx)"


class AbstractRestfulClient:
    """
    Shared request plumbing for the service sub-clients.

    Holds only the frozen ClientConfig; every call builds its own request.
    """

    def __init__(self, config: ClientConfig):
        self.config = config

    def _url(self, endpoint: str, options: Optional[TranscriptionOptions]) -> str:
        return f"{self.config.url}/{endpoint.lstrip('/')}?{serialize_options(options)}"

    def _headers(self, extra: Mapping[str, str]) -> httpx.Headers:
        headers = httpx.Headers({"User-Agent": USER_AGENT})
        headers.update(self.config.headers)
        headers.update(extra)
        return headers

    async def _post(
        self,
        endpoint: str,
        options: Optional[TranscriptionOptions],
        *,
        content: Any,
        headers: Mapping[str, str],
    ) -> Any:
        """
        POST and return the parsed JSON body.

        Raises DeepgramApiError on non-2xx, DeepgramUnknownError on transport
        errors and empty / non-JSON bodies. No retries.
        """
        url = self._url(endpoint, options)
        request = httpx.Request("POST", url, content=content, headers=self._headers(headers))
        logger.debug("POST %s", url)

        try:
            r = await self.config.fetch(request)
        except DeepgramError:
            raise
        except Exception as e:
            # custom transports may fail with anything (OSError, aiohttp errors, timeouts)
            logger.warning("Transport error for %s: %r", url, e)
            raise DeepgramUnknownError(str(e) or repr(e), original=e) from e

        if not r.is_success:
            # make sure the body is loaded before reading text/json
            await r.aread()
            err = api_error_from_response(r, url)
            logger.warning("Deepgram API error: %s", err)
            raise err

        await r.aread()
        try:
            payload = r.json()
        except (ValueError, UnicodeDecodeError) as e:
            raise DeepgramUnknownError(f"Could not parse response body as JSON: {e}", original=e) from e
        if payload is None:
            raise DeepgramUnknownError("Empty response body")
        return payload
