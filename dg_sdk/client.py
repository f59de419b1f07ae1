# client.py
from __future__ import annotations

import logging
import os
from typing import Any, Mapping, Optional, Union

from .constants import API_KEY_ENV, DEFAULT_OPTIONS
from .errors import DeepgramConfigError
from .fetch import fetch_with_auth
from .helpers import apply_setting_defaults, build_client_config
from .listen import ListenClient
from .types import ClientConfig, ClientOptions

logger = logging.getLogger(__name__)

Options = Union[ClientOptions, Mapping[str, Any], None]


class DeepgramClient:
    """
    Client for the Deepgram API.

    Usage:
        client = DeepgramClient("<key>", ClientOptions(url="deepgram.internal:8080"))
        res = await client.listen().transcribe_url("https://example.com/a.wav", {"punctuate": True})
        if res.error:
            ...

    - api_key: a Deepgram key (sent as "Token <key>"), or a ready "Bearer <token>"
    - options.url: override the API URL (on-prem); https:// is assumed without a scheme
    - options.fetch: custom transport (async callable or httpx.AsyncClient)
    - options.headers: extra headers sent with every request
    """

    def __init__(self, api_key: str, options: Options = None):
        if not api_key:
            raise DeepgramConfigError("api_key is required.")

        settings = apply_setting_defaults(options, DEFAULT_OPTIONS)
        if not settings.url:
            raise DeepgramConfigError("An API URL is required.")

        self._config: ClientConfig = build_client_config(settings, fetch_with_auth(api_key, settings.fetch))
        logger.debug("Deepgram client configured for %s", self._config.url)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def url(self) -> str:
        return self._config.url

    @property
    def headers(self) -> Mapping[str, str]:
        return self._config.headers

    def listen(self) -> ListenClient:
        # a fresh sub-client per call; only the frozen config is shared
        return ListenClient(self._config)


def create_client(api_key: Optional[str] = None, options: Options = None) -> DeepgramClient:
    """Create a DeepgramClient, reading DEEPGRAM_API_KEY when no key is passed."""
    key = api_key or os.getenv(API_KEY_ENV, "")
    if not key:
        raise DeepgramConfigError(f"api_key is required (pass it or set {API_KEY_ENV}).")
    return DeepgramClient(key, options)
