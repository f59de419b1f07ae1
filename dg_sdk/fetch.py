# fetch.py
# -----------------------------------------------------------------------------
# Transport resolution + auth injection.
# - Default transport: short-lived httpx.AsyncClient per request
# - Auth: Authorization: Token <key>, or a pre-formed "Bearer ..." key verbatim
# - A caller-supplied Authorization header always wins
# -----------------------------------------------------------------------------
from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from .constants import DEFAULT_TIMEOUT_S
from .errors import DeepgramConfigError
from .types import Fetch

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def resolve_fetch(custom: Optional[Any] = None) -> Fetch:
    if custom is None:
        async def _fetch(request: httpx.Request) -> httpx.Response:
            async with httpx.AsyncClient(timeout=DEFAULT_TIMEOUT_S) as client:
                return await client.send(request)
        return _fetch
    if isinstance(custom, httpx.AsyncClient):
        return custom.send
    if callable(custom):
        return custom
    raise DeepgramConfigError(f"fetch must be callable or an httpx.AsyncClient, got {type(custom).__name__}")


def resolve_auth_header(api_key: str) -> str:
    # Pre-formed bearer tokens (e.g. short-lived access tokens) pass through as-is.
    if api_key.startswith(BEARER_PREFIX):
        return api_key
    return f"Token {api_key}"


def fetch_with_auth(api_key: str, custom: Optional[Any] = None) -> Fetch:
    if not api_key:
        raise DeepgramConfigError("api_key is required.")
    fetch = resolve_fetch(custom)
    auth = resolve_auth_header(api_key)

    async def _authed(request: httpx.Request) -> httpx.Response:
        if "Authorization" not in request.headers:
            request.headers["Authorization"] = auth
        else:
            logger.debug("Keeping caller-supplied Authorization header")
        return await fetch(request)

    return _authed
