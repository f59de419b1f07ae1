# errors.py
from __future__ import annotations

from typing import Any, Dict, Optional

import httpx


class DeepgramError(Exception):
    """Base SDK error. Every failure envelope carries one of these."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DeepgramConfigError(DeepgramError, ValueError):
    """Raised at client construction (missing key, bad URL, bad fetch)."""


class DeepgramApiError(DeepgramError):
    """The API answered with a non-2xx status code."""

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        url: str,
        request_id: Optional[str] = None,
        payload: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.url = url
        self.request_id = request_id
        self.payload = payload or {}

    def __str__(self) -> str:
        return f"HTTP {self.status_code} for {self.url}: {self.message}"


class DeepgramUnknownError(DeepgramError):
    """Transport failure, or a response body that could not be parsed."""

    def __init__(self, message: str, original: Optional[BaseException] = None):
        super().__init__(message)
        self.original = original


def is_deepgram_error(err: Any) -> bool:
    return isinstance(err, DeepgramError)


def api_error_from_response(r: httpx.Response, url: str) -> DeepgramApiError:
    """
    Build a DeepgramApiError from a non-2xx response.

    The API reports errors as {"err_code", "err_msg", "request_id"}; older
    deployments use "reason" or "message". Falls back to the raw body text.
    """
    message = r.text or r.reason_phrase
    payload: Optional[Dict[str, Any]] = None
    try:
        j = r.json()
    except ValueError:
        j = None
    if isinstance(j, dict):
        payload = j
        message = j.get("err_msg") or j.get("reason") or j.get("message") or message
    request_id = r.headers.get("dg-request-id") or (payload or {}).get("request_id")
    return DeepgramApiError(
        r.status_code,
        str(message),
        url=url,
        request_id=request_id,
        payload=payload,
    )
