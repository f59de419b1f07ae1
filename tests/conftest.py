"""Shared pytest fixtures for the dg_sdk test suite.

The network is replaced by ``httpx.MockTransport``: every request the SDK sends
is recorded on the ``api`` fixture and answered by a configurable handler.
"""

from typing import Any, Callable, List, Optional

import httpx
import pytest

from dg_sdk import ClientOptions, DeepgramClient

BASE_URL = "https://api.example.com"
API_KEY = "a" * 40


class FakeApi:
    """Records requests and replies with ``self.response`` (or ``self.handler``)."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.response: httpx.Response = httpx.Response(200, json={})
        self.handler: Optional[Callable[[httpx.Request], httpx.Response]] = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.handler is not None:
            return self.handler(request)
        # a fresh copy per request, so one canned reply can serve several calls
        return httpx.Response(
            self.response.status_code,
            headers=self.response.headers,
            content=self.response.content,
        )

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]


@pytest.fixture
def transcription() -> dict:
    """A trimmed pre-recorded transcription response body."""
    return {
        "metadata": {
            "request_id": "5f1d9c0e-2b6a-4d1b-9a5e-0d8a2c4f1e77",
            "created": "2024-01-01T00:00:00.000Z",
            "duration": 3.5,
            "channels": 1,
            "models": ["1abfe86b-e047-4eed-858a-35e5625b41ee"],
        },
        "results": {
            "channels": [
                {
                    "alternatives": [
                        {
                            "transcript": "hello world",
                            "confidence": 0.98,
                            "words": [
                                {"word": "hello", "start": 0.1, "end": 0.5, "confidence": 0.99},
                                {"word": "world", "start": 0.6, "end": 1.0, "confidence": 0.97},
                            ],
                        }
                    ]
                }
            ]
        },
    }


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def make_client(api: FakeApi) -> Callable[..., DeepgramClient]:
    """Build a DeepgramClient whose transport is the FakeApi."""

    def _make(api_key: str = API_KEY, **overrides: Any) -> DeepgramClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(api))
        options = ClientOptions(url=overrides.pop("url", BASE_URL), fetch=http, **overrides)
        return DeepgramClient(api_key, options)

    return _make


@pytest.fixture
def client(make_client) -> DeepgramClient:
    return make_client()
