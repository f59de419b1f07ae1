"""Tests for DeepgramClient construction and the listen() factory."""

import dataclasses

import httpx
import pytest

from dg_sdk import ClientOptions, DeepgramClient, DeepgramConfigError, ListenClient, create_client
from dg_sdk.constants import DEFAULT_URL


def test_default_configuration():
    client = DeepgramClient("key")

    assert client.url == DEFAULT_URL
    assert dict(client.headers) == {}
    assert callable(client.config.fetch)


@pytest.mark.parametrize("key", ["", None])
def test_missing_api_key_is_fatal(key):
    with pytest.raises(DeepgramConfigError, match="api_key"):
        DeepgramClient(key)


def test_config_error_is_a_value_error():
    with pytest.raises(ValueError):
        DeepgramClient("")


@pytest.mark.parametrize("url", ["", "https://"])
def test_bad_url_is_fatal(url):
    with pytest.raises(DeepgramConfigError):
        DeepgramClient("key", ClientOptions(url=url))


def test_url_is_normalized():
    client = DeepgramClient("key", {"global": {"url": "deepgram.internal:8080/"}})

    assert client.url == "https://deepgram.internal:8080"


def test_config_is_immutable():
    client = DeepgramClient("key", ClientOptions(headers={"X-Team": "asr"}))

    with pytest.raises(dataclasses.FrozenInstanceError):
        client.config.url = "https://elsewhere.example"
    with pytest.raises(TypeError):
        client.headers["X-Team"] = "other"


def test_caller_headers_are_copied():
    headers = {"X-Team": "asr"}
    client = DeepgramClient("key", ClientOptions(headers=headers))

    headers["X-Team"] = "changed"

    assert client.headers["X-Team"] == "asr"


def test_listen_returns_a_fresh_client_sharing_config():
    client = DeepgramClient("key")

    first, second = client.listen(), client.listen()

    assert isinstance(first, ListenClient)
    assert first is not second
    assert first.config is second.config is client.config


def test_create_client_reads_env(monkeypatch):
    monkeypatch.setenv("DEEPGRAM_API_KEY", "from-env")

    client = create_client(options={"url": "api.example.com"})

    assert isinstance(client, DeepgramClient)
    assert client.url == "https://api.example.com"


@pytest.mark.asyncio
async def test_create_client_prefers_explicit_key(monkeypatch, api):
    monkeypatch.setenv("DEEPGRAM_API_KEY", "from-env")
    http = httpx.AsyncClient(transport=httpx.MockTransport(api))

    client = create_client("explicit", {"url": "https://api.example.com", "fetch": http})
    await client.listen().transcribe_url("http://audio.example/a.wav")

    assert api.last.headers["Authorization"] == "Token explicit"


def test_create_client_without_any_key(monkeypatch):
    monkeypatch.delenv("DEEPGRAM_API_KEY", raising=False)

    with pytest.raises(DeepgramConfigError, match="DEEPGRAM_API_KEY"):
        create_client()


# ---------------------------------------------------------------------------
# Headers on the wire
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_token_auth_and_default_headers_are_sent(make_client, api, transcription):
    api.response = httpx.Response(200, json=transcription)
    client = make_client("secret", headers={"X-Team": "asr"})

    await client.listen().transcribe_url("http://audio.example/a.wav")

    headers = api.last.headers
    assert headers["Authorization"] == "Token secret"
    assert headers["X-Team"] == "asr"
    assert headers["User-Agent"].startswith("dg-sdk/")


@pytest.mark.asyncio
async def test_bearer_key_is_sent_verbatim(make_client, api):
    client = make_client("Bearer short-lived")

    await client.listen().transcribe_url("http://audio.example/a.wav")

    assert api.last.headers["Authorization"] == "Bearer short-lived"


@pytest.mark.asyncio
async def test_configured_authorization_header_wins(make_client, api):
    client = make_client("secret", headers={"Authorization": "Bearer from-config", "User-Agent": "mine/1.0"})

    await client.listen().transcribe_url("http://audio.example/a.wav")

    assert api.last.headers.get_list("Authorization") == ["Bearer from-config"]
    assert api.last.headers["User-Agent"] == "mine/1.0"


@pytest.mark.asyncio
async def test_base_path_is_kept(make_client, api):
    client = make_client(url="https://proxy.example.com/deepgram/")

    await client.listen().transcribe_url("http://audio.example/a.wav")

    assert api.last.url.path == "/deepgram/v1/listen"


@pytest.mark.asyncio
async def test_plain_async_function_as_fetch(transcription):
    sent = []

    async def fetch(request):
        sent.append(request)
        return httpx.Response(200, json=transcription)

    client = DeepgramClient("key", {"url": "https://api.example.com", "fetch": fetch})

    res = await client.listen().transcribe_url("http://audio.example/a.wav")

    assert res.result == transcription
    assert sent[0].headers["Authorization"] == "Token key"
