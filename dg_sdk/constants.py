# constants.py
from __future__ import annotations

from typing import Any, Dict

DEFAULT_URL = "https://api.deepgram.com"

DEFAULT_HEADERS: Dict[str, str] = {}

DEFAULT_OPTIONS: Dict[str, Any] = {
    "global": {
        "url": DEFAULT_URL,
        "headers": DEFAULT_HEADERS,
        "fetch": None,
    },
}

# Passed to the default httpx transport only; custom fetches bring their own.
DEFAULT_TIMEOUT_S = 60.0

LISTEN_ENDPOINT = "v1/listen"

API_KEY_ENV = "DEEPGRAM_API_KEY"

MSG_UNKNOWN_SOURCE = "Unknown transcription source type"
MSG_MIMETYPE_REQUIRED = "Mimetype must be provided if the source is a Buffer or a Readable"
MSG_CALLBACK_REQUIRED = "A callback URL must be provided for callback transcriptions"
