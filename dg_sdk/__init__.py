"""
dg_sdk: Async client for the Deepgram speech-to-text API.
"""

# Single source of truth for version (read by setup.py)
__version__ = "0.1.0"

from .client import DeepgramClient, create_client
from .errors import (
    DeepgramApiError,
    DeepgramConfigError,
    DeepgramError,
    DeepgramUnknownError,
    is_deepgram_error,
)
from .listen import ListenClient
from .sources import SourceKind, classify_source
from .types import (
    BufferSource,
    ClientConfig,
    ClientOptions,
    DeepgramResponse,
    StreamSource,
    UrlSource,
)

__all__ = [
    "DeepgramClient",
    "create_client",
    "ListenClient",
    "ClientOptions",
    "ClientConfig",
    "DeepgramResponse",
    "UrlSource",
    "BufferSource",
    "StreamSource",
    "SourceKind",
    "classify_source",
    "DeepgramError",
    "DeepgramConfigError",
    "DeepgramApiError",
    "DeepgramUnknownError",
    "is_deepgram_error",
]
