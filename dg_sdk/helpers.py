# helpers.py
from __future__ import annotations

import re
from dataclasses import fields
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union
from urllib.parse import urlencode

import httpx

from .errors import DeepgramConfigError
from .types import ClientConfig, ClientOptions

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


# =============================================================================
# Query parameters
# =============================================================================

def _value_to_str(v: Any) -> str:
    if isinstance(v, bool):
        return "true" if v else "false"
    return str(v)


def append_search_params(
    params: List[Tuple[str, str]],
    options: Optional[Mapping[str, Any]],
) -> List[Tuple[str, str]]:
    """
    Append options to a list of (key, value) query pairs, in mapping order.

    - Lists/tuples become one pair per element under the same key
    - None values are skipped (keeps requests smaller)
    - Booleans become "true"/"false"
    """
    for key, value in (options or {}).items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            params.extend((key, _value_to_str(v)) for v in value if v is not None)
        else:
            params.append((key, _value_to_str(value)))
    return params


def serialize_options(options: Optional[Mapping[str, Any]]) -> str:
    return urlencode(append_search_params([], options))


# =============================================================================
# Settings
# =============================================================================

def strip_trailing_slash(url: str) -> str:
    return url[:-1] if url.endswith("/") else url


def normalize_base_url(url: Optional[str]) -> str:
    if not url:
        raise DeepgramConfigError("An API URL is required.")
    url = url.strip()
    if not _SCHEME_RE.match(url):
        url = "https://" + url
    url = strip_trailing_slash(url)
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise DeepgramConfigError(f"Invalid API URL {url!r}: {e}") from e
    if not parsed.host:
        raise DeepgramConfigError(f"Invalid API URL {url!r}: missing host")
    return url


def _options_to_dict(options: Union[ClientOptions, Mapping[str, Any], None]) -> Dict[str, Any]:
    if options is None:
        return {}
    if isinstance(options, ClientOptions):
        return {f.name: getattr(options, f.name) for f in fields(options) if getattr(options, f.name) is not None}
    if isinstance(options, Mapping):
        # the JS-style {"global": {...}} shape is accepted alongside flat mappings
        flat = options.get("global", options)
        known = {f.name for f in fields(ClientOptions)}
        unknown = set(flat) - known
        if unknown:
            raise DeepgramConfigError(f"Unrecognized client options: {', '.join(sorted(unknown))}")
        return {k: v for k, v in flat.items() if v is not None}
    raise DeepgramConfigError(f"options must be ClientOptions or a mapping, got {type(options).__name__}")


def apply_setting_defaults(
    options: Union[ClientOptions, Mapping[str, Any], None],
    defaults: Union[ClientOptions, Mapping[str, Any]],
) -> ClientOptions:
    """Merge supplied options over defaults (None means "not supplied")."""
    merged = {**_options_to_dict(defaults), **_options_to_dict(options)}
    return ClientOptions(**merged)


def build_client_config(settings: ClientOptions, fetch) -> ClientConfig:
    return ClientConfig(
        url=normalize_base_url(settings.url),
        headers=MappingProxyType(dict(settings.headers or {})),
        fetch=fetch,
    )
