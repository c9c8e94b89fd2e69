"""
Request construction helpers: auth header, URL and body encoding.

These are pure functions shared by the client; they never touch the
network.
"""

import base64
import io
import json
import math
from collections.abc import Iterator
from typing import Any, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import parse_qsl, urlencode, urljoin, urlsplit, urlunsplit

from requests.structures import CaseInsensitiveDict

JSON_CONTENT_TYPE = "application/json"

ParamScalar = Union[str, int, float, bool]
ParamValue = Union[ParamScalar, None, Sequence[ParamScalar]]
Params = Mapping[str, ParamValue]
HeadersLike = Mapping[str, str]


class _Unset:
    """Marker for "no body was given" (distinct from a JSON ``null``)."""

    _instance = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()

RAW_BODY_TYPES = (str, bytes, bytearray, memoryview, io.IOBase)


# ---------------------------------------------------------------------------
# Headers
# ---------------------------------------------------------------------------


def basic_auth_header(username: str, password: str) -> str:
    """Return the ``Authorization`` value for HTTP Basic auth."""
    token = base64.b64encode(f"{username}:{password}".encode("utf-8"))
    return f"Basic {token.decode('ascii')}"


def default_headers(
    username: str,
    password: str,
    headers: Optional[HeadersLike] = None,
) -> CaseInsensitiveDict:
    """
    Assemble the headers sent with every request.

    Explicit headers always win; ``Authorization`` and ``Accept`` are only
    filled in when absent (header names compare case-insensitively).
    """
    merged = CaseInsensitiveDict(headers or {})
    if "Authorization" not in merged:
        merged["Authorization"] = basic_auth_header(username, password)
    if "Accept" not in merged:
        merged["Accept"] = JSON_CONTENT_TYPE
    return merged


def merge_headers(
    base: HeadersLike, overrides: Optional[HeadersLike] = None
) -> CaseInsensitiveDict:
    """Overlay ``overrides`` onto ``base`` key by key; the override wins."""
    merged = CaseInsensitiveDict(base)
    for key, value in (overrides or {}).items():
        merged[key] = value
    return merged


# ---------------------------------------------------------------------------
# URLs
# ---------------------------------------------------------------------------


def stringify_param(value: Any) -> str:
    """Render a query value the way the server's JavaScript runtime would."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def build_url(base_url: str, path: str, params: Optional[Params] = None) -> str:
    """
    Resolve ``path`` against ``base_url`` and apply query parameters.

    - ``None`` values are skipped.
    - Lists and tuples append one repeated ``key=item`` pair per element.
    - Scalars replace any existing value for the key.

    Without ``params`` the resolved URL is returned untouched.
    """
    url = urljoin(base_url, path)
    if params is None:
        return url

    parts = urlsplit(url)
    pairs = parse_qsl(parts.query, keep_blank_values=True)
    changed = False

    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            for item in value:
                pairs.append((key, stringify_param(item)))
                changed = True
            continue

        text = stringify_param(value)
        first = next((i for i, (k, _) in enumerate(pairs) if k == key), None)
        if first is None:
            pairs.append((key, text))
        else:
            pairs[first] = (key, text)
            pairs = [
                pair for i, pair in enumerate(pairs) if i <= first or pair[0] != key
            ]
        changed = True

    if not changed:
        return url
    return urlunsplit(parts._replace(query=urlencode(pairs)))


# ---------------------------------------------------------------------------
# Bodies
# ---------------------------------------------------------------------------


def is_raw_body(body: Any) -> bool:
    """True if ``body`` can go on the wire as-is (text, bytes, stream, chunks)."""
    return isinstance(body, RAW_BODY_TYPES) or isinstance(body, Iterator)


def encode_body(
    body: Any, headers: HeadersLike
) -> Tuple[Any, CaseInsensitiveDict]:
    """
    Decide the outgoing body and return it with the (possibly updated) headers.

    Raw bodies pass through without touching ``Content-Type``. Anything
    else is serialized as JSON, defaulting ``Content-Type`` to
    ``application/json``. ``UNSET`` means no body at all.

    Raises:
        ValueError: If the body holds NaN or an infinity, which JSON cannot
            represent.
    """
    out_headers = CaseInsensitiveDict(headers)
    if body is UNSET:
        return None, out_headers
    if is_raw_body(body):
        return body, out_headers

    payload = json.dumps(body, allow_nan=False)
    if "Content-Type" not in out_headers:
        out_headers["Content-Type"] = JSON_CONTENT_TYPE
    return payload, out_headers
