"""
Configuration for connecting to the Inkdrop local server.

Configuration via environment variables:
    INKDROP_BASE_URL   Base URL of the local server (default: http://127.0.0.1:19840)
    INKDROP_USERNAME   Username set in Inkdrop's local server preferences (required)
    INKDROP_PASSWORD   Password set in Inkdrop's local server preferences (required)
    INKDROP_TIMEOUT    Request timeout in seconds (default: 30)
    INKDROP_HEADERS    Extra headers as a JSON object, e.g. {"X-Trace": "1"}
"""

import json
import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

DEFAULT_BASE_URL = "http://127.0.0.1:19840"


@dataclass(frozen=True)
class ClientConfig:
    """Immutable connection settings."""

    username: str
    password: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    headers: Dict[str, str] = field(default_factory=dict)


def load_config(environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
    """
    Load connection settings from environment variables.

    Args:
        environ: Mapping to read from (default: ``os.environ``)

    Raises:
        ValueError: If a required variable is missing or a value is invalid.
    """
    env = os.environ if environ is None else environ

    raw_timeout = env.get("INKDROP_TIMEOUT", "30")
    try:
        timeout = float(raw_timeout)
    except ValueError:
        timeout = 0.0
    if not timeout > 0:
        raise ValueError(
            f"INKDROP_TIMEOUT must be a positive number of seconds, got: {raw_timeout!r}."
        )

    return ClientConfig(
        username=_require(env, "INKDROP_USERNAME"),
        password=_require(env, "INKDROP_PASSWORD"),
        base_url=env.get("INKDROP_BASE_URL", "").strip() or DEFAULT_BASE_URL,
        timeout=timeout,
        headers=_parse_headers(env.get("INKDROP_HEADERS", "")),
    )


def _require(env: Mapping[str, str], name: str) -> str:
    """Return the value of *name* or raise ``ValueError`` if unset/empty."""
    value = env.get(name, "")
    if not value.strip():
        raise ValueError(f"Required environment variable {name!r} is not set.")
    return value


def _parse_headers(raw: str) -> Dict[str, str]:
    """Parse ``INKDROP_HEADERS``; an unset or blank value means no headers."""
    if not raw.strip():
        return {}
    try:
        headers = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"INKDROP_HEADERS must be a JSON object: {e}") from e
    if not isinstance(headers, dict) or not all(
        isinstance(value, str) for value in headers.values()
    ):
        raise ValueError(
            f"INKDROP_HEADERS must map header names to strings, got: {raw!r}."
        )
    return headers
