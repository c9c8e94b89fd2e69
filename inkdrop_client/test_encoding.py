"""Tests for auth headers, URL building and body encoding."""

import base64
import io
import json

import pytest

from inkdrop_client.encoding import (
    UNSET,
    basic_auth_header,
    build_url,
    default_headers,
    encode_body,
    is_raw_body,
    merge_headers,
    stringify_param,
)

BASE = "http://127.0.0.1:19840"


# ── headers ──────────────────────────────────────────────────────────────────


def test_basic_auth_header_known_value():
    assert basic_auth_header("user", "pass") == "Basic dXNlcjpwYXNz"


def test_basic_auth_header_decodes_back():
    header = basic_auth_header("jürgen", "p:ss w0rd")
    assert header.startswith("Basic ")
    assert base64.b64decode(header[6:]).decode("utf-8") == "jürgen:p:ss w0rd"


def test_basic_auth_header_padding():
    # 4 input bytes -> two padding characters
    assert basic_auth_header("a", "bc") == "Basic YTpiYw=="


def test_default_headers_fills_auth_and_accept():
    headers = default_headers("user", "pass")
    assert headers["Authorization"] == "Basic dXNlcjpwYXNz"
    assert headers["Accept"] == "application/json"


def test_default_headers_explicit_values_win_case_insensitively():
    headers = default_headers(
        "user", "pass", {"authorization": "Bearer tok", "ACCEPT": "text/plain"}
    )
    assert headers["Authorization"] == "Bearer tok"
    assert headers["accept"] == "text/plain"
    assert len(headers) == 2


def test_merge_headers_overlay_wins_per_key():
    merged = merge_headers({"Accept": "application/json", "X-A": "1"}, {"accept": "text/html"})
    assert merged["Accept"] == "text/html"
    assert merged["X-A"] == "1"
    assert len(merged) == 2


# ── URLs ─────────────────────────────────────────────────────────────────────


def test_build_url_without_params_returns_resolved_url():
    assert build_url(BASE, "/notes") == f"{BASE}/notes"


def test_build_url_scalars_keep_mapping_order():
    url = build_url(BASE, "/notes", {"limit": 10, "descending": True})
    assert url == f"{BASE}/notes?limit=10&descending=true"


def test_build_url_repeats_array_values():
    url = build_url(BASE, "/notes", {"tags": ["a", "b"]})
    assert url == f"{BASE}/notes?tags=a&tags=b"


def test_build_url_drops_none():
    assert build_url(BASE, "/x", {"a": None, "b": "v"}) == f"{BASE}/x?b=v"


def test_build_url_all_none_adds_no_question_mark():
    assert build_url(BASE, "/x", {"a": None}) == f"{BASE}/x"
    assert build_url(BASE, "/x", {}) == f"{BASE}/x"


def test_build_url_scalar_replaces_existing_values():
    url = build_url(BASE, "/notes?limit=5&q=1&limit=6", {"limit": 10})
    assert url == f"{BASE}/notes?limit=10&q=1"


def test_build_url_array_appends_to_existing_values():
    url = build_url(BASE, "/notes?tags=a", {"tags": ["b"]})
    assert url == f"{BASE}/notes?tags=a&tags=b"


def test_build_url_resolves_relative_and_absolute_paths():
    assert build_url("http://host/api/", "notes") == "http://host/api/notes"
    assert build_url("http://host/api/", "/notes") == "http://host/notes"
    assert build_url("http://host/api", "notes") == "http://host/notes"


def test_build_url_form_encodes_values():
    url = build_url(BASE, "/notes", {"keyword": "status:active a&b"})
    assert url == f"{BASE}/notes?keyword=status%3Aactive+a%26b"


def test_stringify_param_matches_server_text_forms():
    assert stringify_param(True) == "true"
    assert stringify_param(False) == "false"
    assert stringify_param(10) == "10"
    assert stringify_param(10.0) == "10"
    assert stringify_param(1.5) == "1.5"
    assert stringify_param(None) == "null"
    assert stringify_param(float("inf")) == "Infinity"
    assert stringify_param("x") == "x"


# ── bodies ───────────────────────────────────────────────────────────────────


def test_encode_body_serializes_plain_values_as_json():
    payload, headers = encode_body({"name": "Inbox"}, {"Accept": "application/json"})
    assert json.loads(payload) == {"name": "Inbox"}
    assert headers["Content-Type"] == "application/json"
    assert headers["Accept"] == "application/json"


def test_encode_body_keeps_explicit_content_type():
    payload, headers = encode_body(["a"], {"content-type": "application/vnd.api+json"})
    assert payload == '["a"]'
    assert headers["Content-Type"] == "application/vnd.api+json"


def test_encode_body_passes_raw_bodies_through():
    stream = io.BytesIO(b"\x89PNG")
    chunks = iter([b"a", b"b"])
    for raw in ("name=Inbox", b"\x00\x01", bytearray(b"x"), stream, chunks):
        payload, headers = encode_body(raw, {})
        assert payload is raw
        assert "Content-Type" not in headers


def test_encode_body_unset_sends_nothing():
    payload, headers = encode_body(UNSET, {})
    assert payload is None
    assert "Content-Type" not in headers


def test_encode_body_none_is_json_null():
    payload, headers = encode_body(None, {})
    assert payload == "null"
    assert headers["Content-Type"] == "application/json"


def test_encode_body_does_not_mutate_input_headers():
    original = {"Accept": "application/json"}
    encode_body({"a": 1}, original)
    assert original == {"Accept": "application/json"}


def test_is_raw_body_rejects_containers():
    assert not is_raw_body({"a": 1})
    assert not is_raw_body([b"a"])
    assert not is_raw_body(3)


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_encode_body_rejects_non_finite_numbers(value):
    with pytest.raises(ValueError):
        encode_body({"numOfTasks": value}, {})
