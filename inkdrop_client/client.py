"""
Inkdrop client for the desktop app's local HTTP server.

Provides an async Python interface to the notes, books, tags and files
endpoints, validating every payload before handing it back.
"""

import asyncio
from typing import Any, Mapping, Optional

from .config import DEFAULT_BASE_URL, ClientConfig
from .encoding import (
    JSON_CONTENT_TYPE,
    UNSET,
    Params,
    build_url,
    default_headers,
    encode_body,
    merge_headers,
)
from .errors import ApiError
from .resources import BooksAPI, DocsAPI, FilesAPI, NotesAPI, TagsAPI
from .transport import DEFAULT_TIMEOUT, RequestsTransport, Transport
from .types import ServerInfo
from .validators import ensure, server_info_adapter


class InkdropClient:
    """
    Client for the Inkdrop local HTTP API.

    Resources are exposed as attributes:
    - notes: list / upsert notes
    - books: list / upsert notebooks
    - tags: list / upsert tags
    - files: list / create files
    - docs: get / delete any document by id

    Example:
        >>> async with InkdropClient("user", "secret") as client:
        ...     notes = await client.notes.list({"limit": 10, "descending": True})
        ...     note = await client.docs.get(notes[0].id)
    """

    def __init__(
        self,
        username: str,
        password: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        transport: Optional[Transport] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize the Inkdrop client.

        Args:
            username: Local server username (from Inkdrop's preferences)
            password: Local server password
            base_url: Base URL of the local server
            transport: Async HTTP transport; defaults to RequestsTransport
            headers: Extra default headers; these override the built-in
                Authorization and Accept headers
            timeout: Request timeout in seconds for the default transport
        """
        self.base_url = base_url
        self.username = username
        self.password = password
        self._owns_transport = transport is None
        self._transport = transport or RequestsTransport(timeout=timeout)
        self._default_headers = default_headers(username, password, headers)

        self.notes = NotesAPI(self)
        self.books = BooksAPI(self)
        self.tags = TagsAPI(self)
        self.files = FilesAPI(self)
        self.docs = DocsAPI(self)

    @classmethod
    def from_config(
        cls, config: ClientConfig, transport: Optional[Transport] = None
    ) -> "InkdropClient":
        """Build a client from a loaded :class:`ClientConfig`."""
        return cls(
            config.username,
            config.password,
            base_url=config.base_url,
            transport=transport,
            headers=config.headers,
            timeout=config.timeout,
        )

    @property
    def default_headers(self) -> Mapping[str, str]:
        """A copy of the headers sent with every request."""
        return dict(self._default_headers)

    # -------------------------------------------------------------------------
    # Request pipeline
    # -------------------------------------------------------------------------

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Params] = None,
        headers: Optional[Mapping[str, str]] = None,
        body: Any = UNSET,
        signal: Optional[asyncio.Event] = None,
    ) -> Any:
        """
        Send one request and return the decoded payload.

        Args:
            method: HTTP method
            path: Path resolved against ``base_url``
            params: Query parameters (see ``build_url``)
            headers: Per-request headers, overriding the defaults
            body: Raw body or JSON-serializable value; omit for no body
            signal: Abort event forwarded to the transport

        Returns:
            None for 204, the parsed JSON for JSON responses, text otherwise

        Raises:
            ApiError: Status outside [200, 300)
        """
        url = build_url(self.base_url, path, params)
        merged = merge_headers(self._default_headers, headers)
        payload, merged = encode_body(body, merged)

        response = await self._transport(
            url,
            method=method,
            headers=merged,
            body=payload,
            signal=signal,
        )

        if response.status == 204:
            data = None
        elif JSON_CONTENT_TYPE in (response.headers.get("content-type") or ""):
            data = await response.json()
        else:
            data = await response.text()

        if not 200 <= response.status < 300:
            raise ApiError(response.status, response.status_text, data)
        return data

    async def get(
        self,
        path: str,
        *,
        params: Optional[Params] = None,
        headers: Optional[Mapping[str, str]] = None,
        signal: Optional[asyncio.Event] = None,
    ) -> Any:
        return await self.request(
            "GET", path, params=params, headers=headers, signal=signal
        )

    async def post(
        self,
        path: str,
        body: Any = UNSET,
        *,
        params: Optional[Params] = None,
        headers: Optional[Mapping[str, str]] = None,
        signal: Optional[asyncio.Event] = None,
    ) -> Any:
        return await self.request(
            "POST", path, params=params, headers=headers, body=body, signal=signal
        )

    async def delete(
        self,
        path: str,
        *,
        params: Optional[Params] = None,
        headers: Optional[Mapping[str, str]] = None,
        signal: Optional[asyncio.Event] = None,
    ) -> Any:
        return await self.request(
            "DELETE", path, params=params, headers=headers, signal=signal
        )

    # -------------------------------------------------------------------------
    # Discovery
    # -------------------------------------------------------------------------

    async def server_info(
        self, signal: Optional[asyncio.Event] = None
    ) -> ServerInfo:
        """
        Get the server's app name and versions.

        Raises:
            ApiError: Server rejected the request (e.g. bad credentials)
            ValidationError: Unexpected response shape
        """
        data = await self.get("/", signal=signal)
        return ensure(data, server_info_adapter, "server info")

    # -------------------------------------------------------------------------
    # Session Management
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Close the default transport; injected transports are left alone."""
        if self._owns_transport:
            self._transport.close()

    async def __aenter__(self) -> "InkdropClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
