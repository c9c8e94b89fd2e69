"""
HTTP transport boundary.

The client never speaks HTTP itself; it drives a single async callable::

    response = await transport(url, method=..., headers=..., body=..., signal=...)

Any object matching :class:`Transport` can be injected (tests use an
in-memory fake). :class:`RequestsTransport` is the default and runs each
blocking ``requests`` exchange in a worker thread.
"""

import asyncio
import logging
from typing import Any, Callable, Mapping, Optional, Protocol, runtime_checkable

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class RequestAborted(Exception):
    """Raised by :class:`RequestsTransport` when the abort signal is set."""


@runtime_checkable
class TransportResponse(Protocol):
    """What the client needs from an HTTP response."""

    status: int
    status_text: str
    headers: Mapping[str, str]

    async def json(self) -> Any: ...

    async def text(self) -> str: ...


class Transport(Protocol):
    """Async callable performing one HTTP exchange."""

    async def __call__(
        self,
        url: str,
        *,
        method: str,
        headers: Mapping[str, str],
        body: Any = None,
        signal: Optional[asyncio.Event] = None,
    ) -> TransportResponse: ...


class RequestsResponse:
    """Adapts a fully-read ``requests.Response`` to :class:`TransportResponse`."""

    def __init__(self, response: requests.Response):
        self._response = response
        self.status = response.status_code
        self.status_text = response.reason or ""
        self.headers = response.headers

    async def json(self) -> Any:
        return self._response.json()

    async def text(self) -> str:
        return self._response.text


class RequestsTransport:
    """
    Default transport built on a pooled ``requests.Session``.

    Requests made with an abort signal run on a session of their own, so a
    worker thread left behind by an abort never shares the pooled session.

    Args:
        timeout: Per-request timeout in seconds
        session_factory: Builds sessions (e.g. with custom adapters); called
            once for the pooled session and once per signalled request
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ):
        self.timeout = timeout
        self._session_factory = session_factory
        self._session = session_factory()

    async def __call__(
        self,
        url: str,
        *,
        method: str,
        headers: Mapping[str, str],
        body: Any = None,
        signal: Optional[asyncio.Event] = None,
    ) -> RequestsResponse:
        if signal is not None and signal.is_set():
            raise RequestAborted(f"{method} {url} aborted before sending")

        if signal is None:
            response = await asyncio.to_thread(
                self._send, self._session, method, url, dict(headers), body
            )
            return RequestsResponse(response)

        call = asyncio.ensure_future(
            asyncio.to_thread(self._send_isolated, method, url, dict(headers), body)
        )
        waiter = asyncio.ensure_future(signal.wait())
        try:
            done, _ = await asyncio.wait(
                {call, waiter}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            waiter.cancel()
            if not call.done():
                call.cancel()

        if call not in done:
            raise RequestAborted(f"{method} {url} aborted")
        return RequestsResponse(call.result())

    def _send_isolated(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Any,
    ) -> requests.Response:
        session = self._session_factory()
        try:
            return self._send(session, method, url, headers, body)
        finally:
            session.close()

    def _send(
        self,
        session: requests.Session,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Any,
    ) -> requests.Response:
        if isinstance(body, str):
            body = body.encode("utf-8")
        elif isinstance(body, (bytearray, memoryview)):
            body = bytes(body)

        response = session.request(
            method,
            url,
            headers=headers,
            data=body,
            timeout=self.timeout,
        )
        logger.debug("%s %s -> %s", method, url, response.status_code)
        return response

    # -------------------------------------------------------------------------
    # Session Management
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """
        Close the pooled session.

        Aborted requests may still be running in their worker threads; they
        hold their own sessions and close them when they finish.
        """
        self._session.close()

    def __enter__(self) -> "RequestsTransport":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
