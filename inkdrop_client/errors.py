"""
Exception classes for the Inkdrop client library.

Provides a hierarchy of exceptions for the two failure modes of a call:
- InkdropError: Base exception for all Inkdrop client errors
- ApiError: The server answered with a non-2xx status
- ValidationError: A 2xx payload did not have the expected document shape

Network-level failures (connection refused, aborts, timeouts) are not
wrapped; they propagate from the transport as-is.
"""

from typing import Any, Optional


class InkdropError(Exception):
    """
    Base exception for all Inkdrop client errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code if applicable
        response: Decoded response data for debugging
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response: Optional[Any] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response

    def __str__(self) -> str:
        return self.message


class ApiError(InkdropError):
    """
    Raised when the HTTP exchange completes with a status outside [200, 300).

    The decoded body (JSON value, text, or None for 204) is attached
    unmodified; the server documents no schema for error bodies.
    """

    def __init__(
        self,
        status: int,
        status_text: str,
        body: Optional[Any] = None,
    ):
        super().__init__(
            f"Inkdrop API error: {status} {status_text}",
            status_code=status,
            response=body,
        )
        self.status = status
        self.status_text = status_text
        self.body = body


class ValidationError(InkdropError):
    """
    Raised when a successful response does not match the expected shape.

    This indicates a contract mismatch between client and server, e.g.
    a note without a ``status`` or a list containing a non-object.
    """

    def __init__(self, expected: str, value: Any = None):
        super().__init__(
            f"Unexpected response shape: expected {expected}, "
            f"got {_describe(value)}",
            response=value,
        )
        self.expected = expected
        self.value = value


def _describe(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, dict):
        keys = ", ".join(sorted(str(k) for k in value)[:8])
        return f"object with keys [{keys}]"
    if isinstance(value, list):
        return f"array of length {len(value)}"
    return type(value).__name__
