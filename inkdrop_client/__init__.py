"""
Inkdrop Client - async Python client for Inkdrop's local HTTP server.

Every response is checked against the expected document shape before it
is returned, so callers get typed documents or an exception, never a
half-populated object.

Example usage:
    >>> from inkdrop_client import InkdropClient
    >>>
    >>> async with InkdropClient("username", "password") as client:
    ...     # List recent notes
    ...     notes = await client.notes.list(
    ...         {"limit": 10, "sort": "updatedAt", "descending": True}
    ...     )
    ...
    ...     # Update one of them
    ...     note = await client.docs.get(notes[0].id)
    ...     result = await client.notes.upsert({**note.to_dict(), "pinned": True})
    ...     print(result.rev)
"""

__version__ = "0.1.0"

# Main client
from .client import InkdropClient
from .config import DEFAULT_BASE_URL, ClientConfig, load_config
from .encoding import UNSET, basic_auth_header, build_url, encode_body
from .transport import RequestAborted, RequestsTransport, Transport, TransportResponse

# Resources
from .resources import BooksAPI, DocsAPI, FilesAPI, NotesAPI, TagsAPI

# Types
from .types import (
    AnyDoc,
    AttachmentData,
    BookDoc,
    BookInput,
    FileDoc,
    FileInput,
    MutationResponse,
    NoteDoc,
    NoteInput,
    ServerInfo,
    TagDoc,
    TagInput,
)

# Validators
from .validators import (
    book_list_adapter,
    doc_kind,
    ensure,
    file_list_adapter,
    is_any_doc,
    mutation_response_adapter,
    note_list_adapter,
    parse_any_doc,
    server_info_adapter,
    tag_list_adapter,
)

# Errors
from .errors import ApiError, InkdropError, ValidationError

__all__ = [
    # Version
    "__version__",
    # Client
    "InkdropClient",
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "load_config",
    "UNSET",
    "basic_auth_header",
    "build_url",
    "encode_body",
    "RequestAborted",
    "RequestsTransport",
    "Transport",
    "TransportResponse",
    # Resources
    "NotesAPI",
    "BooksAPI",
    "TagsAPI",
    "FilesAPI",
    "DocsAPI",
    # Types
    "AnyDoc",
    "AttachmentData",
    "BookDoc",
    "BookInput",
    "FileDoc",
    "FileInput",
    "MutationResponse",
    "NoteDoc",
    "NoteInput",
    "ServerInfo",
    "TagDoc",
    "TagInput",
    # Validators
    "doc_kind",
    "is_any_doc",
    "parse_any_doc",
    "ensure",
    "server_info_adapter",
    "mutation_response_adapter",
    "note_list_adapter",
    "book_list_adapter",
    "tag_list_adapter",
    "file_list_adapter",
    # Errors
    "InkdropError",
    "ApiError",
    "ValidationError",
]
