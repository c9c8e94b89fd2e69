"""
Per-resource API surfaces.

Each class binds one URL path to a handful of operations and pipes the
decoded payload through the matching validator before building the typed
result. There is no caching and no retrying; every call is one round trip.
"""

import asyncio
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Union
from urllib.parse import quote

from pydantic import TypeAdapter

from .encoding import Params
from .types import (
    AnyDoc,
    BookDoc,
    BookInput,
    DocGetParams,
    FileDoc,
    FileInput,
    ListParams,
    MutationResponse,
    NoteDoc,
    NoteInput,
    NoteListParams,
    TagDoc,
    TagInput,
)
from .validators import (
    book_list_adapter,
    ensure,
    file_list_adapter,
    mutation_response_adapter,
    note_list_adapter,
    parse_any_doc,
    tag_list_adapter,
)

if TYPE_CHECKING:
    from .client import InkdropClient


def _as_body(doc: Any) -> Dict[str, Any]:
    """Accept either a plain mapping or a document model."""
    if hasattr(doc, "to_dict"):
        return doc.to_dict()
    return dict(doc)


def doc_path(doc_id: str) -> str:
    """Path for a single document; ``note:abc`` stays readable."""
    return "/" + quote(doc_id, safe=":")


class _ResourceAPI:
    path = ""

    def __init__(self, client: "InkdropClient"):
        self.client = client

    async def _list(
        self,
        params: Optional[Params],
        adapter: TypeAdapter,
        expected: str,
        signal: Optional[asyncio.Event],
    ) -> List[Any]:
        data = await self.client.get(self.path, params=params, signal=signal)
        return ensure(data, adapter, f"list of {expected}")

    async def _post(
        self, doc: Any, signal: Optional[asyncio.Event]
    ) -> MutationResponse:
        data = await self.client.post(self.path, _as_body(doc), signal=signal)
        return ensure(data, mutation_response_adapter, "mutation response")


class NotesAPI(_ResourceAPI):
    """Operations on ``/notes``."""

    path = "/notes"

    async def list(
        self,
        params: Optional[NoteListParams] = None,
        signal: Optional[asyncio.Event] = None,
    ) -> List[NoteDoc]:
        """
        List notes.

        Args:
            params: Server-side filters (keyword, limit, skip, sort, descending)
            signal: Abort event forwarded to the transport

        Raises:
            ApiError: Non-2xx response
            ValidationError: A returned item is not a note
        """
        return await self._list(params, note_list_adapter, "note", signal)

    async def upsert(
        self,
        note: Union[NoteInput, NoteDoc, Mapping[str, Any]],
        signal: Optional[asyncio.Event] = None,
    ) -> MutationResponse:
        """Create a note, or update it when ``_id`` and ``_rev`` are given."""
        return await self._post(note, signal)


class BooksAPI(_ResourceAPI):
    """Operations on ``/books``."""

    path = "/books"

    async def list(
        self,
        params: Optional[ListParams] = None,
        signal: Optional[asyncio.Event] = None,
    ) -> List[BookDoc]:
        return await self._list(params, book_list_adapter, "book", signal)

    async def upsert(
        self,
        book: Union[BookInput, BookDoc, Mapping[str, Any]],
        signal: Optional[asyncio.Event] = None,
    ) -> MutationResponse:
        return await self._post(book, signal)


class TagsAPI(_ResourceAPI):
    """Operations on ``/tags``."""

    path = "/tags"

    async def list(
        self,
        params: Optional[ListParams] = None,
        signal: Optional[asyncio.Event] = None,
    ) -> List[TagDoc]:
        return await self._list(params, tag_list_adapter, "tag", signal)

    async def upsert(
        self,
        tag: Union[TagInput, TagDoc, Mapping[str, Any]],
        signal: Optional[asyncio.Event] = None,
    ) -> MutationResponse:
        return await self._post(tag, signal)


class FilesAPI(_ResourceAPI):
    """Operations on ``/files``."""

    path = "/files"

    async def list(
        self,
        params: Optional[ListParams] = None,
        signal: Optional[asyncio.Event] = None,
    ) -> List[FileDoc]:
        return await self._list(params, file_list_adapter, "file", signal)

    async def create(
        self,
        file: Union[FileInput, FileDoc, Mapping[str, Any]],
        signal: Optional[asyncio.Event] = None,
    ) -> MutationResponse:
        """
        Upload a file document.

        Inline content goes in ``_attachments`` as base64 ``data``.
        """
        return await self._post(file, signal)


class DocsAPI(_ResourceAPI):
    """Kind-agnostic operations on ``/{doc_id}``."""

    async def get(
        self,
        doc_id: str,
        params: Optional[DocGetParams] = None,
        signal: Optional[asyncio.Event] = None,
    ) -> AnyDoc:
        """
        Get any document by id.

        Args:
            doc_id: Document id, e.g. ``note:Bk5Ivk0T``
            params: Optional ``rev`` and ``attachments`` flags
            signal: Abort event forwarded to the transport

        Returns:
            NoteDoc, BookDoc, TagDoc or FileDoc depending on the payload

        Raises:
            ApiError: Non-2xx response (404 for unknown ids)
            ValidationError: Payload matches none of the document kinds
        """
        data = await self.client.get(doc_path(doc_id), params=params, signal=signal)
        return parse_any_doc(data)

    async def delete(
        self,
        doc_id: str,
        signal: Optional[asyncio.Event] = None,
    ) -> MutationResponse:
        """Delete any document by id."""
        data = await self.client.delete(doc_path(doc_id), signal=signal)
        return ensure(data, mutation_response_adapter, "mutation response")
