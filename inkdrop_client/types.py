"""
Type definitions for the Inkdrop client library.

Documents returned by the server are frozen pydantic models. Field names are
snake_case; the wire names (``_id``, ``bookId``, ``_attachments``...) are
aliases, so ``model_validate`` reads a raw payload and ``to_dict`` gives the
wire form back, ready to re-submit through ``upsert``.

Write inputs and list/get parameters are plain TypedDicts.
"""

from typing import Any, Dict, List, Literal, Optional, TypedDict, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
)

DocId = str
NoteStatus = Literal["none", "active", "onHold", "completed", "dropped"]
NoteShare = Literal["private", "public"]
NoteSort = Literal["updatedAt", "createdAt", "title"]

# bool is an int subclass but never a JSON number
Number = Union[StrictInt, StrictFloat]


# ---------------------------------------------------------------------------
# TypedDict types for inputs and parameters
# ---------------------------------------------------------------------------


class NoteInput(TypedDict, total=False):
    """Fields accepted by ``notes.upsert``. Include ``_id``/``_rev`` to update."""

    _id: DocId
    _rev: str
    doctype: Literal["markdown"]
    bookId: DocId
    status: NoteStatus
    share: NoteShare
    migratedBy: str
    numOfTasks: int
    numOfCheckedTasks: int
    pinned: bool
    title: str
    body: str
    tags: List[DocId]
    createdAt: int
    updatedAt: int


class _NamedInput(TypedDict):
    name: str


class BookInput(_NamedInput, total=False):
    """Fields accepted by ``books.upsert``."""

    _id: DocId
    _rev: str
    parentBookId: DocId
    createdAt: int
    updatedAt: int


class TagInput(_NamedInput, total=False):
    """Fields accepted by ``tags.upsert``."""

    _id: DocId
    _rev: str
    color: str
    count: int
    createdAt: int
    updatedAt: int


class FileInput(_NamedInput, total=False):
    """Fields accepted by ``files.create``."""

    _id: DocId
    _rev: str
    contentType: str
    contentLength: int
    md5digest: str
    revpos: int
    publicIn: List[DocId]
    _attachments: Dict[str, Dict[str, Any]]
    createdAt: int
    updatedAt: int


class NoteListParams(TypedDict, total=False):
    keyword: str
    limit: int
    skip: int
    sort: NoteSort
    descending: bool


class ListParams(TypedDict, total=False):
    limit: int
    skip: int


class DocGetParams(TypedDict, total=False):
    rev: str
    attachments: bool


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class _WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire representation, unknown server fields included."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class ServerInfo(_WireModel):
    """Response from ``GET /``."""

    app: StrictStr
    version: StrictStr
    api_version: StrictStr = Field(alias="apiVersion")


class MutationResponse(_WireModel):
    """Acknowledgment returned by create, update and delete operations."""

    ok: StrictBool
    id: StrictStr
    rev: StrictStr


class AttachmentData(_WireModel):
    """CouchDB-style attachment stub; ``data`` is present when inlined."""

    digest: StrictStr
    content_type: StrictStr
    revpos: Number
    data: Any = None


class _Doc(_WireModel):
    """Fields shared by every stored document."""

    id: StrictStr = Field(alias="_id")
    rev: StrictStr = Field(alias="_rev")
    created_at: Optional[Number] = Field(default=None, alias="createdAt")
    updated_at: Optional[Number] = Field(default=None, alias="updatedAt")

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        # optional fields may be absent, never null
        if value is None:
            raise ValueError("null is not allowed; omit the field instead")
        return value

    def __hash__(self) -> int:
        return hash((type(self), self.id, self.rev))


class NoteDoc(_Doc):
    """
    A markdown note.

    ``book_id`` points at the notebook the note is filed under and ``tags``
    holds tag document ids.
    """

    doctype: Literal["markdown"]
    book_id: StrictStr = Field(alias="bookId")
    status: NoteStatus
    share: Optional[NoteShare] = None
    migrated_by: Optional[StrictStr] = Field(default=None, alias="migratedBy")
    num_of_tasks: Optional[Number] = Field(default=None, alias="numOfTasks")
    num_of_checked_tasks: Optional[Number] = Field(
        default=None, alias="numOfCheckedTasks"
    )
    pinned: Optional[StrictBool] = None
    title: Optional[StrictStr] = None
    body: Optional[StrictStr] = None
    tags: Optional[List[StrictStr]] = None


class BookDoc(_Doc):
    """A notebook, optionally nested under ``parent_book_id``."""

    name: StrictStr
    parent_book_id: Optional[StrictStr] = Field(default=None, alias="parentBookId")


class TagDoc(_Doc):
    """A tag; ``count`` is maintained by the server."""

    name: StrictStr
    color: Optional[StrictStr] = None
    count: Optional[Number] = None


class FileDoc(_Doc):
    """An attached file (usually an image embedded in a note)."""

    name: StrictStr
    content_type: Optional[StrictStr] = Field(default=None, alias="contentType")
    content_length: Optional[Number] = Field(default=None, alias="contentLength")
    md5digest: Optional[StrictStr] = None
    revpos: Optional[Number] = None
    public_in: Optional[List[StrictStr]] = Field(default=None, alias="publicIn")
    attachments: Dict[str, AttachmentData] = Field(
        default_factory=dict, alias="_attachments"
    )


AnyDoc = Union[NoteDoc, BookDoc, TagDoc, FileDoc]
