"""
Shape validation for decoded API payloads.

Every successful response is run through a pydantic adapter before the
client hands it back. ``ensure`` is the single place where a
``pydantic.ValidationError`` becomes the client's own ``ValidationError``;
nothing is coerced or defaulted on the way.

Book, tag and file documents share the same required fields, so the
document union is discriminated by the ``<kind>:`` prefix of ``_id`` and
falls back to trying every kind in order.
"""

import logging
from typing import Annotated, Any, Dict, List, Optional, Type, Union

import pydantic
from pydantic import Discriminator, Strict, Tag, TypeAdapter

from .errors import ValidationError
from .types import (
    AnyDoc,
    BookDoc,
    FileDoc,
    MutationResponse,
    NoteDoc,
    ServerInfo,
    TagDoc,
)

logger = logging.getLogger(__name__)

# Order used when the id carries no recognised prefix.
DOC_MODELS: Dict[str, Type[AnyDoc]] = {
    "note": NoteDoc,
    "book": BookDoc,
    "tag": TagDoc,
    "file": FileDoc,
}
DOC_KINDS = {model: kind for kind, model in DOC_MODELS.items()}


def doc_tag(value: Any) -> Optional[str]:
    """The kind named by the ``_id`` prefix, if it names one."""
    if isinstance(value, dict):
        doc_id = value.get("_id")
    else:
        doc_id = getattr(value, "id", None)
    if not isinstance(doc_id, str):
        return None
    prefix = doc_id.partition(":")[0]
    return prefix if prefix in DOC_MODELS else None


server_info_adapter = TypeAdapter(ServerInfo)
mutation_response_adapter = TypeAdapter(MutationResponse)

note_list_adapter = TypeAdapter(Annotated[List[NoteDoc], Strict()])
book_list_adapter = TypeAdapter(Annotated[List[BookDoc], Strict()])
tag_list_adapter = TypeAdapter(Annotated[List[TagDoc], Strict()])
file_list_adapter = TypeAdapter(Annotated[List[FileDoc], Strict()])

tagged_doc_adapter = TypeAdapter(
    Annotated[
        Union[
            Annotated[NoteDoc, Tag("note")],
            Annotated[BookDoc, Tag("book")],
            Annotated[TagDoc, Tag("tag")],
            Annotated[FileDoc, Tag("file")],
        ],
        Discriminator(doc_tag),
    ]
)


def ensure(value: Any, adapter: TypeAdapter, expected: str) -> Any:
    """Validate ``value`` with ``adapter`` and return the parsed result."""
    try:
        return adapter.validate_python(value)
    except pydantic.ValidationError as e:
        logger.warning(
            "Response did not match %s (%d errors)", expected, e.error_count()
        )
        raise ValidationError(expected, value) from e


def parse_any_doc(value: Any) -> AnyDoc:
    """
    Parse a payload of unknown kind into the matching document model.

    The variant named by the id prefix is tried first; every other kind is
    tried, in ``DOC_MODELS`` order, before the payload is rejected.
    """
    tag = doc_tag(value)
    if tag is not None:
        try:
            return tagged_doc_adapter.validate_python(value)
        except pydantic.ValidationError:
            logger.debug("Payload is not a valid %s; trying other kinds", tag)

    for kind, model in DOC_MODELS.items():
        if kind == tag:
            continue
        try:
            return model.model_validate(value)
        except pydantic.ValidationError:
            continue

    expected = "note, book, tag or file document"
    logger.warning("Response did not match %s", expected)
    raise ValidationError(expected, value)


def doc_kind(value: Any) -> Optional[str]:
    """Return which document kind ``value`` is, or None if it is none of them."""
    try:
        return DOC_KINDS[type(parse_any_doc(value))]
    except ValidationError:
        return None


def is_any_doc(value: Any) -> bool:
    return doc_kind(value) is not None
