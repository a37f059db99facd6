# kindstream/codecs/decoder.py
"""
Two-pass decoding of heterogeneous record streams.

For every document, in stream order:

1. envelope pass: read only the ``type_name`` tag;
2. resolution: look the tag up in an :class:`ObjectRegistry`;
3. full pass: validate the whole document into the resolved shape.

The first failure aborts the decode and nothing is returned. Documents are
parsed twice because the concrete shape is only known once the tag is read.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from asgiref.sync import sync_to_async
from pydantic import ValidationError

from kindstream.conf import get_settings
from kindstream.exceptions import FieldDecodeError, MalformedDocumentError, UnknownTypeError
from kindstream.registry import ObjectRegistry, get_active_registry
from kindstream.tracing import span_sync
from kindstream.types import TYPE_NAME_KEY, ObjectProtocol, TypeMeta

from .reader import DocumentReader, RawDocument, StreamLike

logger = logging.getLogger(__name__)

__all__ = ["ObjectDecoder", "decode", "adecode", "read_envelope"]


def _summarize(err: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in item['loc']) or '<root>'}: {item['msg']}"
        for item in err.errors()
    )


def read_envelope(document: RawDocument) -> TypeMeta:
    """Decode a document only as far as its type tag.

    A document without ``type_name`` yields the empty tag.

    :raises MalformedDocumentError: if the document is not a mapping or its
        ``type_name`` is not a string.
    """
    payload = document.payload
    if not isinstance(payload, Mapping):
        raise MalformedDocumentError(
            f"could not find {TYPE_NAME_KEY!r}: expected an object, got {type(payload).__name__}",
            index=document.index,
        )
    try:
        return TypeMeta.model_validate(payload)
    except ValidationError as err:
        raise MalformedDocumentError(
            f"could not find {TYPE_NAME_KEY!r}: {payload.get(TYPE_NAME_KEY)!r} is not a type name",
            index=document.index,
        ) from err


class ObjectDecoder:
    """Decode streams into registered objects using one registry."""

    def __init__(
        self,
        registry: ObjectRegistry,
        *,
        buffer_size: int | None = None,
        skip_empty: bool | None = None,
    ) -> None:
        settings = get_settings()
        self.registry = registry
        self.buffer_size = buffer_size if buffer_size is not None else int(settings["BUFFER_SIZE"])
        self.skip_empty = skip_empty if skip_empty is not None else bool(settings["SKIP_EMPTY_DOCUMENTS"])

    def decode_document(self, document: RawDocument) -> ObjectProtocol:
        """Resolve and fully decode a single canonical document."""
        meta = read_envelope(document)

        try:
            factory = self.registry.resolve(meta)
        except UnknownTypeError as err:
            raise UnknownTypeError(meta.type_name, index=document.index) from err

        try:
            obj = factory.build(document.payload)
        except ValidationError as err:
            raise FieldDecodeError(
                meta.type_name, _summarize(err), index=document.index
            ) from err

        logger.debug("Decoded document %d as %s", document.index, factory.shape_name)
        return obj

    def decode(self, stream: StreamLike) -> list[ObjectProtocol]:
        """
        Decode every document of ``stream`` until it ends cleanly.

        :return: The decoded objects, in document order (empty for an empty stream).
        :raises MalformedDocumentError: a document is not an object with a string tag.
        :raises UnknownTypeError: a document's tag is not registered.
        :raises FieldDecodeError: a document's fields do not fit its shape.
        :raises StreamReadError: the stream failed while being read.
        """
        reader = DocumentReader(stream, buffer_size=self.buffer_size, skip_empty=self.skip_empty)
        with span_sync(
            "kindstream.decode",
            attributes={"kindstream.registry.size": self.registry.count()},
        ) as span:
            objs: list[ObjectProtocol] = []
            for document in reader:
                objs.append(self.decode_document(document))
            span.set_attribute("kindstream.documents", len(objs))
            if reader.syntax:
                span.set_attribute("kindstream.syntax", reader.syntax)
        return objs


def decode(
    stream: StreamLike,
    registry: ObjectRegistry | None = None,
    *,
    buffer_size: int | None = None,
) -> list[ObjectProtocol]:
    """Decode ``stream`` with ``registry``, or with the active registry when omitted."""
    registry = registry if registry is not None else get_active_registry()
    return ObjectDecoder(registry, buffer_size=buffer_size).decode(stream)


async def adecode(
    stream: StreamLike,
    registry: ObjectRegistry | None = None,
    *,
    buffer_size: int | None = None,
) -> list[ObjectProtocol]:
    """
    Async wrapper around :func:`decode`; the blocking decode runs in a worker thread.
    """
    registry = registry if registry is not None else get_active_registry()
    return await sync_to_async(decode, thread_sensitive=False)(stream, registry, buffer_size=buffer_size)
