# kindstream/exceptions/decode_exceptions.py
"""Decode-time errors. Always recoverable; each aborts the whole decode."""
from kindstream.exceptions.base import KindStreamError


class DecodeError(KindStreamError):
    """Base for failures while decoding a stream.

    ``index`` is the 0-based position of the offending document, or ``None``
    when the failure is not tied to a document.
    """

    def __init__(self, message: str, *, index: int | None = None):
        if index is not None:
            message = f"document {index}: {message}"
        super().__init__(message)
        self.index = index


class StreamReadError(DecodeError):
    """The underlying stream failed while fetching the next document."""


class MalformedDocumentError(DecodeError):
    """A document could not be parsed far enough to read its type tag."""


class UnknownTypeError(DecodeError, LookupError):
    """No shape is registered for a document's type name."""

    def __init__(self, type_name: str, *, index: int | None = None):
        super().__init__(
            f"no registered type found for object with type name: {type_name!r}",
            index=index,
        )
        self.type_name = type_name


class FieldDecodeError(DecodeError):
    """A document's fields do not fit the shape resolved for its tag."""

    def __init__(self, type_name: str, detail: str, *, index: int | None = None):
        super().__init__(f"unable to unmarshal object of type {type_name!r}: {detail}", index=index)
        self.type_name = type_name
