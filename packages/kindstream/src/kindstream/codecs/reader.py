# kindstream/codecs/reader.py
"""
Split a YAML-or-JSON byte/text stream into canonical documents.

Surface syntax
--------------
The first non-whitespace character within the first ``buffer_size``
characters decides the syntax:

- ``{`` or ``[``: a sequence of concatenated JSON values (JSON-lines or any
  whitespace separation). A top-level array contributes each of its elements
  as one document.
- anything else: YAML documents separated by ``---``, loaded lazily with
  PyYAML's safe loader. Empty documents are skipped unless disabled.

Every payload is normalized to the JSON data model (string keys, ISO date
strings, lists instead of sets, base64 for binary), so later stages see the
same structure whatever the surface syntax was.
"""

from __future__ import annotations

import base64
import codecs
import datetime
import io
import json
import logging
from collections.abc import Iterator, Mapping
from typing import IO, Any, NamedTuple, Union

import yaml

from kindstream.exceptions import MalformedDocumentError, StreamReadError

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 4096

StreamLike = Union[str, bytes, bytearray, IO[str], IO[bytes]]

__all__ = [
    "DEFAULT_BUFFER_SIZE",
    "DocumentReader",
    "RawDocument",
    "StreamLike",
    "canonicalize",
]


class RawDocument(NamedTuple):
    """One canonical document and its 0-based position in the stream."""

    index: int
    payload: Any


# ---------------------------------------------------------------------------
# Canonical form
# ---------------------------------------------------------------------------

def _canonical_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, datetime.date):
        return key.isoformat()
    if key is None or isinstance(key, (bool, int, float)):
        return json.dumps(key)
    return str(key)


def canonicalize(value: Any) -> Any:
    """Normalize a loaded value to what ``json.loads`` could have produced."""
    if isinstance(value, Mapping):
        return {_canonical_key(k): canonicalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [canonicalize(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return [canonicalize(v) for v in sorted(value, key=repr)]
    if isinstance(value, datetime.date):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    return value


class _JSONKeyLoader(yaml.SafeLoader):
    """Safe loader that turns mapping keys into JSON object keys as it builds them.

    Keys that compare equal in Python (``1``, ``1.0`` and ``true``) stay separate.
    """

    def construct_mapping(self, node, deep=False):
        if not isinstance(node, yaml.MappingNode):
            raise yaml.constructor.ConstructorError(
                None, None, f"expected a mapping node, but found {node.id}", node.start_mark
            )
        self.flatten_mapping(node)
        mapping = {}
        for key_node, value_node in node.value:
            key = _canonical_key(self.construct_object(key_node, deep=True))
            mapping[key] = self.construct_object(value_node, deep=deep)
        return mapping


# ---------------------------------------------------------------------------
# Text stream
# ---------------------------------------------------------------------------

def _as_stream(stream: StreamLike) -> IO[Any]:
    if isinstance(stream, str):
        return io.StringIO(stream)
    if isinstance(stream, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(stream))
    if callable(getattr(stream, "read", None)):
        return stream
    raise TypeError(f"Cannot read documents from {type(stream).__name__}")


class _TextStream:
    """Text view over a text or binary stream, read in chunks.

    Binary input is decoded as UTF-8 (a leading BOM is dropped). ``index`` is
    the document being read, used to locate read and decoding failures.
    """

    def __init__(self, stream: IO[Any], *, chunk_size: int) -> None:
        self._stream = stream
        self._chunk_size = chunk_size
        self._decoder = codecs.getincrementaldecoder("utf-8-sig")()
        self._pending = ""
        self._done = False
        self.index = 0

    def _pull(self, size: int) -> str:
        if self._done:
            return ""
        try:
            raw = self._stream.read(size)
        except Exception as err:
            raise StreamReadError(f"unable to read stream: {err}", index=self.index) from err

        if not raw:
            self._done = True
        if isinstance(raw, str):
            return raw
        try:
            return self._decoder.decode(raw or b"", final=not raw)
        except UnicodeDecodeError as err:
            raise MalformedDocumentError(f"stream is not valid UTF-8: {err}", index=self.index) from err

    def read(self, size: int = -1) -> str:
        if size is None or size < 0:
            parts = [self._pending]
            self._pending = ""
            while not self._done:
                parts.append(self._pull(-1))
            return "".join(parts)

        while not self._pending and not self._done:
            self._pending = self._pull(max(size, self._chunk_size))
        out, self._pending = self._pending[:size], self._pending[size:]
        return out

    def sniff(self, limit: int) -> str:
        """Return the first non-whitespace character within ``limit`` characters."""
        while not self._done and len(self._pending) < limit and not self._pending.strip():
            self._pending += self._pull(self._chunk_size)
        return self._pending[:limit].lstrip()[:1]


# ---------------------------------------------------------------------------
# Reader
# ---------------------------------------------------------------------------

class DocumentReader:
    """Iterate the documents of a YAML-or-JSON stream, in order.

    Iteration raises :class:`MalformedDocumentError` on syntax errors and
    :class:`StreamReadError` when the stream itself fails.
    """

    def __init__(
        self,
        stream: StreamLike,
        *,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        skip_empty: bool = True,
    ) -> None:
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        self._stream = stream
        self.buffer_size = buffer_size
        self.skip_empty = skip_empty
        self.syntax: str | None = None

    def __iter__(self) -> Iterator[RawDocument]:
        text = _TextStream(_as_stream(self._stream), chunk_size=self.buffer_size)
        first = text.sniff(self.buffer_size)
        self.syntax = "json" if first in ("{", "[") else "yaml"
        logger.debug("Reading %s documents", self.syntax)
        if self.syntax == "json":
            return self._iter_json(text)
        return self._iter_yaml(text)

    def _iter_json(self, text: _TextStream) -> Iterator[RawDocument]:
        decoder = json.JSONDecoder()
        buf = ""
        index = 0
        while True:
            text.index = index
            buf = buf.lstrip()
            if not buf:
                buf = text.read(self.buffer_size)
                if not buf:
                    return
                continue

            try:
                value, end = decoder.raw_decode(buf)
            except json.JSONDecodeError as err:
                more = text.read(max(self.buffer_size, len(buf)))
                if more:
                    buf += more
                    continue
                raise MalformedDocumentError(
                    f"invalid JSON: {err.msg} (char {err.pos})", index=index
                ) from err

            # A scalar ending at the buffer edge may continue in the next chunk.
            if end == len(buf) and not isinstance(value, (dict, list, str)):
                more = text.read(self.buffer_size)
                if more:
                    buf += more
                    continue

            buf = buf[end:]
            if isinstance(value, list):
                for item in value:
                    yield RawDocument(index, item)
                    index += 1
            else:
                yield RawDocument(index, value)
                index += 1

    def _iter_yaml(self, text: _TextStream) -> Iterator[RawDocument]:
        loader = _JSONKeyLoader(text)
        index = 0
        try:
            while True:
                text.index = index
                try:
                    if not loader.check_data():
                        return
                    data = loader.get_data()
                except yaml.YAMLError as err:
                    raise MalformedDocumentError(f"invalid YAML: {err}", index=index) from err

                if data is None and self.skip_empty:
                    continue
                yield RawDocument(index, canonicalize(data))
                index += 1
        finally:
            loader.dispose()
