"""Reading, decoding and encoding of record streams."""

from .decoder import ObjectDecoder, adecode, decode, read_envelope
from .encoder import encode, encode_json, encode_yaml, to_document
from .reader import DEFAULT_BUFFER_SIZE, DocumentReader, RawDocument, canonicalize

__all__ = [
    "DEFAULT_BUFFER_SIZE",
    "DocumentReader",
    "RawDocument",
    "canonicalize",
    "ObjectDecoder",
    "decode",
    "adecode",
    "read_envelope",
    "encode",
    "encode_json",
    "encode_yaml",
    "to_document",
]
