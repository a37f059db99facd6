from .base import KindStreamError
from .decode_exceptions import (
    DecodeError,
    FieldDecodeError,
    MalformedDocumentError,
    StreamReadError,
    UnknownTypeError,
)
from .registry_exceptions import (
    ConflictingRegistrationError,
    InvalidShapeError,
    MissingTypeNameError,
    RegistrationError,
    RegistryBootstrapError,
    RegistryFrozenError,
)

__all__ = [
    "KindStreamError",
    "RegistrationError",
    "MissingTypeNameError",
    "InvalidShapeError",
    "ConflictingRegistrationError",
    "RegistryFrozenError",
    "RegistryBootstrapError",
    "DecodeError",
    "StreamReadError",
    "MalformedDocumentError",
    "UnknownTypeError",
    "FieldDecodeError",
]
