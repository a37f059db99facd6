# kindstream/exceptions/registry_exceptions.py
"""Registration-time errors.

All of these describe inconsistent static wiring of record kinds, never bad
input data, so none of them derives from :class:`DecodeError`.
"""
from typing import TYPE_CHECKING

from kindstream.exceptions.base import KindStreamError

if TYPE_CHECKING:
    from kindstream.types import TypeMeta


# ----------------------------------------------------------------------------
# Registry errors
# ----------------------------------------------------------------------------
class RegistrationError(KindStreamError): ...


class MissingTypeNameError(RegistrationError):
    """Raised when a type tag with an empty type name is registered."""


class InvalidShapeError(RegistrationError):
    """Raised when a shape cannot hold a decoded record for its tag."""


class ConflictingRegistrationError(RegistrationError):
    """Raised when a tag is already bound to a different shape."""

    def __init__(self, type_meta: "TypeMeta", *, existing: str, attempted: str):
        super().__init__(
            f"Double registration of different types for {type_meta.type_name!r}: "
            f"old={existing}, new={attempted}"
        )
        self.type_meta = type_meta
        self.existing = existing
        self.attempted = attempted


class RegistryFrozenError(RuntimeError, RegistrationError): ...


class RegistryBootstrapError(RuntimeError, KindStreamError):
    """Raised by must-succeed registration and bootstrap entry points.

    Not a :class:`RegistrationError`: code that recovers from checked
    registration failures should not swallow a broken bootstrap by accident.
    """
