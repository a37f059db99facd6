# kindstream/types/meta.py
"""The type tag embedded in every decodable record."""
from collections.abc import Mapping
from typing import Any, Union

from pydantic import ConfigDict

from .base import StrictBaseModel

__all__ = [
    "TYPE_NAME_KEY",
    "TypeMeta",
    "TypeMetaLike",
]

# Key of the tag field inside every document.
TYPE_NAME_KEY = "type_name"


class TypeMeta(StrictBaseModel):
    """Metadata required to identify the type of an object.

    The type name is an opaque string: no naming convention is enforced here.
    An empty name is representable (a document without a tag decodes to one)
    but can never be registered.

    Unknown keys are ignored so that a whole document validates as its own
    envelope.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    type_name: str = ""

    def __str__(self) -> str:
        return self.type_name

    def __repr__(self) -> str:
        return f"TypeMeta({self.type_name!r})"

    def __hash__(self) -> int:
        return hash(self.type_name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypeMeta):
            return NotImplemented
        return self.type_name == other.type_name

    @classmethod
    def get(cls, value: "TypeMetaLike") -> "TypeMeta":
        """Coerce a TypeMeta, a bare type name or a mapping into a TypeMeta.

        :raises TypeError: if ``value`` is none of the accepted inputs.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(type_name=value)
        if isinstance(value, Mapping):
            return cls.model_validate(value)
        raise TypeError(f"Unsupported type tag input: {type(value).__name__}")


TypeMetaLike = Union[TypeMeta, str, Mapping[str, Any]]
