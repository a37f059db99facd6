# kindstream/types/objects.py
"""The capability every decodable object exposes, and a base model for it."""
from collections.abc import Mapping
from typing import Any, ClassVar, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, model_validator

from .meta import TYPE_NAME_KEY, TypeMeta

__all__ = [
    "ObjectProtocol",
    "BaseObject",
    "type_of",
]


@runtime_checkable
class ObjectProtocol(Protocol):
    """Any decodable object: it can report its own type tag."""

    def get_type(self) -> TypeMeta: ...


class BaseObject(BaseModel):
    """Base Pydantic model for record kinds.

    Subclasses declare their tag once::

        class Apple(BaseObject):
            type_meta: ClassVar[TypeMeta] = TypeMeta(type_name="Apple")

            color: str

    The embedded ``type_name`` field is filled from ``type_meta`` when the data
    does not carry it, and data naming any other type is rejected, so an
    instance always reports the tag its class was declared with.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    type_meta: ClassVar[TypeMeta | None] = None

    type_name: str = ""

    @model_validator(mode="before")
    @classmethod
    def stamp_type_name(cls, data: Any) -> Any:
        declared = cls.type_meta
        if declared is None or not isinstance(data, Mapping):
            return data
        current = data.get(TYPE_NAME_KEY)
        if current is None:
            return {**data, TYPE_NAME_KEY: declared.type_name}
        if current != declared.type_name:
            raise ValueError(
                f"{cls.__name__} is declared as {declared.type_name!r}, got {current!r}"
            )
        return data

    def get_type(self) -> TypeMeta:
        return TypeMeta(type_name=self.type_name)


def type_of(obj: Any) -> TypeMeta:
    """Return the type tag embedded in a decodable object.

    :raises TypeError: if ``obj`` does not expose ``get_type()``.
    """
    if not isinstance(obj, ObjectProtocol):
        raise TypeError(f"{type(obj).__name__} does not expose get_type()")
    return obj.get_type()
