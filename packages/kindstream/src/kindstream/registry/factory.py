# kindstream/registry/factory.py
"""Constructor closures stored by the object registry."""

from __future__ import annotations

import typing
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from kindstream.types import TYPE_NAME_KEY, TypeMeta

_ZERO_VALUES: dict[Any, Any] = {
    str: "",
    bool: False,
    int: 0,
    float: 0.0,
    bytes: b"",
}
_ZERO_FACTORIES: dict[Any, Any] = {
    list: list,
    dict: dict,
    set: set,
    tuple: tuple,
}


def _zero_value(annotation: Any) -> Any:
    """Best-effort zero value for a field annotation; ``None`` when unknown."""
    origin = typing.get_origin(annotation) or annotation
    if origin in _ZERO_VALUES:
        return _ZERO_VALUES[origin]
    if origin in _ZERO_FACTORIES:
        return _ZERO_FACTORIES[origin]()
    if isinstance(origin, type) and issubclass(origin, Mapping):
        return {}
    return None


def shape_label(shape: Any) -> str:
    """Return ``module.QualName`` for a shape, for diagnostics."""
    module = getattr(shape, "__module__", None)
    qualname = getattr(shape, "__qualname__", None) or repr(shape)
    return f"{module}.{qualname}" if module else qualname


@dataclass(frozen=True, slots=True)
class ObjectFactory:
    """Binds a type tag to the concrete pydantic model that decodes it."""

    type_meta: TypeMeta
    shape: type[BaseModel]

    @property
    def type_name(self) -> str:
        return self.type_meta.type_name

    @property
    def shape_name(self) -> str:
        return shape_label(self.shape)

    def new(self) -> BaseModel:
        """Allocate a fresh, zero-valued instance stamped with this tag.

        No validation runs; fields with defaults get them, other fields get the
        zero value of their annotation (or ``None``).
        """
        values: dict[str, Any] = {}
        for field_name, field in self.shape.model_fields.items():
            if field.is_required():
                values[field_name] = _zero_value(field.annotation)
        values[TYPE_NAME_KEY] = self.type_meta.type_name
        return self.shape.model_construct(**values)

    def build(self, payload: Mapping[str, Any]) -> BaseModel:
        """Allocate an instance and fully populate it from a canonical document.

        A payload without ``type_name`` is stamped with this factory's tag.

        :raises ValueError: if the payload names a different tag.
        :raises pydantic.ValidationError: if the fields do not fit the shape.
        """
        given = payload.get(TYPE_NAME_KEY)
        if given and given != self.type_meta.type_name:
            raise ValueError(
                f"{self.shape_name} is registered as {self.type_meta.type_name!r}, "
                f"cannot build it from a {given!r} document"
            )
        return self.shape.model_validate({**payload, TYPE_NAME_KEY: self.type_meta.type_name})


__all__ = ["ObjectFactory", "shape_label"]
