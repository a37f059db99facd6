# kindstream/registry/base.py


import inspect
import logging
from threading import RLock
from typing import Any

from pydantic import BaseModel, ValidationError

from kindstream.exceptions import (
    ConflictingRegistrationError,
    InvalidShapeError,
    MissingTypeNameError,
    RegistrationError,
    RegistryBootstrapError,
    RegistryFrozenError,
    UnknownTypeError,
)
from kindstream.types import TYPE_NAME_KEY, TypeMeta, TypeMetaLike

from .factory import ObjectFactory, shape_label

logger = logging.getLogger(__name__)


def _check_shape(shape: Any) -> None:
    """Raise InvalidShapeError unless ``shape`` is a concrete record model."""
    if not isinstance(shape, type):
        raise InvalidShapeError(f"can only register model classes, got {type(shape).__name__}")
    if not issubclass(shape, BaseModel):
        raise InvalidShapeError(f"{shape_label(shape)} is not a pydantic model")
    if inspect.isabstract(shape):
        raise InvalidShapeError(f"{shape_label(shape)} is abstract")
    if TYPE_NAME_KEY not in shape.model_fields:
        raise InvalidShapeError(f"{shape_label(shape)} has no {TYPE_NAME_KEY!r} field")
    if not callable(getattr(shape, "get_type", None)):
        raise InvalidShapeError(f"{shape_label(shape)} does not implement get_type()")


class ObjectRegistry:
    """Registry mapping type tags to the factories of their concrete shapes.

    Populated once at startup (see :func:`kindstream.registry.bootstrap_registry`),
    then frozen and only read while decoding.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._store: dict[TypeMeta, ObjectFactory] = {}
        self._frozen = False

    # --- registration ---

    def register(self, type_meta: TypeMetaLike, shape: type[BaseModel]) -> ObjectFactory:
        """
        Register ``shape`` as the concrete model decoded for ``type_meta``.

        Registering the same tag with the same shape again is a no-op.

        :param type_meta: The tag (or bare type name) to register.
        :param shape: A pydantic model class with a ``type_name`` field and ``get_type()``.
        :return: The factory stored for the tag.
        :raises MissingTypeNameError: if the type name is empty or not a string.
        :raises InvalidShapeError: if the shape is not record-shaped, or declares another tag.
        :raises ConflictingRegistrationError: if the tag is bound to a different shape.
        :raises RegistryFrozenError: if the registry is frozen and the pair is new.
        """
        try:
            meta = TypeMeta.get(type_meta)
        except (TypeError, ValidationError) as err:
            raise MissingTypeNameError(f"cannot register {type_meta!r}: not a type name") from err
        if not meta.type_name.strip():
            raise MissingTypeNameError("cannot register an object that doesn't have a type name")
        _check_shape(shape)

        with self._lock:
            existing = self._store.get(meta)
            if existing is not None:
                if existing.shape is shape:
                    logger.debug("Duplicate registration ignored: %s -> %s", meta, existing.shape_name)
                    return existing
                raise ConflictingRegistrationError(
                    meta, existing=existing.shape_name, attempted=shape_label(shape)
                )

            if self._frozen:
                raise RegistryFrozenError("Registry is frozen")

            declared = getattr(shape, "type_meta", None)
            if declared is not None and declared != meta:
                raise InvalidShapeError(
                    f"{shape_label(shape)} is declared as {str(declared)!r}, "
                    f"cannot register it as {meta.type_name!r}"
                )

            factory = ObjectFactory(type_meta=meta, shape=shape)
            self._store[meta] = factory
            logger.debug("Registered %s -> %s", meta, factory.shape_name)
            return factory

    def must_register(self, type_meta: TypeMetaLike, shape: type[BaseModel]) -> ObjectFactory:
        """
        Register or abort: intended for startup wiring of known record kinds.

        Any :class:`RegistrationError` is re-raised as :class:`RegistryBootstrapError`.
        """
        try:
            return self.register(type_meta, shape)
        except RegistrationError as err:
            logger.critical("Unable to register object %r: %s", str(type_meta), err)
            raise RegistryBootstrapError(f"Unable to register object: {err}") from err

    # --- retrieval ---

    def resolve(self, type_meta: TypeMetaLike) -> ObjectFactory:
        """
        Return the factory registered for ``type_meta``.

        :raises UnknownTypeError: if no shape is registered for the tag.
        """
        meta = TypeMeta.get(type_meta)
        with self._lock:
            try:
                return self._store[meta]
            except KeyError:
                raise UnknownTypeError(meta.type_name) from None

    def try_resolve(self, type_meta: TypeMetaLike) -> ObjectFactory | None:
        """Like :meth:`resolve`, returning None instead of raising."""
        try:
            return self.resolve(type_meta)
        except UnknownTypeError:
            return None

    # --- introspection ---

    def __contains__(self, type_meta: object) -> bool:
        try:
            meta = TypeMeta.get(type_meta)  # type: ignore[arg-type]
        except (TypeError, ValidationError):
            return False
        with self._lock:
            return meta in self._store

    def __len__(self) -> int:
        return self.count()

    def count(self) -> int:
        """Counts the number of registered tags."""
        with self._lock:
            return len(self._store)

    def keys(self) -> tuple[TypeMeta, ...]:
        with self._lock:
            return tuple(self._store.keys())

    def type_names(self) -> tuple[str, ...]:
        """Registered type names, sorted."""
        with self._lock:
            return tuple(sorted(meta.type_name for meta in self._store))

    def items(self) -> tuple[tuple[TypeMeta, ObjectFactory], ...]:
        with self._lock:
            return tuple(self._store.items())

    # --- mutation / control ---

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Mark the registry as frozen (no further registrations)."""
        with self._lock:
            self._frozen = True

    def clear(self) -> None:
        """Clear the registry if not frozen."""
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError("Registry is frozen")
            self._store.clear()

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"<ObjectRegistry {state} types=[{', '.join(self.type_names())}]>"


__all__ = ["ObjectRegistry"]
