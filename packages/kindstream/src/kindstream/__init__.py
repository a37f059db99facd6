"""
kindstream: decode streams of self-describing records into typed objects.

Every record carries a ``type_name`` tag. Record kinds are registered once in
an :class:`~kindstream.registry.ObjectRegistry`; the decoder reads each
document's tag first, resolves the registered shape, then decodes the whole
document into it.

Import Guidelines:
------------------
- Use `kindstream.types` for `TypeMeta` and the `BaseObject` model.
- Use `kindstream.registry` to build, bootstrap and activate registries.
- Use `kindstream.codecs` for `decode` / `encode`.
- Use `kindstream.exceptions` for standardized error handling.
"""

from importlib.metadata import PackageNotFoundError, version

from .codecs import adecode, decode, encode
from .registry import ObjectRegistry, bootstrap_registry, push_active_registry, set_active_registry
from .types import TYPE_NAME_KEY, BaseObject, ObjectProtocol, TypeMeta, type_of

try:
    __version__ = version("kindstream")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "TYPE_NAME_KEY",
    "TypeMeta",
    "BaseObject",
    "ObjectProtocol",
    "type_of",
    "ObjectRegistry",
    "bootstrap_registry",
    "push_active_registry",
    "set_active_registry",
    "decode",
    "adecode",
    "encode",
]
