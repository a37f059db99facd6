# kindstream/registry/active.py
"""Active-registry tracking for callers that do not pass a registry around.

Nothing is created implicitly: a registry becomes active only when the
top-level caller sets or pushes one.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Generator

from .base import ObjectRegistry

_active_registry: ContextVar[ObjectRegistry | None] = ContextVar("kindstream_active_registry", default=None)


def set_active_registry(registry: ObjectRegistry | None) -> None:
    _active_registry.set(registry)


@contextmanager
def push_active_registry(registry: ObjectRegistry) -> Generator[ObjectRegistry, None, None]:
    token = _active_registry.set(registry)
    try:
        yield registry
    finally:
        _active_registry.reset(token)


def get_active_registry() -> ObjectRegistry:
    """Return the active registry.

    :raises LookupError: if no registry has been activated.
    """
    registry = _active_registry.get()
    if registry is None:
        raise LookupError(
            "No active object registry; pass one explicitly or activate it with set_active_registry()"
        )
    return registry


__all__ = ["get_active_registry", "push_active_registry", "set_active_registry"]
