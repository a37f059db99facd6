"""Type-tag registry: tags to the factories of their concrete shapes."""

from .active import get_active_registry, push_active_registry, set_active_registry
from .base import ObjectRegistry
from .bootstrap import bootstrap_registry, load_hook
from .factory import ObjectFactory

__all__ = [
    "ObjectRegistry",
    "ObjectFactory",
    "bootstrap_registry",
    "load_hook",
    "get_active_registry",
    "push_active_registry",
    "set_active_registry",
]
