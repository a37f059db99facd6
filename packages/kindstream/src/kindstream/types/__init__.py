from .base import StrictBaseModel
from .meta import TYPE_NAME_KEY, TypeMeta, TypeMetaLike
from .objects import BaseObject, ObjectProtocol, type_of

__all__ = [
    "StrictBaseModel",
    "TYPE_NAME_KEY",
    "TypeMeta",
    "TypeMetaLike",
    "BaseObject",
    "ObjectProtocol",
    "type_of",
]
