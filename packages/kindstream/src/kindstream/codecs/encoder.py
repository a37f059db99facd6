# kindstream/codecs/encoder.py
"""Write objects back out as documents the decoder accepts."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any, Literal

import yaml
from pydantic import BaseModel

from kindstream.types import TYPE_NAME_KEY, type_of

__all__ = ["encode", "encode_json", "encode_yaml", "to_document"]


def to_document(obj: BaseModel) -> dict[str, Any]:
    """Dump ``obj`` in JSON mode, with its type tag as the first key."""
    data = obj.model_dump(mode="json", by_alias=True)
    data.pop(TYPE_NAME_KEY, None)
    return {TYPE_NAME_KEY: type_of(obj).type_name, **data}


def encode_json(objects: Iterable[BaseModel]) -> str:
    """One JSON document per line."""
    return "".join(json.dumps(to_document(obj)) + "\n" for obj in objects)


def encode_yaml(objects: Iterable[BaseModel]) -> str:
    """``---`` separated YAML documents."""
    return yaml.safe_dump_all(
        (to_document(obj) for obj in objects),
        sort_keys=False,
        explicit_start=True,
    )


def encode(objects: Iterable[BaseModel], format: Literal["yaml", "json"] = "yaml") -> str:
    if format == "yaml":
        return encode_yaml(objects)
    if format == "json":
        return encode_json(objects)
    raise ValueError(f"Unsupported format: {format!r}")
