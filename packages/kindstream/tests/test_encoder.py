import json
from typing import ClassVar

import pytest
import yaml

from kindstream.codecs import encode, encode_json, encode_yaml, to_document
from kindstream.types import BaseObject, TypeMeta


class Apple(BaseObject):
    type_meta: ClassVar[TypeMeta] = TypeMeta(type_name="Apple")

    color: str


def test_to_document_puts_the_tag_first():
    doc = to_document(Apple(color="Red"))

    assert list(doc) == ["type_name", "color"]
    assert doc == {"type_name": "Apple", "color": "Red"}


def test_encode_json_writes_one_document_per_line():
    text = encode_json([Apple(color="Red"), Apple(color="Green")])

    lines = text.splitlines()
    assert [json.loads(line)["color"] for line in lines] == ["Red", "Green"]


def test_encode_yaml_writes_separated_documents():
    text = encode_yaml([Apple(color="Red"), Apple(color="Green")])

    assert text.startswith("---")
    assert list(yaml.safe_load_all(text)) == [
        {"type_name": "Apple", "color": "Red"},
        {"type_name": "Apple", "color": "Green"},
    ]


def test_encode_dispatches_and_rejects_unknown_formats():
    objs = [Apple(color="Red")]

    assert encode(objs) == encode_yaml(objs)
    assert encode(objs, "json") == encode_json(objs)
    with pytest.raises(ValueError):
        encode(objs, "toml")
