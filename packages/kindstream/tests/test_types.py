from typing import ClassVar

import pytest
from pydantic import ValidationError

from kindstream.types import TYPE_NAME_KEY, BaseObject, ObjectProtocol, TypeMeta, type_of


class Widget(BaseObject):
    type_meta: ClassVar[TypeMeta] = TypeMeta(type_name="Widget")

    size: int = 0


class Untagged(BaseObject):
    label: str


def test_type_meta_equality_and_hash_are_structural():
    a = TypeMeta(type_name="Apple")
    b = TypeMeta(type_name="Apple")

    assert a == b
    assert hash(a) == hash(b)
    assert a != TypeMeta(type_name="Banana")
    assert {a: 1}[b] == 1


def test_type_meta_is_opaque_and_frozen():
    meta = TypeMeta(type_name="v1/Odd Name!")
    assert str(meta) == "v1/Odd Name!"

    with pytest.raises(ValidationError):
        meta.type_name = "Other"


def test_type_meta_ignores_other_fields():
    meta = TypeMeta.model_validate({TYPE_NAME_KEY: "Apple", "color": "Red"})
    assert meta == TypeMeta(type_name="Apple")


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Apple", "Apple"),
        ({"type_name": "Apple"}, "Apple"),
        (TypeMeta(type_name="Apple"), "Apple"),
        ("", ""),
    ],
)
def test_type_meta_get_coerces(value, expected):
    assert TypeMeta.get(value).type_name == expected


def test_type_meta_get_rejects_unsupported_input():
    with pytest.raises(TypeError):
        TypeMeta.get(42)


def test_base_object_stamps_declared_tag():
    widget = Widget(size=3)

    assert widget.type_name == "Widget"
    assert widget.get_type() == Widget.type_meta
    assert type_of(widget) == TypeMeta(type_name="Widget")


def test_base_object_rejects_foreign_tag():
    with pytest.raises(ValidationError):
        Widget.model_validate({"type_name": "Gadget", "size": 1})


def test_base_object_without_declared_tag_reports_its_data():
    obj = Untagged(type_name="Note", label="x")
    assert obj.get_type() == TypeMeta(type_name="Note")


def test_base_object_ignores_unknown_fields():
    widget = Widget.model_validate({"type_name": "Widget", "size": 2, "extra": True})
    assert widget.size == 2
    assert not hasattr(widget, "extra")


def test_type_of_requires_the_capability():
    assert isinstance(Widget(), ObjectProtocol)

    with pytest.raises(TypeError):
        type_of(object())
