import datetime
import io

import pytest

from kindstream.codecs.reader import DocumentReader, RawDocument, canonicalize
from kindstream.exceptions import MalformedDocumentError


def test_yaml_documents_are_split_in_order():
    reader = DocumentReader("a: 1\n---\nb: 2\n---\nc: [1, 2]\n")

    docs = list(reader)

    assert docs == [
        RawDocument(0, {"a": 1}),
        RawDocument(1, {"b": 2}),
        RawDocument(2, {"c": [1, 2]}),
    ]
    assert reader.syntax == "yaml"


def test_json_values_and_array_elements_are_documents():
    reader = DocumentReader('{"a": 1}\n[{"b": 2}, {"c": 3}]\n{"d": 4}')

    assert [d.payload for d in reader] == [{"a": 1}, {"b": 2}, {"c": 3}, {"d": 4}]
    assert [d.index for d in DocumentReader('[{"b": 2}, {"c": 3}]')] == [0, 1]
    assert reader.syntax == "json"


def test_json_scalars_split_across_chunks_are_read_whole():
    docs = list(DocumentReader(io.StringIO("[12345678]"), buffer_size=2))
    assert docs == [RawDocument(0, 12345678)]


def test_leading_whitespace_beyond_the_sniff_window_falls_back_to_yaml():
    reader = DocumentReader(" " * 10 + '{"a": 1}', buffer_size=4)

    assert [d.payload for d in reader] == [{"a": 1}]
    assert reader.syntax == "yaml"


def test_reading_is_lazy():
    reader = iter(DocumentReader("a: 1\n---\nb: [unclosed\n"))

    assert next(reader) == RawDocument(0, {"a": 1})
    with pytest.raises(MalformedDocumentError):
        next(reader)


def test_canonicalize_converts_to_json_model():
    value = {
        7: datetime.date(2024, 1, 2),
        True: {None: b"\x00\x01"},
        "when": datetime.datetime(2024, 1, 2, 3, 4, 5),
        "tags": {"b", "a"},
        "pair": (1, 2),
    }

    assert canonicalize(value) == {
        "7": "2024-01-02",
        "true": {"null": "AAE="},
        "when": "2024-01-02T03:04:05",
        "tags": ["a", "b"],
        "pair": [1, 2],
    }


def test_yaml_set_and_binary_tags_are_canonical():
    stream = "tags: !!set {a, b}\nblob: !!binary AAE=\n"
    (doc,) = DocumentReader(stream)
    assert doc.payload == {"tags": ["a", "b"], "blob": "AAE="}


def test_invalid_arguments():
    with pytest.raises(ValueError):
        DocumentReader("", buffer_size=0)
    with pytest.raises(TypeError):
        iter(DocumentReader(42))


def test_yaml_keys_equal_in_python_stay_separate():
    stream = "1: one\ntrue: yes\n1.0: float\n0: zero\nfalse: no\nnull: nothing\n"

    (doc,) = DocumentReader(stream)

    assert doc.payload == {
        "1": "one",
        "true": True,
        "1.0": "float",
        "0": "zero",
        "false": False,
        "null": "nothing",
    }


def test_yaml_merge_keys_are_flattened():
    stream = "base: &base {1: a, x: b}\nchild:\n  <<: *base\n  x: c\n"

    (doc,) = DocumentReader(stream)

    assert doc.payload["child"] == {"1": "a", "x": "c"}
