"""Tests for tree/resolver.py — lookup and copy-on-write mutation by path."""

import pytest

from yamlnote.errors import (
    ErrorCode,
    YamlNoteIndexOutOfBoundsError,
    YamlNoteInvalidPathError,
    YamlNotePathError,
    YamlNotePathNotFoundError,
    YamlNoteTypeMismatchError,
)
from yamlnote.tree.nodes import Mapping, Number, Sequence, String, from_python
from yamlnote.tree.pointer import APPEND
from yamlnote.tree.resolver import delete, exists, insert, resolve, set_node


@pytest.fixture
def doc():
    return from_python({"a": "text", "items": [1, 2, 3], "meta": {"author": "kim"}})


class TestResolve:
    def test_root(self, doc):
        assert resolve(doc, ()) is doc

    def test_nested_key(self, doc):
        assert resolve(doc, ("meta", "author")) == String("kim")

    def test_int_and_string_index(self, doc):
        assert resolve(doc, ("items", 1)) == Number(2)
        assert resolve(doc, ("items", "1")) == Number(2)

    def test_missing_key(self, doc):
        with pytest.raises(YamlNotePathNotFoundError) as exc_info:
            resolve(doc, ("meta", "missing"))
        err = exc_info.value
        assert err.code == ErrorCode.PATH_NOT_FOUND
        assert err.context["path"] == "/meta/missing"
        assert err.context["depth"] == 1
        assert err.context["key"] == "missing"

    def test_index_out_of_bounds(self, doc):
        with pytest.raises(YamlNoteIndexOutOfBoundsError) as exc_info:
            resolve(doc, ("items", 3))
        assert exc_info.value.context["length"] == 3

    def test_append_as_final_token(self, doc):
        with pytest.raises(YamlNoteIndexOutOfBoundsError):
            resolve(doc, ("items", APPEND))

    def test_append_before_final_token(self, doc):
        with pytest.raises(YamlNoteInvalidPathError):
            resolve(doc, ("items", APPEND, "x"))

    def test_through_scalar(self, doc):
        with pytest.raises(YamlNoteTypeMismatchError) as exc_info:
            resolve(doc, ("a", 0))
        assert exc_info.value.context["node_kind"] == "string"

    def test_index_into_mapping(self, doc):
        with pytest.raises(YamlNoteInvalidPathError):
            resolve(doc, (0,))

    def test_leading_zero_index(self, doc):
        with pytest.raises(YamlNoteInvalidPathError):
            resolve(doc, ("items", "01"))

    def test_all_path_errors_share_base(self, doc):
        with pytest.raises(YamlNotePathError):
            resolve(doc, ("nope",))


class TestExists:
    def test_present(self, doc):
        assert exists(doc, ("items", 0))

    def test_missing(self, doc):
        assert not exists(doc, ("meta", "nope"))
        assert not exists(doc, ("items", 10))

    def test_type_mismatch_still_raises(self, doc):
        with pytest.raises(YamlNoteTypeMismatchError):
            exists(doc, ("a", "b"))


class TestInsert:
    def test_new_key(self, doc):
        result = insert(doc, ("meta", "year"), Number(2024))
        assert resolve(result, ("meta", "year")) == Number(2024)

    def test_existing_key_is_overwritten(self, doc):
        result = insert(doc, ("a",), String("new"))
        assert resolve(result, ("a",)) == String("new")

    def test_auto_vivifies_mappings(self):
        result = insert(Mapping(), ("x", "y", "z"), Number(1))
        assert result == from_python({"x": {"y": {"z": 1}}})

    def test_path_too_deep_to_rebuild(self):
        with pytest.raises(YamlNoteInvalidPathError) as exc_info:
            insert(Mapping(), ("k",) * 5000, Number(1))
        assert exc_info.value.context["depth"] == 0
        assert isinstance(exc_info.value.cause, RecursionError)

    def test_sequence_insert_shifts(self, doc):
        result = insert(doc, ("items", 0), Number(0))
        assert resolve(result, ("items",)) == from_python([0, 1, 2, 3])

    def test_insert_at_length_appends(self, doc):
        result = insert(doc, ("items", 3), Number(4))
        assert resolve(result, ("items",)) == from_python([1, 2, 3, 4])

    def test_append_marker(self, doc):
        result = insert(doc, ("items", APPEND), Number(4))
        assert resolve(result, ("items",)) == from_python([1, 2, 3, 4])

    def test_dash_string_appends(self, doc):
        result = insert(doc, ("items", "-"), Number(4))
        assert resolve(result, ("items", 3)) == Number(4)

    def test_past_end(self, doc):
        with pytest.raises(YamlNoteIndexOutOfBoundsError):
            insert(doc, ("items", 5), Number(9))

    def test_no_vivification_inside_sequence(self, doc):
        with pytest.raises(YamlNoteIndexOutOfBoundsError):
            insert(doc, ("items", 7, "x"), Number(9))

    def test_through_scalar(self, doc):
        with pytest.raises(YamlNoteTypeMismatchError):
            insert(doc, ("a", "b"), Number(1))

    def test_root_replaces_document(self, doc):
        assert insert(doc, (), String("x")) == String("x")

    def test_original_unchanged(self, doc):
        before = from_python({"a": "text", "items": [1, 2, 3], "meta": {"author": "kim"}})
        insert(doc, ("meta", "new", "deep"), Number(1))
        insert(doc, ("items", APPEND), Number(4))
        assert doc == before

    def test_untouched_siblings_shared(self, doc):
        result = insert(doc, ("items", APPEND), Number(4))
        assert resolve(result, ("meta",)) is resolve(doc, ("meta",))


class TestDelete:
    def test_key(self, doc):
        result = delete(doc, ("meta", "author"))
        assert resolve(result, ("meta",)) == Mapping()

    def test_index(self, doc):
        result = delete(doc, ("items", 1))
        assert resolve(result, ("items",)) == from_python([1, 3])

    def test_missing_key(self, doc):
        with pytest.raises(YamlNotePathNotFoundError):
            delete(doc, ("meta", "missing"))

    def test_missing_parent_not_vivified(self, doc):
        with pytest.raises(YamlNotePathNotFoundError):
            delete(doc, ("nope", "deeper"))

    def test_out_of_bounds(self, doc):
        with pytest.raises(YamlNoteIndexOutOfBoundsError):
            delete(doc, ("items", 3))

    def test_append_marker(self, doc):
        with pytest.raises(YamlNoteIndexOutOfBoundsError):
            delete(doc, ("items", APPEND))

    def test_root(self, doc):
        with pytest.raises(YamlNoteInvalidPathError):
            delete(doc, ())


class TestSetNode:
    def test_existing_index(self, doc):
        result = set_node(doc, ("items", 0), String("first"))
        assert resolve(result, ("items", 0)) == String("first")

    def test_creates_final_key(self, doc):
        result = set_node(doc, ("meta", "year"), Number(2024))
        assert resolve(result, ("meta", "year")) == Number(2024)

    def test_missing_intermediate(self, doc):
        with pytest.raises(YamlNotePathNotFoundError):
            set_node(doc, ("nope", "x"), Number(1))

    def test_index_must_exist(self, doc):
        with pytest.raises(YamlNoteIndexOutOfBoundsError):
            set_node(doc, ("items", 3), Number(4))

    def test_root(self, doc):
        assert set_node(doc, (), Sequence()) == Sequence()
