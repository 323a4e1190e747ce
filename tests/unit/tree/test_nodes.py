"""Tests for tree/nodes.py — variants, container helpers, Python conversion."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from yamlnote.tree.nodes import (
    Bool,
    Mapping,
    NodeKind,
    Null,
    Number,
    Sequence,
    String,
    from_python,
    is_container,
    to_python,
)


class TestNodeKinds:
    @pytest.mark.parametrize(
        ("node", "kind"),
        [
            (Null(), NodeKind.NULL),
            (Bool(True), NodeKind.BOOL),
            (Number(1), NodeKind.NUMBER),
            (String("x"), NodeKind.STRING),
            (Sequence(), NodeKind.SEQUENCE),
            (Mapping(), NodeKind.MAPPING),
        ],
    )
    def test_kind(self, node, kind):
        assert node.kind is kind

    def test_is_container(self):
        assert is_container(Sequence())
        assert is_container(Mapping())
        assert not is_container(String("a"))

    def test_int_and_float_numbers_differ(self):
        assert Number(1) != Number(1.0)
        assert Number(1.0) == Number(1.0)
        assert hash(Number(2)) == hash(Number(2))
        assert from_python({"a": 1}) != from_python({"a": 1.0})

    def test_number_is_not_bool(self):
        assert Number(1) != Bool(True)
        assert not is_container(Null())

    def test_nodes_are_frozen(self):
        node = String("a")
        with pytest.raises(AttributeError):
            node.value = "b"


class TestSequence:
    def test_with_item_leaves_original(self):
        seq = Sequence((Number(1), Number(2)))
        updated = seq.with_item(1, Number(3))
        assert updated == Sequence((Number(1), Number(3)))
        assert seq == Sequence((Number(1), Number(2)))

    def test_inserted(self):
        seq = Sequence((Number(1), Number(3)))
        assert seq.inserted(1, Number(2)) == Sequence((Number(1), Number(2), Number(3)))

    def test_appended(self):
        assert Sequence().appended(Null()) == Sequence((Null(),))

    def test_without_index(self):
        seq = Sequence((String("a"), String("b"), String("c")))
        assert seq.without_index(0) == Sequence((String("b"), String("c")))

    def test_order_matters_for_equality(self):
        assert Sequence((Number(1), Number(2))) != Sequence((Number(2), Number(1)))

    def test_untouched_children_are_shared(self):
        child = Mapping((("k", String("v")),))
        seq = Sequence((child, Number(1)))
        assert seq.with_item(1, Number(2))[0] is child


class TestMapping:
    def test_duplicate_keys_rejected(self):
        with pytest.raises(ValueError, match="Duplicate"):
            Mapping((("a", Null()), ("a", Null())))

    def test_non_string_key_rejected(self):
        with pytest.raises(ValueError, match="strings"):
            Mapping(((1, Null()),))

    def test_equality_ignores_order(self):
        left = Mapping((("a", Number(1)), ("b", Number(2))))
        right = Mapping((("b", Number(2)), ("a", Number(1))))
        assert left == right
        assert hash(left) == hash(right)

    def test_inequality_on_values(self):
        assert Mapping((("a", Number(1)),)) != Mapping((("a", Number(2)),))

    def test_inequality_on_keys(self):
        assert Mapping((("a", Number(1)),)) != Mapping((("b", Number(1)),))

    def test_not_equal_to_sequence(self):
        assert Mapping() != Sequence()

    def test_with_entry_keeps_position(self):
        mapping = Mapping((("a", Number(1)), ("b", Number(2))))
        updated = mapping.with_entry("a", Number(9))
        assert updated.keys() == ["a", "b"]
        assert updated["a"] == Number(9)

    def test_with_entry_appends_new_key(self):
        mapping = Mapping((("a", Number(1)),))
        assert mapping.with_entry("z", Null()).keys() == ["a", "z"]

    def test_without(self):
        mapping = Mapping((("a", Number(1)), ("b", Number(2))))
        assert mapping.without("a") == Mapping((("b", Number(2)),))
        assert "a" in mapping

    def test_without_missing_key_raises(self):
        with pytest.raises(KeyError):
            Mapping().without("missing")

    def test_get_and_contains(self):
        mapping = Mapping((("a", Number(1)),))
        assert mapping.get("a") == Number(1)
        assert mapping.get("b") is None
        assert "b" not in mapping


class TestFromPython:
    def test_scalars(self):
        assert from_python(None) == Null()
        assert from_python(True) == Bool(True)
        assert from_python(3) == Number(3)
        assert from_python(1.5) == Number(1.5)
        assert from_python(Decimal("2.5")) == Number(Decimal("2.5"))
        assert from_python("s") == String("s")

    def test_bool_is_not_a_number(self):
        assert isinstance(from_python(False), Bool)

    def test_dates_become_iso_strings(self):
        assert from_python(date(2024, 1, 15)) == String("2024-01-15")
        assert from_python(datetime(2024, 1, 15, 10, 30)) == String("2024-01-15T10:30:00")

    def test_nested(self):
        tree = from_python({"a": [1, {"b": None}]})
        assert tree == Mapping((
            ("a", Sequence((Number(1), Mapping((("b", Null()),))))),
        ))

    def test_tuple_becomes_sequence(self):
        assert from_python((1, 2)) == Sequence((Number(1), Number(2)))

    def test_scalar_keys_are_stringified(self):
        tree = from_python({1: "a", False: "b", None: "c", 2.5: "d"})
        assert tree.keys() == ["1", "false", "null", "2.5"]

    def test_unsupported_key_raises(self):
        with pytest.raises(TypeError):
            from_python({(1, 2): "x"})

    def test_unsupported_value_raises(self):
        with pytest.raises(TypeError, match="set"):
            from_python({1, 2})

    def test_tree_passes_through(self):
        node = String("x")
        assert from_python(node) is node


class TestToPython:
    def test_roundtrip(self):
        data = {"title": "Note", "tags": ["a", "b"], "meta": {"n": 1, "ok": True, "x": None}}
        assert to_python(from_python(data)) == data

    def test_preserves_key_order(self):
        data = {"z": 1, "a": 2}
        assert list(to_python(from_python(data))) == ["z", "a"]
