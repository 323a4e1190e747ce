"""Property-based tests for yamlnote using Hypothesis.

These tests verify the algebraic properties of the diff engine, the patch
applier and the YAML codec over randomly generated documents.
"""

from __future__ import annotations

import json

import pytest
from hypothesis import HealthCheck, assume, given, settings
from hypothesis import strategies as st

from yamlnote.codec.document import decode_document, encode_document, encode_json
from yamlnote.config import YamlNoteConfig
from yamlnote.diff.engine import compute_diff
from yamlnote.diff.patcher import apply_ops
from yamlnote.diff.wire import ops_from_json, ops_to_json
from yamlnote.errors import YamlNoteApplyError
from yamlnote.models import OpType
from yamlnote.tree.nodes import from_python
from yamlnote.tree.pointer import format_pointer, parse_pointer
from yamlnote.tree.resolver import insert, resolve

# ---------------------------------------------------------------------------
# Reusable strategies
# ---------------------------------------------------------------------------

# Printable single-line text; multi-line literal blocks are covered by the
# example-based codec tests.
_text_st = st.text(
    alphabet=st.characters(min_codepoint=0x20, max_codepoint=0x7E) | st.sampled_from("\u00e9\u00df\u30ce"),
    max_size=20,
)

_scalar_st = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-(2**53), max_value=2**53),
    st.floats(allow_nan=False, allow_infinity=False),
    _text_st,
)

_key_st = _text_st.filter(bool)

_value_st = st.recursive(
    _scalar_st,
    lambda children: st.one_of(
        st.lists(children, max_size=4),
        st.dictionaries(_key_st, children, max_size=4),
    ),
    max_leaves=20,
)

_document_st = st.dictionaries(_key_st, _value_st, max_size=5).map(from_python)


class TestCodecRoundTrip:
    @given(doc=_document_st)
    @settings(max_examples=200, suppress_health_check=[HealthCheck.too_slow])
    def test_encode_then_decode(self, doc):
        assert decode_document(encode_document(doc)) == doc

    @given(doc=_document_st)
    @settings(max_examples=100)
    def test_json_is_valid(self, doc):
        json.loads(encode_json(doc))


class TestDiffThenApply:
    @given(base=_document_st, target=_document_st)
    @settings(max_examples=300, suppress_health_check=[HealthCheck.too_slow])
    def test_apply_yields_target(self, base, target):
        assert apply_ops(base, compute_diff(base, target)) == target

    @given(base=_document_st, target=_document_st)
    @settings(max_examples=150, suppress_health_check=[HealthCheck.too_slow])
    def test_apply_with_append_marker(self, base, target):
        config = YamlNoteConfig(diff_append_marker=True)
        assert apply_ops(base, compute_diff(base, target, config)) == target

    @given(base=_document_st, target=_document_st)
    @settings(max_examples=150, suppress_health_check=[HealthCheck.too_slow])
    def test_wire_roundtrip_applies(self, base, target):
        ops = ops_from_json(ops_to_json(compute_diff(base, target)))
        assert apply_ops(base, ops) == target

    @given(doc=_document_st)
    def test_self_diff_is_empty(self, doc):
        assert compute_diff(doc, doc) == []


class TestAtomicity:
    @given(doc=_document_st, target=_document_st)
    @settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])
    def test_failed_patch_leaves_input(self, doc, target):
        ops = compute_diff(doc, target)
        snapshot = encode_json(doc)
        bad = ops + [compute_diff(from_python({"x": 1}), from_python({}))[0]]
        assume("x" not in doc)
        assume(not any(op.path == ("x",) and op.op_type is OpType.ADD for op in ops))
        with pytest.raises(YamlNoteApplyError) as exc_info:
            apply_ops(doc, bad)
        assert exc_info.value.index == len(ops)
        assert encode_json(doc) == snapshot


class TestPaths:
    @given(keys=st.lists(st.text(max_size=6), min_size=1, max_size=5), leaf=_scalar_st)
    def test_insert_then_resolve(self, keys, leaf):
        assume(len(set(keys)) == len(keys))
        tree = insert(from_python({}), tuple(keys), from_python(leaf))
        assert resolve(tree, tuple(keys)) == from_python(leaf)

    @given(keys=st.lists(st.text(max_size=6), max_size=5))
    def test_pointer_roundtrip(self, keys):
        assert parse_pointer(format_pointer(tuple(keys))) == tuple(keys)
