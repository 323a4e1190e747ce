"""Tests for codec/frontmatter.py — metadata block extraction and checks."""

import pytest

from yamlnote.codec.frontmatter import parse_frontmatter, split_frontmatter, validate_frontmatter
from yamlnote.errors import ErrorCode, YamlNoteFrontmatterError
from yamlnote.models import Frontmatter

NOTE = """---
schema_path: ./schemas/note.yaml
validated: false
---
# Title

Body text.
"""


class TestSplitFrontmatter:
    def test_split(self):
        raw, body = split_frontmatter(NOTE)
        assert raw == "schema_path: ./schemas/note.yaml\nvalidated: false"
        assert body.startswith("# Title")

    def test_missing(self):
        assert split_frontmatter("# Title\n") is None

    def test_single_fence(self):
        assert split_frontmatter("---\nschema_path: x\n") is None


class TestParseFrontmatter:
    def test_fields(self):
        fm = parse_frontmatter(NOTE)
        assert fm.schema_path == "./schemas/note.yaml"
        assert fm.validated is False
        assert "schema_path" in fm.raw

    def test_defaults(self):
        fm = parse_frontmatter("---\ntitle: x\n---\nbody\n")
        assert fm.schema_path is None
        assert fm.validated is True

    def test_empty_block(self):
        assert parse_frontmatter("---\n---\n") == Frontmatter(raw="")

    def test_missing(self):
        with pytest.raises(YamlNoteFrontmatterError) as exc_info:
            parse_frontmatter("# No frontmatter\n")
        assert exc_info.value.code == ErrorCode.FRONTMATTER_ERROR
        assert exc_info.value.context["reason"] == "missing"

    def test_invalid_yaml(self):
        with pytest.raises(YamlNoteFrontmatterError) as exc_info:
            parse_frontmatter("---\nschema_path: [oops\n---\n")
        assert exc_info.value.context["reason"] == "yaml"

    def test_not_a_mapping(self):
        with pytest.raises(YamlNoteFrontmatterError) as exc_info:
            parse_frontmatter("---\n- a\n- b\n---\n")
        assert exc_info.value.context["reason"] == "shape"

    def test_schema_path_type(self):
        with pytest.raises(YamlNoteFrontmatterError):
            parse_frontmatter("---\nschema_path: 3\n---\n")

    def test_validated_type(self):
        with pytest.raises(YamlNoteFrontmatterError):
            parse_frontmatter("---\nvalidated: maybe\n---\n")


class TestValidateFrontmatter:
    def test_ok(self):
        result = validate_frontmatter(Frontmatter(schema_path="note.yaml"))
        assert result.success
        assert result.errors == []

    def test_no_schema_is_ok(self):
        assert validate_frontmatter(Frontmatter()).success

    def test_blank_schema_path(self):
        result = validate_frontmatter(Frontmatter(schema_path="  "))
        assert not result.success
        assert result.to_dict() == {
            "success": False,
            "errors": [{"line": 0, "message": "schema_path is empty", "path": "schema_path"}],
        }
