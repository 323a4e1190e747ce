"""YAML / JSON text codec for document trees.

Decoding goes through PyYAML's safe loader (or :mod:`json`) and then
:func:`~yamlnote.tree.nodes.from_python`; encoding goes the other way
through a :class:`yaml.SafeDumper` subclass that writes block style and
renders multi-line strings as literal ``|`` blocks.

Failures surface as :class:`YamlNoteDecodeError` (with a 1-based ``line``
when the parser reports one, else ``0``) and :class:`YamlNoteEncodeError`.
"""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any

import yaml

from yamlnote.config import YamlNoteConfig
from yamlnote.errors import YamlNoteDecodeError, YamlNoteEncodeError
from yamlnote.tree.nodes import Tree, from_python, to_python

# ---------------------------------------------------------------------------
# YAML dumper
# ---------------------------------------------------------------------------

class _DocumentDumper(yaml.SafeDumper):
    """Safe dumper that never emits anchors/aliases."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_str(data)


def _represent_decimal(dumper: yaml.SafeDumper, data: Decimal) -> yaml.ScalarNode:
    if data == data.to_integral_value():
        return dumper.represent_int(int(data))
    return dumper.represent_float(float(data))


_DocumentDumper.add_representer(str, _represent_str)
_DocumentDumper.add_representer(Decimal, _represent_decimal)


def _error_line(exc: yaml.YAMLError) -> int:
    mark = getattr(exc, "problem_mark", None) or getattr(exc, "context_mark", None)
    return mark.line + 1 if mark is not None else 0


def _to_tree(data: Any, fmt: str) -> Tree:
    try:
        return from_python(data)
    except TypeError as exc:
        raise YamlNoteDecodeError(
            f"Unsupported {fmt.upper()} value: {exc}",
            context={"line": 0, "format": fmt},
            cause=exc,
        ) from exc
    except ValueError as exc:
        raise YamlNoteDecodeError(
            f"Invalid {fmt.upper()} mapping: {exc}",
            context={"line": 0, "format": fmt},
            cause=exc,
        ) from exc
    except RecursionError as exc:
        raise _too_deep(fmt, exc) from exc


def _too_deep(fmt: str, exc: RecursionError) -> YamlNoteDecodeError:
    return YamlNoteDecodeError(
        f"{fmt.upper()} document is recursive or too deeply nested",
        context={"line": 0, "format": fmt},
        cause=exc,
    )


# ---------------------------------------------------------------------------
# YAML
# ---------------------------------------------------------------------------

def decode_document(text: str) -> Tree:
    """Parse YAML (or JSON, which is a YAML subset) text into a tree.

    An empty document decodes to :class:`~yamlnote.tree.nodes.Null`.

    Raises
    ------
    YamlNoteDecodeError
        On malformed text, multiple documents, unhashable or unsupported
        keys, values with no tree equivalent (e.g. ``!!binary``), or
        nesting deeper than the interpreter's recursion limit (``line`` 0).
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise YamlNoteDecodeError(
            f"YAML parse error: {exc}",
            context={"line": _error_line(exc), "format": "yaml"},
            cause=exc,
        ) from exc
    except RecursionError as exc:
        raise _too_deep("yaml", exc) from exc
    return _to_tree(data, "yaml")


def encode_document(tree: Tree, config: YamlNoteConfig | None = None) -> str:
    """Render *tree* as block-style YAML text.

    Raises
    ------
    YamlNoteEncodeError
        If the tree cannot be represented.
    """
    config = config or YamlNoteConfig()
    try:
        return yaml.dump(
            to_python(tree),
            Dumper=_DocumentDumper,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=config.yaml_sort_keys,
            indent=config.yaml_indent,
            width=config.yaml_width,
        )
    except (yaml.YAMLError, TypeError, RecursionError) as exc:
        raise YamlNoteEncodeError(
            f"YAML serialization error: {exc}",
            context={"format": "yaml"},
            cause=exc,
        ) from exc


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

def _json_default(obj: Any) -> Any:
    if isinstance(obj, Decimal):
        return int(obj) if obj == obj.to_integral_value() else float(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def dumps_json(data: Any) -> str:
    """Serialise plain Python *data* as compact UTF-8 JSON (``Decimal`` aware)."""
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"), default=_json_default)


def decode_json(text: str) -> Tree:
    """Parse JSON text into a tree.

    Raises
    ------
    YamlNoteDecodeError
        On malformed JSON; ``line`` is the line reported by the parser.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise YamlNoteDecodeError(
            f"JSON parse error: {exc}",
            context={"line": exc.lineno, "format": "json"},
            cause=exc,
        ) from exc
    except RecursionError as exc:
        raise _too_deep("json", exc) from exc
    return _to_tree(data, "json")


def encode_json(tree: Tree) -> str:
    """Render *tree* as compact JSON text.

    Raises
    ------
    YamlNoteEncodeError
        If the tree holds a value JSON cannot represent.
    """
    try:
        return dumps_json(to_python(tree))
    except (TypeError, ValueError, RecursionError) as exc:
        raise YamlNoteEncodeError(
            f"JSON serialization error: {exc}",
            context={"format": "json"},
            cause=exc,
        ) from exc
