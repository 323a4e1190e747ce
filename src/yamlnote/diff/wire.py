"""JSON-Patch wire format for edit operations.

A patch document is a JSON array of objects::

    [{"op": "add", "path": "/items/-", "value": 3},
     {"op": "remove", "path": "/draft"},
     {"op": "replace", "path": "/title", "value": "Final"}]

Only ``add``, ``remove`` and ``replace`` are understood.  Paths are
JSON-Pointers; segments are kept as strings when read back, so whether a
segment is an index is decided by the resolver against the actual
container.
"""

from __future__ import annotations

import json
from typing import Any

from yamlnote.codec.document import dumps_json
from yamlnote.errors import (
    YamlNoteEncodeError,
    YamlNoteInvalidPathError,
    YamlNotePatchFormatError,
)
from yamlnote.models import EditOp, OpType
from yamlnote.tree.nodes import from_python
from yamlnote.tree.pointer import parse_pointer

_OPS_WITH_VALUE = frozenset({OpType.ADD, OpType.REPLACE})


def ops_to_document(ops: list[EditOp]) -> list[dict[str, Any]]:
    return [op.to_dict() for op in ops]


def ops_to_json(ops: list[EditOp]) -> str:
    """Render *ops* as a JSON-Patch array string.

    Raises
    ------
    YamlNoteEncodeError
        If an operation value is nested too deeply to serialise.
    """
    try:
        return dumps_json(ops_to_document(ops))
    except RecursionError as exc:
        raise YamlNoteEncodeError(
            "Patch value is nested too deeply to serialise",
            context={"format": "json"},
            cause=exc,
        ) from exc


def ops_from_document(document: Any) -> list[EditOp]:
    """Build edit operations from a decoded patch document.

    Raises
    ------
    YamlNotePatchFormatError
        If *document* is not a list of well-formed operation objects.
    """
    if not isinstance(document, list):
        raise YamlNotePatchFormatError(
            "Patch document must be a JSON array",
            context={"reason": f"got {type(document).__name__}"},
        )
    return [_op_from_entry(index, entry) for index, entry in enumerate(document)]


def ops_from_json(text: str) -> list[EditOp]:
    """Parse a JSON-Patch array string into edit operations.

    Raises
    ------
    YamlNotePatchFormatError
        If *text* is not valid JSON or not a well-formed patch.
    """
    try:
        document = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise YamlNotePatchFormatError(
            f"Patch is not valid JSON: {exc}",
            context={"reason": "json"},
            cause=exc,
        ) from exc
    except RecursionError as exc:
        raise YamlNotePatchFormatError(
            "Patch is nested too deeply",
            context={"reason": "depth"},
            cause=exc,
        ) from exc
    return ops_from_document(document)


def _op_from_entry(index: int, entry: Any) -> EditOp:
    if not isinstance(entry, dict):
        raise YamlNotePatchFormatError(
            f"Patch entry {index} is not an object",
            context={"index": index, "reason": "entry"},
        )

    raw_op = entry.get("op")
    try:
        op_type = OpType(raw_op)
    except ValueError:
        raise YamlNotePatchFormatError(
            f"Patch entry {index} has unsupported op {raw_op!r}",
            context={"index": index, "reason": "op"},
        ) from None

    raw_path = entry.get("path")
    if not isinstance(raw_path, str):
        raise YamlNotePatchFormatError(
            f"Patch entry {index} is missing a string 'path'",
            context={"index": index, "reason": "path"},
        )
    try:
        path = parse_pointer(raw_path)
    except YamlNoteInvalidPathError as exc:
        raise YamlNotePatchFormatError(
            f"Patch entry {index} has an invalid path: {exc.message}",
            context={"index": index, "reason": "path"},
            cause=exc,
        ) from exc

    if op_type not in _OPS_WITH_VALUE:
        return EditOp.remove(path)

    if "value" not in entry:
        raise YamlNotePatchFormatError(
            f"Patch entry {index} ({op_type.value}) is missing 'value'",
            context={"index": index, "reason": "value"},
        )
    try:
        value = from_python(entry["value"])
    except RecursionError as exc:
        raise YamlNotePatchFormatError(
            f"Patch entry {index} has a value nested too deeply",
            context={"index": index, "reason": "depth"},
            cause=exc,
        ) from exc
    return EditOp(op_type, path, value)
