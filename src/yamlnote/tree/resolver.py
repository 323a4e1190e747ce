"""Path resolver: locate, insert, delete and set nodes inside a tree.

Every mutator takes a root and returns a *new* root.  The input is never
modified, and a failing call raises before any new root exists, so an
error always leaves the caller with exactly the tree it had.

Addressing rules
----------------

* An empty path is the root: ``insert`` / ``set_node`` replace it,
  ``delete`` refuses (the root cannot be removed).
* Mapping tokens: a missing *final* key is created by ``insert`` and
  ``set_node``.  A missing *intermediate* key is auto-vivified as an empty
  mapping by ``insert``; every other operation raises
  :class:`YamlNotePathNotFoundError`.
* Sequence tokens: ``insert`` accepts ``0 <= i <= len`` (``i == len``
  appends) and the append marker; ``delete`` / ``set_node`` / ``resolve``
  need ``0 <= i < len``.  The append marker is only legal as the final
  token of an ``insert``.
* Any token left over when a scalar is reached raises
  :class:`YamlNoteTypeMismatchError`.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from yamlnote.errors import (
    YamlNoteIndexOutOfBoundsError,
    YamlNoteInvalidPathError,
    YamlNotePathNotFoundError,
    YamlNoteTypeMismatchError,
)
from yamlnote.tree.nodes import Mapping, Sequence, Tree
from yamlnote.tree.pointer import (
    Path,
    PathToken,
    format_pointer,
    mapping_key,
    sequence_index,
)


class _Action(str, Enum):
    INSERT = "insert"
    DELETE = "delete"
    SET = "set"


# ---------------------------------------------------------------------------
# Error helpers
# ---------------------------------------------------------------------------

def _ctx(path: Path, depth: int, **extra: Any) -> dict[str, Any]:
    return {"path": format_pointer(path), "depth": depth, **extra}


def _not_found(path: Path, depth: int, key: str) -> YamlNotePathNotFoundError:
    return YamlNotePathNotFoundError(
        f"Key {key!r} not found at {format_pointer(path[:depth]) or '/'}",
        context=_ctx(path, depth, key=key),
    )


def _out_of_bounds(
    path: Path, depth: int, index: int | None, length: int,
) -> YamlNoteIndexOutOfBoundsError:
    shown = "-" if index is None else index
    return YamlNoteIndexOutOfBoundsError(
        f"Index {shown} out of bounds for sequence of length {length}",
        context=_ctx(path, depth, index=shown, length=length),
    )


def _type_mismatch(path: Path, depth: int, node: Tree) -> YamlNoteTypeMismatchError:
    return YamlNoteTypeMismatchError(
        f"Cannot traverse into {node.kind.value} at {format_pointer(path[:depth]) or '/'}",
        context=_ctx(path, depth, node_kind=node.kind.value),
    )


def _append_not_final(path: Path, depth: int) -> YamlNoteInvalidPathError:
    return YamlNoteInvalidPathError(
        "The append marker is only valid as the final token",
        context=_ctx(path, depth, token="-"),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def resolve(tree: Tree, path: Path) -> Tree:
    """Return the node addressed by *path*.

    Raises
    ------
    YamlNotePathNotFoundError, YamlNoteIndexOutOfBoundsError,
    YamlNoteInvalidPathError, YamlNoteTypeMismatchError
    """
    node = tree
    for depth, token in enumerate(path):
        node = _child(node, token, path, depth)
    return node


def exists(tree: Tree, path: Path) -> bool:
    """Return ``True`` if *path* addresses an existing node.

    Malformed paths and traversal through scalars still raise.
    """
    try:
        resolve(tree, path)
    except (YamlNotePathNotFoundError, YamlNoteIndexOutOfBoundsError):
        return False
    return True


def insert(tree: Tree, path: Path, value: Tree) -> Tree:
    """Insert *value* at *path*, auto-vivifying missing intermediate mappings."""
    if not path:
        return value
    return _rebuild(tree, tuple(path), _Action.INSERT, value)


def delete(tree: Tree, path: Path) -> Tree:
    """Remove the node at *path*.  The root cannot be deleted."""
    if not path:
        raise YamlNoteInvalidPathError(
            "The document root cannot be removed",
            context=_ctx((), 0, token=None),
        )
    return _rebuild(tree, tuple(path), _Action.DELETE, None)


def set_node(tree: Tree, path: Path, value: Tree) -> Tree:
    """Set the node at *path* to *value*.

    A missing final mapping key is created; sequence positions must
    already exist.
    """
    if not path:
        return value
    return _rebuild(tree, tuple(path), _Action.SET, value)


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------

def _child(node: Tree, token: PathToken, path: Path, depth: int) -> Tree:
    if isinstance(node, Mapping):
        key = mapping_key(token, path, depth)
        if key not in node:
            raise _not_found(path, depth, key)
        return node[key]
    if isinstance(node, Sequence):
        index = sequence_index(token, path, depth)
        if index is None and depth < len(path) - 1:
            raise _append_not_final(path, depth)
        if index is None or index >= len(node):
            raise _out_of_bounds(path, depth, index, len(node))
        return node[index]
    raise _type_mismatch(path, depth, node)


def _rebuild(tree: Tree, path: Path, action: _Action, value: Tree | None) -> Tree:
    try:
        return _edit(tree, path, 0, action, value)
    except RecursionError as exc:
        raise YamlNoteInvalidPathError(
            f"Path of {len(path)} tokens is too deep to edit",
            context=_ctx(path, 0, token=None),
            cause=exc,
        ) from exc


def _edit(node: Tree, path: Path, depth: int, action: _Action, value: Tree | None) -> Tree:
    """Rebuild the spine from *node* down to the target of *path*."""
    token = path[depth]
    final = depth == len(path) - 1

    if isinstance(node, Mapping):
        key = mapping_key(token, path, depth)
        if final:
            return _edit_mapping_entry(node, key, path, depth, action, value)
        if key in node:
            child = node[key]
        elif action is _Action.INSERT:
            child = Mapping()
        else:
            raise _not_found(path, depth, key)
        return node.with_entry(key, _edit(child, path, depth + 1, action, value))

    if isinstance(node, Sequence):
        index = sequence_index(token, path, depth)
        if final:
            return _edit_sequence_item(node, index, path, depth, action, value)
        if index is None:
            raise _append_not_final(path, depth)
        if index >= len(node):
            raise _out_of_bounds(path, depth, index, len(node))
        return node.with_item(index, _edit(node[index], path, depth + 1, action, value))

    raise _type_mismatch(path, depth, node)


def _edit_mapping_entry(
    node: Mapping, key: str, path: Path, depth: int, action: _Action, value: Tree | None,
) -> Mapping:
    if action is _Action.DELETE:
        if key not in node:
            raise _not_found(path, depth, key)
        return node.without(key)
    assert value is not None
    return node.with_entry(key, value)


def _edit_sequence_item(
    node: Sequence, index: int | None, path: Path, depth: int, action: _Action, value: Tree | None,
) -> Sequence:
    length = len(node)
    if action is _Action.INSERT:
        assert value is not None
        if index is None or index == length:
            return node.appended(value)
        if index > length:
            raise _out_of_bounds(path, depth, index, length)
        return node.inserted(index, value)

    if index is None or index >= length:
        raise _out_of_bounds(path, depth, index, length)
    if action is _Action.DELETE:
        return node.without_index(index)
    assert value is not None
    return node.with_item(index, value)
