"""Tree model, path tokens and the path resolver.

Exports
-------
Null, Bool, Number, String, Sequence, Mapping, Tree, NodeKind
    The immutable document variants.
from_python, to_python
    Plain Python value conversion.
APPEND, format_pointer, parse_pointer
    Path tokens and JSON-Pointer rendering.
resolve, exists, insert, delete, set_node
    Path-addressed lookup and copy-on-write mutators.
"""

from .nodes import (
    Bool,
    Mapping,
    NodeKind,
    Null,
    Number,
    Sequence,
    String,
    Tree,
    from_python,
    is_container,
    to_python,
)
from .pointer import APPEND, Path, PathToken, format_pointer, parse_pointer
from .resolver import delete, exists, insert, resolve, set_node

__all__ = [
    "APPEND",
    "Bool",
    "Mapping",
    "NodeKind",
    "Null",
    "Number",
    "Path",
    "PathToken",
    "Sequence",
    "String",
    "Tree",
    "delete",
    "exists",
    "format_pointer",
    "from_python",
    "insert",
    "is_container",
    "parse_pointer",
    "resolve",
    "set_node",
    "to_python",
]
