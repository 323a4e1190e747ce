"""Immutable tree model for structured documents.

A document is a recursive value built from six variants:

* scalars -- :class:`Null`, :class:`Bool`, :class:`Number`, :class:`String`
* containers -- :class:`Sequence` (ordered items) and :class:`Mapping`
  (ordered, unique string keys)

All variants are frozen dataclasses.  Edits never mutate a node; the
container helpers (``with_item``, ``inserted``, ``with_entry`` ...) return a
new node that shares every untouched child with the original.  A tree can
therefore be handed to several readers at once and an edited result never
aliases back into its source.

Equality is structural.  Sequences compare element by element; mappings
compare key sets and values regardless of entry order; numbers also
compare the type of their value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Union

# ---------------------------------------------------------------------------
# Node kinds
# ---------------------------------------------------------------------------

class NodeKind(str, Enum):
    """Discriminator for the tree variants."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Null:
    """The null scalar."""

    @property
    def kind(self) -> NodeKind:
        return NodeKind.NULL


@dataclass(frozen=True, slots=True)
class Bool:
    """A boolean scalar."""

    value: bool

    @property
    def kind(self) -> NodeKind:
        return NodeKind.BOOL


@dataclass(frozen=True, slots=True, eq=False)
class Number:
    """A numeric scalar (``int``, ``float`` or ``Decimal``).

    Two numbers are equal only when their values have the same Python type,
    so ``1`` and ``1.0`` are different documents and diff as a replace.
    """

    value: int | float | Decimal

    @property
    def kind(self) -> NodeKind:
        return NodeKind.NUMBER

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Number):
            return NotImplemented
        return type(self.value) is type(other.value) and self.value == other.value

    def __hash__(self) -> int:
        return hash((type(self.value), self.value))


@dataclass(frozen=True, slots=True)
class String:
    """A text scalar."""

    value: str

    @property
    def kind(self) -> NodeKind:
        return NodeKind.STRING


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Sequence:
    """An ordered list of child trees."""

    items: tuple[Tree, ...] = ()

    @property
    def kind(self) -> NodeKind:
        return NodeKind.SEQUENCE

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> Tree:
        return self.items[index]

    def with_item(self, index: int, value: Tree) -> Sequence:
        """Return a copy with the element at *index* replaced."""
        return Sequence(self.items[:index] + (value,) + self.items[index + 1:])

    def inserted(self, index: int, value: Tree) -> Sequence:
        """Return a copy with *value* inserted before *index*."""
        return Sequence(self.items[:index] + (value,) + self.items[index:])

    def appended(self, value: Tree) -> Sequence:
        return Sequence(self.items + (value,))

    def without_index(self, index: int) -> Sequence:
        """Return a copy with the element at *index* removed."""
        return Sequence(self.items[:index] + self.items[index + 1:])


@dataclass(frozen=True, slots=True, eq=False)
class Mapping:
    """An ordered collection of ``(key, value)`` entries with unique keys.

    Entry order is preserved for rendering and for deterministic diff
    output, but it takes no part in equality.

    Raises
    ------
    ValueError
        If a key is not a string or appears more than once.
    """

    entries: tuple[tuple[str, Tree], ...] = ()
    _index: dict[str, int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        index: dict[str, int] = {}
        for position, (key, _value) in enumerate(self.entries):
            if not isinstance(key, str):
                raise ValueError(f"Mapping keys must be strings, got {type(key).__name__}")
            if key in index:
                raise ValueError(f"Duplicate mapping key {key!r}")
            index[key] = position
        object.__setattr__(self, "_index", index)

    @property
    def kind(self) -> NodeKind:
        return NodeKind.MAPPING

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __getitem__(self, key: str) -> Tree:
        return self.entries[self._index[key]][1]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        if len(self.entries) != len(other.entries):
            return False
        return all(
            key in other._index and other[key] == value
            for key, value in self.entries
        )

    def __hash__(self) -> int:
        return hash(frozenset(self.entries))

    def get(self, key: str, default: Tree | None = None) -> Tree | None:
        position = self._index.get(key)
        if position is None:
            return default
        return self.entries[position][1]

    def keys(self) -> list[str]:
        return [key for key, _ in self.entries]

    def with_entry(self, key: str, value: Tree) -> Mapping:
        """Return a copy with *key* set to *value*.

        An existing key keeps its position; a new key is appended.
        """
        position = self._index.get(key)
        if position is None:
            return Mapping(self.entries + ((key, value),))
        return Mapping(
            self.entries[:position] + ((key, value),) + self.entries[position + 1:]
        )

    def without(self, key: str) -> Mapping:
        """Return a copy with *key* removed."""
        position = self._index[key]
        return Mapping(self.entries[:position] + self.entries[position + 1:])


Tree = Union[Null, Bool, Number, String, Sequence, Mapping]
"""Any document node."""

SCALAR_TYPES: tuple[type, ...] = (Null, Bool, Number, String)
CONTAINER_TYPES: tuple[type, ...] = (Sequence, Mapping)


def is_container(node: Tree) -> bool:
    return isinstance(node, CONTAINER_TYPES)


# ---------------------------------------------------------------------------
# Python value conversion
# ---------------------------------------------------------------------------

def _key_to_str(key: Any) -> str:
    """Stringify a scalar mapping key the way YAML would print it."""
    if isinstance(key, str):
        return key
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, (int, float, Decimal)):
        return str(key)
    raise TypeError(f"Unsupported mapping key type: {type(key).__name__}")


def from_python(obj: Any) -> Tree:
    """Convert a plain Python value to a tree.

    Mapping:

    * ``None`` -> :class:`Null`
    * ``bool`` -> :class:`Bool` (checked before ``int``)
    * ``int`` / ``float`` / ``Decimal`` -> :class:`Number`
    * ``str`` -> :class:`String`
    * ``date`` / ``datetime`` -> :class:`String` in ISO-8601 form
    * ``list`` / ``tuple`` -> :class:`Sequence`
    * ``dict`` -> :class:`Mapping`; ``None``, ``bool`` and numeric keys are
      stringified

    Trees are returned unchanged.

    Raises
    ------
    TypeError
        For any other value type.
    """
    if isinstance(obj, (Null, Bool, Number, String, Sequence, Mapping)):
        return obj
    if obj is None:
        return Null()
    if isinstance(obj, bool):
        return Bool(obj)
    if isinstance(obj, (int, float, Decimal)):
        return Number(obj)
    if isinstance(obj, str):
        return String(obj)
    if isinstance(obj, (datetime, date)):
        return String(obj.isoformat())
    if isinstance(obj, (list, tuple)):
        return Sequence(tuple(from_python(item) for item in obj))
    if isinstance(obj, dict):
        return Mapping(tuple((_key_to_str(k), from_python(v)) for k, v in obj.items()))
    raise TypeError(f"Cannot convert {type(obj).__name__} to a tree node")


def to_python(node: Tree) -> Any:
    """Convert a tree back to plain Python values (inverse of :func:`from_python`)."""
    if isinstance(node, Null):
        return None
    if isinstance(node, (Bool, Number, String)):
        return node.value
    if isinstance(node, Sequence):
        return [to_python(item) for item in node.items]
    if isinstance(node, Mapping):
        return {key: to_python(value) for key, value in node.entries}
    raise TypeError(f"Unknown tree node: {type(node).__name__}")
