"""Public data models for the yamlnote core.

This module contains the edit-operation type, the conflict report types,
and the small result types returned at the text boundary.  All types are
plain dataclasses with no behaviour beyond what is needed for structural
equality and rendering to JSON-ready dicts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from yamlnote.tree.nodes import Tree, to_python
from yamlnote.tree.pointer import Path, format_pointer

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class OpType(str, Enum):
    """Operation types emitted by the diff engine."""

    ADD = "add"
    """Insert a value (mapping key upsert, sequence insert or append)."""

    REMOVE = "remove"
    """Delete an existing node."""

    REPLACE = "replace"
    """Overwrite an existing node."""


class ConflictMode(str, Enum):
    """Which conflict detector produced a :class:`ConflictReport`."""

    REPLACE = "replace"
    """Single-branch detector: every Replace in ``diff(base, edited)``."""

    THREE_WAY = "three_way"
    """Two branches diffed against a shared base."""


# ---------------------------------------------------------------------------
# Edit operations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EditOp:
    """A single step of a patch.

    Attributes
    ----------
    op_type:
        The kind of operation.
    path:
        Token path of the target node.  ``()`` is the document root.
    value:
        The new subtree for ``ADD`` and ``REPLACE``; ``None`` for
        ``REMOVE``.
    """

    op_type: OpType
    path: Path
    value: Tree | None = None

    @classmethod
    def add(cls, path: Path, value: Tree) -> EditOp:
        return cls(OpType.ADD, tuple(path), value)

    @classmethod
    def remove(cls, path: Path) -> EditOp:
        return cls(OpType.REMOVE, tuple(path))

    @classmethod
    def replace(cls, path: Path, value: Tree) -> EditOp:
        return cls(OpType.REPLACE, tuple(path), value)

    @property
    def pointer(self) -> str:
        return format_pointer(self.path)

    def to_dict(self) -> dict[str, Any]:
        """Render as a JSON-Patch operation object."""
        entry: dict[str, Any] = {"op": self.op_type.value, "path": self.pointer}
        if self.op_type is not OpType.REMOVE:
            entry["value"] = to_python(self.value) if self.value is not None else None
        return entry


# ---------------------------------------------------------------------------
# Conflicts
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Conflict:
    """A path where edits disagree on the resulting value.

    Attributes
    ----------
    path:
        Token path of the contested node.
    value:
        The edited outcome (``ours`` in three-way mode).  ``None`` when
        that side removed the node.
    op_type:
        The operation that produced *value*.
    theirs:
        The other branch's outcome (three-way mode only).
    theirs_op:
        The other branch's operation (three-way mode only).
    """

    path: Path
    value: Tree | None
    op_type: OpType = OpType.REPLACE
    theirs: Tree | None = None
    theirs_op: OpType | None = None

    @property
    def pointer(self) -> str:
        return format_pointer(self.path)

    def to_dict(self) -> dict[str, Any]:
        entry: dict[str, Any] = {
            "path": self.pointer,
            "value": to_python(self.value) if self.value is not None else None,
        }
        if self.theirs_op is not None:
            entry["op"] = self.op_type.value
            entry["theirs_op"] = self.theirs_op.value
            entry["theirs"] = to_python(self.theirs) if self.theirs is not None else None
        return entry


@dataclass
class ConflictReport:
    """Result of a conflict detector run.

    Attributes
    ----------
    mode:
        Which detector produced the report.
    conflicts:
        Flagged paths, in diff order.
    """

    mode: ConflictMode
    conflicts: list[Conflict] = field(default_factory=list)

    @property
    def has_conflict(self) -> bool:
        return bool(self.conflicts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "has_conflict": self.has_conflict,
            "conflicts": [conflict.to_dict() for conflict in self.conflicts],
        }


# ---------------------------------------------------------------------------
# Text-boundary results
# ---------------------------------------------------------------------------

@dataclass
class ErrorInfo:
    """One problem reported to a text-boundary caller.

    Attributes
    ----------
    line:
        1-based source line, or ``0`` when unknown.
    message:
        Human-readable description.
    path:
        JSON-Pointer (or field name) the problem relates to; may be empty.
    """

    line: int
    message: str
    path: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"line": self.line, "message": self.message, "path": self.path}


@dataclass
class ValidationResult:
    """Outcome of a parse or validation step reported as data."""

    success: bool
    errors: list[ErrorInfo] = field(default_factory=list)

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(success=True)

    @classmethod
    def failed(cls, *errors: ErrorInfo) -> ValidationResult:
        return cls(success=False, errors=list(errors))

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "errors": [error.to_dict() for error in self.errors],
        }


@dataclass
class Frontmatter:
    """Metadata block at the top of a Markdown note.

    Attributes
    ----------
    schema_path:
        Path of the schema the note should be validated against.
    validated:
        Whether validation is enabled for the note.  Defaults to ``True``.
    raw:
        The YAML text between the ``---`` fences.
    """

    schema_path: str | None = None
    validated: bool = True
    raw: str = ""
