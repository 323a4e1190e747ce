"""yamlnote — structural diff, patch and conflict detection for YAML notes.

Public re-exports
-----------------

* **Facade:** :class:`YamlNoteCore` (fail-soft, string in / string out)
* **Configuration:** :class:`YamlNoteConfig`
* **Errors:** Every :class:`YamlNoteError` subclass and :class:`ErrorCode`
* **Models:** Edit operations, conflict reports and boundary results
* **Tree:** The immutable document variants and the path resolver

Usage::

    from yamlnote import YamlNoteCore

    core = YamlNoteCore()
    patch = core.diff("tags: [a]\\n", "tags: [a, b]\\n")
    core.apply_patch("tags: [a]\\n", patch)
"""

from __future__ import annotations

# ── Configuration ───────────────────────────────────────────────────────
from yamlnote.config import DEFAULT_UNTITLED_TITLE, YamlNoteConfig

# ── Facade ─────────────────────────────────────────────────────────────
from yamlnote.core import YamlNoteCore, __version__

# ── Engine ──────────────────────────────────────────────────────────────
from yamlnote.diff import (
    DiffEngine,
    PatchApplier,
    apply_ops,
    compute_diff,
    detect_conflicts,
    detect_three_way_conflicts,
    ops_from_json,
    ops_to_json,
)

# ── Errors ──────────────────────────────────────────────────────────────
from yamlnote.errors import (
    ErrorCode,
    YamlNoteApplyError,
    YamlNoteDecodeError,
    YamlNoteEncodeError,
    YamlNoteError,
    YamlNoteFrontmatterError,
    YamlNoteIndexOutOfBoundsError,
    YamlNoteInvalidPathError,
    YamlNotePatchFormatError,
    YamlNotePathError,
    YamlNotePathNotFoundError,
    YamlNoteTypeMismatchError,
)

# ── Models ──────────────────────────────────────────────────────────────
from yamlnote.models import (
    Conflict,
    ConflictMode,
    ConflictReport,
    EditOp,
    ErrorInfo,
    Frontmatter,
    OpType,
    ValidationResult,
)

# ── Tree ────────────────────────────────────────────────────────────────
from yamlnote.tree import (
    APPEND,
    Bool,
    Mapping,
    NodeKind,
    Null,
    Number,
    Sequence,
    String,
    Tree,
    delete,
    format_pointer,
    from_python,
    insert,
    parse_pointer,
    resolve,
    set_node,
    to_python,
)

# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    "__version__",
    # Facade
    "YamlNoteCore",
    # Configuration
    "YamlNoteConfig",
    "DEFAULT_UNTITLED_TITLE",
    # Error base + code enum
    "YamlNoteError",
    "ErrorCode",
    # Codec errors
    "YamlNoteDecodeError",
    "YamlNoteEncodeError",
    "YamlNoteFrontmatterError",
    # Path errors
    "YamlNotePathError",
    "YamlNotePathNotFoundError",
    "YamlNoteIndexOutOfBoundsError",
    "YamlNoteInvalidPathError",
    "YamlNoteTypeMismatchError",
    # Patch errors
    "YamlNoteApplyError",
    "YamlNotePatchFormatError",
    # Models
    "OpType",
    "EditOp",
    "ConflictMode",
    "Conflict",
    "ConflictReport",
    "ErrorInfo",
    "ValidationResult",
    "Frontmatter",
    # Engine
    "DiffEngine",
    "PatchApplier",
    "compute_diff",
    "apply_ops",
    "detect_conflicts",
    "detect_three_way_conflicts",
    "ops_to_json",
    "ops_from_json",
    # Tree
    "Tree",
    "NodeKind",
    "Null",
    "Bool",
    "Number",
    "String",
    "Sequence",
    "Mapping",
    "APPEND",
    "from_python",
    "to_python",
    "parse_pointer",
    "format_pointer",
    "resolve",
    "insert",
    "delete",
    "set_node",
]
