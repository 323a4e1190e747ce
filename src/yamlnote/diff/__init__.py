"""Diff, patch and conflict detection over document trees.

Exports
-------
DiffEngine, compute_diff
    Compute edit operations between two trees.
PatchApplier, apply_ops
    Apply edit operations atomically.
detect_conflicts
    Single-branch detector that flags every replacement.
detect_three_way_conflicts
    Two branches compared against a shared base.
ops_to_json, ops_from_json
    JSON-Patch wire format.
"""

from .conflict import detect_conflicts, detect_three_way_conflicts
from .engine import DiffEngine, compute_diff
from .patcher import PatchApplier, apply_ops
from .wire import ops_from_document, ops_from_json, ops_to_document, ops_to_json

__all__ = [
    "DiffEngine",
    "PatchApplier",
    "apply_ops",
    "compute_diff",
    "detect_conflicts",
    "detect_three_way_conflicts",
    "ops_from_document",
    "ops_from_json",
    "ops_to_document",
    "ops_to_json",
]
