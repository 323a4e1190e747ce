"""Conflict detection between document edits.

Two detectors are available:

* :func:`detect_conflicts` -- the compatibility detector.  It diffs a
  single edited tree against its base and flags *every* ``REPLACE`` as a
  conflict candidate.  It does not look at a second branch, so it flags
  replacements rather than genuinely divergent concurrent edits.  The
  two-argument text entry point uses this detector.
* :func:`detect_three_way_conflicts` -- diffs two branches against a shared
  base and flags paths the branches change in different ways.
"""

from __future__ import annotations

from yamlnote.config import YamlNoteConfig
from yamlnote.models import Conflict, ConflictMode, ConflictReport, EditOp, OpType
from yamlnote.observability import resolve_metrics
from yamlnote.tree.nodes import Tree
from yamlnote.tree.pointer import Path

from .engine import DiffEngine


def detect_conflicts(
    base: Tree, edited: Tree, config: YamlNoteConfig | None = None,
) -> ConflictReport:
    """Flag every replacement between *base* and *edited*.

    Parameters
    ----------
    base:
        The shared starting tree.
    edited:
        The edited tree.

    Returns
    -------
    ConflictReport
        ``has_conflict`` is ``True`` iff the diff contains at least one
        ``REPLACE``.  Additions and removals are never flagged.
    """
    config = config or YamlNoteConfig()
    ops = DiffEngine(config).diff(base, edited)
    conflicts = [
        Conflict(path=op.path, value=op.value)
        for op in ops
        if op.op_type is OpType.REPLACE
    ]
    report = ConflictReport(mode=ConflictMode.REPLACE, conflicts=conflicts)
    _emit_conflict_metrics(config, report)
    return report


def detect_three_way_conflicts(
    base: Tree, ours: Tree, theirs: Tree, config: YamlNoteConfig | None = None,
) -> ConflictReport:
    """Flag paths that *ours* and *theirs* change incompatibly.

    Both branches are diffed against *base*.  A conflict is reported when:

    * both branches touch the same path with a different operation or a
      different value, or
    * one branch touches a path whose ancestor the other branch touches,
      since the ancestor edit overwrites or removes the descendant edit.

    Edits made identically on both sides, and edits to unrelated paths,
    are not conflicts.  Each conflict is keyed by *ours*'s path and carries
    the first overlapping operation of *theirs*; conflicts are reported in
    the order of *ours*'s operations.
    """
    config = config or YamlNoteConfig()
    engine = DiffEngine(config)
    our_ops = engine.diff(base, ours)
    their_ops = engine.diff(base, theirs)

    their_by_path: dict[Path, EditOp] = {op.path: op for op in their_ops}

    conflicts: list[Conflict] = []
    seen: set[Path] = set()
    for ours_op in our_ops:
        for theirs_op in _overlapping(ours_op, their_ops, their_by_path):
            if _same_outcome(ours_op, theirs_op):
                continue
            if ours_op.path in seen:
                continue
            seen.add(ours_op.path)
            conflicts.append(
                Conflict(
                    path=ours_op.path,
                    value=ours_op.value,
                    op_type=ours_op.op_type,
                    theirs=theirs_op.value,
                    theirs_op=theirs_op.op_type,
                )
            )

    report = ConflictReport(mode=ConflictMode.THREE_WAY, conflicts=conflicts)
    _emit_conflict_metrics(config, report)
    return report


def _overlapping(
    op: EditOp, others: list[EditOp], by_path: dict[Path, EditOp],
) -> list[EditOp]:
    """Return the operations in *others* on *op*'s path, its ancestors, or its descendants."""
    exact = by_path.get(op.path)
    related = [exact] if exact is not None else []
    related.extend(
        other for other in others
        if other.path != op.path and (_is_prefix(other.path, op.path) or _is_prefix(op.path, other.path))
    )
    return related


def _is_prefix(prefix: Path, path: Path) -> bool:
    return len(prefix) < len(path) and path[: len(prefix)] == prefix


def _same_outcome(left: EditOp, right: EditOp) -> bool:
    return (
        left.path == right.path
        and left.op_type is right.op_type
        and left.value == right.value
    )


def _emit_conflict_metrics(config: YamlNoteConfig, report: ConflictReport) -> None:
    if report.conflicts:
        resolve_metrics(config.metrics).increment(
            "yamlnote.conflicts_total",
            len(report.conflicts),
            tags={"mode": report.mode.value},
        )
