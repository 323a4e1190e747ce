"""Diff engine: compute the edit operations that turn one tree into another.

The diff is structural and deterministic, not minimal:

* Equal trees produce no operations.
* Two mappings are compared key by key.  Keys are visited in *target*
  order (``ADD`` for new keys, recursion for shared keys), followed by
  ``REMOVE`` for keys only present in *base*, in base order.
* Two sequences are compared position by position.  A mismatch at a shared
  index is a ``REPLACE`` of that element; there is no move or LCS
  detection.  Extra target elements become ``ADD`` at increasing indices
  (or at the append marker); extra base elements become ``REMOVE`` in
  *descending* index order so that no removal shifts a later one.
* Anything else that differs -- two scalars, or two nodes of different
  kinds -- becomes a single ``REPLACE`` of the whole node.

Diffing is total: any two trees yield some operation list.
"""

from __future__ import annotations

import time
from collections import Counter
from typing import Any

from yamlnote.config import YamlNoteConfig
from yamlnote.models import EditOp
from yamlnote.observability import get_logger, log_fields, resolve_metrics
from yamlnote.tree.nodes import Mapping, Sequence, Tree
from yamlnote.tree.pointer import APPEND, Path

log = get_logger("yamlnote.diff")


class DiffEngine:
    """Computes edit operations between two trees.

    Parameters
    ----------
    config:
        Core configuration (append-marker emission, metrics, debug flags).
    """

    def __init__(self, config: YamlNoteConfig | None = None) -> None:
        self._config = config or YamlNoteConfig()
        self._metrics = resolve_metrics(self._config.metrics)

    def diff(self, base: Tree, target: Tree) -> list[EditOp]:
        """Compute the operations transforming *base* into *target*.

        Parameters
        ----------
        base:
            The starting tree.
        target:
            The desired tree.

        Returns
        -------
        list[EditOp]
            Ordered operations; applying them to *base* yields a tree equal
            to *target*.  Trees nested too deeply to compare degrade to a
            single root-level ``REPLACE``.
        """
        started = time.perf_counter()
        ops: list[EditOp] = []
        try:
            self._diff_node(base, target, (), ops)
        except RecursionError:
            log.warning(
                "diff degraded to root replace",
                extra=log_fields(op="diff", reason="depth"),
            )
            ops = [EditOp.replace((), target)]

        emit_op_counts(self._metrics, "yamlnote.diff_ops_total", ops)
        self._metrics.timing(
            "yamlnote.diff_duration_ms", (time.perf_counter() - started) * 1000.0,
        )
        if self._config.debug_dump_diff:
            log.debug(
                "diff computed",
                extra=log_fields(op="diff", ops=[op.to_dict() for op in ops]),
            )
        return ops

    def _diff_node(self, base: Tree, target: Tree, path: Path, ops: list[EditOp]) -> None:
        if base == target:
            return
        if isinstance(base, Mapping) and isinstance(target, Mapping):
            self._diff_mapping(base, target, path, ops)
        elif isinstance(base, Sequence) and isinstance(target, Sequence):
            self._diff_sequence(base, target, path, ops)
        else:
            ops.append(EditOp.replace(path, target))

    def _diff_mapping(
        self, base: Mapping, target: Mapping, path: Path, ops: list[EditOp],
    ) -> None:
        for key, value in target.entries:
            if key in base:
                self._diff_node(base[key], value, path + (key,), ops)
            else:
                ops.append(EditOp.add(path + (key,), value))
        for key, _value in base.entries:
            if key not in target:
                ops.append(EditOp.remove(path + (key,)))

    def _diff_sequence(
        self, base: Sequence, target: Sequence, path: Path, ops: list[EditOp],
    ) -> None:
        shared = min(len(base), len(target))
        for index in range(shared):
            if base[index] != target[index]:
                ops.append(EditOp.replace(path + (index,), target[index]))

        for index in range(shared, len(target)):
            token = APPEND if self._config.diff_append_marker else index
            ops.append(EditOp.add(path + (token,), target[index]))

        for index in range(len(base) - 1, shared - 1, -1):
            ops.append(EditOp.remove(path + (index,)))


def compute_diff(
    base: Tree, target: Tree, config: YamlNoteConfig | None = None,
) -> list[EditOp]:
    """Shortcut for ``DiffEngine(config).diff(base, target)``."""
    return DiffEngine(config).diff(base, target)


def emit_op_counts(metrics: Any, name: str, ops: list[EditOp]) -> None:
    """Emit one *name* counter per operation type present in *ops*."""
    op_counts: Counter[str] = Counter(op.op_type.value for op in ops)
    for op_type_val, count in op_counts.items():
        metrics.increment(name, count, tags={"op_type": op_type_val})
