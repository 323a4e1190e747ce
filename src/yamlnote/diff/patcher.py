"""Patch applier: run an ordered list of edit operations against a tree.

Operations run strictly in order, each against the tree produced by the
ones before it.  Trees are immutable, so the working copy is simply the
latest root; the first failing operation aborts the patch and the caller's
tree is left exactly as it was.

* ``ADD`` inserts, auto-vivifying intermediate mappings.
* ``REMOVE`` deletes and fails when the target is missing.
* ``REPLACE`` requires the target to exist, then overwrites it.  Callers
  that want upsert semantics use ``ADD``.
"""

from __future__ import annotations

from yamlnote.config import YamlNoteConfig
from yamlnote.errors import YamlNoteApplyError, YamlNoteInvalidPathError, YamlNotePathError
from yamlnote.models import EditOp, OpType
from yamlnote.observability import get_logger, log_fields, resolve_metrics
from yamlnote.tree.nodes import Tree
from yamlnote.tree.resolver import delete, insert, resolve, set_node

from .engine import emit_op_counts

log = get_logger("yamlnote.patch")


class PatchApplier:
    """Applies edit operations to trees.

    Parameters
    ----------
    config:
        Core configuration (metrics backend).
    """

    def __init__(self, config: YamlNoteConfig | None = None) -> None:
        self._config = config or YamlNoteConfig()
        self._metrics = resolve_metrics(self._config.metrics)

    def apply(self, tree: Tree, ops: list[EditOp]) -> Tree:
        """Apply *ops* to *tree* and return the resulting tree.

        Parameters
        ----------
        tree:
            The starting tree.  It is never modified.
        ops:
            Ordered operations, e.g. from :class:`DiffEngine`.

        Returns
        -------
        Tree
            The patched tree.

        Raises
        ------
        YamlNoteApplyError
            On the first operation that fails.  ``context["index"]`` is its
            position in *ops* and ``cause`` is the underlying
            :class:`YamlNotePathError`.
        """
        working = tree
        for index, op in enumerate(ops):
            try:
                working = _apply_one(working, op)
            except YamlNotePathError as exc:
                self._metrics.increment(
                    "yamlnote.patch_failures_total",
                    tags={"reason": str(getattr(exc.code, "value", exc.code))},
                )
                log.debug(
                    "patch aborted",
                    extra=log_fields(op="apply", index=index, path=op.pointer, reason=exc.message),
                )
                raise YamlNoteApplyError(
                    f"Operation {index} ({op.op_type.value} {op.pointer or '/'}) failed: {exc.message}",
                    context={
                        "index": index,
                        "op": op.op_type.value,
                        "path": op.pointer,
                        "reason": str(getattr(exc.code, "value", exc.code)),
                    },
                    cause=exc,
                ) from exc

        emit_op_counts(self._metrics, "yamlnote.patch_ops_total", ops)
        return working


def _apply_one(tree: Tree, op: EditOp) -> Tree:
    if op.op_type is OpType.ADD:
        return insert(tree, op.path, _require_value(op))
    if op.op_type is OpType.REMOVE:
        return delete(tree, op.path)
    if op.op_type is OpType.REPLACE:
        resolve(tree, op.path)
        return set_node(tree, op.path, _require_value(op))
    raise ValueError(f"Unknown operation type: {op.op_type!r}")


def _require_value(op: EditOp) -> Tree:
    if op.value is None:
        raise YamlNoteInvalidPathError(
            f"{op.op_type.value} operation at {op.pointer or '/'} has no value",
            context={"path": op.pointer, "depth": len(op.path), "token": None},
        )
    return op.value


def apply_ops(tree: Tree, ops: list[EditOp], config: YamlNoteConfig | None = None) -> Tree:
    """Shortcut for ``PatchApplier(config).apply(tree, ops)``."""
    return PatchApplier(config).apply(tree, ops)
