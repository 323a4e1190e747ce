"""Text-boundary facade for the yamlnote core.

:class:`YamlNoteCore` wraps the tree, diff and codec layers behind
string-in / string-out methods for editor front-ends.  The methods never
raise for bad input: each one has a documented fallback result, and every
swallowed :class:`~yamlnote.errors.YamlNoteError` is logged at ``WARNING``
and counted as ``yamlnote.boundary_fallbacks_total``.

Usage::

    from yamlnote import YamlNoteCore

    core = YamlNoteCore()
    patch = core.diff("title: Draft\\n", "title: Final\\n")
    # '[{"op":"replace","path":"/title","value":"Final"}]'
    core.apply_patch("title: Draft\\n", patch)
    # 'title: Final\\n'
"""

from __future__ import annotations

from yamlnote.codec.document import (
    decode_document,
    decode_json,
    dumps_json,
    encode_document,
    encode_json,
)
from yamlnote.codec.frontmatter import parse_frontmatter, validate_frontmatter
from yamlnote.codec.markdown import md_to_yaml, yaml_to_md
from yamlnote.config import YamlNoteConfig
from yamlnote.diff.conflict import detect_conflicts, detect_three_way_conflicts
from yamlnote.diff.engine import DiffEngine
from yamlnote.diff.patcher import PatchApplier
from yamlnote.diff.wire import ops_from_json, ops_to_json
from yamlnote.errors import YamlNoteEncodeError, YamlNoteError
from yamlnote.models import ConflictMode, ConflictReport, ErrorInfo, ValidationResult
from yamlnote.observability import get_logger, log_fields, resolve_metrics

__version__ = "0.1.0"

log = get_logger("yamlnote.core")

EMPTY_PATCH = "[]"
NO_CONFLICTS = dumps_json(ConflictReport(mode=ConflictMode.REPLACE).to_dict())


class YamlNoteCore:
    """Fail-soft string API over the yamlnote engine.

    Parameters
    ----------
    config:
        Core configuration shared by every component.  Defaults to
        ``YamlNoteConfig()``.
    """

    def __init__(self, config: YamlNoteConfig | None = None) -> None:
        self._config = config or YamlNoteConfig()
        self._metrics = resolve_metrics(self._config.metrics)
        self._engine = DiffEngine(self._config)
        self._applier = PatchApplier(self._config)

    @property
    def config(self) -> YamlNoteConfig:
        return self._config

    # ── Diff / patch ───────────────────────────────────────────────────

    def diff(self, base_text: str, target_text: str) -> str:
        """Compute a JSON patch from *base_text* to *target_text*.

        Returns
        -------
        str
            A JSON-Patch array.  ``"[]"`` when either input fails to
            decode.
        """
        try:
            base = decode_document(base_text)
            target = decode_document(target_text)
            return ops_to_json(self._engine.diff(base, target))
        except YamlNoteError as exc:
            self._fallback("diff", exc)
            return EMPTY_PATCH

    def apply_patch(self, doc_text: str, patch_text: str) -> str:
        """Apply a JSON patch to a YAML document.

        Returns
        -------
        str
            The patched document re-encoded as YAML.  On any failure
            (undecodable document, malformed patch, failing operation or
            encode error) *doc_text* is returned unchanged.
        """
        try:
            tree = decode_document(doc_text)
            ops = ops_from_json(patch_text)
            return encode_document(self._applier.apply(tree, ops), self._config)
        except YamlNoteError as exc:
            self._fallback("apply_patch", exc)
            return doc_text

    # ── Conflicts ──────────────────────────────────────────────────────

    def detect_conflicts(self, base_text: str, edited_text: str) -> str:
        """Flag every replacement between two versions.

        Returns
        -------
        str
            ``{"has_conflict": bool, "conflicts": [{"path", "value"}, ...]}``.
            ``{"has_conflict": false, "conflicts": []}`` when either input
            fails to decode.
        """
        try:
            base = decode_document(base_text)
            edited = decode_document(edited_text)
            return _report_json(detect_conflicts(base, edited, self._config))
        except YamlNoteError as exc:
            self._fallback("detect_conflicts", exc)
            return NO_CONFLICTS

    def detect_three_way_conflicts(
        self, base_text: str, ours_text: str, theirs_text: str,
    ) -> str:
        """Compare two edited branches against their shared base.

        Falls back to the empty report when any input fails to decode.
        """
        try:
            base = decode_document(base_text)
            ours = decode_document(ours_text)
            theirs = decode_document(theirs_text)
            return _report_json(detect_three_way_conflicts(base, ours, theirs, self._config))
        except YamlNoteError as exc:
            self._fallback("detect_three_way_conflicts", exc)
            return NO_CONFLICTS

    # ── Format conversion ──────────────────────────────────────────────

    def parse_yaml(self, text: str) -> str:
        """Convert YAML text to JSON, or a failed ``ValidationResult`` JSON."""
        try:
            return encode_json(decode_document(text))
        except YamlNoteError as exc:
            self._fallback("parse_yaml", exc)
            return self._error_json(exc)

    def stringify_yaml(self, json_text: str) -> str:
        """Convert JSON text to YAML, or a failed ``ValidationResult`` JSON."""
        try:
            return encode_document(decode_json(json_text), self._config)
        except YamlNoteError as exc:
            self._fallback("stringify_yaml", exc)
            return self._error_json(exc)

    def md_to_yaml(self, markdown: str) -> str:
        """Extract ``title`` and ``content`` from Markdown as YAML."""
        try:
            return md_to_yaml(markdown, self._config)
        except YamlNoteError as exc:
            self._fallback("md_to_yaml", exc)
            return self._error_json(exc)

    def yaml_to_md(self, text: str) -> str:
        """Render a ``title`` / ``content`` YAML note as Markdown."""
        try:
            return yaml_to_md(text)
        except YamlNoteError as exc:
            self._fallback("yaml_to_md", exc)
            return self._error_json(exc)

    def validate_frontmatter_text(self, markdown: str) -> str:
        """Parse and check the frontmatter block of a Markdown note.

        Returns
        -------
        str
            ``ValidationResult`` JSON: ``{"success": bool, "errors": [...]}``.
        """
        try:
            result = validate_frontmatter(parse_frontmatter(markdown))
        except YamlNoteError as exc:
            self._fallback("validate_frontmatter_text", exc)
            return self._error_json(exc)
        return dumps_json(result.to_dict())

    @staticmethod
    def version() -> str:
        return __version__

    # ── Internal helpers ──────────────────────────────────────────────

    def _fallback(self, entry_point: str, exc: YamlNoteError) -> None:
        code = str(getattr(exc.code, "value", exc.code))
        self._metrics.increment(
            "yamlnote.boundary_fallbacks_total",
            tags={"entry_point": entry_point, "error_code": code},
        )
        fields = {**exc.context, "entry_point": entry_point, "error_code": code}
        log.warning(
            "%s fell back to default result: %s",
            entry_point,
            exc.message,
            extra=log_fields(**fields),
        )

    @staticmethod
    def _error_json(exc: YamlNoteError) -> str:
        line = exc.context.get("line", 0)
        path = exc.context.get("path", "")
        error = ErrorInfo(line if isinstance(line, int) else 0, exc.message, str(path))
        return dumps_json(ValidationResult.failed(error).to_dict())


def _report_json(report: ConflictReport) -> str:
    try:
        return dumps_json(report.to_dict())
    except RecursionError as exc:
        raise YamlNoteEncodeError(
            "Conflict report is nested too deeply to serialise",
            context={"format": "json"},
            cause=exc,
        ) from exc
