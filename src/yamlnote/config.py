"""Configuration for the yamlnote core.

:class:`YamlNoteConfig` is a plain dataclass that captures every tuneable
knob of the diff engine, the patch applier, and the YAML codec.  Instances
are passed to :class:`~yamlnote.core.YamlNoteCore` and to the individual
components; every component falls back to ``YamlNoteConfig()`` when none is
given.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_UNTITLED_TITLE = "Untitled Document"
"""Title used by ``md_to_yaml`` when the Markdown has no level-1 heading."""


@dataclass
class YamlNoteConfig:
    """Complete configuration for the yamlnote core.

    Every parameter has a sensible default.

    Parameters
    ----------
    diff_append_marker:
        Emit trailing sequence additions at the append marker (``/-``)
        instead of at explicit increasing indices.
    yaml_sort_keys:
        Sort mapping keys when encoding YAML.  Off by default so that
        encoded documents keep their authored key order.
    yaml_indent:
        Block indentation used when encoding YAML (2 to 9, the range
        PyYAML accepts).
    yaml_width:
        Preferred line width for encoded YAML scalars.
    untitled_title:
        Title assigned by ``md_to_yaml`` when no level-1 heading exists.
    metrics:
        Optional :class:`~yamlnote.observability.MetricsHook` backend.
    debug_dump_diff:
        Log every computed edit operation at ``DEBUG`` level.
    """

    # ── Diff ────────────────────────────────────────────────────────────
    diff_append_marker: bool = False

    # ── YAML encoding ───────────────────────────────────────────────────
    yaml_sort_keys: bool = False

    yaml_indent: int = 2

    yaml_width: int = 80

    # ── Markdown ────────────────────────────────────────────────────────
    untitled_title: str = DEFAULT_UNTITLED_TITLE

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_diff: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not 2 <= self.yaml_indent <= 9:
            raise ValueError(f"yaml_indent must be between 2 and 9, got {self.yaml_indent}")
        if self.yaml_width <= 0:
            raise ValueError(f"yaml_width must be > 0, got {self.yaml_width}")
        if not self.untitled_title.strip():
            raise ValueError("untitled_title must not be blank")
