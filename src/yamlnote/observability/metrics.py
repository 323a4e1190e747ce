"""Metrics hook protocol and no-op default implementation.

yamlnote emits counters and timings around diffing, patching and conflict
detection.  By default a :class:`NoopMetricsHook` discards them; pass any
object satisfying :class:`MetricsHook` as ``YamlNoteConfig.metrics`` to
route them to StatsD, Prometheus or similar.

Emitted metric names:

* ``yamlnote.diff_ops_total``            -- counter, tagged ``op_type``
* ``yamlnote.diff_duration_ms``          -- timing
* ``yamlnote.patch_ops_total``           -- counter, tagged ``op_type``
* ``yamlnote.patch_failures_total``      -- counter, tagged ``reason``
* ``yamlnote.conflicts_total``           -- counter, tagged ``mode``
* ``yamlnote.boundary_fallbacks_total``  -- counter, tagged ``entry_point``
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    *tags* keys and values are strings; backends translate them into their
    own labelling scheme.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment a counter metric by *value*."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration in milliseconds."""
        ...

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Set a gauge metric to an absolute value."""
        ...


class NoopMetricsHook:
    """Metrics backend that silently discards all data points.

    Used when no backend is configured, so call-sites never need
    ``if metrics is not None`` guards.
    """

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def gauge(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass


def resolve_metrics(hook: object | None) -> MetricsHook:
    """Return *hook*, or a :class:`NoopMetricsHook` when it is ``None``."""
    return hook if hook is not None else NoopMetricsHook()  # type: ignore[return-value]
