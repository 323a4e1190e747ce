"""Shared test fixtures for the yamlnote test suite."""

from __future__ import annotations

import pytest

from yamlnote.config import YamlNoteConfig
from yamlnote.core import YamlNoteCore


class RecordingMetrics:
    """MetricsHook that records every call for assertions."""

    def __init__(self) -> None:
        self.increments: list[tuple[str, int, dict | None]] = []
        self.timings: list[tuple[str, float, dict | None]] = []
        self.gauges: list[tuple[str, float, dict | None]] = []

    def increment(self, name, value=1, tags=None):
        self.increments.append((name, value, tags))

    def timing(self, name, ms, tags=None):
        self.timings.append((name, ms, tags))

    def gauge(self, name, value, tags=None):
        self.gauges.append((name, value, tags))

    def counts(self, name: str) -> int:
        return sum(value for n, value, _ in self.increments if n == name)


@pytest.fixture
def config() -> YamlNoteConfig:
    """Default configuration."""
    return YamlNoteConfig()


@pytest.fixture
def metrics() -> RecordingMetrics:
    return RecordingMetrics()


@pytest.fixture
def core(config: YamlNoteConfig) -> YamlNoteCore:
    """Fail-soft facade using the default test config."""
    return YamlNoteCore(config)
