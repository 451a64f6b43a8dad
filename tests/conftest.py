"""Shared fixtures for registry tracing tests."""

from __future__ import annotations
from collections.abc import Iterator
import pytest
from distribution_registry.config import get_settings
from distribution_registry.tracing import reset_tracing


@pytest.fixture(autouse=True)
def _isolate_tracing(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Start every test without global tracing state or OTEL overrides."""
    for name in (
        "OTEL_TRACES_EXPORTER",
        "OTEL_EXPORTER_OTLP_PROTOCOL",
        "OTEL_EXPORTER_OTLP_TRACES_PROTOCOL",
        "REGISTRY_TRACING_ENABLED",
        "REGISTRY_TRACING_SERVICE_NAME",
        "REGISTRY_TRACING_SAMPLING_RATIO",
        "REGISTRY_TRACING_EXPORTER",
        "REGISTRY_TRACING_PROTOCOL",
        "REGISTRY_TRACING_DEBUG_LOG",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_tracing()
    get_settings(refresh=True)
    yield
    reset_tracing()
