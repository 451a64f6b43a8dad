"""Tests for environment-driven span exporter selection."""

from __future__ import annotations
from typing import Any
import pytest
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
    OTLPSpanExporter as GrpcOTLPSpanExporter,
)
from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
    OTLPSpanExporter as HttpOTLPSpanExporter,
)
from opentelemetry.sdk.trace.export import ConsoleSpanExporter
from opentelemetry.sdk.trace.export.in_memory_span_exporter import (
    InMemorySpanExporter,
)
from distribution_registry.tracing import autoexport
from distribution_registry.tracing.autoexport import (
    ExporterConfigurationError,
    new_span_exporters,
    resolve_exporter_names,
    resolve_protocol,
)


def test_exporter_names_default_to_otlp() -> None:
    assert resolve_exporter_names(environ={}) == ["otlp"]
    assert resolve_exporter_names(environ={"OTEL_TRACES_EXPORTER": "  "}) == ["otlp"]


def test_exporter_names_are_split_normalized_and_deduplicated() -> None:
    environ = {"OTEL_TRACES_EXPORTER": "OTLP, console,,otlp "}

    assert resolve_exporter_names(environ=environ) == ["otlp", "console"]


def test_explicit_exporter_names_win_over_environment() -> None:
    environ = {"OTEL_TRACES_EXPORTER": "otlp"}

    assert resolve_exporter_names("console", environ=environ) == ["console"]


def test_protocol_resolution_order() -> None:
    assert resolve_protocol(environ={}) == "http/protobuf"
    assert resolve_protocol(environ={"OTEL_EXPORTER_OTLP_PROTOCOL": "grpc"}) == "grpc"
    environ = {
        "OTEL_EXPORTER_OTLP_PROTOCOL": "grpc",
        "OTEL_EXPORTER_OTLP_TRACES_PROTOCOL": "http/protobuf",
    }
    assert resolve_protocol(environ=environ) == "http/protobuf"
    assert resolve_protocol("GRPC", environ=environ) == "grpc"


def test_none_builds_no_exporters() -> None:
    assert new_span_exporters("none") == []


def test_console_builds_sdk_console_exporter() -> None:
    (exporter,) = new_span_exporters("console")

    assert isinstance(exporter, ConsoleSpanExporter)


def test_otlp_defaults_to_http_transport(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OTEL_TRACES_EXPORTER", raising=False)

    (exporter,) = new_span_exporters()

    assert isinstance(exporter, HttpOTLPSpanExporter)
    exporter.shutdown()


def test_otlp_grpc_transport_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OTEL_TRACES_EXPORTER", "otlp")
    monkeypatch.setenv("OTEL_EXPORTER_OTLP_TRACES_PROTOCOL", "grpc")

    (exporter,) = new_span_exporters()

    assert isinstance(exporter, GrpcOTLPSpanExporter)
    exporter.shutdown()


def test_multiple_exporters_keep_order(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OTEL_TRACES_EXPORTER", "console,otlp")

    exporters = new_span_exporters()

    assert [type(exporter) for exporter in exporters] == [
        ConsoleSpanExporter,
        HttpOTLPSpanExporter,
    ]
    exporters[1].shutdown()


def test_unsupported_protocol_is_rejected() -> None:
    with pytest.raises(ExporterConfigurationError, match="http/json"):
        new_span_exporters("otlp", protocol="http/json")


class _FakeEntryPoint:
    def __init__(self, target: Any) -> None:
        self._target = target

    def load(self) -> Any:
        return self._target


def test_unknown_exporter_name_resolves_through_entry_points(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    seen: dict[str, str] = {}

    def fake_entry_points(*, group: str, name: str) -> list[_FakeEntryPoint]:
        seen.update(group=group, name=name)
        return [_FakeEntryPoint(InMemorySpanExporter)]

    monkeypatch.setattr(autoexport, "entry_points", fake_entry_points)

    (exporter,) = new_span_exporters("memory")

    assert isinstance(exporter, InMemorySpanExporter)
    assert seen == {"group": "opentelemetry_traces_exporter", "name": "memory"}


def test_unknown_exporter_name_without_entry_point_is_rejected(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(autoexport, "entry_points", lambda **_: [])

    with pytest.raises(ExporterConfigurationError, match="zipkin"):
        new_span_exporters("zipkin")


def test_exporter_configuration_error_is_value_error() -> None:
    assert issubclass(ExporterConfigurationError, ValueError)
