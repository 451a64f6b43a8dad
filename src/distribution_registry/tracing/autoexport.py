"""Environment-driven selection of span exporters.

Exporter names are read from ``OTEL_TRACES_EXPORTER`` (``otlp`` when unset)
and may be a comma-separated list. ``otlp`` uses the transport named by
``OTEL_EXPORTER_OTLP_TRACES_PROTOCOL`` or ``OTEL_EXPORTER_OTLP_PROTOCOL``
(``http/protobuf`` when unset); endpoint, headers and TLS options are left
to the OTLP exporters, which read their own ``OTEL_EXPORTER_OTLP_*``
variables. Names other than the built-in ones are resolved through the
``opentelemetry_traces_exporter`` entry-point group.
"""

from __future__ import annotations
import logging
import os
from collections.abc import Mapping
from importlib.metadata import entry_points
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SpanExporter


logger = logging.getLogger(__name__)

TRACES_EXPORTER_ENV = "OTEL_TRACES_EXPORTER"
TRACES_PROTOCOL_ENV = "OTEL_EXPORTER_OTLP_TRACES_PROTOCOL"
PROTOCOL_ENV = "OTEL_EXPORTER_OTLP_PROTOCOL"
ENTRY_POINT_GROUP = "opentelemetry_traces_exporter"

DEFAULT_EXPORTER = "otlp"
DEFAULT_PROTOCOL = "http/protobuf"


class ExporterConfigurationError(ValueError):
    """Raised when the configured exporter or OTLP protocol is not supported."""


def resolve_exporter_names(
    names: str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> list[str]:
    """Return the normalized exporter names to build, in first-seen order."""
    env = os.environ if environ is None else environ
    raw = names if names is not None else env.get(TRACES_EXPORTER_ENV)
    if raw is None or not raw.strip():
        raw = DEFAULT_EXPORTER
    resolved: list[str] = []
    for entry in raw.split(","):
        candidate = entry.strip().lower()
        if candidate and candidate not in resolved:
            resolved.append(candidate)
    return resolved


def resolve_protocol(
    protocol: str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Return the OTLP transport protocol for trace export."""
    env = os.environ if environ is None else environ
    for candidate in (protocol, env.get(TRACES_PROTOCOL_ENV), env.get(PROTOCOL_ENV)):
        if candidate and candidate.strip():
            return candidate.strip().lower()
    return DEFAULT_PROTOCOL


def new_span_exporters(
    names: str | None = None,
    *,
    protocol: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> list[SpanExporter]:
    """Build the span exporters selected by arguments or the environment.

    ``none`` contributes nothing, so the result may be empty. Construction
    errors from the underlying exporters are not caught.
    """
    exporters: list[SpanExporter] = []
    for name in resolve_exporter_names(names, environ=environ):
        if name == "none":
            continue
        if name == "otlp":
            exporters.append(
                _build_otlp_exporter(resolve_protocol(protocol, environ=environ))
            )
        elif name == "console":
            exporters.append(ConsoleSpanExporter())
        else:
            exporters.append(_load_entry_point_exporter(name))
        logger.debug("Configured span exporter '%s'.", name)
    return exporters


def _build_otlp_exporter(protocol: str) -> SpanExporter:
    if protocol == "http/protobuf":
        from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
            OTLPSpanExporter,
        )

        return OTLPSpanExporter()
    if protocol == "grpc":
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
            OTLPSpanExporter as GrpcOTLPSpanExporter,
        )

        return GrpcOTLPSpanExporter()
    msg = f"Unsupported OTLP protocol '{protocol}'; expected grpc or http/protobuf."
    raise ExporterConfigurationError(msg)


def _load_entry_point_exporter(name: str) -> SpanExporter:
    matches = list(entry_points(group=ENTRY_POINT_GROUP, name=name))
    if not matches:
        msg = f"Unknown span exporter '{name}' in {TRACES_EXPORTER_ENV}."
        raise ExporterConfigurationError(msg)
    exporter_cls = matches[0].load()
    return exporter_cls()


__all__ = [
    "DEFAULT_EXPORTER",
    "DEFAULT_PROTOCOL",
    "ExporterConfigurationError",
    "new_span_exporters",
    "resolve_exporter_names",
    "resolve_protocol",
]
