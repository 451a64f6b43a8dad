"""Public tracing utilities for the registry service."""

from distribution_registry.tracing.autoexport import (
    ExporterConfigurationError,
    new_span_exporters,
)
from distribution_registry.tracing.exporters import (
    CompositeExporterError,
    CompositeSpanExporter,
    build_logger_exporter,
)
from distribution_registry.tracing.provider import (
    ATTRIBUTE_PREFIX,
    DEFAULT_SAMPLING_RATIO,
    SERVICE_NAME,
    TracingHandle,
    attribute_key,
    configure_tracing,
    get_active_handle,
    init_open_telemetry,
    reset_tracing,
)
from distribution_registry.tracing.writer import LoggerWriter


__all__ = [
    "ATTRIBUTE_PREFIX",
    "DEFAULT_SAMPLING_RATIO",
    "SERVICE_NAME",
    "CompositeExporterError",
    "CompositeSpanExporter",
    "ExporterConfigurationError",
    "LoggerWriter",
    "TracingHandle",
    "attribute_key",
    "build_logger_exporter",
    "configure_tracing",
    "get_active_handle",
    "init_open_telemetry",
    "new_span_exporters",
    "reset_tracing",
]
