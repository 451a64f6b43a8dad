"""Bootstrap OpenTelemetry tracing for the registry service."""

from __future__ import annotations
import logging
from dataclasses import dataclass
from opentelemetry import propagate, trace
from opentelemetry.baggage.propagation import W3CBaggagePropagator
from opentelemetry.propagators.composite import CompositePropagator
from opentelemetry.propagators.textmap import TextMapPropagator
from opentelemetry.sdk.resources import SERVICE_NAME as SERVICE_NAME_KEY
from opentelemetry.sdk.resources import SERVICE_VERSION as SERVICE_VERSION_KEY
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SpanExporter
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from opentelemetry.trace.propagation.tracecontext import (
    TraceContextTextMapPropagator,
)
from opentelemetry.util._once import Once
from distribution_registry.config import TracingSettings, get_settings
from distribution_registry.tracing.autoexport import new_span_exporters
from distribution_registry.tracing.exporters import (
    CompositeSpanExporter,
    build_logger_exporter,
)
from distribution_registry.version import version


_logger = logging.getLogger(__name__)

SERVICE_NAME = "distribution"
"""Service name reported on every span resource."""

DEFAULT_SAMPLING_RATIO = 1.0
"""Record every span unless configuration asks otherwise."""

ATTRIBUTE_PREFIX = "io.cncf.distribution."
"""Prefix for custom span attributes emitted by the registry."""

SCHEMA_URL = "https://opentelemetry.io/schemas/1.4.0"


def attribute_key(name: str) -> str:
    """Return ``name`` namespaced under :data:`ATTRIBUTE_PREFIX`."""
    if name.startswith(ATTRIBUTE_PREFIX):
        return name
    return f"{ATTRIBUTE_PREFIX}{name}"


@dataclass(slots=True)
class TracingHandle:
    """Tracing pipeline owned by the caller that built it."""

    resource: Resource
    exporter: CompositeSpanExporter
    processor: BatchSpanProcessor
    provider: TracerProvider
    propagator: TextMapPropagator

    def activate_global(self) -> None:
        """Install provider and propagator as the process-wide defaults.

        Any previously installed provider is replaced without being shut down.
        """
        trace._TRACER_PROVIDER_SET_ONCE = Once()  # type: ignore[attr-defined]
        trace.set_tracer_provider(self.provider)
        propagate.set_global_textmap(self.propagator)
        _STATE.handle = self

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        """Export every buffered span, waiting at most ``timeout_millis``."""
        return self.provider.force_flush(timeout_millis)

    def shutdown(self) -> None:
        """Flush buffered spans and shut the exporters down."""
        try:
            self.provider.shutdown()
        finally:
            if _STATE.handle is self:
                _STATE.handle = None


@dataclass(slots=True)
class _TracingState:
    handle: TracingHandle | None = None


_STATE = _TracingState()
_DEFAULT_TEXTMAP = propagate.get_global_textmap()


def _build_resource(service_name: str) -> Resource:
    return Resource(
        {SERVICE_NAME_KEY: service_name, SERVICE_VERSION_KEY: version()},
        schema_url=SCHEMA_URL,
    )


def _build_propagator() -> TextMapPropagator:
    return CompositePropagator(
        [TraceContextTextMapPropagator(), W3CBaggagePropagator()]
    )


def init_open_telemetry(
    logger: logging.Logger | logging.LoggerAdapter | None = None,
    *,
    settings: TracingSettings | None = None,
    install: bool = True,
) -> TracingHandle:
    """Build the tracing pipeline and, by default, install it globally.

    Spans go through a batch processor to a composite exporter that feeds the
    auto-detected exporters and a debug-log exporter writing to ``logger``.
    Exporter construction errors propagate unchanged and leave the global
    provider and propagator untouched.
    """
    tracing_settings = settings or TracingSettings()
    span_logger = logger if logger is not None else _default_span_logger()

    resource = _build_resource(tracing_settings.service_name)
    exporters: list[SpanExporter] = new_span_exporters(
        tracing_settings.exporter, protocol=tracing_settings.protocol
    )
    if tracing_settings.debug_log or not exporters:
        try:
            exporters.append(build_logger_exporter(span_logger))
        except Exception:
            _discard_exporters(exporters)
            raise

    composite = CompositeSpanExporter(*exporters)
    processor = BatchSpanProcessor(composite)
    provider = TracerProvider(
        sampler=TraceIdRatioBased(tracing_settings.sampling_ratio),
        resource=resource,
    )
    provider.add_span_processor(processor)

    handle = TracingHandle(
        resource=resource,
        exporter=composite,
        processor=processor,
        provider=provider,
        propagator=_build_propagator(),
    )
    if install:
        handle.activate_global()
        _logger.info(
            "OpenTelemetry tracing configured for service %s with %d exporter(s).",
            tracing_settings.service_name,
            len(composite.exporters),
        )
    return handle


def configure_tracing(
    settings: TracingSettings | None = None,
    *,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> TracingHandle | None:
    """Configure tracing from settings, returning ``None`` when disabled."""
    tracing_settings = settings or TracingSettings.from_mapping(get_settings())
    if not tracing_settings.enabled:
        _logger.debug("Tracing disabled; skipping tracer configuration.")
        return None
    return init_open_telemetry(logger, settings=tracing_settings)


def get_active_handle() -> TracingHandle | None:
    """Return the handle most recently installed as the global default."""
    return _STATE.handle


def reset_tracing() -> None:
    """Clear global tracing state (primarily for testing)."""
    _STATE.handle = None
    if hasattr(trace, "_TRACER_PROVIDER_SET_ONCE"):
        trace._TRACER_PROVIDER_SET_ONCE = Once()  # type: ignore[attr-defined]
    if hasattr(trace, "_TRACER_PROVIDER"):
        trace._TRACER_PROVIDER = None  # type: ignore[attr-defined]
    propagate.set_global_textmap(_DEFAULT_TEXTMAP)


def _discard_exporters(exporters: list[SpanExporter]) -> None:
    for exporter in exporters:
        try:
            exporter.shutdown()
        except Exception as exc:
            _logger.warning(
                "Failed to shut down span exporter %s: %s",
                type(exporter).__name__,
                exc,
            )


def _default_span_logger() -> logging.Logger:
    return logging.getLogger("distribution_registry.tracing.spans")


__all__ = [
    "ATTRIBUTE_PREFIX",
    "DEFAULT_SAMPLING_RATIO",
    "SERVICE_NAME",
    "TracingHandle",
    "attribute_key",
    "configure_tracing",
    "get_active_handle",
    "init_open_telemetry",
    "reset_tracing",
]
