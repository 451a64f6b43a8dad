"""Span exporters used by the registry tracing pipeline.

``CompositeSpanExporter`` fans one batch out to several exporters so the
batch processor sees a single sink while spans reach every destination.
``build_logger_exporter`` produces the debug-log sink.
"""

from __future__ import annotations
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING
from opentelemetry.sdk.trace.export import (
    ConsoleSpanExporter,
    SpanExporter,
    SpanExportResult,
)
from distribution_registry.tracing.writer import LoggerWriter


if TYPE_CHECKING:
    from opentelemetry.sdk.trace import ReadableSpan


_logger = logging.getLogger(__name__)


class CompositeExporterError(Exception):
    """Raised when one or more wrapped exporters raised during a fan-out call.

    ``errors`` keeps every exception in exporter order; the first one is also
    chained as ``__cause__``.
    """

    def __init__(self, operation: str, errors: Sequence[BaseException]) -> None:
        """Record the failing ``operation`` and the collected ``errors``."""
        self.operation = operation
        self.errors = tuple(errors)
        super().__init__(
            f"{len(self.errors)} span exporter(s) failed during {operation}: "
            f"{self.errors[0]!r}"
        )


class CompositeSpanExporter(SpanExporter):
    """Present several span exporters as one.

    Every call is forwarded to each exporter in the order supplied. A failing
    exporter never prevents the remaining ones from running; the failure is
    reported once all of them have been called.
    """

    def __init__(self, *exporters: SpanExporter) -> None:
        """Wrap ``exporters``; at least one is required."""
        if not exporters:
            raise ValueError("CompositeSpanExporter requires at least one exporter.")
        self._exporters: tuple[SpanExporter, ...] = tuple(exporters)

    @property
    def exporters(self) -> tuple[SpanExporter, ...]:
        """Return the wrapped exporters in call order."""
        return self._exporters

    def export(self, spans: Sequence[ReadableSpan]) -> SpanExportResult:
        """Export ``spans`` through every wrapped exporter."""
        errors: list[BaseException] = []
        failed = False
        for exporter in self._exporters:
            try:
                result = exporter.export(spans)
            except Exception as exc:
                _logger.warning(
                    "Span exporter %s raised during export: %s",
                    type(exporter).__name__,
                    exc,
                )
                errors.append(exc)
                continue
            if result is not SpanExportResult.SUCCESS:
                failed = True
        if errors:
            raise CompositeExporterError("export", errors) from errors[0]
        return SpanExportResult.FAILURE if failed else SpanExportResult.SUCCESS

    def shutdown(self) -> None:
        """Shut down every wrapped exporter."""
        errors: list[BaseException] = []
        for exporter in self._exporters:
            try:
                exporter.shutdown()
            except Exception as exc:
                _logger.warning(
                    "Span exporter %s raised during shutdown: %s",
                    type(exporter).__name__,
                    exc,
                )
                errors.append(exc)
        if errors:
            raise CompositeExporterError("shutdown", errors) from errors[0]

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        """Flush every wrapped exporter; ``True`` only when all succeeded."""
        errors: list[BaseException] = []
        flushed = True
        for exporter in self._exporters:
            try:
                if not exporter.force_flush(timeout_millis):
                    flushed = False
            except Exception as exc:
                _logger.warning(
                    "Span exporter %s raised during force_flush: %s",
                    type(exporter).__name__,
                    exc,
                )
                errors.append(exc)
        if errors:
            raise CompositeExporterError("force_flush", errors) from errors[0]
        return flushed


def _format_span(span: ReadableSpan) -> str:
    return span.to_json(indent=None)


def build_logger_exporter(
    logger: logging.Logger | logging.LoggerAdapter,
) -> ConsoleSpanExporter:
    """Return an exporter writing each finished span to ``logger`` at debug level."""
    return ConsoleSpanExporter(out=LoggerWriter(logger), formatter=_format_span)


__all__ = [
    "CompositeExporterError",
    "CompositeSpanExporter",
    "build_logger_exporter",
]
