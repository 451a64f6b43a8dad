"""Text stream that forwards everything written to it into a logger."""

from __future__ import annotations
import io
import logging


class LoggerWriter(io.TextIOBase):
    """Adapt ``write`` calls into debug-level log records.

    Each call produces exactly one record and always reports the whole
    buffer as consumed, so it can stand in for ``sys.stdout`` wherever the
    SDK expects a writable stream.
    """

    def __init__(self, logger: logging.Logger | logging.LoggerAdapter) -> None:
        """Wrap ``logger``; records are emitted at ``DEBUG`` level."""
        super().__init__()
        self._logger = logger

    @property
    def logger(self) -> logging.Logger | logging.LoggerAdapter:
        """Return the logger receiving written text."""
        return self._logger

    def writable(self) -> bool:
        """Report that the stream accepts writes."""
        return True

    def write(self, data: str | bytes) -> int:  # type: ignore[override]
        """Log ``data`` as a single debug record and return its length."""
        if isinstance(data, bytes | bytearray | memoryview):
            text = bytes(data).decode("utf-8", errors="replace")
        else:
            text = data
        self._logger.debug(text)
        return len(data)

    def flush(self) -> None:
        """Nothing is buffered; records are emitted on write."""


__all__ = ["LoggerWriter"]
