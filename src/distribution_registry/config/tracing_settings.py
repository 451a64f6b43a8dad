"""Configuration model describing OpenTelemetry tracing settings."""

from __future__ import annotations
from collections.abc import Mapping
from typing import Any, cast
from pydantic import BaseModel, Field, field_validator
from distribution_registry.config.defaults import _DEFAULTS


_PROTOCOLS = {"grpc", "http/protobuf"}


def _coerce_bool(value: object, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    candidate = str(value).strip().lower()
    if candidate in {"1", "true", "yes", "on"}:
        return True
    if candidate in {"0", "false", "no", "off"}:
        return False
    return default


def _coerce_optional_text(value: object | None) -> str | None:
    if value is None:
        return None
    text = str(value).strip().lower()
    return text or None


class TracingSettings(BaseModel):
    """Structured tracing configuration derived from environment variables."""

    enabled: bool = Field(default=bool(_DEFAULTS["TRACING_ENABLED"]))
    service_name: str = Field(
        default=str(_DEFAULTS["TRACING_SERVICE_NAME"]), min_length=1
    )
    sampling_ratio: float = Field(
        default=float(cast(float, _DEFAULTS["TRACING_SAMPLING_RATIO"])),
        ge=0.0,
        le=1.0,
    )
    exporter: str | None = Field(
        default=None,
        description="Comma-separated exporter names; falls back to "
        "OTEL_TRACES_EXPORTER when unset.",
    )
    protocol: str | None = Field(
        default=None,
        description="OTLP transport; falls back to OTEL_EXPORTER_OTLP_PROTOCOL.",
    )
    debug_log: bool = Field(default=bool(_DEFAULTS["TRACING_DEBUG_LOG"]))

    @field_validator("enabled", mode="before")
    @classmethod
    def _coerce_enabled(cls, value: object) -> bool:
        return _coerce_bool(value, bool(_DEFAULTS["TRACING_ENABLED"]))

    @field_validator("debug_log", mode="before")
    @classmethod
    def _coerce_debug_log(cls, value: object) -> bool:
        return _coerce_bool(value, bool(_DEFAULTS["TRACING_DEBUG_LOG"]))

    @field_validator("service_name", mode="before")
    @classmethod
    def _coerce_service_name(cls, value: object) -> str:
        if value is None:
            return str(_DEFAULTS["TRACING_SERVICE_NAME"])
        return str(value).strip()

    @field_validator("sampling_ratio", mode="before")
    @classmethod
    def _coerce_sampling_ratio(cls, value: object) -> float:
        if value is None:
            return float(cast(float, _DEFAULTS["TRACING_SAMPLING_RATIO"]))
        try:
            return float(cast(Any, value))
        except (TypeError, ValueError) as exc:
            msg = "REGISTRY_TRACING_SAMPLING_RATIO must be numeric."
            raise ValueError(msg) from exc

    @field_validator("exporter", mode="before")
    @classmethod
    def _coerce_exporter(cls, value: object | None) -> str | None:
        return _coerce_optional_text(value)

    @field_validator("protocol", mode="before")
    @classmethod
    def _validate_protocol(cls, value: object | None) -> str | None:
        candidate = _coerce_optional_text(value)
        if candidate is not None and candidate not in _PROTOCOLS:
            msg = "REGISTRY_TRACING_PROTOCOL must be one of: grpc, http/protobuf."
            raise ValueError(msg)
        return candidate

    @classmethod
    def from_mapping(cls, source: Mapping[str, Any]) -> TracingSettings:
        """Build tracing settings from the raw Dynaconf mapping."""
        return cls(
            enabled=source.get("TRACING_ENABLED", _DEFAULTS["TRACING_ENABLED"]),
            service_name=source.get(
                "TRACING_SERVICE_NAME", _DEFAULTS["TRACING_SERVICE_NAME"]
            ),
            sampling_ratio=source.get(
                "TRACING_SAMPLING_RATIO", _DEFAULTS["TRACING_SAMPLING_RATIO"]
            ),
            exporter=source.get("TRACING_EXPORTER", _DEFAULTS["TRACING_EXPORTER"]),
            protocol=source.get("TRACING_PROTOCOL", _DEFAULTS["TRACING_PROTOCOL"]),
            debug_log=source.get(
                "TRACING_DEBUG_LOG", _DEFAULTS["TRACING_DEBUG_LOG"]
            ),
        )


__all__ = ["TracingSettings"]
