"""Default configuration values for the registry service."""

_DEFAULTS: dict[str, object] = {
    "TRACING_ENABLED": False,
    "TRACING_SERVICE_NAME": "distribution",
    "TRACING_SAMPLING_RATIO": 1.0,
    "TRACING_EXPORTER": None,
    "TRACING_PROTOCOL": None,
    "TRACING_DEBUG_LOG": True,
}

__all__ = ["_DEFAULTS"]
