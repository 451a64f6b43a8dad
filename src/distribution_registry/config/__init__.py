"""Configuration helpers for the registry service."""

from distribution_registry.config.loader import get_settings
from distribution_registry.config.tracing_settings import TracingSettings


__all__ = ["TracingSettings", "get_settings"]
