"""Runtime configuration loading for the registry service."""

from __future__ import annotations
from functools import lru_cache
from dynaconf import Dynaconf
from distribution_registry.config.defaults import _DEFAULTS


def _build_loader() -> Dynaconf:
    """Create a Dynaconf loader wired to environment variables only."""
    return Dynaconf(
        envvar_prefix="REGISTRY",
        settings_files=[],  # No config files, env vars only
        load_dotenv=True,
        environments=False,
    )


def _normalize_settings(source: Dynaconf) -> Dynaconf:
    """Fill defaults for every known key on the raw Dynaconf settings."""
    normalized = Dynaconf(
        envvar_prefix="REGISTRY",
        settings_files=[],
        load_dotenv=False,
        environments=False,
    )
    for key, default in _DEFAULTS.items():
        value = source.get(key)
        normalized.set(key, default if value is None else value)
    return normalized


@lru_cache(maxsize=1)
def _load_settings() -> Dynaconf:
    """Load settings once and cache the normalized Dynaconf instance."""
    return _normalize_settings(_build_loader())


def get_settings(*, refresh: bool = False) -> Dynaconf:
    """Return the cached Dynaconf settings, reloading them if requested."""
    if refresh:
        _load_settings.cache_clear()
    return _load_settings()


__all__ = ["get_settings"]
