"""Version metadata for the registry service."""

from __future__ import annotations
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as package_version


PACKAGE_NAME = "distribution-registry"
_FALLBACK_VERSION = "0.0.0+unknown"


def version() -> str:
    """Return the installed package version, or a placeholder when unknown."""
    try:
        return package_version(PACKAGE_NAME)
    except PackageNotFoundError:
        return _FALLBACK_VERSION


__all__ = ["PACKAGE_NAME", "version"]
