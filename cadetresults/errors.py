"""Custom exceptions for the :mod:`cadetresults` package."""
from __future__ import annotations


class CadetResultsError(Exception):
    """Base exception for result extraction errors."""


class ConfigurationError(CadetResultsError, ValueError):
    """Invalid extraction options, unit counts, or configuration overrides."""


class BundleLoadError(CadetResultsError, RuntimeError):
    """Raised when a raw result bundle cannot be read from disk."""


__all__ = [
    "CadetResultsError",
    "ConfigurationError",
    "BundleLoadError",
]
