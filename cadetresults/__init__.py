"""Normalization of CADET simulation result bundles."""
from .errors import BundleLoadError, CadetResultsError, ConfigurationError
from .extract import extract
from .model import NormalizedOutput, SensitivityResults, SolutionResults
from .schema import ExtractOptions

__all__ = [
    "extract",
    "ExtractOptions",
    "NormalizedOutput",
    "SolutionResults",
    "SensitivityResults",
    "CadetResultsError",
    "ConfigurationError",
    "BundleLoadError",
]
