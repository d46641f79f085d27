"""Structured warning classes for the :mod:`cadetresults` package."""
from __future__ import annotations


class ResultsWarning(UserWarning):
    """Base warning class for cadetresults."""


class LayoutWarning(ResultsWarning):
    """Array shape or storage layout inconsistencies inside a bundle."""


__all__ = [
    "ResultsWarning",
    "LayoutWarning",
]
