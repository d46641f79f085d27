"""I/O helper subpackage."""
from . import h5, summary

__all__ = ["h5", "summary"]
