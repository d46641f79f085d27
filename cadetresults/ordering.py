"""Storage ordering helpers.

CADET writes arrays in row-major order.  A reader that assumes column-major
storage (Fortran, MATLAB, some HDF5 bindings) presents the same buffer with
its axes reversed, e.g. an outlet of shape ``(nTime, nComp)`` arrives as
``(nComp, nTime)``.  :func:`switch_storage_ordering` undoes that by reversing
the axis order; applying it twice returns the original array.
"""
from __future__ import annotations

from typing import Any, Literal

import numpy as np

from .errors import ConfigurationError

SourceLayout = Literal["row_major", "column_major"]


def switch_storage_ordering(array: Any) -> np.ndarray:
    """Return ``array`` with its axis order reversed as a C-contiguous copy.

    Rank 0 and rank 1 arrays are returned as copies with unchanged shape.
    """

    arr = np.asarray(array)
    if arr.ndim < 2:
        return np.array(arr, copy=True)
    return np.ascontiguousarray(arr.transpose())


class AxisOrderConverter:
    """Convert bundle leaves into host (row-major, logical order) arrays.

    ``source_layout="row_major"`` is the h5py / in-process case where arrays
    already carry their logical shape; leaves are only copied.
    ``source_layout="column_major"`` reverses the axes of every leaf.
    """

    def __init__(self, source_layout: SourceLayout = "row_major") -> None:
        if source_layout not in ("row_major", "column_major"):
            raise ConfigurationError(f"Unsupported source layout: {source_layout!r}")
        self.source_layout = source_layout

    def convert(self, array: Any) -> np.ndarray:
        if self.source_layout == "column_major":
            return switch_storage_ordering(array)
        return np.array(array, copy=True, order="C")

    __call__ = convert

    def __repr__(self) -> str:
        return f"AxisOrderConverter(source_layout={self.source_layout!r})"


__all__ = ["SourceLayout", "switch_storage_ordering", "AxisOrderConverter"]
