"""Tabular overview of a normalized result."""
from __future__ import annotations

import pandas as pd

from ..model import NormalizedOutput, iter_arrays

COLUMNS = ["section", "field", "unit", "partype", "shape", "dtype"]


def summary_frame(output: NormalizedOutput) -> pd.DataFrame:
    """Return one row per populated array of ``output``.

    ``unit`` and ``partype`` are ``<NA>`` for entries that are not per unit
    or per particle type.
    """

    rows = []
    for section, results in (("solution", output.solution), ("sensitivity", output.sensitivity)):
        for slot, unit, partype, arr in iter_arrays(results):
            rows.append(
                {
                    "section": section,
                    "field": slot,
                    "unit": unit,
                    "partype": partype,
                    "shape": "x".join(str(n) for n in arr.shape) or "scalar",
                    "dtype": str(arr.dtype),
                }
            )
    df = pd.DataFrame(rows, columns=COLUMNS)
    df["unit"] = df["unit"].astype("Int64")
    df["partype"] = df["partype"].astype("Int64")
    return df


__all__ = ["COLUMNS", "summary_frame"]
