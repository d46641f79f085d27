"""Read CADET HDF5 result files into nested mappings.

The file layout mirrors the raw bundle: groups become ``dict`` instances and
datasets become NumPy arrays.  h5py returns datasets in row-major order with
their logical shape, so bundles read here use ``source_layout="row_major"``.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np

from ..errors import BundleLoadError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _read_dataset(dataset: Any) -> Any:
    value = dataset[()]
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return np.asarray(value)


def _read_group(group: Any, h5py: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {}
    for name, item in group.items():
        if isinstance(item, h5py.Group):
            payload[name] = _read_group(item, h5py)
        elif isinstance(item, h5py.Dataset):
            payload[name] = _read_dataset(item)
    return payload


def load_bundle(path: PathLike, group: Optional[str] = None) -> Dict[str, Any]:
    """Return the contents of ``path`` (or of ``group`` inside it) as a nested dict.

    Parameters
    ----------
    path:
        HDF5 file written by CADET.
    group:
        Optional group to read, e.g. ``"output"``; the whole file by default.
    """

    try:
        import h5py
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise BundleLoadError("h5py is required to read HDF5 result files") from exc

    source = Path(path)
    try:
        with h5py.File(source, "r") as handle:
            root = handle
            if group is not None:
                if group not in handle:
                    raise BundleLoadError(f"{source} has no group '{group}'")
                root = handle[group]
            bundle = _read_group(root, h5py)
    except OSError as exc:
        raise BundleLoadError(f"Failed to read result file {source}: {exc}") from exc

    logger.debug("load_bundle: read %d top-level entries from %s", len(bundle), source)
    return bundle


__all__ = ["load_bundle"]
