"""Reassemble fields that CADET emitted as per-component siblings.

With ``split_components`` enabled CADET writes ``SOLUTION_OUTLET_COMP_000``,
``SOLUTION_OUTLET_COMP_001``, … instead of one ``SOLUTION_OUTLET`` array.
The last-state sensitivities are always stored this way, one vector per
parameter (``LAST_STATE_SENSY_000``, …).
"""
from __future__ import annotations

import logging
import warnings
from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple

import numpy as np

from .naming import NO_INDEX, parse_ordinal
from .warnings import LayoutWarning

logger = logging.getLogger(__name__)


def _matching_keys(names: Iterable[Any], prefix: str) -> List[Tuple[int, str]]:
    found = []
    for name in names:
        index = parse_ordinal(name, prefix)
        if index != NO_INDEX:
            found.append((index, name))
    found.sort()
    return found


def extract_multi_field(
    bundle: Mapping[str, Any],
    names: Optional[Iterable[Any]],
    prefix: str,
    *,
    convert: Optional[Callable[[Any], np.ndarray]] = None,
) -> Optional[np.ndarray]:
    """Stack the ``<prefix>_<digits>`` siblings of ``bundle`` along a new last axis.

    Parameters
    ----------
    bundle:
        Mapping holding the sibling arrays.
    names:
        Candidate key names; ``None`` uses every key of ``bundle``.  Names
        that are not present in ``bundle`` are ignored.
    prefix:
        Shared stem, e.g. ``"SOLUTION_OUTLET_COMP"``.  Only keys of the exact
        form ``<prefix>_<digits>`` match, so ``LAST_STATE_SENSY`` does not
        pick up ``LAST_STATE_SENSYDOT_000``.
    convert:
        Optional per-sibling conversion applied before stacking.

    Returns
    -------
    numpy.ndarray or None
        Array of shape ``sibling_shape + (n_siblings,)`` ordered by ordinal,
        or ``None`` when no sibling matches or the siblings disagree in shape.
    """

    if not isinstance(bundle, Mapping):
        return None
    candidates = bundle.keys() if names is None else names
    matches = [(index, name) for index, name in _matching_keys(candidates, prefix) if name in bundle]
    if not matches:
        return None

    parts = []
    for _, name in matches:
        value = bundle[name]
        parts.append(convert(value) if convert is not None else np.array(value, copy=True))

    shapes = {part.shape for part in parts}
    if len(shapes) > 1:
        message = f"Siblings of {prefix} have inconsistent shapes {sorted(shapes)}; field skipped"
        logger.warning(message)
        warnings.warn(message, LayoutWarning, stacklevel=2)
        return None
    return np.stack(parts, axis=-1)


__all__ = ["extract_multi_field"]
