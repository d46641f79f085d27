"""Assemble the per-unit solution view of a result bundle."""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

import numpy as np

from .fields import FIELD_KINDS, FieldKind, resolve_keys
from .model import SlotEntry, SolutionResults, new_slots
from .multifields import extract_multi_field
from .naming import (
    LAST_STATE_Y,
    LAST_STATE_YDOT,
    SOLUTION_GROUP,
    SOLUTION_TIMES,
    get_group,
    get_leaf,
    unit_key,
)
from .ordering import AxisOrderConverter

logger = logging.getLogger(__name__)

Converter = Callable[[Any], np.ndarray]


def read_unit_field(unit: Mapping[str, Any], kind: FieldKind, convert: Converter) -> SlotEntry:
    """Return one solution field of ``unit`` or ``None``.

    Per-particle-type kinds come back as a list of arrays.  Kinds with a
    component-wise representation fall back to it when the single array is
    missing.
    """

    keys = resolve_keys(unit, kind, "solution")
    if keys is not None:
        if kind.per_particle_type:
            return [convert(unit[key]) for key in keys]
        return convert(unit[keys[0]])

    prefix = kind.multi_part_prefix("solution")
    if prefix is None:
        return None
    return extract_multi_field(unit, list(unit.keys()), prefix, convert=convert)


def _optional_copy(bundle: Mapping[str, Any], key: str, convert: Converter) -> Optional[np.ndarray]:
    value = get_leaf(bundle, key)
    if value is None:
        return None
    return convert(value)


def assemble_solution(
    bundle: Mapping[str, Any],
    num_units: int,
    requested_units: Optional[int] = None,
    *,
    converter: Optional[Converter] = None,
) -> SolutionResults:
    """Build :class:`SolutionResults` from the ``output`` level of a bundle.

    Every per-unit list has ``max(requested_units, num_units)`` entries.
    Units missing from the ``solution`` group are skipped and keep ``None``
    in every slot.
    """

    convert = converter if converter is not None else AxisOrderConverter()
    n_return = max(requested_units or 0, num_units)
    slots = new_slots("solution", n_return)
    time = None

    solution = get_group(bundle, SOLUTION_GROUP)
    if solution is not None:
        time = _optional_copy(solution, SOLUTION_TIMES, convert)
        for index in range(num_units):
            unit = get_group(solution, unit_key(index))
            if unit is None:
                logger.debug("assemble_solution: %s not present; skipping", unit_key(index))
                continue
            for kind in FIELD_KINDS:
                slots[kind.slot][index] = read_unit_field(unit, kind, convert)

    return SolutionResults(
        time=time,
        last_state=_optional_copy(bundle, LAST_STATE_Y, convert),
        last_state_dot=_optional_copy(bundle, LAST_STATE_YDOT, convert),
        **slots,
    )


__all__ = ["read_unit_field", "assemble_solution"]
