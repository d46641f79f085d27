"""Assemble parameter sensitivities with a trailing parameter axis.

CADET stores the sensitivity of every field once per parameter under
``sensitivity/param_%03d/unit_%03d``.  The assembler stacks those copies so
that e.g. the outlet sensitivity (the *jacobian*) of a unit has shape
``(nTime, nComp, nParams)``.  Unit discovery and native shapes are anchored
on the last parameter; parameters lacking a unit or field leave a zero slice.
"""
from __future__ import annotations

import logging
import warnings
from typing import Any, Callable, List, Literal, Mapping, Optional, Sequence

import numpy as np

from .discovery import last_param_group
from .fields import FIELD_KINDS, FieldKind, resolve_keys
from .model import SensitivityResults, SlotEntry, new_slots
from .multifields import extract_multi_field
from .naming import (
    LAST_STATE_SENSY,
    LAST_STATE_SENSYDOT,
    SENSITIVITY_GROUP,
    get_group,
    get_leaf,
    param_key,
    unit_key,
)
from .ordering import AxisOrderConverter
from .warnings import LayoutWarning

logger = logging.getLogger(__name__)

Converter = Callable[[Any], np.ndarray]
Fetch = Callable[[Optional[Mapping[str, Any]]], Optional[np.ndarray]]
OffsetMode = Literal["stride", "legacy"]

UnitsByParam = Sequence[Optional[Mapping[str, Any]]]


def _shape_mismatch(label: str, param: int, got: tuple, expected: tuple) -> None:
    message = (
        f"{label}: parameter {param} has shape {got}, expected {expected}; "
        "leaving its slice at zero"
    )
    logger.warning(message)
    warnings.warn(message, LayoutWarning, stacklevel=3)


def _allocate(anchor: np.ndarray, num_params: int) -> np.ndarray:
    return np.zeros(anchor.shape + (num_params,), dtype=np.result_type(anchor.dtype, np.float64))


def stack_over_parameters(units: UnitsByParam, fetch: Fetch, *, label: str = "field") -> Optional[np.ndarray]:
    """Stack ``fetch(units[p])`` into ``out[..., p]`` for every parameter.

    ``units[p]`` is the unit sub-bundle of parameter ``p`` (``None`` when the
    parameter does not report the unit).  The last entry is the anchor that
    fixes the native shape; ``None`` is returned when it yields nothing.
    Parameters without data, or with a different shape, keep a zero slice.
    """

    num_params = len(units)
    if num_params == 0:
        return None
    anchor = fetch(units[-1])
    if anchor is None:
        return None

    data = _allocate(anchor, num_params)
    for p, unit in enumerate(units):
        values = anchor if p == num_params - 1 else fetch(unit)
        if values is None:
            logger.debug("%s: no data for parameter %d; slice stays zero", label, p)
            continue
        if values.shape != anchor.shape:
            _shape_mismatch(label, p, values.shape, anchor.shape)
            continue
        data[..., p] = values
    return data


def stack_over_parameters_legacy(units: UnitsByParam, fetch: Fetch, *, label: str = "field") -> Optional[np.ndarray]:
    """Stack parameters using the flat column-major offsets of older CADET-MI releases.

    The anchor's ``stride`` values are written starting at flat offset
    ``num_params - 1`` instead of ``(num_params - 1) * stride``; the other
    parameters then overwrite ``[p * stride, (p + 1) * stride)``.  Both
    layouts agree whenever ``stride == 1`` or ``num_params == 1``.
    """

    num_params = len(units)
    if num_params == 0:
        return None
    anchor = fetch(units[-1])
    if anchor is None:
        return None

    stride = anchor.size
    flat = _allocate(anchor, num_params).reshape(-1)
    start = num_params - 1
    flat[start:start + stride] = anchor.ravel(order="F")
    for p, unit in enumerate(units[:-1]):
        values = fetch(unit)
        if values is None:
            logger.debug("%s: no data for parameter %d; slice stays zero", label, p)
            continue
        if values.shape != anchor.shape:
            _shape_mismatch(label, p, values.shape, anchor.shape)
            continue
        flat[p * stride:(p + 1) * stride] = values.ravel(order="F")
    return np.ascontiguousarray(flat.reshape(anchor.shape + (num_params,), order="F"))


def _leaf_fetch(key: str, convert: Converter) -> Fetch:
    def fetch(unit: Optional[Mapping[str, Any]]) -> Optional[np.ndarray]:
        value = get_leaf(unit, key)
        if value is None:
            return None
        return convert(value)

    return fetch


def read_unit_sensitivity(
    units: UnitsByParam,
    kind: FieldKind,
    convert: Converter,
    multi_field_offset: OffsetMode = "stride",
) -> SlotEntry:
    """Return the stacked sensitivity of one field kind for one unit."""

    anchor_unit = units[-1]
    if anchor_unit is None:
        return None

    keys = resolve_keys(anchor_unit, kind, "sensitivity")
    if keys is not None:
        stacked = [stack_over_parameters(units, _leaf_fetch(key, convert), label=key) for key in keys]
        if kind.per_particle_type:
            return stacked
        return stacked[0]

    prefix = kind.multi_part_prefix("sensitivity")
    if prefix is None:
        return None
    names = list(anchor_unit.keys())

    def fetch(unit: Optional[Mapping[str, Any]]) -> Optional[np.ndarray]:
        if unit is None:
            return None
        return extract_multi_field(unit, names, prefix, convert=convert)

    if multi_field_offset == "legacy":
        return stack_over_parameters_legacy(units, fetch, label=prefix)
    return stack_over_parameters(units, fetch, label=prefix)


def assemble_sensitivity(
    bundle: Mapping[str, Any],
    num_params: int,
    num_sens_units: int,
    requested_units: Optional[int] = None,
    *,
    converter: Optional[Converter] = None,
    multi_field_offset: OffsetMode = "stride",
) -> SensitivityResults:
    """Build :class:`SensitivityResults` from the ``output`` level of a bundle."""

    convert = converter if converter is not None else AxisOrderConverter()
    n_return = max(requested_units or 0, num_sens_units)
    slots = new_slots("sensitivity", n_return)
    extra = {
        "last_state": extract_multi_field(bundle, None, LAST_STATE_SENSY),
        "last_state_dot": extract_multi_field(bundle, None, LAST_STATE_SENSYDOT),
    }

    sensitivity = get_group(bundle, SENSITIVITY_GROUP)
    anchor_param = last_param_group(sensitivity, num_params)
    if anchor_param is None:
        return SensitivityResults(**slots, **extra)

    params = [get_group(sensitivity, param_key(p)) for p in range(num_params)]
    for index in range(num_sens_units):
        name = unit_key(index)
        if get_group(anchor_param, name) is None:
            logger.debug("assemble_sensitivity: %s not present under %s; skipping", name, param_key(num_params - 1))
            continue
        units: List[Optional[Mapping[str, Any]]] = [get_group(param, name) for param in params]
        for kind in FIELD_KINDS:
            slots[kind.output_slot("sensitivity")][index] = read_unit_sensitivity(
                units, kind, convert, multi_field_offset
            )

    return SensitivityResults(**slots, **extra)


__all__ = [
    "OffsetMode",
    "stack_over_parameters",
    "stack_over_parameters_legacy",
    "read_unit_sensitivity",
    "assemble_sensitivity",
]
