"""Normalized result containers.

Per-unit lists always have one entry per unit operation; units without data
for a field hold ``None``.  Particle and solid slots hold a list with one
array per particle type.  Sensitivity arrays carry one extra trailing axis
indexed by parameter.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Dict, Iterator, List, Optional, Tuple, Union

import numpy as np

from .fields import Section, slots

FieldEntry = Optional[np.ndarray]
PartypeEntry = Optional[List[np.ndarray]]
SlotEntry = Union[FieldEntry, PartypeEntry]


def new_slots(section: Section, n_units: int) -> Dict[str, List[SlotEntry]]:
    """Return ``{slot: [None] * n_units}`` for every field kind of ``section``."""

    return {slot: [None] * n_units for slot in slots(section)}


@dataclass(frozen=True)
class SolutionResults:
    time: FieldEntry = None
    outlet: List[FieldEntry] = field(default_factory=list)
    outlet_dot: List[FieldEntry] = field(default_factory=list)
    inlet: List[FieldEntry] = field(default_factory=list)
    inlet_dot: List[FieldEntry] = field(default_factory=list)
    bulk: List[FieldEntry] = field(default_factory=list)
    bulk_dot: List[FieldEntry] = field(default_factory=list)
    particle: List[PartypeEntry] = field(default_factory=list)
    particle_dot: List[PartypeEntry] = field(default_factory=list)
    solid: List[PartypeEntry] = field(default_factory=list)
    solid_dot: List[PartypeEntry] = field(default_factory=list)
    flux: List[FieldEntry] = field(default_factory=list)
    flux_dot: List[FieldEntry] = field(default_factory=list)
    volume: List[FieldEntry] = field(default_factory=list)
    volume_dot: List[FieldEntry] = field(default_factory=list)
    last_state: FieldEntry = None
    last_state_dot: FieldEntry = None

    @property
    def n_units(self) -> int:
        return len(self.outlet)


@dataclass(frozen=True)
class SensitivityResults:
    """Sensitivities; ``jacobian`` is the outlet sensitivity, shape ``(..., n_params)``."""

    jacobian: List[FieldEntry] = field(default_factory=list)
    jacobian_dot: List[FieldEntry] = field(default_factory=list)
    inlet: List[FieldEntry] = field(default_factory=list)
    inlet_dot: List[FieldEntry] = field(default_factory=list)
    bulk: List[FieldEntry] = field(default_factory=list)
    bulk_dot: List[FieldEntry] = field(default_factory=list)
    particle: List[PartypeEntry] = field(default_factory=list)
    particle_dot: List[PartypeEntry] = field(default_factory=list)
    solid: List[PartypeEntry] = field(default_factory=list)
    solid_dot: List[PartypeEntry] = field(default_factory=list)
    flux: List[FieldEntry] = field(default_factory=list)
    flux_dot: List[FieldEntry] = field(default_factory=list)
    volume: List[FieldEntry] = field(default_factory=list)
    volume_dot: List[FieldEntry] = field(default_factory=list)
    last_state: FieldEntry = None
    last_state_dot: FieldEntry = None

    @property
    def n_units(self) -> int:
        return len(self.jacobian)


@dataclass(frozen=True)
class NormalizedOutput:
    solution: SolutionResults
    sensitivity: SensitivityResults
    num_units: int = 0
    num_params: int = 0
    num_sens_units: int = 0


def iter_arrays(results: Union[SolutionResults, SensitivityResults]) -> Iterator[Tuple[str, Optional[int], Optional[int], np.ndarray]]:
    """Yield ``(slot, unit, partype, array)`` for every populated entry.

    ``unit`` and ``partype`` are ``None`` for whole-bundle entries such as
    ``time`` and ``last_state``.
    """

    for spec in fields(results):
        value = getattr(results, spec.name)
        if value is None:
            continue
        if isinstance(value, np.ndarray):
            yield spec.name, None, None, value
            continue
        for unit, entry in enumerate(value):
            if entry is None:
                continue
            if isinstance(entry, np.ndarray):
                yield spec.name, unit, None, entry
                continue
            for partype, arr in enumerate(entry):
                yield spec.name, unit, partype, arr


__all__ = [
    "FieldEntry",
    "PartypeEntry",
    "SlotEntry",
    "new_slots",
    "SolutionResults",
    "SensitivityResults",
    "NormalizedOutput",
    "iter_arrays",
]
