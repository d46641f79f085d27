"""Table of the per-unit field kinds reported by CADET.

Every field kind is described once by a :class:`FieldKind` record.  The
solution and sensitivity assemblers iterate over :data:`FIELD_KINDS` instead
of handling each field by hand, so adding a field means adding a row here.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Literal, Mapping, Optional, Tuple

from .naming import get_leaf, partype_key

Section = Literal["solution", "sensitivity"]

_KEY_PREFIXES = {
    ("solution", False): "SOLUTION",
    ("solution", True): "SOLDOT",
    ("sensitivity", False): "SENS",
    ("sensitivity", True): "SENSDOT",
}


@dataclass(frozen=True)
class FieldKind:
    """One per-unit field of a result bundle.

    Parameters
    ----------
    slot:
        Attribute name on :class:`~cadetresults.model.SolutionResults`.
    source:
        Field stem shared by all key variants, e.g. ``"OUTLET"``.
    derivative:
        ``True`` for time derivatives (``SOLDOT_`` / ``SENSDOT_`` keys).
    per_particle_type:
        Field may be split into ``_PARTYPE_%03d`` siblings; the output slot
        then holds a list with one array per particle type.
    multi_part:
        Field may be emitted as ``_COMP_%03d`` component siblings instead of
        a single array.
    sensitivity_slot:
        Attribute name on :class:`~cadetresults.model.SensitivityResults`
        when it differs from ``slot``.
    """

    slot: str
    source: str
    derivative: bool = False
    per_particle_type: bool = False
    multi_part: bool = False
    sensitivity_slot: Optional[str] = None

    def output_slot(self, section: Section) -> str:
        if section == "sensitivity" and self.sensitivity_slot is not None:
            return self.sensitivity_slot
        return self.slot

    def key(self, section: Section) -> str:
        """Return the single-array key, e.g. ``SOLDOT_OUTLET``."""

        return f"{_KEY_PREFIXES[(section, self.derivative)]}_{self.source}"

    def multi_part_prefix(self, section: Section) -> Optional[str]:
        """Return the component-wise key prefix or ``None``."""

        if not self.multi_part:
            return None
        return f"{self.key(section)}_COMP"


FIELD_KINDS: Tuple[FieldKind, ...] = (
    FieldKind("outlet", "OUTLET", multi_part=True, sensitivity_slot="jacobian"),
    FieldKind("outlet_dot", "OUTLET", derivative=True, multi_part=True, sensitivity_slot="jacobian_dot"),
    FieldKind("inlet", "INLET", multi_part=True),
    FieldKind("inlet_dot", "INLET", derivative=True, multi_part=True),
    FieldKind("bulk", "BULK"),
    FieldKind("bulk_dot", "BULK", derivative=True),
    FieldKind("particle", "PARTICLE", per_particle_type=True),
    FieldKind("particle_dot", "PARTICLE", derivative=True, per_particle_type=True),
    FieldKind("solid", "SOLID", per_particle_type=True),
    FieldKind("solid_dot", "SOLID", derivative=True, per_particle_type=True),
    FieldKind("flux", "FLUX"),
    FieldKind("flux_dot", "FLUX", derivative=True),
    FieldKind("volume", "VOLUME"),
    FieldKind("volume_dot", "VOLUME", derivative=True),
)


def slots(section: Section) -> Tuple[str, ...]:
    """Return the output slot names of ``section`` in table order."""

    return tuple(kind.output_slot(section) for kind in FIELD_KINDS)


def resolve_keys(unit: Mapping[str, Any], kind: FieldKind, section: Section) -> Optional[List[str]]:
    """Return the keys of ``unit`` holding ``kind`` or ``None`` when absent.

    The single-array key wins.  For per-particle-type kinds the
    ``_PARTYPE_%03d`` variants are probed from 0 upwards and probing stops at
    the first missing index, so ``_000, _002`` yields only ``_000``.
    """

    key = kind.key(section)
    if get_leaf(unit, key) is not None:
        return [key]
    if not kind.per_particle_type:
        return None
    found: List[str] = []
    while get_leaf(unit, partype_key(key, len(found))) is not None:
        found.append(partype_key(key, len(found)))
    return found or None


__all__ = ["Section", "FieldKind", "FIELD_KINDS", "slots", "resolve_keys"]
