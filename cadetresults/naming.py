"""Key naming conventions of CADET result bundles.

CADET encodes structure in key names: unit operations live under
``unit_%03d``, sensitivity parameters under ``param_%03d`` and particle
types are suffixed with ``_PARTYPE_%03d``.  The helpers below build those
names and parse the ordinals back out of them.
"""
from __future__ import annotations

import re
from typing import Any, Iterable, Mapping, Optional

OUTPUT_GROUP = "output"
SOLUTION_GROUP = "solution"
SENSITIVITY_GROUP = "sensitivity"

SOLUTION_TIMES = "SOLUTION_TIMES"
LAST_STATE_Y = "LAST_STATE_Y"
LAST_STATE_YDOT = "LAST_STATE_YDOT"
LAST_STATE_SENSY = "LAST_STATE_SENSY"
LAST_STATE_SENSYDOT = "LAST_STATE_SENSYDOT"

UNIT_PREFIX = "unit"
PARAM_PREFIX = "param"

# Sentinel returned for names that do not carry the requested ordinal.
NO_INDEX = -1

_ORDINAL_PATTERNS: dict[str, re.Pattern[str]] = {}


def ordinal_key(prefix: str, index: int) -> str:
    """Return ``<prefix>_%03d`` for ``index``."""

    return f"{prefix}_{int(index):03d}"


def unit_key(index: int) -> str:
    return ordinal_key(UNIT_PREFIX, index)


def param_key(index: int) -> str:
    return ordinal_key(PARAM_PREFIX, index)


def partype_key(field_name: str, index: int) -> str:
    """Return the per-particle-type variant of ``field_name``."""

    return f"{field_name}_PARTYPE_{int(index):03d}"


def _pattern(prefix: str) -> re.Pattern[str]:
    pattern = _ORDINAL_PATTERNS.get(prefix)
    if pattern is None:
        pattern = re.compile(rf"^{re.escape(prefix)}_(\d+)$")
        _ORDINAL_PATTERNS[prefix] = pattern
    return pattern


def parse_ordinal(name: Any, prefix: str) -> int:
    """Return the numeric suffix of ``<prefix>_<digits>`` or :data:`NO_INDEX`.

    Names that do not follow the pattern (including non-string keys) are
    not an error; they simply contribute no ordinal.
    """

    if not isinstance(name, str):
        return NO_INDEX
    match = _pattern(prefix).match(name)
    if match is None:
        return NO_INDEX
    return int(match.group(1))


def count_ordinals(names: Iterable[Any], prefix: str) -> int:
    """Return ``1 + max(ordinal)`` over ``names`` or ``0`` when none match."""

    return max((parse_ordinal(name, prefix) for name in names), default=NO_INDEX) + 1


def get_group(bundle: Any, key: str) -> Optional[Mapping[str, Any]]:
    """Return ``bundle[key]`` when it is itself a mapping, else ``None``."""

    if not isinstance(bundle, Mapping):
        return None
    group = bundle.get(key)
    if isinstance(group, Mapping):
        return group
    return None


def get_leaf(bundle: Any, key: str) -> Any:
    """Return the array stored at ``bundle[key]`` or ``None``.

    Nested groups are not leaves and read as absent.
    """

    if not isinstance(bundle, Mapping):
        return None
    value = bundle.get(key)
    if value is None or isinstance(value, Mapping):
        return None
    return value


__all__ = [
    "OUTPUT_GROUP",
    "SOLUTION_GROUP",
    "SENSITIVITY_GROUP",
    "SOLUTION_TIMES",
    "LAST_STATE_Y",
    "LAST_STATE_YDOT",
    "LAST_STATE_SENSY",
    "LAST_STATE_SENSYDOT",
    "NO_INDEX",
    "ordinal_key",
    "unit_key",
    "param_key",
    "partype_key",
    "parse_ordinal",
    "count_ordinals",
    "get_group",
    "get_leaf",
]
