"""Infer the dimensions of a result bundle from its key names."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .naming import (
    PARAM_PREFIX,
    SENSITIVITY_GROUP,
    SOLUTION_GROUP,
    UNIT_PREFIX,
    count_ordinals,
    get_group,
    param_key,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dimensions:
    """Counts recovered from a bundle.

    ``num_sens_units`` is taken from the last parameter only, which is also
    the parameter the sensitivity assembler anchors on.
    """

    num_units: int
    num_params: int
    num_sens_units: int


def last_param_group(sensitivity: Optional[Mapping[str, Any]], num_params: int) -> Optional[Mapping[str, Any]]:
    """Return the sub-bundle of parameter ``num_params - 1`` if present."""

    if sensitivity is None or num_params <= 0:
        return None
    return get_group(sensitivity, param_key(num_params - 1))


def discover_dimensions(bundle: Mapping[str, Any], requested_units: Optional[int] = None) -> Dimensions:
    """Return unit, parameter and sensitivity-unit counts of ``bundle``.

    ``bundle`` is the level holding ``solution`` / ``sensitivity`` (i.e. the
    ``output`` group has already been entered).  Missing groups count as
    zero.  A zero unit count is replaced by ``requested_units`` when given,
    since data for every unit may be missing.
    """

    num_units = 0
    num_params = 0
    num_sens_units = 0

    solution = get_group(bundle, SOLUTION_GROUP)
    if solution is not None:
        num_units = count_ordinals(solution.keys(), UNIT_PREFIX)

    sensitivity = get_group(bundle, SENSITIVITY_GROUP)
    if sensitivity is not None:
        num_params = count_ordinals(sensitivity.keys(), PARAM_PREFIX)
        anchor = last_param_group(sensitivity, num_params)
        if anchor is not None:
            num_sens_units = count_ordinals(anchor.keys(), UNIT_PREFIX)

    if requested_units is not None:
        if num_units == 0:
            num_units = int(requested_units)
        if num_sens_units == 0:
            num_sens_units = int(requested_units)

    logger.debug(
        "discover_dimensions: units=%d params=%d sens_units=%d",
        num_units,
        num_params,
        num_sens_units,
    )
    return Dimensions(num_units=num_units, num_params=num_params, num_sens_units=num_sens_units)


__all__ = ["Dimensions", "discover_dimensions", "last_param_group"]
