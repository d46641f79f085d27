"""Normalize a raw CADET result bundle.

:func:`extract` is the entry point.  It accepts the nested mapping produced
by the simulator (in-process) or by :func:`cadetresults.io.h5.load_bundle`
and returns a :class:`~cadetresults.model.NormalizedOutput` with one entry per
unit operation in every per-unit list, whether or not data was reported for
that unit.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from .discovery import discover_dimensions
from .errors import ConfigurationError
from .model import NormalizedOutput, iter_arrays
from .naming import OUTPUT_GROUP, get_group
from .ordering import AxisOrderConverter
from .schema import ExtractOptions
from .sensitivity import assemble_sensitivity
from .solution import assemble_solution

logger = logging.getLogger(__name__)


def _freeze(output: NormalizedOutput) -> None:
    for results in (output.solution, output.sensitivity):
        for _, _, _, arr in iter_arrays(results):
            arr.flags.writeable = False


def extract(
    bundle: Mapping[str, Any],
    num_unit_operations: Optional[int] = None,
    *,
    options: Optional[ExtractOptions] = None,
) -> NormalizedOutput:
    """Convert ``bundle`` into a :class:`NormalizedOutput`.

    Parameters
    ----------
    bundle:
        Raw result mapping.  When it holds an ``output`` group, that group is
        used instead.
    num_unit_operations:
        Number of unit operations in the simulated system.  It cannot always
        be inferred from the bundle because units may have reported nothing.
    options:
        Extraction switches; defaults to :class:`ExtractOptions()`.

    Raises
    ------
    TypeError
        If ``bundle`` is not a mapping.
    ConfigurationError
        If ``num_unit_operations`` is negative.
    """

    if not isinstance(bundle, Mapping):
        raise TypeError(f"Result bundle must be a mapping, got {type(bundle).__name__}")
    if num_unit_operations is not None:
        num_unit_operations = int(num_unit_operations)
        if num_unit_operations < 0:
            raise ConfigurationError(
                f"num_unit_operations must be non-negative, got {num_unit_operations}"
            )
    opts = options if options is not None else ExtractOptions()

    output_group = get_group(bundle, OUTPUT_GROUP)
    if output_group is not None:
        bundle = output_group

    dims = discover_dimensions(bundle, num_unit_operations)
    converter = AxisOrderConverter(opts.source_layout)

    solution = assemble_solution(bundle, dims.num_units, num_unit_operations, converter=converter)
    sensitivity = assemble_sensitivity(
        bundle,
        dims.num_params,
        dims.num_sens_units,
        num_unit_operations,
        converter=converter,
        multi_field_offset=opts.multi_field_offset,
    )
    result = NormalizedOutput(
        solution=solution,
        sensitivity=sensitivity,
        num_units=dims.num_units,
        num_params=dims.num_params,
        num_sens_units=dims.num_sens_units,
    )
    if opts.read_only:
        _freeze(result)
    logger.info(
        "Extracted results for %d unit(s), %d sensitivity parameter(s)",
        solution.n_units,
        dims.num_params,
    )
    return result


__all__ = ["extract"]
