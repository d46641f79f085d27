from __future__ import annotations

import dataclasses

import numpy as np
import pytest

from cadetresults import ExtractOptions, extract
from cadetresults.errors import ConfigurationError

from conftest import ramp


def test_two_units_end_to_end(two_unit_bundle):
    out = extract(two_unit_bundle)
    assert out.solution.time.shape == (5,)
    assert len(out.solution.outlet) == 2
    assert [arr.shape for arr in out.solution.outlet] == [(5, 2), (5, 2)]
    np.testing.assert_array_equal(out.solution.outlet[1], ramp(5, 2, offset=100.0))
    assert out.num_units == 2
    assert out.num_params == 0
    assert out.sensitivity.jacobian == []


def test_output_group_is_entered(two_unit_bundle):
    out = extract({"output": two_unit_bundle, "input": {"unrelated": np.zeros(1)}})
    assert len(out.solution.outlet) == 2


def test_no_solution_group_uses_requested_count():
    out = extract({}, 3)
    assert out.solution.outlet == [None, None, None]
    assert out.solution.particle_dot == [None, None, None]
    assert out.sensitivity.jacobian == [None, None, None]
    assert extract({}).solution.outlet == []


def test_unit_gap_with_requested_count():
    bundle = {
        "solution": {
            "unit_000": {"SOLUTION_OUTLET": ramp(3, 1)},
            "unit_002": {"SOLUTION_OUTLET": ramp(3, 1)},
        }
    }
    out = extract(bundle, 3)
    assert len(out.solution.outlet) == 3
    assert out.solution.outlet[0] is not None
    assert out.solution.outlet[1] is None
    assert out.solution.outlet[2] is not None


def test_sensitivity_section_end_to_end():
    bundle = {
        "output": {
            "solution": {"unit_000": {"SOLUTION_OUTLET": ramp(4, 2)}},
            "sensitivity": {
                "param_000": {"unit_000": {"SENS_OUTLET": ramp(4, 2, offset=1.0)}},
                "param_001": {},
                "param_002": {"unit_000": {"SENS_OUTLET": ramp(4, 2, offset=2.0)}},
            },
            "LAST_STATE_SENSY_000": np.ones(3),
        }
    }
    out = extract(bundle)
    assert (out.num_params, out.num_sens_units) == (3, 1)
    jac = out.sensitivity.jacobian[0]
    assert jac.shape == (4, 2, 3)
    assert not jac[..., 1].any()
    np.testing.assert_array_equal(jac[..., 2], ramp(4, 2, offset=2.0))
    assert out.sensitivity.last_state.shape == (3, 1)


def test_column_major_option():
    flipped = {
        "solution": {
            "unit_000": {"SOLUTION_OUTLET": ramp(5, 2).T.copy()},
        }
    }
    out = extract(flipped, options=ExtractOptions(source_layout="column_major"))
    np.testing.assert_array_equal(out.solution.outlet[0], ramp(5, 2))


def test_output_is_detached_and_read_only(two_unit_bundle):
    out = extract(two_unit_bundle)
    two_unit_bundle["solution"]["unit_000"]["SOLUTION_OUTLET"][0, 0] = -1.0
    assert out.solution.outlet[0][0, 0] == 0.0
    assert not out.solution.outlet[0].flags.writeable
    with pytest.raises(ValueError):
        out.solution.outlet[0][0, 0] = 3.0
    with pytest.raises(dataclasses.FrozenInstanceError):
        out.solution.time = None


def test_writable_output_when_requested(two_unit_bundle):
    out = extract(two_unit_bundle, options=ExtractOptions(read_only=False))
    out.solution.outlet[0][0, 0] = 3.0
    assert out.solution.outlet[0][0, 0] == 3.0


def test_invalid_inputs_raise():
    with pytest.raises(ConfigurationError):
        extract({}, -1)
    with pytest.raises(TypeError):
        extract([1, 2, 3])
