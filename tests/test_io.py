"""Tests for reading result bundles from HDF5 files and the CLI."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from cadetresults import extract
from cadetresults.errors import BundleLoadError, ConfigurationError
from cadetresults.io import h5, summary
from cadetresults.run import main, run
from cadetresults.schema import Config

from conftest import ramp

try:
    import h5py as _h5py
except ImportError:  # pragma: no cover - optional dependency
    _h5py = None

requires_h5py = pytest.mark.skipif(_h5py is None, reason="h5py is required for HDF5 tests")


def _write_result_file(path: Path) -> None:
    with _h5py.File(path, "w") as handle:
        handle.create_dataset("input/model/NUNITS", data=2)
        out = handle.create_group("output")
        out.create_dataset("solution/SOLUTION_TIMES", data=np.linspace(0.0, 4.0, 5))
        out.create_dataset("solution/unit_000/SOLUTION_OUTLET", data=ramp(5, 2))
        out.create_dataset("solution/unit_001/SOLUTION_PARTICLE_PARTYPE_000", data=ramp(5, 3, 2))
        out.create_dataset("sensitivity/param_000/unit_000/SENS_OUTLET", data=ramp(5, 2))
        out.create_dataset("LAST_STATE_Y", data=np.arange(4.0))


@requires_h5py
def test_load_bundle_reads_nested_groups(tmp_path: Path):
    path = tmp_path / "sim.h5"
    _write_result_file(path)
    bundle = h5.load_bundle(path)
    assert set(bundle) == {"input", "output"}
    np.testing.assert_array_equal(bundle["output"]["solution"]["unit_000"]["SOLUTION_OUTLET"], ramp(5, 2))

    output_only = h5.load_bundle(path, group="output")
    assert "solution" in output_only


@requires_h5py
def test_loaded_bundle_normalizes(tmp_path: Path):
    path = tmp_path / "sim.h5"
    _write_result_file(path)
    out = extract(h5.load_bundle(path))
    assert out.solution.outlet[0].shape == (5, 2)
    assert out.solution.outlet[1] is None
    assert out.solution.particle[1][0].shape == (5, 3, 2)
    assert out.sensitivity.jacobian[0].shape == (5, 2, 1)
    assert out.solution.last_state.shape == (4,)


@requires_h5py
def test_missing_group_and_file(tmp_path: Path):
    path = tmp_path / "sim.h5"
    _write_result_file(path)
    with pytest.raises(BundleLoadError):
        h5.load_bundle(path, group="nope")
    with pytest.raises(BundleLoadError):
        h5.load_bundle(tmp_path / "missing.h5")


def test_summary_frame_lists_populated_entries(two_unit_bundle):
    frame = summary.summary_frame(extract(two_unit_bundle))
    assert list(frame.columns) == summary.COLUMNS
    outlet = frame[frame["field"] == "outlet"]
    assert list(outlet["unit"]) == [0, 1]
    assert set(outlet["shape"]) == {"5x2"}
    time_row = frame[frame["field"] == "time"].iloc[0]
    assert time_row["section"] == "solution"
    assert time_row["shape"] == "5"


def test_summary_frame_empty_output():
    frame = summary.summary_frame(extract({}))
    assert frame.empty


def test_run_requires_input_path():
    with pytest.raises(ConfigurationError):
        run(Config())


@requires_h5py
def test_cli_prints_summary(tmp_path: Path, capsys):
    path = tmp_path / "sim.h5"
    _write_result_file(path)
    main(["--file", str(path), "--units", "3", "--quiet"])
    captured = capsys.readouterr().out
    assert "outlet" in captured
    assert "jacobian" in captured
    assert "5x2" in captured


@requires_h5py
def test_cli_keeps_numeric_file_name_as_path(tmp_path: Path, capsys, monkeypatch):
    _write_result_file(tmp_path / "1")
    monkeypatch.chdir(tmp_path)
    main(["--file", "1", "--quiet"])
    assert "5x2" in capsys.readouterr().out
