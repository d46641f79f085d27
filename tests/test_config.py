from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from cadetresults import config_utils
from cadetresults.errors import ConfigurationError
from cadetresults.schema import Config, ExtractOptions


def test_defaults():
    cfg = Config()
    assert cfg.extract.source_layout == "row_major"
    assert cfg.extract.multi_field_offset == "stride"
    assert cfg.extract.read_only is True
    assert cfg.input.path is None
    assert cfg.io.quiet is False


def test_invalid_layout_rejected():
    with pytest.raises(ValidationError):
        ExtractOptions(source_layout="diagonal")


def test_parse_override_value():
    assert config_utils.parse_override_value("true") is True
    assert config_utils.parse_override_value("null") is None
    assert config_utils.parse_override_value("3") == 3
    assert config_utils.parse_override_value("2.5") == "2.5"
    assert config_utils.parse_override_value("column_major") == "column_major"


def test_apply_overrides_creates_nested_mappings():
    payload = config_utils.apply_overrides_dict({}, ["extract.multi_field_offset=legacy", "io.quiet=true"])
    assert payload == {"extract": {"multi_field_offset": "legacy"}, "io": {"quiet": True}}


def test_malformed_override_rejected():
    with pytest.raises(ConfigurationError):
        config_utils.apply_overrides_dict({}, ["extract.source_layout"])
    with pytest.raises(ConfigurationError):
        config_utils.apply_overrides_dict({"io": 3}, ["io.quiet=true"])


def test_negative_unit_count_rejected():
    with pytest.raises(ConfigurationError):
        config_utils.build_config({"input": {"num_unit_operations": -2}})


def test_load_config_from_yaml(tmp_path: Path):
    path = tmp_path / "cfg.yml"
    path.write_text(
        "input:\n"
        "  path: results.h5\n"
        "  num_unit_operations: 3\n"
        "extract:\n"
        "  source_layout: column_major\n",
        encoding="utf-8",
    )
    cfg = config_utils.load_config(path, overrides=["extract.read_only=false"])
    assert cfg.input.path == Path("results.h5")
    assert cfg.input.num_unit_operations == 3
    assert cfg.extract.source_layout == "column_major"
    assert cfg.extract.read_only is False


def test_load_config_requires_mapping(tmp_path: Path):
    path = tmp_path / "cfg.yml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        config_utils.load_config(path)
