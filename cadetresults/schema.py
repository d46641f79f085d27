"""Configuration schema for result extraction.

The models mirror the YAML files accepted by :mod:`cadetresults.run`::

    input:
      path: out/simulation.h5
      num_unit_operations: 3
    extract:
      source_layout: row_major
      multi_field_offset: stride
    io:
      quiet: false
"""
from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .errors import ConfigurationError


class ExtractOptions(BaseModel):
    """Switches controlling how a bundle is normalized."""

    source_layout: Literal["row_major", "column_major"] = Field(
        "row_major",
        description=(
            "Storage convention of the bundle's arrays: 'row_major' when arrays already carry "
            "their logical shape (h5py, in-process), 'column_major' when axes arrive reversed"
        ),
    )
    multi_field_offset: Literal["stride", "legacy"] = Field(
        "stride",
        description=(
            "Placement of the last parameter when sensitivities are rebuilt from component "
            "fields: 'stride' stacks along the parameter axis, 'legacy' reproduces the flat "
            "offset of older CADET-MI releases"
        ),
    )
    read_only: bool = Field(True, description="Mark every returned array as read-only")


class InputConfig(BaseModel):
    path: Optional[Path] = Field(None, description="HDF5 result file to read")
    num_unit_operations: Optional[int] = Field(
        None,
        description="Number of unit operations in the simulated system, if known",
    )

    @field_validator("num_unit_operations")
    @classmethod
    def _non_negative(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 0:
            raise ConfigurationError(f"input.num_unit_operations must be non-negative, got {value}")
        return value


class IO(BaseModel):
    quiet: bool = Field(False, description="Suppress INFO logs and Python warnings")


class Config(BaseModel):
    """Top-level configuration object."""

    input: InputConfig = Field(default_factory=InputConfig)
    extract: ExtractOptions = Field(default_factory=ExtractOptions)
    io: IO = Field(default_factory=IO)


__all__ = ["ExtractOptions", "InputConfig", "IO", "Config"]
