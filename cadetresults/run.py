"""Command line entry point: normalize a CADET result file and print a summary."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from . import config_utils
from .errors import ConfigurationError
from .extract import extract
from .io import h5, summary
from .model import NormalizedOutput
from .schema import Config

logger = logging.getLogger(__name__)


def run(cfg: Config) -> NormalizedOutput:
    """Read ``cfg.input.path`` and normalize it with ``cfg.extract``."""

    if cfg.input.path is None:
        raise ConfigurationError("input.path must point to a result file")
    bundle = h5.load_bundle(cfg.input.path)
    return extract(bundle, cfg.input.num_unit_operations, options=cfg.extract)


def main(argv: Optional[List[str]] = None) -> None:
    """Command line entry point."""

    parser = argparse.ArgumentParser(description="Normalize a CADET HDF5 result file")
    parser.add_argument("--file", type=Path, help="HDF5 result file (overrides input.path)")
    parser.add_argument("--config", type=Path, help="Path to YAML configuration")
    parser.add_argument(
        "--units",
        type=int,
        help="Number of unit operations in the system (overrides input.num_unit_operations)",
    )
    parser.add_argument(
        "--override",
        action="append",
        nargs="+",
        metavar="PATH=VALUE",
        help="Apply configuration overrides using dotted paths; e.g. --override extract.source_layout=column_major",
    )
    parser.add_argument(
        "--quiet",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Suppress INFO logs and Python warnings (defaults to io.quiet).",
    )
    args = parser.parse_args(argv)

    override_list: List[str] = []
    if args.override:
        for group in args.override:
            override_list.extend(group)
    if args.units is not None:
        override_list.append(f"input.num_unit_operations={args.units}")

    if args.config is not None:
        cfg = config_utils.load_config(args.config, overrides=override_list)
    else:
        cfg = config_utils.build_config({}, overrides=override_list)
    if args.file is not None:
        cfg.input.path = args.file
    if args.quiet is not None:
        cfg.io.quiet = bool(args.quiet)
    config_utils.configure_logging(
        logging.WARNING if cfg.io.quiet else logging.INFO,
        suppress_warnings=cfg.io.quiet,
    )

    output = run(cfg)
    frame = summary.summary_frame(output)
    print(frame.to_string(index=False))


__all__ = ["run", "main"]

if __name__ == "__main__":  # pragma: no cover - standard CLI entrypoint
    main()
