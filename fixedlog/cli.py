# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""
Command-line accuracy sweep.

Usage:
    fixedlog-sweep
    fixedlog-sweep --config sweep.yaml
    fixedlog-sweep width=32 max_shifts=16 window=4096 --log-level DEBUG

Configuration is the SweepConfig dataclass as an OmegaConf structured config;
a YAML file and key=value overrides are merged on top, in that order.
"""

import argparse
import logging
import time
from logging import Logger
from typing import Optional, Sequence

from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from .error_sweep import SweepConfig, format_table, run_sweep
from .errors import InvalidInputError

logger: Logger = logging.getLogger(__name__)


def load_config(config_path: Optional[str] = None, overrides: Sequence[str] = ()) -> SweepConfig:
    cfg = OmegaConf.structured(SweepConfig)
    if config_path is not None:
        cfg = OmegaConf.merge(cfg, OmegaConf.load(config_path))
    if overrides:
        cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(list(overrides)))
    return OmegaConf.to_object(cfg)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Measure fixed-point log2/ln error against a float64 reference."
    )
    parser.add_argument(
        "overrides",
        nargs="*",
        help="SweepConfig overrides as key=value (e.g. width=32 max_shifts=16)",
    )
    parser.add_argument("--config", type=str, default=None, help="YAML file with SweepConfig fields")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config, args.overrides)
        t0 = time.perf_counter()
        rows = run_sweep(config)
    except (InvalidInputError, OmegaConfBaseException) as exc:
        logger.error("Invalid sweep configuration: %s", exc)
        return 2
    elapsed = time.perf_counter() - t0

    print(format_table(rows))
    print(f"{elapsed:f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
