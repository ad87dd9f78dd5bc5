# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""
Accuracy sweep for the fixed-point log2 kernels.

Drives ilog2_64 (or ilog2_32) over a window of Q-format inputs for every
fractional-bit count in [min_shifts, max_shifts] and compares the log2 and
natural-log results with a float64 numpy reference. The kernels are used as
a black box; nothing here feeds back into them.

Default range mirrors the reference harness: Q8 inputs in the last 65536
values below 2^26 (so starting no lower than 1.0), shifts 8..27.
"""

import logging
import time
from dataclasses import asdict, dataclass
from logging import Logger
from typing import List, Sequence

import numpy as np

from .constants import ILOG2_32_MAX_FRAC_BITS, ILOG2_64_MAX_FRAC_BITS, UINT32_MASK
from .errors import InvalidInputError
from .fixed_point import compose_log2, log2_to_ln
from .log2 import ilog2_32, ilog2_64

logger: Logger = logging.getLogger(__name__)

TABLE_HEADER = "shifts maxerr(log2) avgerr(log2) maxerr(logE) avgerr(logE)"

_KERNELS = {
    32: (ilog2_32, ILOG2_32_MAX_FRAC_BITS),
    64: (ilog2_64, ILOG2_64_MAX_FRAC_BITS),
}

_INT64_MAX = int(np.iinfo(np.int64).max)


@dataclass
class SweepConfig:
    """
    Sweep parameters.

    Inputs run over [start, end) where start = max(1 << input_frac_bits,
    end - window), i.e. never below 1.0 in the input's Q format.
    """
    min_shifts: int = 8
    max_shifts: int = 27
    input_frac_bits: int = 8
    end: int = 1 << 26
    window: int = 1 << 16
    width: int = 64

    @property
    def start(self) -> int:
        return max(1 << self.input_frac_bits, self.end - self.window)

    def validate(self) -> None:
        if self.width not in _KERNELS:
            raise InvalidInputError(f"width must be 32 or 64, got {self.width}")
        max_frac_bits = _KERNELS[self.width][1]
        if not 0 <= self.min_shifts <= self.max_shifts <= max_frac_bits:
            raise InvalidInputError(
                f"shift range [{self.min_shifts}, {self.max_shifts}] must lie in [0, {max_frac_bits}]"
            )
        if self.input_frac_bits < 0:
            raise InvalidInputError(f"input_frac_bits must be >= 0, got {self.input_frac_bits}")
        if self.width == 32 and self.end - 1 > UINT32_MASK:
            raise InvalidInputError(f"end {self.end} exceeds the 32-bit kernel's input range")
        # inputs are held in an int64 array
        if self.end - 1 > _INT64_MAX:
            raise InvalidInputError(f"end {self.end} exceeds the sweep's int64 input range")
        if self.end - self.start < 2:
            raise InvalidInputError(
                f"input range [{self.start}, {self.end}) needs at least 2 values"
            )


@dataclass
class SweepRow:
    shifts: int
    max_err_log2: float
    avg_err_log2: float
    max_err_ln: float
    avg_err_ln: float
    count: int

    def format(self) -> str:
        return (
            f"{self.shifts} {self.max_err_log2:.9f} {self.avg_err_log2:.9f} "
            f"{self.max_err_ln:.9f} {self.avg_err_ln:.9f}"
        )


def approximate_logs(
    inputs: Sequence[int],
    frac_bits: int,
    input_frac_bits: int,
    width: int = 64,
):
    """
    Run the kernel on every input.

    Returns:
        (log2_fixed, ln_fixed) int64 arrays, both with frac_bits fractional bits
    """
    kernel = _KERNELS[width][0]
    log2_fixed = np.empty(len(inputs), dtype=np.int64)
    ln_fixed = np.empty(len(inputs), dtype=np.int64)
    for idx, value in enumerate(inputs):
        result = kernel(int(value), frac_bits)
        composed = compose_log2(result, frac_bits, input_frac_bits)
        log2_fixed[idx] = composed
        ln_fixed[idx] = log2_to_ln(composed)
    return log2_fixed, ln_fixed


def sample_errors(
    inputs: Sequence[int],
    frac_bits: int,
    input_frac_bits: int,
    width: int = 64,
) -> SweepRow:
    """
    Compare kernel output with float64 log2 / ln for one fractional-bit count.

    Averages divide by (count - 1), matching the reference harness.
    """
    inputs = np.asarray(inputs, dtype=np.int64)
    count = len(inputs)
    if count < 2:
        raise InvalidInputError(f"need at least 2 inputs, got {count}")

    log2_fixed, ln_fixed = approximate_logs(inputs, frac_bits, input_frac_bits, width)
    inv_denom_out = 1.0 / float(1 << frac_bits)
    result_log2 = log2_fixed.astype(np.float64) * inv_denom_out
    result_ln = ln_fixed.astype(np.float64) * inv_denom_out

    x = inputs.astype(np.float64) / float(1 << input_frac_bits)
    ans_ln = np.log(x)
    ans_log2 = ans_ln / np.log(2.0)

    df_log2 = np.abs(ans_log2 - result_log2)
    df_ln = np.abs(ans_ln - result_ln)
    return SweepRow(
        shifts=frac_bits,
        max_err_log2=float(np.max(df_log2)),
        avg_err_log2=float(np.sum(df_log2) / (count - 1)),
        max_err_ln=float(np.max(df_ln)),
        avg_err_ln=float(np.sum(df_ln) / (count - 1)),
        count=count,
    )


def run_sweep(config: SweepConfig) -> List[SweepRow]:
    config.validate()
    logger.debug("Sweep config: %s", asdict(config))
    logger.info(
        "Sweeping %d-bit kernel over [%d, %d) for shifts %d..%d",
        config.width, config.start, config.end, config.min_shifts, config.max_shifts,
    )

    inputs = np.arange(config.start, config.end, dtype=np.int64)
    rows = []
    t0 = time.perf_counter()
    for shifts in range(config.min_shifts, config.max_shifts + 1):
        row = sample_errors(inputs, shifts, config.input_frac_bits, config.width)
        logger.info("shifts=%d max_err_log2=%.3e", shifts, row.max_err_log2)
        rows.append(row)
    logger.info("Sweep finished in %.3fs", time.perf_counter() - t0)
    return rows


def format_table(rows: Sequence[SweepRow]) -> str:
    return "\n".join([TABLE_HEADER] + [row.format() for row in rows])
