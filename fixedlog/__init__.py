# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""
Fixed-Point Logarithm Library

Integer-only binary logarithm for 32/64-bit fixed-point inputs, deterministic
across platforms and independent of floating-point hardware. Matches the C
runtime kernels except for the rounding-term cases listed in fixedlog.log2
(carry kept near the word maximum, 2^32 - 1 where C shifts an int by 32).

Available operations:
- Bit scans: bit_scan_forward, bit_scan_reverse (64-bit LSB / MSB index)
- MSB finders: msb8bit, msb16bit, msb32bit (de Bruijn, shared 32-entry table)
- Log2: ilog2_32 (frac_bits <= 28), ilog2_64 (frac_bits <= 30)
- Checked variants: *_checked, raising InvalidInputError
- Q-format helpers: compose_log2, log2_to_ln, fixed_to_float, float_to_fixed
- Accuracy sweep: SweepConfig, run_sweep, format_table
"""

from .bitscan import (
    bit_scan_forward,
    bit_scan_forward_checked,
    bit_scan_reverse,
    bit_scan_reverse_checked,
    msb8bit,
    msb8bit_checked,
    msb16bit,
    msb16bit_checked,
    msb32bit,
    msb32bit_checked,
)
from .constants import (
    ILOG2_32_MAX_FRAC_BITS,
    ILOG2_64_MAX_FRAC_BITS,
    LN2_Q31,
    LN2_SHIFT,
    LOG2_UNDEFINED,
)
from .errors import InvalidInputError
from .fixed_point import compose_log2, fixed_to_float, float_to_fixed, log2_to_ln, to_float
from .log2 import FixedLog2, ilog2_32, ilog2_32_checked, ilog2_64, ilog2_64_checked
from .error_sweep import SweepConfig, SweepRow, format_table, run_sweep, sample_errors

__all__ = [
    'bit_scan_forward',
    'bit_scan_forward_checked',
    'bit_scan_reverse',
    'bit_scan_reverse_checked',
    'msb8bit',
    'msb8bit_checked',
    'msb16bit',
    'msb16bit_checked',
    'msb32bit',
    'msb32bit_checked',
    'ILOG2_32_MAX_FRAC_BITS',
    'ILOG2_64_MAX_FRAC_BITS',
    'LN2_Q31',
    'LN2_SHIFT',
    'LOG2_UNDEFINED',
    'InvalidInputError',
    'FixedLog2',
    'ilog2_32',
    'ilog2_32_checked',
    'ilog2_64',
    'ilog2_64_checked',
    'compose_log2',
    'log2_to_ln',
    'fixed_to_float',
    'float_to_fixed',
    'to_float',
    'SweepConfig',
    'SweepRow',
    'run_sweep',
    'sample_errors',
    'format_table',
]
