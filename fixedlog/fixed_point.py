# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""
Q-format helpers around the log2 kernels.

The kernels return (frac, int_part) separately. Callers usually want one
signed fixed-point number with the input's own fractional shift removed,
sometimes in natural log, and sometimes as a float for comparison:

    log2_fixed = ((int_part - input_frac_bits) << frac_bits) | frac
    ln_fixed   = (log2_fixed * LN2_Q31) >> LN2_SHIFT

Both stay in integer arithmetic. Only fixed_to_float / to_float leave it.
"""

from typing import Union

from .constants import LN2_Q31, LN2_SHIFT
from .errors import InvalidInputError
from .log2 import FixedLog2


def compose_log2(result: FixedLog2, frac_bits: int, input_frac_bits: int = 0) -> int:
    """
    Combine a kernel result into a single Q.frac_bits log2 value.

    Args:
        result: FixedLog2 returned by ilog2_32 / ilog2_64
        frac_bits: Fractional bits the kernel was asked for
        input_frac_bits: Fractional bits of the kernel's input (Q format)

    Returns:
        Signed fixed-point log2 with frac_bits fractional bits
    """
    if result.is_undefined:
        raise InvalidInputError("compose_log2: log2(0) is undefined")
    return ((result.int_part - input_frac_bits) << frac_bits) | result.frac


def log2_to_ln(log2_fixed: int) -> int:
    """Change of base: ln(x) = log2(x) * ln(2), same fractional bits as the input."""
    return (log2_fixed * LN2_Q31) >> LN2_SHIFT


def fixed_to_float(fixed_value: int, frac_bits: int) -> float:
    """Convert a fixed-point integer back to float."""
    return fixed_value / (1 << frac_bits)


def float_to_fixed(value: Union[int, float], frac_bits: int) -> int:
    """Convert a float to a fixed-point integer, rounding half up."""
    if value < 0:
        raise InvalidInputError(f"float_to_fixed: kernel inputs are unsigned, got {value}")
    return int(value * (1 << frac_bits) + 0.5)


def to_float(result: FixedLog2, frac_bits: int, input_frac_bits: int = 0) -> float:
    return fixed_to_float(compose_log2(result, frac_bits, input_frac_bits), frac_bits)
