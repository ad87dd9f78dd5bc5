# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""
Fixed-Point Log2 - Integer-only binary logarithm (32-bit and 64-bit inputs)

Computes log2(v) = int_part + frac / 2^F with the repeated squaring method:
for a mantissa m in [1, 2), log2(m^2) = 2 * log2(m), so squaring shifts the
next fractional bit of the logarithm into the integer position. Each
iteration squares the working value, checks whether it crossed 2.0 and
emits one result bit, MSB first.

The working value is carried as an integer with `n_frac_bits` fractional
bits. Before each squaring it is rounded down into a 16-bit (ilog2_32) or
32-bit (ilog2_64) range so the square fits the C accumulator. The rounding
term is always 2^shift - 1 computed without overflow, which departs from the
C kernels in two places:

- ilog2_32 / ilog2_64 near the top of the word: C adds the rounding term in a
  uint32/uint64 register, which wraps for inputs within 2^16 (2^32) of the
  word maximum and collapses the result to 0. Here the carry is kept, so
  ilog2_32(0xFFFFFFFF, 16) == (0xFFFF, 31).
- ilog2_64 when a renormalization shifts by 32: C computes the term as the
  int expression (1 << 32) - 1, which is undefined and yields 0 on x86.
  Here it is 2^32 - 1, so results can sit 1 LSB higher once F >= 26, e.g.
  ilog2_64(9, 30) == (182455581, 3) where the C build gives 182455580.

All other inputs agree with the C output.

Reference:
    https://en.wikipedia.org/wiki/Binary_logarithm#Iterative_approximation
"""

from typing import Callable, NamedTuple, Optional

from .bitscan import bit_scan_forward, bit_scan_reverse, msb16bit, msb32bit
from .constants import (
    ILOG2_32_MAX_FRAC_BITS,
    ILOG2_32_RENORM_BITS,
    ILOG2_64_MAX_FRAC_BITS,
    ILOG2_64_RENORM_BITS,
    LOG2_UNDEFINED,
    UINT32_MASK,
    UINT64_MASK,
)
from .errors import InvalidInputError


class FixedLog2(NamedTuple):
    """
    Result of ilog2_32 / ilog2_64.

    frac is the F-bit fractional part (Q0.F). int_part is floor(log2(v)),
    or None when v == 0, in which case frac is LOG2_UNDEFINED.
    """
    frac: int
    int_part: Optional[int]

    @property
    def is_undefined(self) -> bool:
        return self.int_part is None


def _squaring_log2(
    v: int,
    n_frac_bits: int,
    frac_bits: int,
    renorm_bits: int,
    msb_high: Callable[[int], int],
) -> int:
    """Run the squaring loop on an odd working value; returns the result bits."""
    limit = 1 << renorm_bits
    result_bits = 0
    for _ in range(frac_bits):
        while v >= limit:
            r_shifts = msb_high(v >> renorm_bits) + 1
            half = (1 << r_shifts) - 1
            v = (v + half) >> r_shifts
            n_frac_bits -= r_shifts
        v *= v
        n_frac_bits <<= 1
        result_bits <<= 1
        if v >> (n_frac_bits + 1):
            result_bits += 1
            n_frac_bits += 1
    return result_bits


def ilog2_32(v: int, frac_bits: int) -> FixedLog2:
    """
    Fixed-point log2 of a 32-bit integer.

    Args:
        v: 32-bit unsigned input (truncated to 32 bits)
        frac_bits: Number of fractional output bits, 0..28

    Returns:
        FixedLog2(frac, int_part); (LOG2_UNDEFINED, None) for v == 0
    """
    assert 0 <= frac_bits <= ILOG2_32_MAX_FRAC_BITS, \
        f"ilog2_32: frac_bits must be <= {ILOG2_32_MAX_FRAC_BITS}, got {frac_bits}"
    v &= UINT32_MASK
    if v == 0:
        return FixedLog2(LOG2_UNDEFINED, None)

    trail_zero_count = bit_scan_forward(v)
    pos_msb = msb32bit(v)
    if pos_msb == trail_zero_count:
        return FixedLog2(0, pos_msb)

    frac = _squaring_log2(
        v >> trail_zero_count,
        pos_msb - trail_zero_count,
        frac_bits,
        ILOG2_32_RENORM_BITS,
        msb16bit,
    )
    return FixedLog2(frac, pos_msb)


def ilog2_64(v: int, frac_bits: int) -> FixedLog2:
    """
    Fixed-point log2 of a 64-bit integer.

    Args:
        v: 64-bit unsigned input (truncated to 64 bits)
        frac_bits: Number of fractional output bits, 0..30

    Returns:
        FixedLog2(frac, int_part); (LOG2_UNDEFINED, None) for v == 0
    """
    assert 0 <= frac_bits <= ILOG2_64_MAX_FRAC_BITS, \
        f"ilog2_64: frac_bits must be <= {ILOG2_64_MAX_FRAC_BITS}, got {frac_bits}"
    v &= UINT64_MASK
    if v == 0:
        return FixedLog2(LOG2_UNDEFINED, None)

    trail_zero_count = bit_scan_forward(v)
    pos_msb = bit_scan_reverse(v)
    if pos_msb == trail_zero_count:
        return FixedLog2(0, pos_msb)

    frac = _squaring_log2(
        v >> trail_zero_count,
        pos_msb - trail_zero_count,
        frac_bits,
        ILOG2_64_RENORM_BITS,
        msb32bit,
    )
    return FixedLog2(frac, pos_msb)


# --- Checked variants ---

def _check_args(name: str, v: int, frac_bits: int, mask: int, max_frac_bits: int) -> None:
    if isinstance(v, bool) or not isinstance(v, int):
        raise InvalidInputError(f"{name}: expected an int input, got {type(v).__name__}")
    if v == 0:
        raise InvalidInputError(f"{name}: log2(0) is undefined")
    if v < 0 or v > mask:
        raise InvalidInputError(f"{name}: input must be in [1, {mask:#x}], got {v}")
    if isinstance(frac_bits, bool) or not isinstance(frac_bits, int):
        raise InvalidInputError(f"{name}: frac_bits must be an int, got {type(frac_bits).__name__}")
    if not 0 <= frac_bits <= max_frac_bits:
        raise InvalidInputError(f"{name}: frac_bits must be in [0, {max_frac_bits}], got {frac_bits}")


def ilog2_32_checked(v: int, frac_bits: int) -> FixedLog2:
    """ilog2_32 that raises InvalidInputError instead of asserting or returning the sentinel."""
    _check_args("ilog2_32", v, frac_bits, UINT32_MASK, ILOG2_32_MAX_FRAC_BITS)
    return ilog2_32(v, frac_bits)


def ilog2_64_checked(v: int, frac_bits: int) -> FixedLog2:
    """ilog2_64 that raises InvalidInputError instead of asserting or returning the sentinel."""
    _check_args("ilog2_64", v, frac_bits, UINT64_MASK, ILOG2_64_MAX_FRAC_BITS)
    return ilog2_64(v, frac_bits)
