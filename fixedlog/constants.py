# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""
Shared numeric constants for the fixed-point log2 kernels.

The Python kernels mirror the C runtime arithmetic. Python ints do not wrap,
so every place the C code relies on uint32/uint64 overflow masks with the
constants below. Centralizing the de Bruijn multipliers and their tables keeps
them from drifting between modules; `fixedlog.debruijn` re-derives each table
from its multiplier and the test-suite checks they still agree.
"""

# Word widths and wraparound masks
UINT16_MASK = (1 << 16) - 1             # 0xFFFF
UINT32_MASK = (1 << 32) - 1             # 0xFFFFFFFF
UINT64_MASK = (1 << 64) - 1

# log2(0) has no value: returned in place of the fractional part
LOG2_UNDEFINED = UINT32_MASK

# Largest fractional-bit count before the squaring step overflows its
# accumulator (16-bit working value for ilog2_32, 32-bit for ilog2_64).
# Recompute both if the accumulator width ever changes.
ILOG2_32_MAX_FRAC_BITS = 28
ILOG2_64_MAX_FRAC_BITS = 30

# Renormalization thresholds for the working value
ILOG2_32_RENORM_BITS = 16
ILOG2_64_RENORM_BITS = 32

# Forward scan: fold x ^ (x - 1) to 32 bits, multiply, keep the top 6 bits
LSB_FOLD_DEBRUIJN = 0x78291ACF
LSB_FOLD_SHIFT = 26

LSB_64_TABLE = (
    63, 30,  3, 32, 59, 14, 11, 33,
    60, 24, 50,  9, 55, 19, 21, 34,
    61, 29,  2, 53, 51, 23, 41, 18,
    56, 28,  1, 43, 46, 27,  0, 35,
    62, 31, 58,  4,  5, 49, 54,  6,
    15, 52, 12, 40,  7, 42, 45, 16,
    25, 57, 48, 13, 10, 39,  8, 44,
    20, 47, 38, 22, 17, 37, 36, 26,
)

# Reverse scan, 32-bit: round down to 2^k - 1, multiply, keep the top 5 bits
MSB_32_DEBRUIJN = 0x07C4ACDD
MSB_32_SHIFT = 27

MSB_32_TABLE = (
     0,  9,  1, 10, 13, 21,  2, 29, 11, 14, 16, 18, 22, 25,  3, 30,
     8, 12, 20, 28, 15, 17, 24,  7, 19, 27, 23,  6, 26,  5,  4, 31,
)

# Reverse scan, 64-bit
MSB_64_DEBRUIJN = 0x03F79D71B4CB0A89
MSB_64_SHIFT = 58

MSB_64_TABLE = (
     0, 47,  1, 56, 48, 27,  2, 60,
    57, 49, 41, 37, 28, 16,  3, 61,
    54, 58, 35, 52, 50, 42, 21, 44,
    38, 32, 29, 23, 17, 11,  4, 62,
    46, 55, 26, 59, 40, 36, 15, 53,
    34, 51, 20, 43, 31, 22, 10, 45,
    25, 39, 14, 33, 19, 30,  9, 24,
    13, 18,  8, 12,  7,  6,  5, 63,
)

# ln(2) in Q31 for change of base: round(0.6931471805599453 * 2**31)
LN2_SHIFT = 31
LN2_Q31 = 0x58B90BFC
