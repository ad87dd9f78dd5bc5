# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""
Bit Scan Primitives - LSB / MSB index of 16/32/64-bit words

Branch-free reference implementations using de Bruijn multiplication:
1. bit_scan_forward: lowest set bit of a 64-bit word (Matt Taylor's folding)
2. bit_scan_reverse: highest set bit of a 64-bit word (Walisch / Dickinson)
3. msb8bit / msb16bit / msb32bit: highest set bit after rounding the word
   down to 2^k - 1, sharing one 32-entry table

The unchecked functions mirror the C kernels: the input is truncated to the
declared word width and a zero word is a precondition violation caught by
`assert` only. The `*_checked` variants validate and raise InvalidInputError.

Reference:
    https://www.chessprogramming.org/BitScan
    http://graphics.stanford.edu/~seander/bithacks.html#IntegerLogDeBruijn
"""

from .constants import (
    LSB_64_TABLE,
    LSB_FOLD_DEBRUIJN,
    LSB_FOLD_SHIFT,
    MSB_32_DEBRUIJN,
    MSB_32_SHIFT,
    MSB_32_TABLE,
    MSB_64_DEBRUIJN,
    MSB_64_SHIFT,
    MSB_64_TABLE,
    UINT16_MASK,
    UINT32_MASK,
    UINT64_MASK,
)
from .errors import InvalidInputError


def bit_scan_forward(bb: int) -> int:
    """
    Index (0..63) of the least significant one bit.

    bb ^ (bb - 1) sets every bit up to and including the lowest one; folding
    the two halves together keeps the pattern unique in 32 bits, so a 32-bit
    multiply is enough to hash it into the 64-entry table.

    Args:
        bb: 64-bit word, must be nonzero

    Returns:
        Bit index of the lowest set bit
    """
    bb &= UINT64_MASK
    assert bb != 0, "bit_scan_forward: word must be nonzero"
    bb ^= bb - 1
    folded = (bb ^ (bb >> 32)) & UINT32_MASK
    return LSB_64_TABLE[((folded * LSB_FOLD_DEBRUIJN) & UINT32_MASK) >> LSB_FOLD_SHIFT]


def _msb_index_32(v: int) -> int:
    return MSB_32_TABLE[((v * MSB_32_DEBRUIJN) & UINT32_MASK) >> MSB_32_SHIFT]


def msb8bit(v: int) -> int:
    """Highest set bit of a 16-bit word whose meaningful range is the low 8 bits."""
    v &= UINT16_MASK
    # round down to one less than a power of 2
    v |= v >> 1
    v |= v >> 2
    v |= v >> 4
    return _msb_index_32(v)


def msb16bit(v: int) -> int:
    """Highest set bit of a 16-bit word."""
    v &= UINT16_MASK
    v |= v >> 1
    v |= v >> 2
    v |= v >> 4
    v |= v >> 8
    return _msb_index_32(v)


def msb32bit(v: int) -> int:
    """Highest set bit of a 32-bit word."""
    v &= UINT32_MASK
    v |= v >> 1
    v |= v >> 2
    v |= v >> 4
    v |= v >> 8
    v |= v >> 16
    return _msb_index_32(v)


def bit_scan_reverse(bb: int) -> int:
    """
    Index (0..63) of the most significant one bit.

    Args:
        bb: 64-bit word, must be nonzero

    Returns:
        Bit index of the highest set bit
    """
    bb &= UINT64_MASK
    assert bb != 0, "bit_scan_reverse: word must be nonzero"
    bb |= bb >> 1
    bb |= bb >> 2
    bb |= bb >> 4
    bb |= bb >> 8
    bb |= bb >> 16
    bb |= bb >> 32
    return MSB_64_TABLE[((bb * MSB_64_DEBRUIJN) & UINT64_MASK) >> MSB_64_SHIFT]


# --- Checked variants ---

def _check_word(name: str, v: int, mask: int) -> None:
    if isinstance(v, bool) or not isinstance(v, int):
        raise InvalidInputError(f"{name}: expected an int word, got {type(v).__name__}")
    if v <= 0 or v > mask:
        raise InvalidInputError(f"{name}: word must be in [1, {mask:#x}], got {v}")


def bit_scan_forward_checked(bb: int) -> int:
    _check_word("bit_scan_forward", bb, UINT64_MASK)
    return bit_scan_forward(bb)


def bit_scan_reverse_checked(bb: int) -> int:
    _check_word("bit_scan_reverse", bb, UINT64_MASK)
    return bit_scan_reverse(bb)


def msb8bit_checked(v: int) -> int:
    _check_word("msb8bit", v, 0xFF)
    return msb8bit(v)


def msb16bit_checked(v: int) -> int:
    _check_word("msb16bit", v, UINT16_MASK)
    return msb16bit(v)


def msb32bit_checked(v: int) -> int:
    _check_word("msb32bit", v, UINT32_MASK)
    return msb32bit(v)
