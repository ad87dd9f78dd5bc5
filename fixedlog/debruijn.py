#!/usr/bin/env python3
# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""
De Bruijn Table Generation Utility

Derives the bit-scan lookup tables from their multipliers instead of trusting
hand-copied literals. Each table maps "multiplier * pattern, top bits" to the
bit index that produced the pattern; a single wrong entry would corrupt every
log2 result downstream, so derivation fails on any collision or gap.

Patterns per table:
    LSB 64   x ^ (x - 1) for lowest bit i is 2^(i+1) - 1, folded to 32 bits
    MSB 32   a word rounded down to 2^(i+1) - 1
    MSB 64   same, 64-bit multiply

Usage:
    # Print the derived tables and check them against fixedlog.constants
    fixedlog-tables --validate

    # Emit a C header for the runtime
    fixedlog-tables --header build/bitscan_tables.h

    # Use as module
    from fixedlog.debruijn import build_msb32_table
    table = build_msb32_table()
"""

import argparse
from pathlib import Path
from typing import Callable, Dict, Sequence, Tuple

import numpy as np

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
    UINT32_MASK,
    UINT64_MASK,
)


def _fill_below(bit_index: int) -> int:
    return (1 << (bit_index + 1)) - 1


def _build_table(
    width: int,
    table_bits: int,
    key: Callable[[int], int],
) -> Tuple[int, ...]:
    """
    Place bit index i at key(i) for every i in [0, width).

    Raises ValueError if two indices hash to the same slot or a slot stays
    empty, i.e. the multiplier is not a valid de Bruijn constant for this
    pattern.
    """
    size = 1 << table_bits
    if size != width:
        raise ValueError(f"table of {size} entries cannot index {width} bit positions")

    table = [-1] * size
    for i in range(width):
        slot = key(i)
        if table[slot] != -1:
            raise ValueError(
                f"collision at slot {slot}: bit {i} and bit {table[slot]} map to the same index"
            )
        table[slot] = i
    return tuple(table)


def build_lsb64_table(multiplier: int = LSB_FOLD_DEBRUIJN) -> Tuple[int, ...]:
    """Table for bit_scan_forward: 64 entries, 32-bit folded multiply, top 6 bits."""
    def key(i: int) -> int:
        isolated = _fill_below(i) & UINT64_MASK
        folded = (isolated ^ (isolated >> 32)) & UINT32_MASK
        return ((folded * multiplier) & UINT32_MASK) >> LSB_FOLD_SHIFT
    return _build_table(64, 32 - LSB_FOLD_SHIFT, key)


def build_msb32_table(multiplier: int = MSB_32_DEBRUIJN) -> Tuple[int, ...]:
    """Table for msb8bit / msb16bit / msb32bit: 32 entries, top 5 bits."""
    def key(i: int) -> int:
        return ((_fill_below(i) * multiplier) & UINT32_MASK) >> MSB_32_SHIFT
    return _build_table(32, 32 - MSB_32_SHIFT, key)


def build_msb64_table(multiplier: int = MSB_64_DEBRUIJN) -> Tuple[int, ...]:
    """Table for bit_scan_reverse: 64 entries, 64-bit multiply, top 6 bits."""
    def key(i: int) -> int:
        return ((_fill_below(i) * multiplier) & UINT64_MASK) >> MSB_64_SHIFT
    return _build_table(64, 64 - MSB_64_SHIFT, key)


def build_all_tables() -> Dict[str, Tuple[int, ...]]:
    return {
        'lsb_64_table': build_lsb64_table(),
        'msb_MultiplyDeBruijnBitPosition': build_msb32_table(),
        'index64': build_msb64_table(),
    }


SHIPPED_TABLES = {
    'lsb_64_table': LSB_64_TABLE,
    'msb_MultiplyDeBruijnBitPosition': MSB_32_TABLE,
    'index64': MSB_64_TABLE,
}


def validate_tables() -> Dict[str, int]:
    """
    Compare the derived tables with the constants the kernels use.

    Returns:
        Mismatch count per table name (all zero when the constants are sound)
    """
    derived = build_all_tables()
    mismatches = {}
    for name, table in derived.items():
        shipped = np.asarray(SHIPPED_TABLES[name], dtype=np.int64)
        mismatches[name] = int(np.count_nonzero(shipped != np.asarray(table, dtype=np.int64)))
    return mismatches


def format_c_table(name: str, table: Sequence[int], per_line: int = 8) -> str:
    lines = [f"static const uint8_t {name}[{len(table)}] = {{"]
    for i in range(0, len(table), per_line):
        chunk = table[i:i + per_line]
        lines.append("    " + ", ".join(f"{v:2d}" for v in chunk) + ",")
    lines.append("};")
    return "\n".join(lines)


def save_tables_c_header(tables: Dict[str, Tuple[int, ...]], output_path) -> Path:
    """
    Save the tables as a C header.

    Args:
        tables: Name -> table, as returned by build_all_tables()
        output_path: Output file path (e.g., 'build/bitscan_tables.h')
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        f.write("// Bit scan lookup tables (generated by fixedlog.debruijn)\n")
        f.write("// DO NOT EDIT MANUALLY\n\n")
        f.write("#include <stdint.h>\n\n")
        f.write(f"#define LSB_FOLD_DEBRUIJN 0x{LSB_FOLD_DEBRUIJN:08X}U\n")
        f.write(f"#define MSB_32_DEBRUIJN 0x{MSB_32_DEBRUIJN:08X}U\n")
        f.write(f"#define MSB_64_DEBRUIJN 0x{MSB_64_DEBRUIJN:016X}ULL\n\n")
        for name, table in tables.items():
            f.write(format_c_table(name, table))
            f.write("\n\n")

    print(f"Saved C header to: {output_path}")
    return output_path


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Derive the de Bruijn bit-scan lookup tables"
    )
    parser.add_argument(
        '--header',
        type=str,
        default=None,
        help='Optional output path for a C header (e.g., build/bitscan_tables.h)'
    )
    parser.add_argument(
        '--validate',
        action='store_true',
        help='Check the derived tables against fixedlog.constants'
    )
    args = parser.parse_args(argv)

    tables = build_all_tables()
    for name, table in tables.items():
        print(format_c_table(name, table))
        print()

    if args.header:
        save_tables_c_header(tables, args.header)

    if args.validate:
        mismatches = validate_tables()
        for name, count in mismatches.items():
            status = "[PASS]" if count == 0 else "[FAIL]"
            print(f"{status} {name}: {count} mismatched entries")
        if any(mismatches.values()):
            return 1

    return 0


if __name__ == '__main__':
    raise SystemExit(main())
