# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the fixed-point log2 kernels.

Accuracy is checked against math.log2 on exact Python ints.
"""

import math
import random
import unittest

from fixedlog.constants import LOG2_UNDEFINED
from fixedlog.errors import InvalidInputError
from fixedlog.log2 import FixedLog2, ilog2_32, ilog2_32_checked, ilog2_64, ilog2_64_checked


def _as_float(result, frac_bits):
    return result.int_part + result.frac / (1 << frac_bits)


class TestExactCases(unittest.TestCase):
    def test_power_of_two_with_zero_frac_bits(self):
        self.assertEqual(ilog2_32(256, 0), FixedLog2(0, 8))

    def test_powers_of_two_64(self):
        for k in range(64):
            for frac_bits in (0, 1, 16, 30):
                self.assertEqual(ilog2_64(1 << k, frac_bits), (0, k))

    def test_powers_of_two_32(self):
        for k in range(32):
            self.assertEqual(ilog2_32(1 << k, 28), (0, k))

    def test_log2_of_three(self):
        # log2(3) = 1.10010101...b
        self.assertEqual(ilog2_32(3, 8), (149, 1))
        self.assertEqual(ilog2_64(3, 8), (149, 1))

    def test_scale_invariance(self):
        # trailing zeros only move the integer part
        self.assertEqual(ilog2_32(3 << 20, 8), (149, 21))
        self.assertEqual(ilog2_64(3 << 50, 8), (149, 51))

    def test_all_ones(self):
        self.assertEqual(ilog2_32(0xFFFFFFFF, 16), (0xFFFF, 31))
        self.assertEqual(ilog2_64((1 << 64) - 1, 16), (0xFFFF, 63))

    def test_one(self):
        self.assertEqual(ilog2_32(1, 16), (0, 0))
        self.assertEqual(ilog2_64(1, 16), (0, 0))


class TestGoldenVectors(unittest.TestCase):
    """Fixed outputs, including the two places the C build rounds differently."""

    def test_values_shared_with_c_build(self):
        self.assertEqual(ilog2_32(3, 8), (149, 1))
        self.assertEqual(ilog2_64(3, 8), (149, 1))
        self.assertEqual(ilog2_32(256, 0), (0, 8))
        # below 26 fractional bits no renormalization shifts by 32
        self.assertEqual(ilog2_64(9, 25), (5701736, 3))

    def test_rounding_term_for_32_bit_shift(self):
        # 2^32 - 1 is added before shifting by 32; the C build adds 0 and
        # returns 182455580
        self.assertEqual(ilog2_64(9, 30), (182455581, 3))

    def test_rounding_carry_near_word_maximum(self):
        # the C build wraps v + half here and returns frac 0
        self.assertEqual(ilog2_32(0xFFFFFFFF, 16), (0xFFFF, 31))
        self.assertEqual(ilog2_64((1 << 64) - 1, 16), (0xFFFF, 63))

    def test_fewer_bits_is_a_prefix(self):
        full = ilog2_64(9, 30)
        for frac_bits in range(31):
            self.assertEqual(ilog2_64(9, frac_bits), (full.frac >> (30 - frac_bits), 3))


class TestUndefinedAndPreconditions(unittest.TestCase):
    def test_zero_returns_sentinel(self):
        result = ilog2_32(0, 16)
        self.assertEqual(result.frac, 0xFFFFFFFF)
        self.assertEqual(result.frac, LOG2_UNDEFINED)
        self.assertIsNone(result.int_part)
        self.assertTrue(result.is_undefined)
        self.assertTrue(ilog2_64(0, 16).is_undefined)

    def test_input_truncated_to_word_width(self):
        self.assertEqual(ilog2_32((1 << 32) | 256, 0), (0, 8))
        self.assertTrue(ilog2_32(1 << 32, 4).is_undefined)

    @unittest.skipUnless(__debug__, "assertions stripped under -O")
    def test_frac_bits_cap_64(self):
        with self.assertRaises(AssertionError):
            ilog2_64(5, 31)
        ilog2_64(5, 30)

    @unittest.skipUnless(__debug__, "assertions stripped under -O")
    def test_frac_bits_cap_32(self):
        with self.assertRaises(AssertionError):
            ilog2_32(5, 29)
        ilog2_32(5, 28)


class TestAccuracy(unittest.TestCase):
    def test_q8_unit_interval_error_bound(self):
        # Q8 inputs 1.0 <= x < 2.0
        frac_bits = 16
        max_err = 0.0
        for i in range(256, 512):
            result = ilog2_32(i, frac_bits)
            approx = (result.int_part - 8) + result.frac / (1 << frac_bits)
            max_err = max(max_err, abs(approx - math.log2(i / 256.0)))
        self.assertLess(max_err, 1e-4)

    def test_64bit_error_within_one_ulp(self):
        rng = random.Random(7)
        for frac_bits in (8, 16, 24, 30):
            ulp = 1.0 / (1 << frac_bits)
            for _ in range(300):
                v = rng.getrandbits(rng.randrange(2, 65)) | 1
                if v == 1:
                    continue
                err = _as_float(ilog2_64(v, frac_bits), frac_bits) - math.log2(v)
                self.assertLess(abs(err), ulp + 1e-8, msg=f"v={v} frac_bits={frac_bits}")

    def test_32bit_and_64bit_agree(self):
        rng = random.Random(11)
        for _ in range(500):
            v = rng.randrange(2, 1 << 32)
            a = ilog2_32(v, 12)
            b = ilog2_64(v, 12)
            self.assertEqual(a.int_part, b.int_part)
            self.assertLessEqual(abs(a.frac - b.frac), 2, msg=f"v={v}")

    def test_monotonic(self):
        frac_bits = 16
        for kernel in (ilog2_32, ilog2_64):
            previous = -1.0
            for v in range(1, 1025):
                value = _as_float(kernel(v, frac_bits), frac_bits)
                self.assertLessEqual(previous, value, msg=f"{kernel.__name__} v={v}")
                previous = value

    def test_deterministic(self):
        self.assertEqual(ilog2_64(123456789, 30), ilog2_64(123456789, 30))


class TestCheckedVariants(unittest.TestCase):
    def test_matches_unchecked(self):
        self.assertEqual(ilog2_32_checked(1000, 16), ilog2_32(1000, 16))
        self.assertEqual(ilog2_64_checked(10 ** 15, 30), ilog2_64(10 ** 15, 30))

    def test_zero_raises(self):
        with self.assertRaises(InvalidInputError):
            ilog2_32_checked(0, 16)
        with self.assertRaises(InvalidInputError):
            ilog2_64_checked(0, 16)

    def test_frac_bits_out_of_range(self):
        with self.assertRaises(InvalidInputError):
            ilog2_64_checked(5, 31)
        with self.assertRaises(InvalidInputError):
            ilog2_32_checked(5, 29)
        with self.assertRaises(InvalidInputError):
            ilog2_32_checked(5, -1)

    def test_input_out_of_range(self):
        with self.assertRaises(InvalidInputError):
            ilog2_32_checked(1 << 32, 8)
        with self.assertRaises(InvalidInputError):
            ilog2_64_checked(-5, 8)


if __name__ == "__main__":
    unittest.main()
