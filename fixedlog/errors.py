# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Exception raised by the checked kernel entry points."""


class InvalidInputError(ValueError):
    """An argument is outside the domain a kernel accepts (zero word, width overflow, frac_bits cap)."""
