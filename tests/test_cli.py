# Copyright (c) 2026 Thorir Mar Ingolfsson, ETH Zurich
# SPDX-License-Identifier: Apache-2.0

"""Tests for the fixedlog-sweep entry point."""

import io
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from fixedlog.cli import load_config, main
from fixedlog.error_sweep import TABLE_HEADER, SweepConfig

SMALL_SWEEP = ["min_shifts=8", "max_shifts=9", "end=2048", "window=256"]


class TestLoadConfig(unittest.TestCase):
    def test_defaults(self):
        self.assertEqual(load_config(), SweepConfig())

    def test_dotlist_overrides(self):
        config = load_config(overrides=["width=32", "max_shifts=12"])
        self.assertIsInstance(config, SweepConfig)
        self.assertEqual(config.width, 32)
        self.assertEqual(config.max_shifts, 12)
        self.assertEqual(config.min_shifts, 8)

    def test_yaml_then_overrides(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "sweep.yaml"
            path.write_text("width: 32\nmax_shifts: 20\nwindow: 512\n")
            config = load_config(str(path), ["max_shifts=10"])
        self.assertEqual(config.width, 32)
        self.assertEqual(config.window, 512)
        self.assertEqual(config.max_shifts, 10)


class TestMain(unittest.TestCase):
    def test_prints_table(self):
        buf = io.StringIO()
        with redirect_stdout(buf):
            code = main(SMALL_SWEEP)
        self.assertEqual(code, 0)
        lines = buf.getvalue().splitlines()
        self.assertEqual(lines[0], TABLE_HEADER)
        self.assertTrue(lines[1].startswith("8 "))
        self.assertTrue(lines[2].startswith("9 "))
        # elapsed seconds
        float(lines[3])

    def test_invalid_config_exit_code(self):
        with redirect_stdout(io.StringIO()):
            self.assertEqual(main(SMALL_SWEEP + ["max_shifts=40"]), 2)

    def test_oversized_end_exit_code(self):
        with redirect_stdout(io.StringIO()):
            self.assertEqual(main(["end=18446744073709551616"]), 2)

    def test_unknown_key_exit_code(self):
        with redirect_stdout(io.StringIO()):
            self.assertEqual(main(["no_such_field=1"]), 2)


if __name__ == "__main__":
    unittest.main()
