"""
Script: tests/test_app.py
What: Unit tests for the shipped application.
Doing: Checks the arithmetic helper and the greeting printed by the entry point.
Why: This is the test stage that gates packaging and publishing.
Goal: Fail the pipeline whenever `add` stops returning the exact sum.
"""

from __future__ import annotations

import io
import subprocess
import sys
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from demo_app.app import GREETING, add, main


PROJECT_ROOT = Path(__file__).resolve().parent.parent


class AddTests(unittest.TestCase):
    def test_adds_two_integers(self) -> None:
        self.assertEqual(add(2, 3), 5)

    def test_adds_negative_and_zero(self) -> None:
        self.assertEqual(add(-7, 7), 0)
        self.assertEqual(add(0, 0), 0)
        self.assertEqual(add(-2, -3), -5)

    def test_exact_at_64_bit_limits(self) -> None:
        # Python ints do not overflow, so the sum stays exact past native widths.
        self.assertEqual(add(2**63 - 1, 1), 2**63)
        self.assertEqual(add(-(2**63), -1), -(2**63) - 1)


class MainTests(unittest.TestCase):
    def test_prints_exactly_one_greeting_line(self) -> None:
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            main()
        self.assertEqual(buffer.getvalue(), GREETING + "\n")

    def test_module_run_prints_greeting_and_exits_0(self) -> None:
        result = subprocess.run(
            [sys.executable, "-m", "demo_app"],
            cwd=PROJECT_ROOT,
            capture_output=True,
            text=True,
            check=False,
        )
        self.assertEqual(result.returncode, 0)
        self.assertEqual(result.stdout, GREETING + "\n")


if __name__ == "__main__":
    unittest.main()
