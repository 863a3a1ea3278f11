"""
Script: tests/test_cli.py
What: Tests for the shared `ci_tools` command dispatcher.
Doing: Checks command-map entries, parser behavior, and command-run paths.
Why: Makes sure workflow command names still point to the right modules.
Goal: Protect the main command entry surface used by workflow steps.
"""

from __future__ import annotations

import io
import unittest
from contextlib import redirect_stderr
from unittest import mock

from ci_tools import cli
from ci_tools.cli import build_parser, command_map, run_command
from ci_tools.common import CiToolError


class CliTests(unittest.TestCase):
    def test_command_map_contains_expected_entries(self) -> None:
        commands = command_map()
        expected = {
            "run-tests",
            "check-artifact-consistency",
            "package-artifact",
            "compute-image-refs",
            "build-image",
            "smoke-test-image",
            "publish-image",
            "run-pipeline",
        }
        self.assertEqual(set(commands.keys()), expected)

    def test_parser_accepts_known_command(self) -> None:
        parser = build_parser({"demo-command": lambda: None})
        args = parser.parse_args(["demo-command"])
        self.assertEqual(args.command, "demo-command")

    def test_parser_rejects_unknown_command(self) -> None:
        parser = build_parser({"demo-command": lambda: None})
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                parser.parse_args(["other-command"])

    def test_run_command_calls_target_function(self) -> None:
        called = {"value": False}

        def _target() -> None:
            called["value"] = True

        run_command("demo", {"demo": _target})
        self.assertTrue(called["value"])

    def test_main_exits_1_and_prints_tool_error(self) -> None:
        def _failing() -> None:
            raise CiToolError("stage broke")

        stderr = io.StringIO()
        with mock.patch.object(cli, "command_map", return_value={"demo": _failing}):
            with redirect_stderr(stderr):
                with self.assertRaises(SystemExit) as ctx:
                    cli.main(["demo"])

        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("stage broke", stderr.getvalue())


if __name__ == "__main__":
    unittest.main()
