"""CLI behavior tests for ``dirtreediff.cli.main``.

Covers table output, exit statuses, argument validation, stopping on the
first traversal error, and persisting defaults.
"""

from __future__ import annotations

import io
import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from dirtreediff import cli

_REAL_SCANDIR = os.scandir


def _write_tree(root: Path, files: dict[str, str]) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return root


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        self.config_path = self.root / "config" / "config.json"
        patcher = mock.patch("dirtreediff.config.CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

    def run_cli(self, *argv: str) -> tuple[int, str, str]:
        stdout = io.StringIO()
        stderr = io.StringIO()
        with mock.patch("sys.stdout", stdout), mock.patch("sys.stderr", stderr):
            status = cli.main(list(argv))
        return status, stdout.getvalue(), stderr.getvalue()


class CliDiffTableTests(CliTestCase):
    def test_backup_versus_live_table(self) -> None:
        backup = _write_tree(
            self.root / "backup",
            {"project-1/README.txt": "r", "project-2/README.txt": "r", "project-3/README.txt": "r"},
        )
        live = _write_tree(
            self.root / "live",
            {"project-1/README.txt": "r", "project-2/SOMETHING-ELSE.txt": "r", "project-4/README.txt": "r"},
        )

        status, out, err = self.run_cli(str(backup), str(live), "--no-color")

        self.assertEqual(status, cli.EXIT_DIFFERENT)
        self.assertEqual(err, "")
        rows = [line.split() for line in out.splitlines()]
        self.assertEqual(
            rows,
            [
                [str(backup), "-------", str(live)],
                ["project-1", "MATCHES", "project-1"],
                ["project-2", "DIFFERS", "project-2"],
                ["project-3", "<", "ONLY", "IN"],
                ["ONLY", "IN", ">", "project-4"],
            ],
        )

    def test_identical_trees_exit_zero(self) -> None:
        files = {"p1/README.txt": "x", "p2/f": "y"}
        left = _write_tree(self.root / "left", files)
        right = _write_tree(self.root / "right", files)

        status, out, _err = self.run_cli(str(left), str(right), "--no-color")

        self.assertEqual(status, cli.EXIT_SAME)
        self.assertEqual(len(out.splitlines()), 3)
        self.assertNotIn("\033[", out)

    def test_forced_color_adds_ansi_labels(self) -> None:
        left = _write_tree(self.root / "left", {"p/f": "x"})
        right = _write_tree(self.root / "right", {"p/f": "x"})

        _status, out, _err = self.run_cli(str(left), str(right), "--color")

        self.assertIn("\033[", out)

    def test_traversal_error_stops_scan(self) -> None:
        files = {"a/f": "1", "b/f": "2", "c/f": "3"}
        left = _write_tree(self.root / "left", files)
        right = _write_tree(self.root / "right", files)
        blocked = left / "b"

        def scandir(path):
            if Path(path) == blocked:
                raise PermissionError(13, "Permission denied", str(path))
            return _REAL_SCANDIR(path)

        with mock.patch("os.scandir", side_effect=scandir):
            status, out, err = self.run_cli(str(left), str(right), "--no-color")

        self.assertEqual(status, cli.EXIT_TROUBLE)
        self.assertEqual([line.split()[0] for line in out.splitlines()[1:]], ["a"])
        self.assertEqual(
            err.splitlines(),
            [
                "ERROR: Encountered an error while scanning directories:",
                f"  failed while walking directories: {blocked}: Permission denied",
                "Aborting directory scan.",
            ],
        )

    def test_nested_traversal_error_prints_rows_before_it(self) -> None:
        files = {"a/x": "1", "b/x": "2", "c/x": "3"}
        left = _write_tree(self.root / "left", files)
        right = _write_tree(self.root / "right", files)
        blocked = left / "b"

        def scandir(path):
            if Path(path) == blocked:
                raise PermissionError(13, "Permission denied", str(path))
            return _REAL_SCANDIR(path)

        with mock.patch("os.scandir", side_effect=scandir):
            status, out, err = self.run_cli(str(left), str(right), "--depth", "2", "--no-color")

        self.assertEqual(status, cli.EXIT_TROUBLE)
        lines = out.splitlines()
        self.assertEqual(lines[0].split(), [str(left), "-------", str(right)])
        self.assertEqual([line.split() for line in lines[1:]], [[os.path.join("a", "x"), "MATCHES", os.path.join("a", "x")]])
        self.assertIn(f"  failed while walking directories: {blocked}: Permission denied", err.splitlines())

    def test_depth_option_compares_nested_entries(self) -> None:
        left = _write_tree(self.root / "left", {"g/x/f": "1"})
        right = _write_tree(self.root / "right", {"g/x/f": "2"})

        status, out, _err = self.run_cli(str(left), str(right), "--depth", "2", "--no-color")

        self.assertEqual(status, cli.EXIT_DIFFERENT)
        self.assertEqual(out.splitlines()[1].split(), [os.path.join("g", "x"), "DIFFERS", os.path.join("g", "x")])


class CliArgumentTests(CliTestCase):
    def test_missing_root_exits_with_usage_error(self) -> None:
        right = _write_tree(self.root / "right", {})
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli(str(self.root / "missing"), str(right))
        self.assertEqual(ctx.exception.code, 2)

    def test_file_root_is_rejected(self) -> None:
        right = _write_tree(self.root / "right", {"f": "x"})
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli(str(right / "f"), str(right))
        self.assertEqual(ctx.exception.code, 2)

    def test_non_positive_depth_is_rejected(self) -> None:
        left = _write_tree(self.root / "left", {})
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli(str(left), str(left), "--depth", "0")
        self.assertEqual(ctx.exception.code, 2)

    def test_save_defaults_persists_depth_and_color(self) -> None:
        left = _write_tree(self.root / "left", {"g/x/f": "1"})
        right = _write_tree(self.root / "right", {"g/x/f": "1"})

        status, _out, _err = self.run_cli(str(left), str(right), "--depth", "2", "--no-color", "--save-defaults")

        self.assertEqual(status, cli.EXIT_SAME)
        saved = json.loads(self.config_path.read_text(encoding="utf-8"))
        self.assertEqual(saved, {"depth": 2, "color": False})

    def test_saved_depth_is_used_when_flag_missing(self) -> None:
        self.config_path.parent.mkdir(parents=True)
        self.config_path.write_text(json.dumps({"depth": 2, "color": False}), encoding="utf-8")
        left = _write_tree(self.root / "left", {"g/x/f": "1"})
        right = _write_tree(self.root / "right", {"g/y/f": "1"})

        status, out, _err = self.run_cli(str(left), str(right))

        self.assertEqual(status, cli.EXIT_DIFFERENT)
        self.assertEqual(len(out.splitlines()), 3)
        self.assertNotIn("\033[", out)


if __name__ == "__main__":
    unittest.main()
