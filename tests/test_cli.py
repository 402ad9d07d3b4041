"""Tests for configuration loading, the interactive session and CLI commands."""

import contextlib
import io
import json
import os
from pathlib import Path
import signal
import sys
import tempfile
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nqueens.analysis import cli, settings

_SETTING_NAMES = (
    "PRINT_THRESHOLD",
    "SOLVER_STRATEGY",
    "SOLVER_TIME_LIMIT",
    "MAX_SOLUTIONS",
    "N_VALUES",
    "RUNS_PER_N",
    "OUT_DIR",
    "RUN_TAG",
    "DATE_IN_FILENAMES",
)


class SettingsIsolation(unittest.TestCase):
    """Snapshot and restore the mutable settings module around each test."""

    def setUp(self):
        self._saved = {name: getattr(settings, name) for name in _SETTING_NAMES}

    def tearDown(self):
        for name, value in self._saved.items():
            setattr(settings, name, value)

    def run_main(self, argv):
        buffer = io.StringIO()
        with contextlib.redirect_stdout(buffer):
            cli.main(argv)
        return buffer.getvalue()


class SessionTests(SettingsIsolation):

    def test_session_stops_at_first_non_positive(self):
        lines = []
        solved = cli.run_session(["4", "0", "5"], out=lines.append)
        self.assertEqual(solved, 1)
        self.assertEqual(lines, ["2 solutions:", "[2, 4, 1, 3]", "[3, 1, 4, 2]"])

    def test_session_reports_counts_for_large_boards(self):
        lines = []
        solved = cli.run_session(["1", "9", "-1"], out=lines.append)
        self.assertEqual(solved, 2)
        self.assertEqual(lines, ["1 solution:", "[1]", "352 solutions."])

    def test_session_skips_invalid_and_blank_lines(self):
        lines = []
        solved = cli.run_session(["", "abc", "3"], out=lines.append)
        self.assertEqual(solved, 1)
        self.assertIn("Invalid input 'abc'", lines[0])
        self.assertEqual(lines[1:], ["0 solutions:"])

    def test_session_uses_configured_threshold(self):
        settings.PRINT_THRESHOLD = 3
        lines = []
        cli.run_session(["4"], out=lines.append)
        self.assertEqual(lines, ["2 solutions."])

    def test_interrupt_handler_requests_stop_and_is_restored(self):
        previous = signal.getsignal(signal.SIGINT)
        with cli.interrupt_stops_search() as should_stop:
            self.assertFalse(should_stop())
            handler = signal.getsignal(signal.SIGINT)
            handler(signal.SIGINT, None)
            self.assertTrue(should_stop())
        self.assertIs(signal.getsignal(signal.SIGINT), previous)


class ConfigurationTests(SettingsIsolation):

    def _write_config(self, tmpdir, payload):
        path = os.path.join(tmpdir, "config.json")
        with open(path, "w") as f:
            json.dump(payload, f)
        return path

    def test_apply_configuration(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = self._write_config(tmpdir, {
                "solver_settings": {"strategy": "iterative", "time_limit": 5.0, "max_solutions": 10},
                "reporting_settings": {"print_threshold": 6, "output_dir": "out", "run_tag": "cfg"},
                "experiment_settings": {"N_values": [4, 5], "runs": 2},
            })
            with contextlib.redirect_stdout(io.StringIO()):
                cli.apply_configuration(path)

        self.assertEqual(settings.SOLVER_STRATEGY, "iterative")
        self.assertEqual(settings.SOLVER_TIME_LIMIT, 5.0)
        self.assertEqual(settings.MAX_SOLUTIONS, 10)
        self.assertEqual(settings.PRINT_THRESHOLD, 6)
        self.assertEqual(settings.OUT_DIR, "out")
        self.assertEqual(settings.RUN_TAG, "cfg")
        self.assertEqual(settings.N_VALUES, [4, 5])
        self.assertEqual(settings.RUNS_PER_N, 2)

    def test_invalid_values_are_rejected(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            bad_strategy = self._write_config(tmpdir, {"solver_settings": {"strategy": "random"}})
            with self.assertRaises(ValueError):
                cli.apply_configuration(bad_strategy)

            bad_threshold = self._write_config(tmpdir, {"reporting_settings": {"print_threshold": 0}})
            with self.assertRaises(ValueError):
                cli.apply_configuration(bad_threshold)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            cli.apply_configuration("/nonexistent/config.json")

    def test_main_exits_on_missing_config(self):
        with self.assertRaises(SystemExit) as ctx:
            self.run_main(["--config", "/nonexistent/config.json", "solve", "4"])
        self.assertEqual(ctx.exception.code, 1)

    def test_parse_n_values(self):
        self.assertIsNone(cli.parse_n_values(None))
        self.assertEqual(cli.parse_n_values(["1-3", "5,5", "8"]), [1, 2, 3, 5, 8])
        with self.assertRaises(ValueError):
            cli.parse_n_values(["0,4"])


class CommandTests(SettingsIsolation):

    def test_solve_command(self):
        output = self.run_main(["--strategy", "iterative", "solve", "4", "9", "0", "5"])
        self.assertIn("=== N = 4 ===", output)
        self.assertIn("[2, 4, 1, 3]", output)
        self.assertIn("352 solutions.", output)
        self.assertNotIn("=== N = 5 ===", output)

    def test_solve_command_exports_csv(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            self.run_main(["--out-dir", tmpdir, "solve", "6", "--csv"])
            self.assertTrue(os.path.exists(os.path.join(tmpdir, "solutions_N6.csv")))

    def test_max_solutions_override(self):
        output = self.run_main(["--max-solutions", "1", "solve", "8"])
        self.assertIn("1 solution:", output)
        self.assertIn("[1, 5, 8, 6, 3, 7, 2, 4]", output)
        self.assertIn("stopped early", output)

    def test_price_command(self):
        output = self.run_main([
            "price",
            "--shirts", "10",
            "--unit-cost", "5",
            "--front", "2",
            "--shipping", "10",
            "--setup", "20",
            "--markup", "50",
        ])
        self.assertIn(
            "Price per shirt: $18.00 | Total order revenue: $180.00 | "
            "Total order cost: $120.00 | Total profits: $60.00",
            output,
        )

    def test_price_command_rejects_invalid_colors(self):
        with self.assertRaises(SystemExit) as ctx:
            self.run_main(["price", "--shirts", "10", "--unit-cost", "5", "--front", "7"])
        self.assertEqual(ctx.exception.code, 1)

    def test_sweep_command_without_plots(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            output = self.run_main([
                "--out-dir", tmpdir,
                "sweep", "-n", "4-6", "--runs", "1", "--validate", "--no-plots",
            ])
            self.assertTrue(os.path.exists(os.path.join(tmpdir, "sweep_results.csv")))
            self.assertTrue(os.path.exists(os.path.join(tmpdir, "sweep_raw_runs.csv")))
        self.assertIn("N=6: 4 solutions", output)


if __name__ == "__main__":
    unittest.main()
