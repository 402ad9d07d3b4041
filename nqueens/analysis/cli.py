"""Command-line interface and high-level pipelines for the N-Queens solver.

This module wires together configuration loading, the interactive
request/response session, one-shot solving, scalability sweeps and the order
pricing calculator. It isolates I/O, argument parsing and progress reporting
from the core algorithmic modules so that the rest of the codebase remains
easy to test programmatically.
"""
from __future__ import annotations

import argparse
import os
import signal
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional

from . import settings
from .experiments import run_sweep, run_sweep_parallel
from .reporting import (
    render_solution_set,
    save_raw_runs_to_csv,
    save_solutions_to_csv,
    save_sweep_to_csv,
)
from config_manager import ConfigManager
from nqueens.backtracking import STRATEGIES, SolutionSet, StopCheck, solve
from nqueens.pricing import quote_order

DEFAULT_CONFIG = "config.json"

Output = Callable[[str], None]


# ------------- Utils --------------------------------------------------------

def parse_n_values(n_args: Optional[List[str]]) -> Optional[List[int]]:
    """Normalize board-size CLI inputs into a sorted list of unique sizes.

    Accepts repeated flags (``-n 4 -n 8``), comma-separated lists
    (``-n 4,5,6``) and inclusive ranges (``-n 1-12``). Returns ``None`` when
    nothing is provided so callers can fall back to ``settings.N_VALUES``.
    """
    if not n_args:
        return None
    selected: List[int] = []
    for entry in n_args:
        for token in entry.split(","):
            token = token.strip()
            if not token:
                continue
            if "-" in token:
                low, high = (int(part) for part in token.split("-", 1))
                selected.extend(range(low, high + 1))
            else:
                selected.append(int(token))
    invalid = [n for n in selected if n < 1]
    if invalid:
        raise ValueError("Board sizes must be positive: " + ", ".join(str(n) for n in invalid))
    return sorted(set(selected)) or None


def apply_configuration(config_path: str) -> ConfigManager:
    """Load configuration and apply it to the global ``settings`` module.

    Raises ``FileNotFoundError`` for a missing file and ``ValueError`` for
    values outside their allowed range.
    """
    config_mgr = ConfigManager(config_path)

    solver_settings = config_mgr.get_solver_settings()
    if solver_settings:
        strategy = solver_settings.get("strategy", settings.SOLVER_STRATEGY)
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown strategy '{strategy}'. Allowed: {', '.join(STRATEGIES)}")
        settings.SOLVER_STRATEGY = strategy
        settings.set_limits(
            time_limit=solver_settings.get("time_limit", settings.SOLVER_TIME_LIMIT),
            max_solutions=solver_settings.get("max_solutions", settings.MAX_SOLUTIONS),
        )

    reporting_settings = config_mgr.get_reporting_settings()
    if reporting_settings:
        threshold = int(reporting_settings.get("print_threshold", settings.PRINT_THRESHOLD))
        if threshold < 1:
            raise ValueError(f"print_threshold must be >= 1, got {threshold}")
        settings.PRINT_THRESHOLD = threshold
        settings.OUT_DIR = reporting_settings.get("output_dir", settings.OUT_DIR)
        settings.RUN_TAG = reporting_settings.get("run_tag", settings.RUN_TAG)
        settings.DATE_IN_FILENAMES = bool(reporting_settings.get("date_in_filenames", settings.DATE_IN_FILENAMES))

    experiment_settings = config_mgr.get_experiment_settings()
    if experiment_settings:
        n_values = [int(n) for n in experiment_settings.get("N_values", settings.N_VALUES)]
        if any(n < 1 for n in n_values):
            raise ValueError("experiment_settings.N_values must contain positive sizes only")
        settings.N_VALUES = n_values
        settings.RUNS_PER_N = int(experiment_settings.get("runs", settings.RUNS_PER_N))

    return config_mgr


def apply_overrides(args: argparse.Namespace) -> None:
    """Apply global command-line flags on top of the configuration."""
    if args.strategy is not None:
        settings.SOLVER_STRATEGY = args.strategy
    if args.threshold is not None:
        if args.threshold < 1:
            raise ValueError(f"--threshold must be >= 1, got {args.threshold}")
        settings.PRINT_THRESHOLD = args.threshold
    if args.out_dir is not None:
        settings.OUT_DIR = args.out_dir
    if args.time_limit is not None or args.max_solutions is not None:
        settings.set_limits(
            time_limit=args.time_limit if args.time_limit is not None else settings.SOLVER_TIME_LIMIT,
            max_solutions=args.max_solutions if args.max_solutions is not None else settings.MAX_SOLUTIONS,
        )


@contextmanager
def interrupt_stops_search() -> Iterator[StopCheck]:
    """Turn Ctrl-C into a cooperative stop request for the enclosed search.

    Yields a stop check suitable for ``solve(should_stop=...)``. The previous
    SIGINT handler is restored on exit. Outside the main thread signals cannot
    be installed and the check simply never fires.
    """
    stop_event = threading.Event()

    if threading.current_thread() is not threading.main_thread():
        yield stop_event.is_set
        return

    def _handler(signum, frame):
        stop_event.set()

    previous = signal.signal(signal.SIGINT, _handler)
    try:
        yield stop_event.is_set
    finally:
        signal.signal(signal.SIGINT, previous)


def solve_and_report(n: int, out: Output = print, should_stop: Optional[StopCheck] = None) -> SolutionSet:
    """Solve one board size with the configured limits and print its report."""
    solution_set = solve(
        n,
        strategy=settings.SOLVER_STRATEGY,
        should_stop=should_stop,
        time_limit=settings.SOLVER_TIME_LIMIT,
        max_solutions=settings.MAX_SOLUTIONS,
    )
    for line in render_solution_set(solution_set, settings.PRINT_THRESHOLD):
        out(line)
    return solution_set


# ------------- Interactive session ------------------------------------------

def run_session(lines: Iterable[str], out: Output = print, interruptible: bool = False) -> int:
    """Drive the request/response loop over ``lines``.

    Each positive integer is solved and reported; the first non-positive
    integer (or the end of ``lines``) ends the session. Lines that are not
    integers are reported and skipped. Returns the number of boards solved.
    """
    solved = 0
    for raw in lines:
        text = raw.strip()
        if not text:
            continue
        try:
            n = int(text)
        except ValueError:
            out(f"Invalid input '{text}': enter a whole number (0 or less to quit).")
            continue
        if n <= 0:
            break

        if interruptible:
            with interrupt_stops_search() as should_stop:
                solution_set = solve_and_report(n, out, should_stop)
        else:
            solution_set = solve_and_report(n, out)
        solution_set.clear()
        solved += 1
    return solved


def _stdin_lines(prompt: str = "Enter number of queens: ") -> Iterator[str]:
    while True:
        try:
            yield input(prompt)
        except EOFError:
            return


# ------------- Commands ------------------------------------------------------

def cmd_session(args: argparse.Namespace) -> None:
    run_session(_stdin_lines(), interruptible=True)


def cmd_solve(args: argparse.Namespace) -> None:
    """Solve each requested size; a non-positive size ends the list."""
    for n in args.sizes:
        if n <= 0:
            break
        print(f"=== N = {n} ===")
        with interrupt_stops_search() as should_stop:
            solution_set = solve_and_report(n, should_stop=should_stop)
        if args.csv:
            save_solutions_to_csv(solution_set, settings.OUT_DIR)
        if args.board and solution_set.size() > 0:
            from .plots import plot_solution_board  # local import to avoid heavy import if unused

            plot_solution_board(solution_set[0], os.path.join(settings.OUT_DIR, f"board_N{n}.png"))


def cmd_sweep(args: argparse.Namespace) -> None:
    """Run the scalability sweep, export CSV files and draw charts."""
    n_values = parse_n_values(args.n_values) or settings.N_VALUES
    runs = args.runs if args.runs is not None else settings.RUNS_PER_N
    os.makedirs(settings.OUT_DIR, exist_ok=True)

    print("\n============================================")
    print(f"{args.mode.upper()} SWEEP, strategy={settings.SOLVER_STRATEGY}, runs={runs}")
    print("============================================")

    runner = run_sweep if args.mode == "sequential" else run_sweep_parallel
    results = runner(
        n_values,
        runs=runs,
        strategy=settings.SOLVER_STRATEGY,
        time_limit=settings.SOLVER_TIME_LIMIT,
        validate=args.validate,
        progress_label="Sweep",
    )

    save_sweep_to_csv(results, n_values, settings.OUT_DIR)
    save_raw_runs_to_csv(results, n_values, settings.OUT_DIR)

    if not args.no_plots:
        from .plots import plot_sweep  # local import to avoid heavy import if unused

        plot_sweep(results, n_values, settings.OUT_DIR)


def format_quote(quote) -> str:
    return (
        f"Price per shirt: ${quote.unit_price:.2f}"
        f" | Total order revenue: ${quote.total_revenue:.2f}"
        f" | Total order cost: ${quote.total_cost:.2f}"
        f" | Total profits: ${quote.profit:.2f}"
    )


def cmd_price(args: argparse.Namespace) -> None:
    """Quote an order once per requested markup."""
    for markup in args.markup or [0.0]:
        quote = quote_order(
            args.shirts,
            args.unit_cost,
            args.front,
            args.back,
            args.shipping,
            args.setup,
            markup,
        )
        print(f"Markup {markup:g}%: " + format_quote(quote))


# ------------- Quick regression --------------------------------------------

def run_quick_regression_tests() -> None:
    """Fast end-to-end checks of solver, reporting, sweep and pricing."""
    print("Running quick regression tests...")

    for strategy in STRATEGIES:
        eight = solve(8, strategy=strategy)
        if eight.size() != 92 or not eight.complete:
            raise AssertionError(f"{strategy} search found {eight.size()} solutions for N=8, expected 92.")
        print(f"  {strategy}: 92 solutions for N=8 in {eight.elapsed:.4f}s ({eight.nodes_explored} nodes)")

    report = render_solution_set(solve(4), threshold=8)
    if report != ["2 solutions:", "[2, 4, 1, 3]", "[3, 1, 4, 2]"]:
        raise AssertionError(f"Unexpected N=4 report: {report}")
    print("  Report for N=4 matches the reference output")

    results = run_sweep([4, 5, 6], runs=1, validate=True, progress_label="Quick regression sweep")

    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(save_sweep_to_csv(results, [4, 5, 6], tmpdir))
        if not csv_path.exists() or csv_path.stat().st_size == 0:
            raise AssertionError("Sweep CSV was not generated successfully during quick tests.")

    quote = quote_order(10, 5.0, 2, 0, 10.0, 20.0, 50.0)
    if abs(quote.total_cost - 120.0) > 1e-9 or abs(quote.profit - 60.0) > 1e-9:
        raise AssertionError(f"Unexpected pricing quote: {quote}")
    print("  Pricing quote matches the reference values")

    print("Quick regression tests passed.")


# ------------- CLI wiring --------------------------------------------------

def build_arg_parser():
    """Construct the argument parser for the CLI entry point."""
    parser = argparse.ArgumentParser(description="Enumerate N-Queens solutions, run sweeps and price orders.")
    parser.add_argument("--config", default=None, help=f"Path to configuration file (default: {DEFAULT_CONFIG} if present).")
    parser.add_argument("--strategy", choices=STRATEGIES, default=None, help="Search strategy (default from configuration: recursive).")
    parser.add_argument("--time-limit", type=float, default=None, help="Per-search time limit in seconds.")
    parser.add_argument("--max-solutions", type=int, default=None, help="Stop each search after storing this many solutions.")
    parser.add_argument("--threshold", type=int, default=None, help="Largest N whose solutions are printed in full (default: 8).")
    parser.add_argument("--out-dir", default=None, help="Directory for CSV files and charts.")
    parser.add_argument("--quick-test", action="store_true", help="Run quick regression tests and exit.")

    subparsers = parser.add_subparsers(dest="command")

    session = subparsers.add_parser("session", help="Interactive loop: enter N, 0 or less to quit (default).")
    session.set_defaults(func=cmd_session)

    solve_parser = subparsers.add_parser("solve", help="Solve the given board sizes.")
    solve_parser.add_argument("sizes", type=int, nargs="+", help="Board sizes; a non-positive size ends the list.")
    solve_parser.add_argument("--csv", action="store_true", help="Export the solutions of each size to CSV.")
    solve_parser.add_argument("--board", action="store_true", help="Draw the first solution of each size as PNG.")
    solve_parser.set_defaults(func=cmd_solve)

    sweep = subparsers.add_parser("sweep", help="Time the solver over a range of board sizes.")
    sweep.add_argument(
        "--n-values",
        "-n",
        action="append",
        help="Board sizes (comma-separated, ranges like 1-12, or multiple flags). Default from configuration.",
    )
    sweep.add_argument("--runs", type=int, default=None, help="Timed runs per board size.")
    sweep.add_argument(
        "--mode",
        choices=["sequential", "parallel"],
        default="sequential",
        help="Sequential (default, cleanest timings) or one process per board size.",
    )
    sweep.add_argument("--validate", action="store_true", help="Check counts and solutions against known values (extra assertions).")
    sweep.add_argument("--no-plots", action="store_true", help="Skip chart generation.")
    sweep.set_defaults(func=cmd_sweep)

    price = subparsers.add_parser("price", help="Quote a t-shirt printing order.")
    price.add_argument("--shirts", type=int, required=True, help="Number of shirts (positive integer).")
    price.add_argument("--unit-cost", type=float, required=True, help="Cost per blank shirt ($).")
    price.add_argument("--front", type=int, default=0, help="Colors on the front print (0-3).")
    price.add_argument("--back", type=int, default=0, help="Colors on the back print (0-3).")
    price.add_argument("--shipping", type=float, default=0.0, help="Shipping cost ($).")
    price.add_argument("--setup", type=float, default=0.0, help="Setup cost ($).")
    price.add_argument("--markup", type=float, action="append", help="Markup percentage; repeat to compare several.")
    price.set_defaults(func=cmd_price)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point: parse arguments and dispatch to the chosen command."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.quick_test:
        run_quick_regression_tests()
        return

    config_path = args.config
    if config_path is None and Path(DEFAULT_CONFIG).exists():
        config_path = DEFAULT_CONFIG

    try:
        if config_path is not None:
            apply_configuration(config_path)
            print(f"Using configuration: {config_path}")
        apply_overrides(args)
    except FileNotFoundError as exc:
        print(f"Configuration file not found: {exc}")
        raise SystemExit(1) from exc
    except ValueError as exc:
        print(f"Configuration error: {exc}")
        raise SystemExit(1) from exc

    command = getattr(args, "func", cmd_session)
    try:
        command(args)
    except KeyboardInterrupt:
        print("\nExecution interrupted by user.")
        raise SystemExit(130) from None
    except ValueError as exc:
        print(f"Execution error: {exc}")
        raise SystemExit(1) from exc
