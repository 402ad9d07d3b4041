"""Text rendering and CSV export for solver outputs.

Small boards are reported in full (one line per solution), larger ones only
by their solution count; the cut-off is ``settings.PRINT_THRESHOLD``. CSV
helpers materialize full solution lists and per-N sweep summaries for
downstream analysis or spreadsheet inspection.
"""
from __future__ import annotations

import csv
import os
from typing import List, Optional, Sequence

from . import settings
from .stats import SweepResults
from nqueens.backtracking import SolutionSet


def format_solution(solution: Sequence[int]) -> str:
    """Render a solution as its bracketed column list, e.g. ``[2, 4, 1, 3]``."""
    return "[" + ", ".join(str(column) for column in solution) + "]"


def _count_phrase(count: int) -> str:
    return f"{count} solution" if count == 1 else f"{count} solutions"


def render_solution_set(solution_set: SolutionSet, threshold: Optional[int] = None) -> List[str]:
    """Return the report lines for one board size.

    Boards with ``n <= threshold`` list every solution after a
    ``"<count> solutions:"`` header; larger boards get a single
    ``"<count> solutions."`` sentence. A partial set (cancelled, timed out or
    capped search) gets a trailing note.
    """
    if threshold is None:
        threshold = settings.PRINT_THRESHOLD

    count = solution_set.size()
    if solution_set.n <= threshold:
        lines = [_count_phrase(count) + ":"]
        lines.extend(format_solution(solution) for solution in solution_set)
    else:
        lines = [_count_phrase(count) + "."]

    if not solution_set.complete:
        lines.append(f"(search for N={solution_set.n} stopped early; results are partial)")
    return lines


def _build_suffix() -> str:
    """Build an optional filename suffix from RUN_TAG and RUN_ID.

    Returns an empty string if no suffixing is configured.
    """
    parts: List[str] = []
    run_tag = getattr(settings, "RUN_TAG", None)
    if run_tag:
        parts.append(str(run_tag))
    if getattr(settings, "DATE_IN_FILENAMES", False):
        run_id = getattr(settings, "RUN_ID", None)
        if run_id:
            parts.append(str(run_id))
    return ("_" + "_".join(parts)) if parts else ""


def save_solutions_to_csv(solution_set: SolutionSet, out_dir: str) -> str:
    """Write every solution of a set to ``solutions_N{n}.csv``.

    One row per solution: ``index`` (1-based discovery order) followed by the
    column of the queen in each row. Returns the file path.
    """
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"solutions_N{solution_set.n}{_build_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["index"] + [f"row_{row}" for row in range(1, solution_set.n + 1)])
        for index, solution in enumerate(solution_set, start=1):
            writer.writerow([index, *solution])

    print(f"Saved {solution_set.size()} solutions: {filename}")
    return filename


def save_sweep_to_csv(results: SweepResults, n_values: List[int], out_dir: str) -> str:
    """Write compact per-N sweep metrics to ``sweep_results.csv``.

    Column names follow lowercase snake_case. Time statistics are computed
    over all timed runs for that N. Returns the file path.
    """
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"sweep_results{_build_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "n",
            "solutions",
            "expected_solutions",
            "matches_expected",
            "complete",
            "nodes_explored",
            "runs",
            "time_mean_seconds",
            "time_median_seconds",
            "time_std_seconds",
            "time_min_seconds",
            "time_max_seconds",
        ])

        for n in n_values:
            entry = results[n]
            time_stats = entry.get("time", {})
            matches = entry.get("matches_expected")
            writer.writerow([
                n,
                entry["solutions"],
                "" if entry.get("expected") is None else entry["expected"],
                "" if matches is None else int(matches),
                int(entry["complete"]),
                entry["nodes"],
                entry.get("total_runs", 0),
                time_stats.get("mean"),
                time_stats.get("median"),
                time_stats.get("std"),
                time_stats.get("min"),
                time_stats.get("max"),
            ])

    print(f"Saved sweep summary: {filename}")
    return filename


def save_raw_runs_to_csv(results: SweepResults, n_values: List[int], out_dir: str) -> str:
    """Write every timed run of a sweep to ``sweep_raw_runs.csv``."""
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"sweep_raw_runs{_build_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["n", "run", "solutions", "nodes_explored", "complete", "time_seconds"])
        for n in n_values:
            for run, record in enumerate(results[n].get("raw_runs", []), start=1):
                writer.writerow([
                    n,
                    run,
                    record["solutions"],
                    record["nodes"],
                    int(record["complete"]),
                    record["time"],
                ])

    print(f"Saved raw sweep runs: {filename}")
    return filename
