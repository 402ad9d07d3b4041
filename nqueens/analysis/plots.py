"""Visualization utilities for sweep outputs and individual solutions.

Charts are written as PNG files into ``out_dir``. Filenames are prefixed by a
two-digit index for stable ordering and carry the optional RUN_TAG / RUN_ID
suffix configured in ``nqueens.analysis.settings``.

Chart map
---------
- 01_solutions_vs_N.png: number of solutions per board size (log scale).
    Sizes with zero solutions (N = 2, 3) are drawn at the floor of the axis.
- 02_time_vs_N_log_scale.png: mean wall-clock time per search (log scale),
    with min/max whiskers across the timed runs.
- 03_nodes_vs_N.png: explored nodes (candidate column tests) per board size.
    Hardware-independent effort proxy.
- 04_nodes_vs_time.png: explored nodes vs mean time with a linear trend.
    Near-linearity means time is dominated by per-node work.
- board_N{n}.png: one solution drawn on a checkerboard (plot_solution_board).
"""
from __future__ import annotations

import os
from typing import List, Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import seaborn as sns  # noqa: E402

from . import settings  # noqa: E402
from .stats import SweepResults  # noqa: E402


def _build_suffix() -> str:
    """Return the filename suffix from RUN_TAG and/or RUN_ID (or empty)."""
    parts: List[str] = []
    run_tag = getattr(settings, "RUN_TAG", None)
    if run_tag:
        parts.append(str(run_tag))
    if getattr(settings, "DATE_IN_FILENAMES", False):
        run_id = getattr(settings, "RUN_ID", None)
        if run_id:
            parts.append(str(run_id))
    return ("_" + "_".join(parts)) if parts else ""


def _save(fname: str, description: str) -> None:
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close()
    print(f"Saved {description}: {fname}")


def plot_sweep(results: SweepResults, n_values: List[int], out_dir: str) -> List[str]:
    """Generate the sweep charts listed in the module docstring.

    Parameters
    ----------
    results : SweepResults
        Per-N entries produced by ``run_sweep`` / ``run_sweep_parallel``.
    n_values : List[int]
        Ordered board sizes to place on the x-axis.
    out_dir : str
        Destination directory; created if missing.

    Returns
    -------
    List[str]
        Paths of the written images.
    """
    os.makedirs(out_dir, exist_ok=True)
    sns.set_theme(style="whitegrid")
    suffix = _build_suffix()
    written: List[str] = []

    counts = [results[n]["solutions"] for n in n_values]
    nodes = [results[n]["nodes"] for n in n_values]
    mean_time = [results[n]["time"].get("mean") or 0.0 for n in n_values]
    min_time = [results[n]["time"].get("min") or 0.0 for n in n_values]
    max_time = [results[n]["time"].get("max") or 0.0 for n in n_values]
    partial = [n for n in n_values if not results[n]["complete"]]

    # 01: solution counts. Zero counts cannot sit on a log axis, clamp to 0.5.
    plt.figure(figsize=(12, 8))
    counts_plot = [max(c, 0.5) for c in counts]
    plt.semilogy(n_values, counts_plot, marker="o", linewidth=2, markersize=8, label="Solutions found")
    expected = [(n, results[n].get("expected")) for n in n_values]
    known = [(n, e) for n, e in expected if e is not None]
    if known:
        plt.semilogy(
            [n for n, _ in known],
            [max(e, 0.5) for _, e in known],
            linestyle="--",
            marker="x",
            linewidth=1,
            label="Known count (A000170)",
        )
    for n, c in zip(n_values, counts):
        plt.annotate(str(c), (n, max(c, 0.5)), textcoords="offset points", xytext=(0, 6), ha="center", fontsize=9)
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Number of solutions (log scale)", fontsize=12)
    title = "Solutions vs Problem Size"
    if partial:
        title += "\n(partial searches: N=" + ", ".join(str(n) for n in partial) + ")"
    plt.title(title, fontsize=14)
    plt.legend(fontsize=11)
    plt.xticks(n_values)
    fname = os.path.join(out_dir, f"01_solutions_vs_N{suffix}.png")
    _save(fname, "solution-count chart")
    written.append(fname)

    # 02: wall-clock time with min/max whiskers.
    plt.figure(figsize=(12, 8))
    mean_plot = np.maximum(np.array(mean_time, dtype=float), 1e-6)
    lower = mean_plot - np.maximum(np.array(min_time, dtype=float), 1e-6)
    upper = np.maximum(np.array(max_time, dtype=float), 1e-6) - mean_plot
    plt.errorbar(
        n_values,
        mean_plot,
        yerr=[np.clip(lower, 0, None), np.clip(upper, 0, None)],
        marker="o",
        linewidth=2,
        markersize=8,
        capsize=4,
        label="Backtracking",
    )
    plt.yscale("log")
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Mean time per search [s] (log scale)", fontsize=12)
    plt.title("Execution Time vs Problem Size\n(min/max over timed runs)", fontsize=14)
    plt.legend(fontsize=11)
    plt.xticks(n_values)
    fname = os.path.join(out_dir, f"02_time_vs_N_log_scale{suffix}.png")
    _save(fname, "execution-time chart (log scale)")
    written.append(fname)

    # 03: explored nodes.
    plt.figure(figsize=(12, 8))
    plt.semilogy(n_values, [max(v, 1) for v in nodes], marker="s", linewidth=2, markersize=8, label="Nodes explored")
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Candidate placements tested (log scale)", fontsize=12)
    plt.title("Logical Cost vs Problem Size", fontsize=14)
    plt.legend(fontsize=11)
    plt.xticks(n_values)
    fname = os.path.join(out_dir, f"03_nodes_vs_N{suffix}.png")
    _save(fname, "logical-cost chart")
    written.append(fname)

    # 04: nodes vs time with a linear trend (needs two distinct x values).
    plt.figure(figsize=(12, 8))
    plt.scatter(nodes, mean_time, s=60, alpha=0.8, label="Board sizes")
    for n, x, y in zip(n_values, nodes, mean_time):
        plt.annotate(f"N={n}", (x, y), textcoords="offset points", xytext=(5, 5), fontsize=9)
    if len(set(nodes)) > 1:
        z = np.polyfit(nodes, mean_time, 1)
        p = np.poly1d(z)
        x_trend = np.linspace(min(nodes), max(nodes), 100)
        plt.plot(x_trend, p(x_trend), "r--", alpha=0.8, label=f"Trend: {z[0]:.2e} s/node")
    plt.xlabel("Nodes explored", fontsize=12)
    plt.ylabel("Mean time [s]", fontsize=12)
    plt.title("Theoretical vs Practical Cost", fontsize=14)
    plt.legend(fontsize=11)
    fname = os.path.join(out_dir, f"04_nodes_vs_time{suffix}.png")
    _save(fname, "nodes-vs-time chart")
    written.append(fname)

    return written


def plot_solution_board(solution: Sequence[int], out_path: str) -> str:
    """Draw a single solution on a checkerboard and save it to ``out_path``.

    ``solution[row]`` is the 1-based column of the queen in that row; row 0
    is drawn at the top.
    """
    n = len(solution)
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)

    board = np.indices((n, n)).sum(axis=0) % 2
    size = max(3.0, min(0.6 * n, 12.0))
    fig, ax = plt.subplots(figsize=(size, size))
    ax.imshow(board, cmap="Greys", vmin=-1, vmax=3)
    for row, column in enumerate(solution):
        ax.text(column - 1, row, "♛", ha="center", va="center", fontsize=max(8, 220 // n), color="darkred")
    ax.set_xticks(range(n))
    ax.set_xticklabels([str(c) for c in range(1, n + 1)])
    ax.set_yticks(range(n))
    ax.set_yticklabels([str(r) for r in range(1, n + 1)])
    ax.set_title("[" + ", ".join(str(c) for c in solution) + "]")
    fig.savefig(out_path, bbox_inches="tight", dpi=150)
    plt.close(fig)
    print(f"Saved board drawing: {out_path}")
    return out_path
