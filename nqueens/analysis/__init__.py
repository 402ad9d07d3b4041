"""
Analysis and orchestration package for the N-Queens solver.

This package contains:
- settings: global knobs (print threshold, limits, sweep sizes, output naming)
- stats: typed sweep records, summaries and the progress printer
- experiments: sequential and parallel scalability sweeps with validation
- reporting: text rendering policy and CSV exports
- plots: sweep charts and board drawings (imported lazily; needs matplotlib)
- cli: configuration loading, interactive session and argument parser
"""

from . import settings as settings  # re-export for convenience
from .stats import (
    StatsSummary,
    RunRecord,
    SweepEntry,
    SweepResults,
    compute_detailed_statistics,
    ProgressPrinter,
)

__all__ = [
    # types
    "StatsSummary",
    "RunRecord",
    "SweepEntry",
    "SweepResults",
    # utils
    "compute_detailed_statistics",
    "ProgressPrinter",
    # settings module
    "settings",
]
