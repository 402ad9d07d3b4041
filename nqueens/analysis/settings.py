"""Global settings for the N-Queens reporting and analysis pipeline.

This module centralizes tunable constants used across the orchestration code.
Values can be overridden at runtime via the configuration loader in
`nqueens.analysis.cli.apply_configuration` and by command-line flags.
"""
from __future__ import annotations

import multiprocessing
from datetime import datetime
from typing import List, Optional

# Boards up to this size are printed in full; larger ones only report a count
PRINT_THRESHOLD: int = 8

# Search strategy used by solve(): "recursive" or "iterative"
SOLVER_STRATEGY: str = "recursive"

# Per-search wall-clock limit in seconds (None = no limit)
SOLVER_TIME_LIMIT: Optional[float] = None

# Soft cap on stored solutions per search (None = store everything)
MAX_SOLUTIONS: Optional[int] = None

# Board sizes to sweep (in ascending order) for scalability analysis
N_VALUES: List[int] = list(range(1, 13))

# Timed repetitions per N in a sweep (counts are deterministic, times are not)
RUNS_PER_N: int = 3

# Output directory for CSV and charts
OUT_DIR: str = "results_nqueens"

# Number of worker processes for parallel sweeps (leave one core for the OS)
NUM_PROCESSES: int = max(1, multiprocessing.cpu_count() - 1)

# Output naming policy --------------------------------------------------------

# When True, results and plots include a datestamp suffix (e.g., _20261017-142530)
# applied consistently across all artifacts produced within the same run.
DATE_IN_FILENAMES: bool = False

# Unique run identifier used for filename stamping; set once at import time.
RUN_ID: str = datetime.now().strftime("%Y%m%d-%H%M%S")

# Optional run label appended to filenames to avoid overwriting outputs
RUN_TAG: Optional[str] = None


def set_limits(
        time_limit: Optional[float] = None,
        max_solutions: Optional[int] = None,
) -> None:
        """Configure search limits applied by the CLI and sweep runners.

        Parameters
        - time_limit: per-search limit in seconds (None disables the limit).
        - max_solutions: cap on stored solutions per search (None disables).

        Side effects
        - Updates module-level globals and prints a concise summary to stdout to
            make the active limits explicit at run start.
        """
        global SOLVER_TIME_LIMIT, MAX_SOLUTIONS
        if time_limit is not None and time_limit <= 0:
                raise ValueError(f"time_limit must be positive, got {time_limit}")
        if max_solutions is not None and max_solutions < 1:
                raise ValueError(f"max_solutions must be >= 1, got {max_solutions}")
        SOLVER_TIME_LIMIT = time_limit
        MAX_SOLUTIONS = max_solutions

        print("Search limits configured:")
        print(f"   - Time: {SOLVER_TIME_LIMIT}s" if SOLVER_TIME_LIMIT else "   - Time: unlimited")
        print(
                f"   - Stored solutions: {MAX_SOLUTIONS}"
                if MAX_SOLUTIONS
                else "   - Stored solutions: unlimited"
        )
