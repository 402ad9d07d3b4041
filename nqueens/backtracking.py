"""Exhaustive backtracking enumeration for the N-Queens problem.

This module places N non-attacking queens on an N x N board, one queen per
row, and enumerates every valid placement depth-first. Two interchangeable
search strategies are provided:

- ``"recursive"``: the classic set / recurse / unset formulation. The
    tentative placement is bracketed by a context manager so the undo step
    always runs, even when the traversal is abandoned part-way.
- ``"iterative"``: the same traversal driven by an explicit stack of decision
    frames, avoiding Python recursion entirely.

Both strategies produce identical solutions in identical order.

Public entry points
-------------------
- solve(n, ...): collect every solution into a ``SolutionSet``.
- iter_solutions(n, ...): stream solutions as they are discovered.
- count_solutions(n, ...): count solutions without storing them.
- search_statistics(n, ...): count plus nodes explored, completeness, timing.
- first_solution(n, ...): the first solution in enumeration order, or None.

Representation
--------------
- Placement: a list of length ``n`` where ``placement[row] = column``; columns
    are 1-based and ``0`` means the row is still unassigned. Rows below the
    current depth hold pairwise non-attacking columns; the others hold 0.
- Solution: an immutable ``tuple`` snapshot of a complete placement. It never
    aliases the live placement mutated by the search.

Ordering
--------
Rows are assigned top to bottom and, within a row, columns are tried in
ascending order 1..n. Solutions are therefore emitted in lexicographic order.

Cancellation and limits
-----------------------
- ``should_stop``: optional zero-argument callable checked at the top of each
    recursive call (each frame push for the iterative strategy). Returning True
    abandons the traversal; ``solve`` then returns the solutions found so far
    with ``complete=False``.
- ``time_limit``: wall-clock budget in seconds, implemented as a deadline
    check folded into ``should_stop``.
- ``max_solutions``: soft cap on the number of stored solutions.

Nodes explored
--------------
Incremented each time a candidate column is tested against the conflict
predicate, whether or not it is accepted. This is a hardware-independent
proxy of search effort.
"""

from __future__ import annotations

import logging
from contextlib import closing, contextmanager
from dataclasses import dataclass, field
from time import perf_counter
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from .utils import conflicts

logger = logging.getLogger(__name__)

Solution = Tuple[int, ...]
StopCheck = Callable[[], bool]

STRATEGIES = ("recursive", "iterative")


class _SearchAborted(Exception):
    """Raised inside a search when the stop check fires."""


@dataclass
class SolutionSet:
    """Ordered collection of the solutions found for one board size.

    Solutions are kept in discovery order. ``complete`` is False when the
    search was cancelled, ran out of time, or hit ``max_solutions``; the set
    then holds a prefix of the full enumeration.
    """

    n: int
    solutions: List[Solution] = field(default_factory=list)
    complete: bool = True
    nodes_explored: int = 0
    elapsed: float = 0.0

    def append(self, solution: Solution) -> None:
        self.solutions.append(tuple(solution))

    def size(self) -> int:
        return len(self.solutions)

    def clear(self) -> None:
        self.solutions.clear()

    def __len__(self) -> int:
        return len(self.solutions)

    def __iter__(self) -> Iterator[Solution]:
        return iter(self.solutions)

    def __getitem__(self, index: int) -> Solution:
        return self.solutions[index]


@dataclass
class SearchStats:
    """Outcome of a counting search (no solutions stored)."""

    n: int
    solutions: int
    nodes_explored: int
    complete: bool
    elapsed: float


@dataclass
class _SearchState:
    """Mutable state shared by one traversal."""

    n: int
    placement: List[int]
    should_stop: Optional[StopCheck] = None
    nodes: int = 0

    def check_stop(self) -> None:
        if self.should_stop is not None and self.should_stop():
            raise _SearchAborted()


@dataclass
class _Frame:
    """Explicit-stack frame: the row being assigned and its next column."""

    row: int
    next_column: int = 1


@contextmanager
def _placed(placement: List[int], depth: int, pos: int) -> Iterator[None]:
    """Tentatively place a queen at (depth, pos); always undo on exit."""
    placement[depth] = pos
    try:
        yield
    finally:
        placement[depth] = 0


def _recursive_search(state: _SearchState, depth: int = 0) -> Iterator[Solution]:
    state.check_stop()
    if depth == state.n:
        yield tuple(state.placement)
        return

    for pos in range(1, state.n + 1):
        state.nodes += 1
        if not conflicts(pos, depth, state.placement):
            with _placed(state.placement, depth, pos):
                yield from _recursive_search(state, depth + 1)


def _iterative_search(state: _SearchState) -> Iterator[Solution]:
    n = state.n
    placement = state.placement
    state.check_stop()
    stack: List[_Frame] = [_Frame(0)]

    while stack:
        frame = stack[-1]
        row = frame.row

        if row == n:
            yield tuple(placement)
            stack.pop()
            continue

        # Undo the previous choice for this row before trying the next column.
        placement[row] = 0

        advanced = False
        while frame.next_column <= n:
            pos = frame.next_column
            frame.next_column += 1
            state.nodes += 1
            if not conflicts(pos, row, placement):
                placement[row] = pos
                state.check_stop()
                stack.append(_Frame(row + 1))
                advanced = True
                break

        if not advanced:
            stack.pop()


_SEARCHES: Dict[str, Callable[[_SearchState], Iterator[Solution]]] = {
    "recursive": _recursive_search,
    "iterative": _iterative_search,
}


def _select_search(strategy: str) -> Callable[[_SearchState], Iterator[Solution]]:
    try:
        return _SEARCHES[strategy]
    except KeyError:
        raise ValueError(
            f"Unknown search strategy '{strategy}'. Allowed: {', '.join(STRATEGIES)}"
        ) from None


def _with_deadline(should_stop: Optional[StopCheck], time_limit: Optional[float]) -> Optional[StopCheck]:
    """Fold an optional wall-clock budget into the stop check."""
    if time_limit is None:
        return should_stop
    deadline = perf_counter() + time_limit

    def check() -> bool:
        if perf_counter() > deadline:
            return True
        return should_stop is not None and should_stop()

    return check


def _new_state(n: int, should_stop: Optional[StopCheck]) -> _SearchState:
    if n < 1:
        raise ValueError(f"Board size must be >= 1, got {n}")
    return _SearchState(n=n, placement=[0] * n, should_stop=should_stop)


def solve(
    n: int,
    *,
    strategy: str = "recursive",
    should_stop: Optional[StopCheck] = None,
    time_limit: Optional[float] = None,
    max_solutions: Optional[int] = None,
) -> SolutionSet:
    """Enumerate every N-Queens solution for an ``n`` x ``n`` board.

    Parameters
    ----------
    n : int
        Board size (n >= 1).
    strategy : {"recursive", "iterative"}
        Traversal implementation; results and order are identical.
    should_stop : callable | None
        Cooperative cancellation hook, see module docstring.
    time_limit : float | None
        Optional wall-clock limit in seconds.
    max_solutions : int | None
        Optional cap on stored solutions (>= 1).

    Returns
    -------
    SolutionSet
        Solutions in ascending column-choice order, plus ``complete``,
        ``nodes_explored`` and ``elapsed`` metadata.

    Raises
    ------
    ValueError
        If ``n < 1``, ``max_solutions < 1`` or the strategy is unknown.
    """
    if max_solutions is not None and max_solutions < 1:
        raise ValueError(f"max_solutions must be >= 1, got {max_solutions}")
    search = _select_search(strategy)
    state = _new_state(n, _with_deadline(should_stop, time_limit))
    result = SolutionSet(n)
    start = perf_counter()

    try:
        with closing(search(state)) as solutions:
            for solution in solutions:
                result.append(solution)
                if max_solutions is not None and result.size() >= max_solutions:
                    logger.debug("Search for n=%d capped at %d solutions", n, max_solutions)
                    result.complete = False
                    break
    except _SearchAborted:
        logger.debug("Search for n=%d stopped after %d solutions", n, result.size())
        result.complete = False

    result.nodes_explored = state.nodes
    result.elapsed = perf_counter() - start
    return result


def iter_solutions(
    n: int,
    *,
    strategy: str = "recursive",
    should_stop: Optional[StopCheck] = None,
) -> Iterator[Solution]:
    """Yield solutions one at a time, in enumeration order.

    Nothing is accumulated, so memory stays bounded by the search depth.
    When ``should_stop`` fires the iterator simply ends.
    """
    search = _select_search(strategy)
    state = _new_state(n, should_stop)
    try:
        yield from search(state)
    except _SearchAborted:
        logger.debug("Streaming search for n=%d stopped", n)


def search_statistics(
    n: int,
    *,
    strategy: str = "recursive",
    should_stop: Optional[StopCheck] = None,
    time_limit: Optional[float] = None,
) -> SearchStats:
    """Run a full search counting solutions instead of storing them."""
    search = _select_search(strategy)
    state = _new_state(n, _with_deadline(should_stop, time_limit))
    count = 0
    complete = True
    start = perf_counter()

    try:
        for _ in search(state):
            count += 1
    except _SearchAborted:
        logger.debug("Counting search for n=%d stopped after %d solutions", n, count)
        complete = False

    return SearchStats(
        n=n,
        solutions=count,
        nodes_explored=state.nodes,
        complete=complete,
        elapsed=perf_counter() - start,
    )


def count_solutions(
    n: int,
    *,
    strategy: str = "recursive",
    should_stop: Optional[StopCheck] = None,
    time_limit: Optional[float] = None,
) -> int:
    """Return the number of solutions (a lower bound if the search stopped)."""
    return search_statistics(
        n, strategy=strategy, should_stop=should_stop, time_limit=time_limit
    ).solutions


def first_solution(n: int, *, strategy: str = "recursive") -> Optional[Solution]:
    """Return the lexicographically first solution, or None if none exists."""
    with closing(iter_solutions(n, strategy=strategy)) as solutions:
        return next(solutions, None)
