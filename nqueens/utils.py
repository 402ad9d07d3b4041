"""Utility helpers for the N-Queens project.

This module provides the low-level primitives the solver and the analysis
layer depend upon: the incremental conflict predicate used while searching,
a pair-conflict counter, and a full validity check for finished boards.

Representation
--------------
Boards are encoded as a 1D sequence where ``board[row] = column``. Columns
are 1-based; ``0`` marks a row that has not been assigned yet.
"""

from __future__ import annotations

from collections import Counter
from typing import Sequence


def conflicts(pos: int, depth: int, placement: Sequence[int]) -> bool:
    """Return True if a queen at (``depth``, ``pos``) attacks an earlier row.

    Only rows ``0..depth-1`` are inspected. Two queens attack each other when
    they share a column or when their column distance equals their row
    distance (either diagonal). The scan stops at the first attacking row.
    """
    for row in range(depth):
        placed = placement[row]
        if placed == pos or abs(pos - placed) == depth - row:
            return True
    return False


def count_conflicts(board: Sequence[int]) -> int:
    """Compute the number of attacking queen pairs in O(N).

    Uses counters per column and per diagonal; rows are distinct by
    construction so they never contribute.
    """
    columns: Counter[int] = Counter()
    diag1: Counter[int] = Counter()
    diag2: Counter[int] = Counter()

    for row, column in enumerate(board):
        columns[column] += 1
        diag1[column - row] += 1
        diag2[column + row] += 1

    def _pairs(counter: Counter[int]) -> int:
        total = 0
        for count in counter.values():
            if count > 1:
                total += count * (count - 1) // 2
        return total

    return _pairs(columns) + _pairs(diag1) + _pairs(diag2)


def is_valid_solution(board: Sequence[int]) -> bool:
    """Return True if the board represents a complete N-Queens solution.

    Contract
    - Input: sequence of length N where board[row] = column (1-based)
    - Valid if: all 1 <= column <= N and no pair of queens attacks each other
    """
    n = len(board)
    if n == 0:
        return False
    for column in board:
        if not isinstance(column, int) or isinstance(column, bool):
            return False
        if column < 1 or column > n:
            return False
    return count_conflicts(board) == 0
