"""Tests for the backtracking enumerator."""

from itertools import combinations
from pathlib import Path
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nqueens.backtracking import (
    STRATEGIES,
    SolutionSet,
    _placed,
    count_solutions,
    first_solution,
    iter_solutions,
    search_statistics,
    solve,
)

KNOWN_COUNTS = {1: 1, 2: 0, 3: 0, 4: 2, 5: 10, 6: 4, 7: 40, 8: 92}


class SolveCountsTests(unittest.TestCase):
    """Completeness against the known sequence of solution counts."""

    def test_known_counts_for_both_strategies(self):
        for strategy in STRATEGIES:
            for n, expected in KNOWN_COUNTS.items():
                with self.subTest(strategy=strategy, n=n):
                    result = solve(n, strategy=strategy)
                    self.assertEqual(result.size(), expected)
                    self.assertEqual(len(result), expected)
                    self.assertTrue(result.complete)

    def test_count_solutions_matches_solve(self):
        self.assertEqual(count_solutions(8), 92)
        self.assertEqual(count_solutions(9, strategy="iterative"), 352)

    def test_boundaries(self):
        self.assertEqual(solve(1).solutions, [(1,)])
        self.assertEqual(solve(2).size(), 0)
        self.assertEqual(solve(3).size(), 0)

    def test_four_queens_in_ascending_order(self):
        self.assertEqual(solve(4).solutions, [(2, 4, 1, 3), (3, 1, 4, 2)])

    def test_rejects_invalid_arguments(self):
        with self.assertRaises(ValueError):
            solve(0)
        with self.assertRaises(ValueError):
            solve(-3)
        with self.assertRaises(ValueError):
            solve(4, strategy="bogus")
        with self.assertRaises(ValueError):
            solve(4, max_solutions=0)
        with self.assertRaises(ValueError):
            list(iter_solutions(0))


class SolutionPropertiesTests(unittest.TestCase):
    """Correctness, ordering and isolation of recorded solutions."""

    def test_no_two_queens_attack(self):
        for n in range(1, 9):
            for solution in solve(n):
                self.assertEqual(sorted(solution), list(range(1, n + 1)))
                for i, j in combinations(range(n), 2):
                    self.assertNotEqual(solution[i], solution[j])
                    self.assertNotEqual(abs(solution[i] - solution[j]), abs(i - j))

    def test_enumeration_is_lexicographic_and_repeatable(self):
        first = solve(7).solutions
        second = solve(7).solutions
        self.assertEqual(first, second)
        self.assertEqual(first, sorted(first))
        self.assertEqual(len(set(first)), len(first))

    def test_strategies_agree_on_order_and_effort(self):
        for n in range(1, 9):
            with self.subTest(n=n):
                recursive = solve(n, strategy="recursive")
                iterative = solve(n, strategy="iterative")
                self.assertEqual(recursive.solutions, iterative.solutions)
                self.assertEqual(recursive.nodes_explored, iterative.nodes_explored)

    def test_first_solution(self):
        self.assertEqual(first_solution(8), (1, 5, 8, 6, 3, 7, 2, 4))
        self.assertEqual(first_solution(8, strategy="iterative"), (1, 5, 8, 6, 3, 7, 2, 4))
        self.assertIsNone(first_solution(3))

    def test_recorded_solution_does_not_alias_source_buffer(self):
        solution_set = SolutionSet(4)
        buffer = [2, 4, 1, 3]
        solution_set.append(buffer)
        buffer[0] = 0
        buffer[1] = 0
        self.assertEqual(solution_set[0], (2, 4, 1, 3))

    def test_streamed_solutions_survive_continued_search(self):
        stream = iter_solutions(6)
        first = next(stream)
        snapshot = list(first)
        rest = list(stream)
        self.assertEqual(list(first), snapshot)
        self.assertEqual([first] + rest, solve(6).solutions)

    def test_clear_empties_the_set(self):
        result = solve(5)
        result.clear()
        self.assertEqual(result.size(), 0)
        self.assertEqual(list(result), [])


class CancellationTests(unittest.TestCase):
    """Cooperative stop, time limit and solution cap."""

    def test_immediate_stop_returns_empty_partial_set(self):
        result = solve(8, should_stop=lambda: True)
        self.assertFalse(result.complete)
        self.assertEqual(result.size(), 0)

    def test_stop_after_some_calls_keeps_a_prefix(self):
        full = solve(8).solutions
        for strategy in STRATEGIES:
            calls = {"count": 0}

            def should_stop():
                calls["count"] += 1
                return calls["count"] > 300

            partial = solve(8, strategy=strategy, should_stop=should_stop)
            self.assertFalse(partial.complete)
            self.assertLess(partial.size(), len(full))
            self.assertEqual(partial.solutions, full[:partial.size()])

    def test_stop_hook_never_firing_changes_nothing(self):
        self.assertEqual(solve(6, should_stop=lambda: False).solutions, solve(6).solutions)

    def test_streaming_stop_ends_iteration(self):
        self.assertEqual(list(iter_solutions(8, should_stop=lambda: True)), [])

    def test_max_solutions_caps_the_set(self):
        full = solve(8).solutions
        capped = solve(8, max_solutions=5)
        self.assertEqual(capped.solutions, full[:5])
        self.assertFalse(capped.complete)

    def test_time_limit(self):
        generous = solve(8, time_limit=60.0)
        self.assertTrue(generous.complete)
        self.assertEqual(generous.size(), 92)

        stats = search_statistics(30, time_limit=0.05)
        self.assertFalse(stats.complete)

    def test_search_statistics_reports_effort(self):
        stats = search_statistics(6)
        self.assertEqual(stats.solutions, 4)
        self.assertTrue(stats.complete)
        self.assertEqual(stats.nodes_explored, solve(6).nodes_explored)
        self.assertGreater(stats.nodes_explored, 0)
        self.assertGreaterEqual(stats.elapsed, 0.0)

    def test_placement_is_undone_even_on_error(self):
        placement = [0, 0, 0]
        with self.assertRaises(RuntimeError):
            with _placed(placement, 1, 3):
                self.assertEqual(placement, [0, 3, 0])
                raise RuntimeError("abort")
        self.assertEqual(placement, [0, 0, 0])


if __name__ == "__main__":
    unittest.main()
