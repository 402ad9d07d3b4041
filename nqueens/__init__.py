"""N-Queens backtracking enumeration and companion order pricing."""

from .backtracking import (
    SolutionSet,
    count_solutions,
    first_solution,
    iter_solutions,
    search_statistics,
    solve,
)
from .pricing import OrderQuote, quote_order
from .utils import conflicts, count_conflicts, is_valid_solution

__all__ = [
    "SolutionSet",
    "solve",
    "iter_solutions",
    "count_solutions",
    "search_statistics",
    "first_solution",
    "conflicts",
    "count_conflicts",
    "is_valid_solution",
    "OrderQuote",
    "quote_order",
]
