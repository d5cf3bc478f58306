"""Pareto primitives for ranking and diversity.

This package provides core pure functions over fitness matrices.
"""

from evokit.primitives.pareto import (
    crowding_distance,
    dominates,
    dominates_matrix,
    non_dominated_sort,
)

__all__ = [
    "dominates",
    "dominates_matrix",
    "non_dominated_sort",
    "crowding_distance",
]
