"""Array-level Pareto primitives.

These functions work on fitness matrices of shape ``(n, n_obj)`` where larger
fitness is better on every column (``fitness = value * weight``):

- dominates: scalar Pareto dominance check
- dominates_matrix: vectorized pairwise dominance
- non_dominated_sort: Deb's fast non-dominated sorting algorithm
- crowding_distance: diversity metric for solutions in a Pareto front
"""

import numpy as np


def dominates(a: np.ndarray, b: np.ndarray) -> bool:
    """Check if fitness vector a Pareto-dominates fitness vector b (maximization).

    A solution a dominates b if and only if:
      - a[i] >= b[i] for ALL objectives (a is at least as good everywhere)
      - a[i] > b[i] for AT LEAST ONE objective (a is strictly better somewhere)

    Args:
        a: Fitness values for solution a. Shape (n_obj,).
        b: Fitness values for solution b. Shape (n_obj,).

    Returns:
        True if a dominates b, False otherwise.

    Raises:
        ValueError: If a and b have different lengths.

    Examples:
        >>> dominates(np.array([10.0, 0.0]), np.array([5.0, -5.0]))
        True
        >>> dominates(np.array([1.0, 3.0]), np.array([2.0, 2.0]))
        False
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(f"fitness vectors must have the same shape, got {a.shape} and {b.shape}")
    return bool(np.all(a >= b) and np.any(a > b))


def dominates_matrix(fitness: np.ndarray) -> np.ndarray:
    """Compute pairwise dominance for all individuals (vectorized).

    Args:
        fitness: Fitness values for all individuals. Shape (n, n_obj).

    Returns:
        Boolean array of shape (n, n) where result[i, j] = True iff
        individual i dominates individual j.

    Examples:
        >>> fit = np.array([[2.0, 2.0], [1.0, 1.0], [2.0, 1.0]])
        >>> dom = dominates_matrix(fit)
        >>> dom[0, 1]  # Does [2,2] dominate [1,1]?
        True
        >>> dom[2, 0]  # Does [2,1] dominate [2,2]?
        False
    """
    # (n, 1, n_obj) vs (1, n, n_obj)
    a = fitness[:, np.newaxis, :]
    b = fitness[np.newaxis, :, :]

    all_geq = np.all(a >= b, axis=2)
    any_gt = np.any(a > b, axis=2)

    return all_geq & any_gt


def non_dominated_sort(fitness: np.ndarray) -> np.ndarray:
    """Assign each individual to a Pareto front using Deb's fast algorithm.

    Time complexity: O(M * N^2) where M = number of objectives, N = population size.

    Args:
        fitness: Fitness values for all individuals. Shape (n, n_obj).

    Returns:
        Integer array of shape (n,) where rank[i] is the front index for
        individual i. Rank 0 = Pareto optimal (first front), rank 1 = second
        front, etc.

    Examples:
        >>> fit = np.array([[3.0, 3.0], [2.0, 2.0], [1.0, 1.0]])
        >>> non_dominated_sort(fit)
        array([0, 1, 2])
    """
    n = fitness.shape[0]

    if n == 0:
        return np.array([], dtype=np.int64)

    dom_matrix = dominates_matrix(fitness)

    # domination_count[i] = number of individuals that dominate i
    domination_count = dom_matrix.sum(axis=0).astype(np.int64)

    ranks = np.full(n, -1, dtype=np.int64)
    front = np.flatnonzero(domination_count == 0)
    current_rank = 0

    while front.size > 0:
        ranks[front] = current_rank
        # Each member of the front releases the individuals it dominates
        domination_count -= dom_matrix[front].sum(axis=0).astype(np.int64)
        # Ranked individuals keep a zero count, so mask them out
        front = np.flatnonzero((domination_count == 0) & (ranks == -1))
        current_rank += 1

    return ranks


def crowding_distance(front_fitness: np.ndarray) -> np.ndarray:
    """Compute crowding distance for individuals in a single Pareto front.

    Boundary solutions (lowest or highest fitness on any objective) receive
    infinite distance. Interior solutions accumulate, per objective m,
    ``(next - prev) / (n_obj * range_m)`` over their sorted neighbours.
    Objectives on which the whole front is tied contribute nothing.

    Args:
        front_fitness: Fitness values for individuals in ONE front only.
            Shape (n_front, n_obj).

    Returns:
        Array of shape (n_front,) containing crowding distances.
        Higher values indicate more isolated (preferred) solutions.

    Examples:
        >>> fit = np.array([[1.0, 4.0], [2.0, 3.0], [3.0, 2.0], [4.0, 1.0]])
        >>> cd = crowding_distance(fit)
        >>> np.isinf(cd[0]) and np.isinf(cd[-1])  # Boundary points
        True
        >>> cd[1]
        0.6666666666666666
    """
    n_front = front_fitness.shape[0]

    if n_front == 0:
        return np.array([], dtype=np.float64)

    if n_front <= 2:
        # Every member is a boundary on every objective
        return np.full(n_front, np.inf)

    n_obj = front_fitness.shape[1]
    distances = np.zeros(n_front, dtype=np.float64)

    for m in range(n_obj):
        sorted_indices = np.argsort(front_fitness[:, m], kind="stable")
        column = front_fitness[sorted_indices, m]

        obj_range = column[-1] - column[0]

        distances[sorted_indices[0]] = np.inf
        distances[sorted_indices[-1]] = np.inf

        if obj_range > 0 and np.isfinite(obj_range):
            interior = sorted_indices[1:-1]
            # inf + finite stays inf for boundaries of earlier objectives
            distances[interior] += (column[2:] - column[:-2]) / (n_obj * obj_range)

    return distances
