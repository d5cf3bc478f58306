"""Pareto ranking over Individuals.

Thin wrappers that snapshot individuals into fitness arrays and run the
array-level primitives, returning results in terms of individuals:

- non_dominated_sort: ordered list of fronts
- crowding_distance: distances aligned with a front
- front_rank: 1-based position of an individual's front
"""

from collections.abc import Sequence
from typing import TypeVar

import numpy as np

from evokit import primitives
from evokit.individual import Individual
from evokit.population import Population, fitness_matrix

I = TypeVar("I", bound=Individual)  # noqa: E741


def non_dominated_sort(individuals: Sequence[I]) -> list[list[I]]:
    """Partition individuals into Pareto fronts, best first.

    Every individual lands in exactly one front. Front 0 holds the individuals
    no other member dominates. Within a front, input order is preserved.

    Raises:
        ObjectiveCountError: If the individuals do not share one objective count.

    Example:
        >>> fronts = non_dominated_sort([a, b, c])
        >>> [len(front) for front in fronts]
        [2, 1]
    """
    population = Population.ranked(individuals)
    return [[population.individuals[i] for i in front] for front in population.fronts()]


def crowding_distance(front: Sequence[Individual]) -> np.ndarray:
    """Crowding distance of each member of one front.

    Args:
        front: Mutually non-dominating individuals sharing one objective count.

    Returns:
        Array aligned with ``front``. Boundary members on any objective get
        ``inf``; fronts of one or two members are all ``inf``.

    Raises:
        ObjectiveCountError: If objective counts differ within the front.
    """
    return primitives.crowding_distance(fitness_matrix(front))


def front_rank(individual: Individual, fronts: Sequence[Sequence[Individual]]) -> int:
    """Return the 1-based index of the front containing ``individual`` (by identity).

    Raises:
        ValueError: If no front contains the individual.
    """
    for i, front in enumerate(fronts):
        if any(member is individual for member in front):
            return i + 1
    raise ValueError("individual does not belong to any of the given fronts")
