"""Deterministic truncation selection: best and worst by a scalarization."""

from collections.abc import Sequence

import numpy as np

from evokit.individual import Individual
from evokit.protocols import ScalarizationMethod
from evokit.scalarization import weighted_sum
from evokit.selection.base import check_amount


def _check_target(target: ScalarizationMethod) -> None:
    if not callable(target):
        raise TypeError(f"target must be callable, got {type(target).__name__}")


def best(target: ScalarizationMethod = weighted_sum):
    """Create a selector keeping the individuals with the highest ``target``.

    Args:
        target: Scalarization method. Default: weighted sum of fitness.

    Returns:
        A SelectionMethod. Ties keep their input order; the caller's sequence
        is not reordered.

    Example:
        >>> selector = best()
        >>> [ind.values() for ind in selector(1, individuals)]
        [[5.0]]
    """
    _check_target(target)

    def selector(
        amount: int,
        individuals: Sequence[Individual],
        rng: np.random.Generator | None = None,
    ) -> list[Individual]:
        """Select the ``amount`` highest-scoring individuals.

        Raises:
            ValueError: If amount exceeds the population size.
        """
        check_amount(amount, len(individuals))
        return sorted(individuals, key=target, reverse=True)[:amount]

    return selector


def worst(target: ScalarizationMethod = weighted_sum):
    """Create a selector keeping the individuals with the lowest ``target``.

    Mirror image of :func:`best`. Combined with :func:`evokit.scalarization.nsga2`,
    whose lower scores are better, it selects the best-ranked individuals.
    """
    _check_target(target)

    def selector(
        amount: int,
        individuals: Sequence[Individual],
        rng: np.random.Generator | None = None,
    ) -> list[Individual]:
        check_amount(amount, len(individuals))
        return sorted(individuals, key=target)[:amount]

    return selector
