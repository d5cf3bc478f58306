"""NSGA-II selection strategy.

Fills the selection front by front in rank order and, when a front only
partially fits, keeps its most isolated members. This preserves both
convergence (better fronts first) and diversity (sparse regions of a front
first).
"""

import logging
from collections.abc import Sequence

import numpy as np

from evokit.individual import Individual
from evokit.multiobjective import crowding_distance, non_dominated_sort
from evokit.selection.base import check_amount

logger = logging.getLogger(__name__)


def nsga2(
    frontiers: Sequence[Sequence[Individual]] | None = None,
    distances: Sequence[np.ndarray] | None = None,
):
    """Create an NSGA-II selector.

    Args:
        frontiers: Precomputed fronts, best first, as returned by
            :func:`evokit.multiobjective.non_dominated_sort`. Computed from the
            individuals on every call when omitted.
        distances: Precomputed crowding distances, one array per front in
            ``frontiers`` and aligned with it. Computed on demand when omitted.

    Returns:
        A SelectionMethod returning whole fronts while they fit and the
        members with the highest crowding distance of the first front that
        does not.

    Raises:
        ValueError: If distances are given without frontiers, or their
            lengths do not match the fronts.

    Example:
        >>> selector = nsga2()
        >>> survivors = selector(100, parents + offspring)
    """
    if distances is not None:
        if frontiers is None:
            raise ValueError("crowding distances require the frontiers they were computed for")
        if len(distances) != len(frontiers):
            raise ValueError(f"got {len(distances)} distance arrays for {len(frontiers)} fronts")
        for r, (front, front_distances) in enumerate(zip(frontiers, distances)):
            if len(front_distances) != len(front):
                raise ValueError(f"front {r} has {len(front)} members but {len(front_distances)} distances")

    def selector(
        amount: int,
        individuals: Sequence[Individual],
        rng: np.random.Generator | None = None,
    ) -> list[Individual]:
        """Select ``amount`` individuals by rank, then crowding distance.

        Raises:
            ValueError: If amount exceeds the population size or the fronts
                hold fewer than amount individuals.
            ObjectiveCountError: If fronts have to be computed and objective
                counts differ.
        """
        check_amount(amount, len(individuals))
        fronts = frontiers if frontiers is not None else non_dominated_sort(individuals)

        selected: list[Individual] = []
        for r, front in enumerate(fronts):
            remaining = amount - len(selected)
            if remaining == 0:
                break
            if len(front) <= remaining:
                selected.extend(front)
                continue

            # Critical front: highest crowding distance first, ties in front order
            cd = np.asarray(distances[r] if distances is not None else crowding_distance(front), dtype=np.float64)
            order = np.argsort(-cd, kind="stable")[:remaining]
            selected.extend(front[i] for i in order)
            logger.debug("NSGA-II truncated front %d: kept %d of %d members", r, remaining, len(front))
            break

        if len(selected) < amount:
            raise ValueError(f"fronts hold {len(selected)} individuals, cannot select {amount}")

        logger.debug("NSGA-II selected %d of %d individuals from %d fronts", amount, len(individuals), len(fronts))
        return selected

    return selector
