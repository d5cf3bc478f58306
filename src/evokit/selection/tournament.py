"""Tournament selection."""

from collections.abc import Sequence

import numpy as np

from evokit.individual import Individual
from evokit.protocols import SelectionMethod
from evokit.selection.base import check_amount, resolve_rng
from evokit.selection.ranking import best


def tournament(size: int = 2, duplicates: bool = False, winner: SelectionMethod | None = None):
    """Create a tournament selector.

    Each round draws ``size`` distinct individuals from the pool and lets
    ``winner`` pick one of them. Without duplicates the winner then leaves the
    pool, so no individual is selected twice; once the pool holds fewer than
    ``size`` individuals, the remaining pool forms the tournament.

    Args:
        size: Number of individuals competing in each tournament (default: 2).
        duplicates: Whether the same individual may win more than once.
        winner: Selection method choosing the tournament winner. Called as
            ``winner(1, sample, rng=rng)``. Default: ``best()``.

    Returns:
        A SelectionMethod.

    Raises:
        TypeError: If size is not an integer, duplicates is not a bool, or
            winner is not callable.
        ValueError: If size is not positive.

    Example:
        >>> selector = tournament(size=3)
        >>> parents = selector(20, individuals, rng=rng)
    """
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
        raise TypeError(f"tournament size must be an integer, got {type(size).__name__}")
    if size <= 0:
        raise ValueError(f"tournament size must be positive, got {size}")
    if not isinstance(duplicates, bool):
        raise TypeError(f"duplicates must be a bool, got {type(duplicates).__name__}")
    if winner is None:
        winner = best()
    if not callable(winner):
        raise TypeError(f"winner must be callable, got {type(winner).__name__}")

    def selector(
        amount: int,
        individuals: Sequence[Individual],
        rng: np.random.Generator | None = None,
    ) -> list[Individual]:
        """Run ``amount`` tournaments.

        Raises:
            ValueError: If size exceeds the population, or duplicates are not
                allowed and amount exceeds the population.
        """
        check_amount(amount, len(individuals), replace=duplicates)
        if size > len(individuals):
            raise ValueError(f"tournament size ({size}) cannot exceed population size ({len(individuals)})")
        rng = resolve_rng(rng)

        pool = list(individuals)
        selected: list[Individual] = []

        for _ in range(amount):
            candidates = rng.choice(len(pool), size=min(size, len(pool)), replace=False)
            champion = winner(1, [pool[i] for i in candidates], rng=rng)[0]
            selected.append(champion)

            if not duplicates:
                position = next((i for i, member in enumerate(pool) if member is champion), None)
                if position is None:
                    raise ValueError("winner method returned an individual outside the tournament")
                del pool[position]

        return selected

    return selector
