"""Population snapshots for Pareto ranking.

Sorting and selection need a consistent view of every individual's fitness.
Population freezes that view into an arena: individuals keep their position in
a tuple, and fitness, rank and crowding distance live in numpy arrays aligned
with those positions. Identity-keyed lookups are replaced by integer indices.

- Population: struct-of-arrays snapshot of multiple individuals
- IndividualView: read-only view of a single position

Both classes are immutable (frozen dataclasses).
"""

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from evokit.individual import Individual, ObjectiveCountError
from evokit.primitives import crowding_distance, non_dominated_sort


@dataclass(frozen=True)
class IndividualView:
    """Read-only view of a single individual in a population.

    Attributes:
        individual: The individual at this position.
        fitness: Fitness vector captured in the snapshot, shape (n_obj,).
        rank: Pareto front rank (0 = first front), or None if not computed.
        crowding_distance: Crowding distance value, or None if not computed.
    """

    individual: Individual
    fitness: np.ndarray
    rank: int | None
    crowding_distance: float | None


def fitness_matrix(individuals: Sequence[Individual]) -> np.ndarray:
    """Stack the fitness vectors of ``individuals`` into an (n, n_obj) array.

    Raises:
        ObjectiveCountError: If the individuals do not share one objective count.
    """
    rows = [individual.fitness() for individual in individuals]
    if not rows:
        return np.empty((0, 0), dtype=np.float64)
    n_obj = len(rows[0])
    for i, row in enumerate(rows):
        if len(row) != n_obj:
            raise ObjectiveCountError(
                f"individual {i} has {len(row)} objectives, expected {n_obj} like individual 0"
            )
    return np.array(rows, dtype=np.float64).reshape(len(rows), n_obj)


def crowding_by_front(fitness: np.ndarray, rank: np.ndarray) -> np.ndarray:
    """Crowding distance of every individual, computed within its own front."""
    distances = np.zeros(rank.shape[0], dtype=np.float64)
    if rank.shape[0] == 0:
        return distances
    for r in range(int(rank.max()) + 1):
        mask = rank == r
        distances[mask] = crowding_distance(fitness[mask])
    return distances


@dataclass(frozen=True)
class Population:
    """Immutable struct-of-arrays snapshot of a population.

    Attributes:
        individuals: The individuals, in input order.
        fitness: Fitness values, shape (n, n_obj).
        rank: Pareto front ranks, shape (n,), or None if not sorted.
        crowding_distance: Crowding distances, shape (n,), or None if not computed.

    Example:
        >>> pop = Population.ranked(individuals)
        >>> pop[0].rank
        0
        >>> [len(front) for front in pop.fronts()]
        [3, 2]
    """

    individuals: tuple[Individual, ...]
    fitness: np.ndarray
    rank: np.ndarray | None = None
    crowding_distance: np.ndarray | None = None

    def __post_init__(self) -> None:
        """Validate shapes and copy arrays for immutability.

        Raises:
            TypeError: If fitness is not a numpy array.
            ValueError: If array shapes are inconsistent or invalid.
        """
        object.__setattr__(self, "individuals", tuple(self.individuals))
        n = len(self.individuals)

        if not isinstance(self.fitness, np.ndarray):
            raise TypeError(f"fitness must be a numpy array, got {type(self.fitness).__name__}")
        if self.fitness.ndim != 2:
            raise ValueError(f"fitness must be 2D, got shape {self.fitness.shape}")
        if self.fitness.shape[0] != n:
            raise ValueError(f"fitness has {self.fitness.shape[0]} rows, expected {n} to match individuals")
        object.__setattr__(self, "fitness", self.fitness.copy())

        if self.rank is not None:
            if not isinstance(self.rank, np.ndarray):
                raise TypeError(f"rank must be a numpy array, got {type(self.rank).__name__}")
            if self.rank.shape != (n,):
                raise ValueError(f"rank must have shape ({n},), got {self.rank.shape}")
            if not np.issubdtype(self.rank.dtype, np.integer):
                raise ValueError(f"rank must have integer dtype, got {self.rank.dtype}")
            object.__setattr__(self, "rank", self.rank.copy())

        if self.crowding_distance is not None:
            if not isinstance(self.crowding_distance, np.ndarray):
                raise TypeError(f"crowding_distance must be a numpy array, got {type(self.crowding_distance).__name__}")
            if self.crowding_distance.shape != (n,):
                raise ValueError(f"crowding_distance must have shape ({n},), got {self.crowding_distance.shape}")
            if not np.issubdtype(self.crowding_distance.dtype, np.floating):
                raise ValueError(f"crowding_distance must have float dtype, got {self.crowding_distance.dtype}")
            object.__setattr__(self, "crowding_distance", self.crowding_distance.copy())

    @classmethod
    def from_individuals(cls, individuals: Sequence[Individual]) -> "Population":
        """Snapshot the current fitness of ``individuals``.

        Raises:
            ObjectiveCountError: If objective counts differ between individuals.
        """
        return cls(individuals=tuple(individuals), fitness=fitness_matrix(individuals))

    @classmethod
    def ranked(cls, individuals: Sequence[Individual]) -> "Population":
        """Snapshot ``individuals`` and compute ranks and per-front crowding distances."""
        fitness = fitness_matrix(individuals)
        rank = non_dominated_sort(fitness)
        return cls(
            individuals=tuple(individuals),
            fitness=fitness,
            rank=rank,
            crowding_distance=crowding_by_front(fitness, rank),
        )

    def __len__(self) -> int:
        return len(self.individuals)

    def __getitem__(self, idx: int) -> IndividualView:
        """Get a read-only view of a single position (supports negative indexing).

        Raises:
            TypeError: If idx is not an integer.
            IndexError: If idx is out of bounds.
        """
        if not isinstance(idx, (int, np.integer)):
            raise TypeError(f"indices must be integers, got {type(idx).__name__}")

        n = len(self)
        original_idx = idx
        if idx < 0:
            idx = n + idx
        if idx < 0 or idx >= n:
            raise IndexError(f"index {original_idx} is out of bounds for population with {n} individuals")

        return IndividualView(
            individual=self.individuals[idx],
            fitness=self.fitness[idx].copy(),
            rank=int(self.rank[idx]) if self.rank is not None else None,
            crowding_distance=float(self.crowding_distance[idx]) if self.crowding_distance is not None else None,
        )

    @property
    def n_obj(self) -> int:
        return self.fitness.shape[1]

    def index_of(self, individual: Individual) -> int:
        """Position of ``individual`` (by identity).

        Raises:
            ValueError: If the individual is not part of this population.
        """
        for i, member in enumerate(self.individuals):
            if member is individual:
                return i
        raise ValueError("individual is not a member of this population")

    def fronts(self) -> list[np.ndarray]:
        """Index arrays of each front, best first, input order within a front.

        Raises:
            ValueError: If ranks have not been computed.
        """
        if self.rank is None:
            raise ValueError("population has no ranks; build it with Population.ranked")
        if len(self) == 0:
            return []
        return [np.flatnonzero(self.rank == r) for r in range(int(self.rank.max()) + 1)]
