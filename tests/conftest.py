"""Shared test fixtures for evokit tests.

This module provides common fixtures used across test modules:
- rng: Seeded random number generator
- make_individual: Factory building evaluated individuals from objectives
- ranked_values: Single-objective population with values 1..5
- tradeoff_front: Bi-objective population forming two fronts
"""

from collections.abc import Callable, Sequence

import numpy as np
import pytest

from evokit import ArrayGenotype, Individual, Objective, maximize, minimize


@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random number generator for deterministic tests."""
    return np.random.default_rng(42)


@pytest.fixture
def make_individual() -> Callable[..., Individual]:
    """Factory for individuals with preset objectives.

    Each call builds an individual with a one-gene genotype and assigns the
    given objectives without running an evaluation function.
    """

    def factory(*objectives: Objective, genes: Sequence[float] = (0.0,)) -> Individual:
        individual = Individual(ArrayGenotype(list(genes)))
        individual.set_objectives(list(objectives))
        return individual

    return factory


@pytest.fixture
def ranked_values(make_individual) -> list[Individual]:
    """Five individuals with a single maximized objective, values 1..5 in order."""
    return [make_individual(maximize(v), genes=[float(v)]) for v in range(1, 6)]


@pytest.fixture
def tradeoff_front(make_individual) -> list[Individual]:
    """Bi-objective population (maximize f1, minimize f2).

    Individuals 0-3 trade off along the first front; individual 4 is dominated
    by individual 1 and forms the second front on its own.
    """
    points = [(1.0, 1.0), (2.0, 2.0), (3.0, 3.0), (4.0, 4.0), (1.5, 3.5)]
    return [make_individual(maximize(a), minimize(b), genes=[a, b]) for a, b in points]
