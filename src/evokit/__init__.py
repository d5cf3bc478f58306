"""evokit: multi-objective ranking and selection for genetic algorithms.

Individuals carry weighted Objectives (``fitness = value * weight``, larger is
better). On top of that model evokit provides Pareto dominance, Deb's fast
non-dominated sort, crowding distance, scalarization and a set of selection
strategies including NSGA-II.

Example:
    >>> import numpy as np
    >>> from evokit import ArrayGenotype, Individual, maximize, minimize, selection
    >>> from evokit import evaluate_population, non_dominated_sort
    >>> rng = np.random.default_rng(42)
    >>> pop = [Individual(ArrayGenotype.random(3, rng)) for _ in range(10)]
    >>> evaluate_population(pop, lambda ind: [maximize(ind.genotype.data().sum()),
    ...                                       minimize(ind.genotype.data().max())])
    >>> fronts = non_dominated_sort(pop)
    >>> survivors = selection.nsga2()(4, pop)
    >>> len(survivors)
    4
"""

from evokit import scalarization, selection
from evokit.evaluation import evaluate_population, evaluate_population_async
from evokit.genotype import ArrayGenotype
from evokit.individual import (
    CloneSettings,
    DeserializationSettings,
    Individual,
    IndividualDefaults,
    ObjectiveCountError,
    SerializationSettings,
)
from evokit.multiobjective import crowding_distance, front_rank, non_dominated_sort
from evokit.objective import Objective, maximize, minimize, objective
from evokit.population import IndividualView, Population
from evokit.protocols import Genotype, SelectionMethod
from evokit.registry import SelectionRegistry, list_selections
from evokit.scalarization import weighted_sum
from evokit.state import State

__all__ = [
    # Data model
    "Objective",
    "objective",
    "maximize",
    "minimize",
    "Individual",
    "IndividualDefaults",
    "CloneSettings",
    "SerializationSettings",
    "DeserializationSettings",
    "ObjectiveCountError",
    "State",
    "Genotype",
    "ArrayGenotype",
    # Ranking
    "non_dominated_sort",
    "crowding_distance",
    "front_rank",
    "Population",
    "IndividualView",
    # Scalarization and selection
    "scalarization",
    "weighted_sum",
    "selection",
    "SelectionMethod",
    "SelectionRegistry",
    "list_selections",
    # Evaluation
    "evaluate_population",
    "evaluate_population_async",
]
