"""Scalarization methods: reduce an individual's objectives to one number.

- weighted_sum: sum of objective fitness (larger is better)
- nsga2: front rank plus crowding tiebreak (smaller is better)
"""

from collections.abc import Sequence

from evokit.individual import Individual
from evokit.population import Population
from evokit.protocols import ScalarizationMethod

EPSILON = 1e-5


def weighted_sum(individual: Individual) -> float:
    """Sum of ``fitness()`` across all objectives; 0.0 without objectives.

    Example:
        >>> ind.set_objectives([Objective(2, 2), Objective(-3, 3), Objective(7, 1)])
        >>> weighted_sum(ind)
        2.0
    """
    return float(sum(individual.fitness()))


def _crowding_term(rank: int, distance: float) -> float:
    if distance == 0:
        return 1.0
    return 1.0 - 1.0 / max(1.0, rank / distance)


def nsga2(members: Sequence[Individual]) -> ScalarizationMethod:
    """Build an NSGA-II scorer for a fixed set of members.

    Fronts and per-front crowding distances are computed once, here. The
    returned function scores a member as::

        rank + 1 - 1 / max(1, rank / crowding_distance) - EPSILON

    with ``rank`` being the 1-based front index. The crowding term lies in
    ``[0, 1]``: zero for boundary members (infinite distance), growing as the
    distance shrinks and reaching one at zero distance. Lower scores are
    better, and a better front always wins over any crowding difference. Use
    it with :func:`evokit.selection.worst` to pick the best-ranked members.

    Raises:
        ObjectiveCountError: If members do not share one objective count.

    Example:
        >>> score = nsga2(population)
        >>> chosen = worst(score)(10, population)
    """
    population = Population.ranked(members)
    fronts = population.rank + 1
    scores = [
        front + _crowding_term(int(front), float(cd)) - EPSILON
        for front, cd in zip(fronts, population.crowding_distance)
    ]

    def score(individual: Individual) -> float:
        """Score one member of the population.

        Raises:
            ValueError: If the individual was not among the members.
        """
        try:
            return float(scores[population.index_of(individual)])
        except ValueError:
            raise ValueError("individual was not part of the population this scorer was built from") from None

    return score
