"""Protocol definitions for the pluggable parts of evokit.

The core never depends on a concrete genotype encoding or on a particular
evaluation, scalarization or selection routine. It talks to them through the
interfaces defined here:

1. **Genotype**: the encoded candidate solution. Anything with ``data``,
   ``mutate``, ``clone``, ``serialize`` and ``offspring`` methods qualifies;
   :class:`evokit.genotype.ArrayGenotype` is the bundled implementation.

2. **Evaluation function**: ``(individual) -> Objective | list[Objective]``,
   or an awaitable / ``concurrent.futures.Future`` resolving to one.

3. **Scalarization method**: ``(individual) -> float``. Must be pure for a
   fixed set of objectives.

4. **Selection method**: ``(amount, individuals, rng=None) -> list`` returning
   exactly ``amount`` individuals.

Example usage:
    ```python
    def my_step(select: SelectionMethod, individuals, rng):
        parents = select(len(individuals) // 2, individuals, rng=rng)
        ...
    ```
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from concurrent.futures import Future
from typing import TYPE_CHECKING, Any, Protocol, Union, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from evokit.individual import Individual
    from evokit.objective import Objective

Evaluation = Union["Objective", Sequence["Objective"]]
EvaluationFunction = Callable[
    ["Individual"], Union[Evaluation, Awaitable[Evaluation], "Future[Evaluation]"]
]
ScalarizationMethod = Callable[["Individual"], float]
MutationMethod = Callable[[Any], Any]
CrossoverMethod = Callable[[list[Any]], list[Any]]


@runtime_checkable
class Genotype(Protocol):
    """Capability interface for encoded candidate solutions.

    Implementations own their data. ``mutate`` changes it in place, ``clone``
    returns an independent copy, ``offspring`` builds children from this
    genotype and its partners through a crossover method.
    """

    def data(self) -> Any:
        """Return a copy of the encoded data."""
        ...

    def mutate(self, method: MutationMethod) -> None:
        """Replace the data with ``method(data)`` (unchanged if it returns None)."""
        ...

    def clone(self, fn: Callable[[Any], Any] | None = None) -> Genotype:
        """Return an independent genotype, optionally transforming the data."""
        ...

    def serialize(self, fn: Callable[[Any], Any] | None = None) -> Any:
        """Return plain, JSON-friendly data."""
        ...

    def offspring(self, partners: Sequence[Genotype], method: CrossoverMethod) -> list[Genotype]:
        """Cross this genotype with ``partners`` and wrap each child."""
        ...


@runtime_checkable
class SelectionMethod(Protocol):
    """Protocol for selection strategies.

    Parameters:
        amount: Number of individuals to return.
        individuals: Population to choose from. Never reordered in place.
        rng: NumPy random number generator for reproducible stochastic
            selection. Deterministic methods ignore it.

    Returns:
        A new list of exactly ``amount`` individuals. Depending on the method
        the same individual may appear more than once.

    Example:
        ```python
        def first(amount, individuals, rng=None):
            return list(individuals[:amount])
        ```
    """

    def __call__(
        self,
        amount: int,
        individuals: Sequence[Individual],
        rng: np.random.Generator | None = None,
    ) -> list[Individual]:
        ...
