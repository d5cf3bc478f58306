"""Candidate solutions and their evaluation / dominance surface.

An Individual bundles a genotype, a phenotype derived from it, a State of
named bindings, and the list of Objectives produced by its last evaluation.

Example:
    >>> from evokit import ArrayGenotype, maximize, minimize
    >>> a = Individual(ArrayGenotype([1.0, 2.0]))
    >>> a.evaluate(lambda ind: [maximize(10), minimize(0)])
    >>> b = Individual(ArrayGenotype([3.0, 4.0]))
    >>> b.set_objectives([maximize(5), minimize(5)])
    >>> a.dominates(b)
    True
"""

from __future__ import annotations

import inspect
import json
from collections.abc import Awaitable, Callable, Sequence
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any

from evokit.objective import Objective
from evokit.protocols import CrossoverMethod, EvaluationFunction, Genotype, MutationMethod
from evokit.serialization import deserialize, is_serializable, serialize
from evokit.state import State

PhenotypeFunction = Callable[[Genotype, State], Any]


class ObjectiveCountError(ValueError):
    """Raised when individuals with different numbers of objectives are compared."""


@dataclass(frozen=True)
class CloneSettings:
    """Optional transforms applied while cloning.

    Attributes:
        genotype: Maps the genotype data to the clone's data.
        state: Maps the computed state dict to the clone's state data.
    """

    genotype: Callable[[Any], Any] | None = None
    state: Callable[[dict[str, Any]], dict[str, Any]] | None = None


@dataclass(frozen=True)
class SerializationSettings:
    """Options for :meth:`Individual.serialize`.

    Attributes:
        genotype: Passed to ``genotype.serialize`` to transform the data.
        state: Maps the computed state dict before encoding.
        check: Verify the state is a plain dict of serializable values.
    """

    genotype: Callable[[Any], Any] | None = None
    state: Callable[[dict[str, Any]], dict[str, Any]] | None = None
    check: bool = True


@dataclass(frozen=True)
class DeserializationSettings:
    """Options for :meth:`Individual.deserialize`.

    Attributes:
        genotype: Builds a genotype from the decoded genotype data. Required.
        phenotype: Phenotype function of the rebuilt individual.
        state: Maps the decoded state dict before wrapping it in a State.
        defaults: Defaults of the rebuilt individual.
    """

    genotype: Callable[[Any], Genotype]
    phenotype: PhenotypeFunction | None = None
    state: Callable[[dict[str, Any]], dict[str, Any]] | None = None
    defaults: IndividualDefaults | None = None


@dataclass(frozen=True)
class IndividualDefaults:
    """Fallbacks used when an Individual method is called without an explicit argument.

    Offspring and clones inherit the defaults of the individual they came from.
    """

    evaluation: EvaluationFunction | None = None
    mutation: MutationMethod | None = None
    crossover: CrossoverMethod | None = None
    cloning: CloneSettings | None = None
    serialization: SerializationSettings | None = None


def _no_phenotype(genotype: Genotype, state: State) -> None:
    return None


def to_objective_list(evaluation: Any) -> list[Objective]:
    """Normalize an evaluation result to a list of Objectives.

    Raises:
        TypeError: If evaluation is neither an Objective nor a list/tuple of them.
    """
    if isinstance(evaluation, Objective):
        return [evaluation]
    if isinstance(evaluation, (list, tuple)) and all(isinstance(item, Objective) for item in evaluation):
        return list(evaluation)
    raise TypeError(
        f"evaluation function must return an Objective or a sequence of Objectives, got {type(evaluation).__name__}"
    )


class Individual:
    """A candidate solution.

    Attributes:
        genotype: Encoded solution, any object satisfying the Genotype protocol.
        phenotype_func: Function computing the phenotype from (genotype, state).
        phenotype: Value of ``phenotype_func`` at construction time.
        state: Named bindings attached to this individual.
        defaults: Fallback methods and settings.
    """

    def __init__(
        self,
        genotype: Genotype,
        phenotype: PhenotypeFunction | None = None,
        state: State | None = None,
        defaults: IndividualDefaults | None = None,
    ) -> None:
        """Create an individual with no objectives.

        Raises:
            TypeError: If genotype is None, phenotype is not callable, state is
                not a State, or defaults is not an IndividualDefaults.
        """
        if genotype is None:
            raise TypeError("genotype must be provided")
        if phenotype is not None and not callable(phenotype):
            raise TypeError(f"phenotype must be callable, got {type(phenotype).__name__}")
        if state is not None and not isinstance(state, State):
            raise TypeError(f"state must be a State, got {type(state).__name__}")
        if defaults is not None and not isinstance(defaults, IndividualDefaults):
            raise TypeError(f"defaults must be IndividualDefaults, got {type(defaults).__name__}")

        self.genotype = genotype
        self.state = state if state is not None else State()
        self.phenotype_func = phenotype if phenotype is not None else _no_phenotype
        self.phenotype = self.phenotype_func(self.genotype, self.state)
        self.defaults = defaults if defaults is not None else IndividualDefaults()
        self._objectives: list[Objective] = []

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def evaluate(self, fn: EvaluationFunction | None = None) -> None | Awaitable[None] | Future:
        """Evaluate this individual and store the resulting objectives.

        Args:
            fn: Evaluation function. Falls back to ``defaults.evaluation``.

        Returns:
            None when ``fn`` returns its objectives directly. When ``fn``
            returns an awaitable, a coroutine that assigns the objectives once
            awaited. When ``fn`` returns a ``concurrent.futures.Future``, a new
            Future that completes after assignment. Cancelling it before the
            evaluation finishes skips the assignment.

        Raises:
            TypeError: If no callable evaluation function is available, or the
                evaluation result is not an Objective or sequence of them.
        """
        if fn is None:
            fn = self.defaults.evaluation
        if not callable(fn):
            raise TypeError(f"evaluation function must be callable, got {type(fn).__name__}")

        evaluation = fn(self)

        if isinstance(evaluation, Future):
            return self._chain_future(evaluation)
        if inspect.isawaitable(evaluation):
            return self._assign_when_ready(evaluation)

        self.set_objectives(to_objective_list(evaluation))
        return None

    async def _assign_when_ready(self, evaluation: Awaitable[Any]) -> None:
        self.set_objectives(to_objective_list(await evaluation))

    def _chain_future(self, evaluation: Future) -> Future:
        done: Future = Future()

        def assign(source: Future) -> None:
            # A cancelled result future must not assign objectives
            if not done.set_running_or_notify_cancel():
                return
            try:
                self.set_objectives(to_objective_list(source.result()))
            except BaseException as exc:
                done.set_exception(exc)
            else:
                done.set_result(None)

        evaluation.add_done_callback(assign)
        return done

    # ------------------------------------------------------------------
    # Objectives
    # ------------------------------------------------------------------

    def objectives(self) -> list[Objective]:
        """Return a new list holding the current objectives."""
        return list(self._objectives)

    def objective(self, index: int) -> Objective:
        """Return the objective at ``index``.

        Raises:
            IndexError: If index is not a valid non-negative position.
        """
        if not 0 <= index < len(self._objectives):
            raise IndexError(f"objective index {index} is out of range for {len(self._objectives)} objectives")
        return self._objectives[index]

    def set_objectives(self, objectives: Sequence[Objective]) -> None:
        """Replace the objective list wholesale.

        Raises:
            TypeError: If objectives is not a list or tuple of Objective.
        """
        if not isinstance(objectives, (list, tuple)):
            raise TypeError(f"objectives must be a list or tuple, got {type(objectives).__name__}")
        for item in objectives:
            if not isinstance(item, Objective):
                raise TypeError(f"objectives must contain Objective instances, got {type(item).__name__}")
        self._objectives = list(objectives)

    def fitness(self) -> list[float]:
        return [objective.fitness() for objective in self._objectives]

    def values(self) -> list[float]:
        return [objective.value for objective in self._objectives]

    def dominates(self, rival: Individual) -> bool:
        """Check whether this individual Pareto-dominates ``rival``.

        Fitness is compared objective by objective, larger being better. This
        individual dominates if it is at least as good everywhere and strictly
        better somewhere.

        Raises:
            ObjectiveCountError: If the individuals have different numbers of objectives.
        """
        mine = self.fitness()
        theirs = rival.fitness()
        if len(mine) != len(theirs):
            raise ObjectiveCountError(
                f"cannot compare individuals with {len(mine)} and {len(theirs)} objectives"
            )
        return all(a >= b for a, b in zip(mine, theirs)) and any(a > b for a, b in zip(mine, theirs))

    # ------------------------------------------------------------------
    # Variation
    # ------------------------------------------------------------------

    def clone(self, settings: CloneSettings | None = None) -> Individual:
        """Return an independent copy with cloned genotype, state and objectives."""
        if settings is None:
            settings = self.defaults.cloning or CloneSettings()
        genotype = self.genotype.clone(settings.genotype)
        state_data = self.state.clone().computed()
        if settings.state is not None:
            state_data = settings.state(state_data)

        individual = Individual(genotype, self.phenotype_func, State(state_data), self.defaults)
        individual.set_objectives([objective.clone() for objective in self._objectives])
        return individual

    def mutate(self, method: MutationMethod | None = None) -> None:
        """Mutate the genotype in place.

        Raises:
            TypeError: If no callable mutation method is available.
        """
        if method is None:
            method = self.defaults.mutation
        if not callable(method):
            raise TypeError(f"mutation method must be callable, got {type(method).__name__}")
        self.genotype.mutate(method)

    def offspring(
        self,
        partners: Sequence[Individual],
        method: CrossoverMethod | None = None,
        phenotype: PhenotypeFunction | None = None,
        state: State | None = None,
    ) -> list[Individual]:
        """Create the children of one crossover between this individual and ``partners``.

        Children are unevaluated and inherit this individual's phenotype
        function (unless ``phenotype`` is given) and defaults.
        """
        if method is None:
            method = self.defaults.crossover
        if not callable(method):
            raise TypeError(f"crossover method must be callable, got {type(method).__name__}")
        phenotype = phenotype if phenotype is not None else self.phenotype_func

        genotypes = self.genotype.offspring([partner.genotype for partner in partners], method)
        return [
            Individual(genotype, phenotype, state.clone() if state is not None else None, self.defaults)
            for genotype in genotypes
        ]

    def crossover(
        self,
        amount: int,
        partners: Sequence[Individual],
        method: CrossoverMethod | None = None,
        phenotype: PhenotypeFunction | None = None,
        state: State | None = None,
    ) -> list[Individual]:
        """Repeat :meth:`offspring` until ``amount`` children exist.

        Raises:
            ValueError: If amount is negative or a crossover produces no children.
        """
        if amount < 0:
            raise ValueError(f"amount must be non-negative, got {amount}")
        children: list[Individual] = []
        while len(children) < amount:
            batch = self.offspring(partners, method, phenotype, state)
            if not batch:
                raise ValueError("crossover method produced no children")
            children.extend(batch)
        return children[:amount]

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def serialize(self, settings: SerializationSettings | None = None) -> dict[str, Any]:
        """Encode genotype, state and objectives as plain data.

        Raises:
            TypeError: If a settings transform is not callable, or ``check`` is
                enabled and the state is not a plain dict of serializable values.
        """
        if settings is None:
            settings = self.defaults.serialization or SerializationSettings()
        if settings.state is not None and not callable(settings.state):
            raise TypeError(f"state transform must be callable, got {type(settings.state).__name__}")

        genotype = self.genotype.serialize(settings.genotype)
        state = self.state.computed()
        if settings.state is not None:
            state = settings.state(state)

        if settings.check:
            if not isinstance(state, dict):
                raise TypeError(f"serialized state must be a dict, got {type(state).__name__}")
            if not is_serializable(state):
                raise TypeError("state is not serializable")

        return {
            "genotype": genotype,
            "state": serialize(state),
            "objectives": [objective.serialize() for objective in self._objectives],
        }

    @classmethod
    def deserialize(cls, data: dict[str, Any], settings: DeserializationSettings) -> Individual:
        """Rebuild an individual from :meth:`serialize` output.

        Raises:
            TypeError: If data is not a dict.
            KeyError: If a required field is missing.
        """
        if not isinstance(data, dict):
            raise TypeError(f"serialized individual must be a dict, got {type(data).__name__}")
        decoded = deserialize(data)

        genotype = settings.genotype(decoded["genotype"])
        state_data = decoded.get("state") or {}
        if settings.state is not None:
            state_data = settings.state(state_data)

        individual = cls(genotype, settings.phenotype, State(state_data), settings.defaults)
        individual.set_objectives([Objective.deserialize(item) for item in data.get("objectives", [])])
        return individual

    def to_json(self, settings: SerializationSettings | None = None) -> str:
        return json.dumps(self.serialize(settings))

    @classmethod
    def from_json(cls, data: str, settings: DeserializationSettings) -> Individual:
        return cls.deserialize(json.loads(data), settings)

    def __repr__(self) -> str:
        return f"Individual(genotype={self.genotype!r}, fitness={self.fitness()!r})"
