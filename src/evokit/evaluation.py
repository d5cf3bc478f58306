"""Population-level evaluation with a scatter/gather barrier.

Non-dominated sorting and crowding distance need every individual evaluated
against the same snapshot. The helpers here evaluate a whole population and
return only once every objective list has been assigned.

- evaluate_population: synchronous, optionally parallel through joblib
- evaluate_population_async: awaits asynchronous evaluation functions
"""

import asyncio
import inspect
import logging
from collections.abc import Sequence
from concurrent.futures import Future

from evokit.individual import Individual, to_objective_list
from evokit.protocols import EvaluationFunction

logger = logging.getLogger(__name__)


def _resolve(individual: Individual, fn: EvaluationFunction | None) -> EvaluationFunction:
    fn = fn if fn is not None else individual.defaults.evaluation
    if not callable(fn):
        raise TypeError(f"evaluation function must be callable, got {type(fn).__name__}")
    return fn


def evaluate_population(
    individuals: Sequence[Individual],
    fn: EvaluationFunction | None = None,
    n_workers: int = 1,
) -> None:
    """Evaluate every individual and assign the results.

    Evaluation results are gathered first and assigned afterwards, so either
    every individual receives new objectives or, if any evaluation raises,
    none does.

    Args:
        individuals: Individuals to evaluate.
        fn: Evaluation function returning an Objective or a sequence of them.
            Falls back to each individual's ``defaults.evaluation``.
        n_workers: Number of parallel workers. Use 1 for sequential execution
            (default), -1 for all CPU cores, or any positive integer.
            Note: with more than one worker, fn and the individuals are sent
            to joblib workers and must be picklable.

    Raises:
        ValueError: If n_workers is invalid.
        TypeError: If no callable evaluation function is available, or an
            evaluation returns something other than Objectives.

    Example:
        >>> evaluate_population(individuals, lambda ind: maximize(ind.genotype.data().sum()))
    """
    if n_workers < 1 and n_workers != -1:
        raise ValueError(f"n_workers must be positive or -1 (all cores), got {n_workers}")

    functions = [_resolve(individual, fn) for individual in individuals]

    if n_workers == 1:
        results = [f(individual) for f, individual in zip(functions, individuals)]
    else:
        from joblib import Parallel, delayed

        results = Parallel(n_jobs=n_workers)(
            delayed(f)(individual) for f, individual in zip(functions, individuals)
        )

    objectives = [to_objective_list(result) for result in results]
    for individual, objective_list in zip(individuals, objectives):
        individual.set_objectives(objective_list)

    logger.debug("Evaluated %d individuals with %d worker(s)", len(individuals), n_workers)


async def evaluate_population_async(
    individuals: Sequence[Individual],
    fn: EvaluationFunction | None = None,
) -> None:
    """Evaluate every individual concurrently and wait for all of them.

    Each individual's :meth:`Individual.evaluate` is called; the pending
    results are awaited together with ``asyncio.gather``. Synchronous
    evaluation functions are accepted too and complete immediately.

    If any evaluation fails, every evaluation still pending is cancelled and
    awaited before the exception propagates, so none of them assigns
    objectives afterwards. Unlike :func:`evaluate_population` this is not
    all-or-nothing: evaluations that finished before the failure keep their
    objectives.

    Raises:
        TypeError: If no callable evaluation function is available.
    """
    pending = []
    try:
        for individual in individuals:
            outcome = individual.evaluate(fn)
            if outcome is None:
                continue
            pending.append(asyncio.wrap_future(outcome) if isinstance(outcome, Future) else outcome)
    except Exception:
        # Release evaluations that will never be awaited
        for awaitable in pending:
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            else:
                awaitable.cancel()
        raise

    tasks = [asyncio.ensure_future(awaitable) for awaitable in pending]
    try:
        await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    logger.debug("Evaluated %d individuals, %d asynchronously", len(individuals), len(pending))
