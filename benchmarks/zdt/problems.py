"""ZDT test problems for multi-objective optimization benchmarking.

The ZDT (Zitzler-Deb-Thiele) test suite is a standard benchmark for
multi-objective evolutionary algorithms. All problems have:
- n decision variables in [0, 1]
- 2 objectives to minimize
- Known Pareto-optimal fronts for validation

References:
    Zitzler, E., Deb, K., & Thiele, L. (2000). Comparison of multiobjective
    evolutionary algorithms: Empirical results. Evolutionary computation, 8(2), 173-195.
"""

from collections.abc import Callable

import numpy as np

from evokit import Individual, Objective, minimize

N_VARS: int = 30
BOUNDS: tuple[float, float] = (0.0, 1.0)


def _g(x: np.ndarray) -> float:
    return 1 + 9 * np.sum(x[1:]) / (len(x) - 1)


def zdt1(x: np.ndarray) -> np.ndarray:
    """ZDT1: convex front, f2 = 1 - sqrt(f1) at x_i = 0 for i > 1."""
    f1 = x[0]
    g = _g(x)
    return np.array([f1, g * (1 - np.sqrt(f1 / g))])


def zdt2(x: np.ndarray) -> np.ndarray:
    """ZDT2: concave front, f2 = 1 - f1^2."""
    f1 = x[0]
    g = _g(x)
    return np.array([f1, g * (1 - (f1 / g) ** 2)])


def zdt3(x: np.ndarray) -> np.ndarray:
    """ZDT3: front split into disconnected convex parts by the sine term."""
    f1 = x[0]
    g = _g(x)
    return np.array([f1, g * (1 - np.sqrt(f1 / g) - (f1 / g) * np.sin(10 * np.pi * f1))])


PROBLEMS: dict[str, Callable[[np.ndarray], np.ndarray]] = {
    "zdt1": zdt1,
    "zdt2": zdt2,
    "zdt3": zdt3,
}


def as_evaluation(problem_fn: Callable[[np.ndarray], np.ndarray]) -> Callable[[Individual], list[Objective]]:
    """Wrap a ZDT function as an evaluation function minimizing both objectives."""

    def evaluate(individual: Individual) -> list[Objective]:
        return [minimize(float(f)) for f in problem_fn(individual.genotype.data())]

    return evaluate
