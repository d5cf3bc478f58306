"""Stochastic selection: uniform, fitness-proportionate, roulette and rank.

Proportionate selection spins a roulette wheel whose slots are sized by
non-negative weights. For weights w_i the selection probability is::

    p_i = w_i / sum(w)

Degenerate wheels are resolved explicitly: negative or non-finite weights are
rejected, and an all-zero wheel falls back to uniform choice.
"""

from collections.abc import Sequence

import numpy as np

from evokit.individual import Individual
from evokit.protocols import ScalarizationMethod
from evokit.scalarization import weighted_sum
from evokit.selection.base import check_amount, resolve_rng

# Keeps the lowest shifted roulette target selectable
ROULETTE_EPSILON = 1e-10


def _check_weights(weights: np.ndarray) -> None:
    if weights.ndim != 1:
        raise ValueError(f"weights must be 1D, got shape {weights.shape}")
    if not np.all(np.isfinite(weights)):
        raise ValueError("weights must be finite")
    if np.any(weights < 0):
        raise ValueError("weights must be non-negative")


def spin(weights: np.ndarray, amount: int, rng: np.random.Generator) -> np.ndarray:
    """Draw ``amount`` indices with replacement, proportionally to ``weights``.

    Rolls landing past the last cumulative boundary through floating-point
    rounding are clamped to the last index.
    """
    n = weights.shape[0]
    largest = weights.max()
    if largest == 0:
        return rng.integers(0, n, size=amount)

    # Scale to [0, 1] first so the sum of large finite weights cannot overflow
    scaled = weights / largest
    cumulative = np.cumsum(scaled / scaled.sum())
    rolls = rng.random(amount)
    # First slot whose upper boundary lies above the roll
    indices = np.searchsorted(cumulative, rolls, side="right")
    return np.minimum(indices, n - 1)


def random():
    """Create a selector drawing a uniform sample without replacement.

    Example:
        >>> selector = random()
        >>> len(selector(3, individuals, rng=np.random.default_rng(0)))
        3
    """

    def selector(
        amount: int,
        individuals: Sequence[Individual],
        rng: np.random.Generator | None = None,
    ) -> list[Individual]:
        """Select ``amount`` distinct individuals uniformly at random.

        Raises:
            ValueError: If amount exceeds the population size.
        """
        check_amount(amount, len(individuals))
        rng = resolve_rng(rng)
        indices = rng.choice(len(individuals), size=amount, replace=False)
        return [individuals[i] for i in indices]

    return selector


def proportionate(weights: Sequence[float] | np.ndarray):
    """Create a roulette-wheel selector over fixed per-position weights.

    Args:
        weights: One non-negative weight per individual, aligned with the
            sequence later passed to the selector.

    Returns:
        A SelectionMethod sampling with replacement.

    Raises:
        ValueError: If weights are not 1D, contain negative, NaN or infinite values.
    """
    weights = np.array(weights, dtype=np.float64)
    _check_weights(weights)

    def selector(
        amount: int,
        individuals: Sequence[Individual],
        rng: np.random.Generator | None = None,
    ) -> list[Individual]:
        """Spin the wheel ``amount`` times.

        Raises:
            ValueError: If the number of weights does not match the population size.
        """
        check_amount(amount, len(individuals), replace=True)
        if weights.shape[0] != len(individuals):
            raise ValueError(f"got {weights.shape[0]} weights for {len(individuals)} individuals")
        if amount == 0:
            return []
        indices = spin(weights, amount, resolve_rng(rng))
        return [individuals[i] for i in indices]

    return selector


def roulette(target: ScalarizationMethod = weighted_sum):
    """Create a proportionate selector weighted by ``target``.

    Target values are used as weights after dividing by their largest
    magnitude. When any of them is negative the whole set is shifted so the
    minimum becomes ``ROULETTE_EPSILON``, which keeps larger targets more
    likely while every weight stays positive.

    Raises:
        TypeError: If target is not callable.
    """
    if not callable(target):
        raise TypeError(f"target must be callable, got {type(target).__name__}")

    def selector(
        amount: int,
        individuals: Sequence[Individual],
        rng: np.random.Generator | None = None,
    ) -> list[Individual]:
        """Select ``amount`` individuals with replacement.

        Raises:
            ValueError: If any target value is NaN or infinite.
        """
        check_amount(amount, len(individuals), replace=True)
        if amount == 0:
            return []
        targets = np.array([target(individual) for individual in individuals], dtype=np.float64)
        if not np.all(np.isfinite(targets)):
            raise ValueError("roulette selection requires finite target values")
        largest = np.abs(targets).max()
        if largest > 0:
            # Rescale to [-1, 1] so the shift below cannot overflow
            targets = targets / largest
        if targets.min() < 0:
            targets = targets - targets.min() + ROULETTE_EPSILON
        return proportionate(targets)(amount, individuals, rng=rng)

    return selector


def rank(target: ScalarizationMethod = weighted_sum):
    """Create a rank-based proportionate selector.

    Individuals are sorted ascending by ``target`` and given weights 1..N, so
    the highest target is N times as likely as the lowest. Only the order of
    target values matters, not their scale or sign.

    Raises:
        TypeError: If target is not callable.
    """
    if not callable(target):
        raise TypeError(f"target must be callable, got {type(target).__name__}")

    def selector(
        amount: int,
        individuals: Sequence[Individual],
        rng: np.random.Generator | None = None,
    ) -> list[Individual]:
        check_amount(amount, len(individuals), replace=True)
        ordered = sorted(individuals, key=target)
        weights = np.arange(1, len(ordered) + 1, dtype=np.float64)
        return proportionate(weights)(amount, ordered, rng=rng)

    return selector
