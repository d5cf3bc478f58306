"""Argument checks shared by the selection strategies."""

import numpy as np


def check_amount(amount: int, available: int, replace: bool = False) -> None:
    """Validate the number of individuals a selector is asked for.

    Args:
        amount: Requested number of individuals.
        available: Size of the population being selected from.
        replace: Whether the strategy can pick the same individual twice.

    Raises:
        TypeError: If amount is not an integer.
        ValueError: If amount is negative, exceeds the population for a
            strategy without replacement, or the population is empty.
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, np.integer)):
        raise TypeError(f"amount must be an integer, got {type(amount).__name__}")
    if amount < 0:
        raise ValueError(f"amount must be non-negative, got {amount}")
    if amount > 0 and available == 0:
        raise ValueError("cannot select from an empty population")
    if not replace and amount > available:
        raise ValueError(f"amount ({amount}) cannot exceed population size ({available})")


def resolve_rng(rng: np.random.Generator | None) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()
