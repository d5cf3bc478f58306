"""Performance metrics for multi-objective optimization.

This module provides metrics for evaluating the quality of Pareto front
approximations, primarily using the hypervolume indicator.
"""

from collections.abc import Sequence

import numpy as np
from pymoo.indicators.hv import HV

from evokit import Individual


def hypervolume(objectives: np.ndarray, ref_point: np.ndarray | None = None) -> float:
    """Compute hypervolume indicator of minimized objective values.

    Args:
        objectives: (n, n_obj) raw objective values (to be minimized).
        ref_point: Reference point. Defaults to [1.1, 1.1] for ZDT problems,
            which is slightly worse than the nadir point (1, 1).

    Returns:
        Hypervolume value (higher is better).

    Raises:
        ValueError: If objectives array is empty or has wrong shape
    """
    if objectives.size == 0:
        raise ValueError("objectives array cannot be empty")

    if objectives.ndim != 2:
        raise ValueError(f"objectives must be 2D array, got shape {objectives.shape}")

    if ref_point is None:
        ref_point = np.array([1.1, 1.1])

    indicator = HV(ref_point=ref_point)
    return float(indicator(objectives))


def population_hypervolume(individuals: Sequence[Individual], ref_point: np.ndarray | None = None) -> float:
    """Hypervolume of the raw objective values of evaluated individuals."""
    return hypervolume(np.array([individual.values() for individual in individuals]), ref_point)
