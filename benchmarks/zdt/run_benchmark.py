"""Benchmark runner comparing an evokit NSGA-II loop with Pymoo on ZDT problems.

The evokit loop is assembled from the library's own pieces: the NSGA-II
scalarizer drives binary tournaments for parent selection, and the NSGA-II
selector picks survivors from parents plus offspring. Pymoo runs its NSGA2
with matching population size and generation count.

Usage:
    python benchmarks/zdt/run_benchmark.py
"""

import json
import logging
import sys
import time
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import numpy as np
from pymoo.algorithms.moo.nsga2 import NSGA2
from pymoo.core.problem import Problem as PymooProblem
from pymoo.operators.crossover.sbx import SBX
from pymoo.operators.mutation.pm import PM
from pymoo.operators.sampling.rnd import FloatRandomSampling
from pymoo.optimize import minimize
from pymoo.termination import get_termination

from benchmarks.metrics import hypervolume, population_hypervolume
from benchmarks.zdt.problems import BOUNDS, N_VARS, PROBLEMS, as_evaluation

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


# Experiment parameters
POP_SIZE = 100
N_GENERATIONS = 250
SBX_ETA = 15.0
PM_ETA = 20.0
MUTATION_PROB = 1.0 / N_VARS
MUTATION_SIGMA = 0.1
N_RUNS = 10
SEEDS = list(range(N_RUNS))
LIBRARIES = ["evokit", "pymoo"]


def _blend_crossover(rng: np.random.Generator) -> Callable[[list[np.ndarray]], list[np.ndarray]]:
    """BLX-style crossover producing two children clipped to the bounds."""

    def method(parents: list[np.ndarray]) -> list[np.ndarray]:
        a, b = parents
        alpha = rng.uniform(0.0, 1.0, size=a.shape)
        return [
            np.clip(alpha * a + (1 - alpha) * b, *BOUNDS),
            np.clip((1 - alpha) * a + alpha * b, *BOUNDS),
        ]

    return method


def _gaussian_mutation(rng: np.random.Generator) -> Callable[[np.ndarray], np.ndarray]:
    """Per-gene Gaussian noise with probability MUTATION_PROB, clipped to the bounds."""

    def method(genes: np.ndarray) -> np.ndarray:
        mask = rng.random(genes.shape) < MUTATION_PROB
        genes[mask] += rng.normal(0.0, MUTATION_SIGMA, size=int(mask.sum()))
        return np.clip(genes, *BOUNDS)

    return method


def run_evokit(problem_name: str, problem_fn: Callable, seed: int) -> tuple[float, float]:
    """Run an NSGA-II loop built from evokit selection methods.

    Args:
        problem_name: Name of the problem (for logging).
        problem_fn: The ZDT problem function.
        seed: Random seed for reproducibility.

    Returns:
        Tuple of (hypervolume, elapsed_time_seconds).
    """
    from evokit import ArrayGenotype, Individual, IndividualDefaults, evaluate_population, scalarization, selection

    rng = np.random.default_rng(seed)
    defaults = IndividualDefaults(
        evaluation=as_evaluation(problem_fn),
        mutation=_gaussian_mutation(rng),
        crossover=_blend_crossover(rng),
    )
    survivors = selection.nsga2()

    start_time = time.perf_counter()

    population = [
        Individual(ArrayGenotype.random(N_VARS, rng, *BOUNDS), defaults=defaults) for _ in range(POP_SIZE)
    ]
    evaluate_population(population)

    for _ in range(N_GENERATIONS):
        score = scalarization.nsga2(population)
        parents = selection.tournament(size=2, duplicates=True, winner=selection.worst(score))
        mates = parents(POP_SIZE, population, rng=rng)

        offspring: list[Individual] = []
        for i in range(0, POP_SIZE, 2):
            offspring.extend(mates[i].crossover(2, [mates[(i + 1) % POP_SIZE]]))
        for child in offspring:
            child.mutate()
        evaluate_population(offspring)

        population = survivors(POP_SIZE, population + offspring[:POP_SIZE])

    elapsed = time.perf_counter() - start_time

    hv = population_hypervolume(population)
    return hv, elapsed


class PymooZDTProblem(PymooProblem):
    """Wrapper to use ZDT functions with Pymoo."""

    def __init__(self, problem_fn: Callable) -> None:
        super().__init__(n_var=N_VARS, n_obj=2, xl=BOUNDS[0], xu=BOUNDS[1])
        self._problem_fn = problem_fn

    def _evaluate(self, x: np.ndarray, out: dict, *args, **kwargs) -> None:
        out["F"] = np.array([self._problem_fn(xi) for xi in x])


def run_pymoo(problem_name: str, problem_fn: Callable, seed: int) -> tuple[float, float]:
    """Run NSGA-II using Pymoo library.

    Args:
        problem_name: Name of the problem (for logging).
        problem_fn: The ZDT problem function.
        seed: Random seed for reproducibility.

    Returns:
        Tuple of (hypervolume, elapsed_time_seconds).
    """
    problem = PymooZDTProblem(problem_fn)

    algorithm = NSGA2(
        pop_size=POP_SIZE,
        sampling=FloatRandomSampling(),
        crossover=SBX(eta=SBX_ETA, prob=1.0),
        mutation=PM(eta=PM_ETA, prob=MUTATION_PROB),
        eliminate_duplicates=False,
    )

    termination = get_termination("n_gen", N_GENERATIONS)

    start_time = time.perf_counter()
    result = minimize(problem, algorithm, termination, seed=seed, verbose=False)
    elapsed = time.perf_counter() - start_time

    hv = hypervolume(result.pop.get("F"))
    return hv, elapsed


def run_benchmark() -> dict:
    """Run the full benchmark suite.

    Returns:
        Dictionary containing metadata and results.
    """
    metadata = {
        "timestamp": datetime.now(UTC).isoformat(),
        "parameters": {
            "pop_size": POP_SIZE,
            "n_generations": N_GENERATIONS,
            "n_vars": N_VARS,
            "bounds": list(BOUNDS),
            "sbx_eta": SBX_ETA,
            "pm_eta": PM_ETA,
            "mutation_prob": MUTATION_PROB,
            "mutation_sigma": MUTATION_SIGMA,
            "n_runs": N_RUNS,
            "seeds": SEEDS,
        },
    }

    results = []
    runners = [
        ("evokit", run_evokit),
        ("pymoo", run_pymoo),
    ]

    total_runs = len(PROBLEMS) * len(runners) * N_RUNS
    current_run = 0

    for problem_name, problem_fn in PROBLEMS.items():
        for library_name, runner in runners:
            for seed in SEEDS:
                current_run += 1
                logger.info(
                    f"Running [{current_run}/{total_runs}]: {library_name} on {problem_name.upper()} (seed={seed})"
                )

                hv, elapsed = runner(problem_name, problem_fn, seed)

                results.append(
                    {
                        "library": library_name,
                        "problem": problem_name.upper(),
                        "seed": seed,
                        "hypervolume": hv,
                        "time_seconds": elapsed,
                    }
                )

                logger.info(f"  HV: {hv:.4f}, Time: {elapsed:.2f}s")

    return {"metadata": metadata, "results": results}


def print_summary(results: dict) -> None:
    """Print hypervolume and timing tables of the benchmark results."""
    from collections import defaultdict

    hv_data = defaultdict(lambda: defaultdict(list))
    time_data = defaultdict(lambda: defaultdict(list))
    for r in results["results"]:
        hv_data[r["problem"]][r["library"]].append(r["hypervolume"])
        time_data[r["problem"]][r["library"]].append(r["time_seconds"])

    problems = sorted(hv_data.keys())

    print("\n" + "=" * 60)
    print("BENCHMARK SUMMARY")
    print("=" * 60)
    print(f"\nParameters: pop_size={POP_SIZE}, generations={N_GENERATIONS}, runs={N_RUNS}")
    print()

    print(f"{'Problem':<10}" + "".join(f"{lib:>22}" for lib in LIBRARIES))
    print("-" * 54)
    for problem in problems:
        row = f"{problem:<10}"
        for lib in LIBRARIES:
            hvs = hv_data[problem][lib]
            row += f"{np.mean(hvs):>14.4f} +/- {np.std(hvs):.4f}" if hvs else f"{'N/A':>22}"
        print(row)
    print("-" * 54)

    print("\nTiming (mean seconds per run):")
    print(f"{'Problem':<10}" + "".join(f"{lib:>15}" for lib in LIBRARIES))
    print("-" * 40)
    for problem in problems:
        row = f"{problem:<10}"
        for lib in LIBRARIES:
            times = time_data[problem][lib]
            row += f"{np.mean(times):>15.2f}" if times else f"{'N/A':>15}"
        print(row)

    print()


def main() -> None:
    """Main entry point for the benchmark."""
    logger.info("Starting ZDT benchmark suite")
    logger.info(f"Parameters: pop_size={POP_SIZE}, generations={N_GENERATIONS}, runs={N_RUNS}")

    results = run_benchmark()

    output_path = Path(__file__).parent / "results" / "benchmark_results.json"
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        json.dump(results, f, indent=2)

    logger.info(f"Results saved to {output_path}")

    print_summary(results)


if __name__ == "__main__":
    main()
