"""Selection strategies for evolutionary algorithms."""

from evokit.registry import SelectionRegistry
from evokit.selection.nsga2 import nsga2
from evokit.selection.ranking import best, worst
from evokit.selection.sampling import proportionate, random, rank, roulette
from evokit.selection.tournament import tournament

# Register built-in selection strategies
SelectionRegistry.register("best", best)
SelectionRegistry.register("worst", worst)
SelectionRegistry.register("random", random)
SelectionRegistry.register("tournament", tournament)
SelectionRegistry.register("roulette", roulette)
SelectionRegistry.register("rank", rank)
SelectionRegistry.register("nsga2", nsga2)

__all__ = ["best", "worst", "random", "tournament", "proportionate", "roulette", "rank", "nsga2"]
