"""Array-backed genotype.

ArrayGenotype stores genes in a 1D numpy array and satisfies the
:class:`evokit.protocols.Genotype` protocol. Mutation and crossover methods
receive and return plain arrays, so they can be written as simple functions:

Example:
    >>> g = ArrayGenotype([0.0, 0.5, 1.0])
    >>> g.mutate(lambda genes: genes[::-1])
    >>> g.data()
    array([1. , 0.5, 0. ])
    >>> [c.data() for c in g.offspring([ArrayGenotype([1.0, 1.0, 1.0])], lambda ps: [(ps[0] + ps[1]) / 2])]
    [array([1.  , 0.75, 0.5 ])]
"""

from collections.abc import Callable, Sequence
from typing import Any

import numpy as np

from evokit.protocols import CrossoverMethod, MutationMethod
from evokit.serialization import deserialize, is_serializable, serialize


def _as_genes(data: Any) -> np.ndarray:
    genes = np.array(data)
    if genes.ndim != 1:
        raise ValueError(f"genes must be 1D, got shape {genes.shape}")
    return genes


class ArrayGenotype:
    """Genotype holding a 1D numpy array of genes.

    The array is copied on construction and on every read, so outside code
    cannot change the genes except through :meth:`mutate`.
    """

    def __init__(self, genes: Sequence[Any] | np.ndarray) -> None:
        self._genes = _as_genes(genes)

    @classmethod
    def generate(cls, size: int, fn: Callable[[int], Any]) -> "ArrayGenotype":
        """Build a genotype of ``size`` genes where gene ``i`` is ``fn(i)``."""
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        return cls([fn(i) for i in range(size)])

    @classmethod
    def random(cls, size: int, rng: np.random.Generator, low: float = 0.0, high: float = 1.0) -> "ArrayGenotype":
        return cls(rng.uniform(low, high, size=size))

    @classmethod
    def deserialize(cls, data: list, fn: Callable[[Any], Any] | None = None) -> "ArrayGenotype":
        decoded = deserialize(data)
        return cls(fn(decoded) if fn is not None else decoded)

    def __len__(self) -> int:
        return self._genes.shape[0]

    def data(self) -> np.ndarray:
        return self._genes.copy()

    def mutate(self, method: MutationMethod) -> None:
        """Apply ``method`` to a copy of the genes and keep its result.

        A method returning None leaves the genes untouched.

        Raises:
            TypeError: If method is not callable.
            ValueError: If the result is not one-dimensional.
        """
        if not callable(method):
            raise TypeError(f"mutation method must be callable, got {type(method).__name__}")
        result = method(self.data())
        if result is None:
            return
        self._genes = _as_genes(result)

    def clone(self, fn: Callable[[np.ndarray], Any] | None = None) -> "ArrayGenotype":
        data = self.data()
        return ArrayGenotype(fn(data) if fn is not None else data)

    def serialize(self, fn: Callable[[np.ndarray], Any] | None = None) -> Any:
        """Return the genes as a list with sentinel tokens for non-finite values.

        Raises:
            TypeError: If the (optionally transformed) data is not plain.
        """
        data = fn(self.data()) if fn is not None else self._genes.tolist()
        if isinstance(data, np.ndarray):
            data = data.tolist()
        if not is_serializable(data):
            raise TypeError("genotype data is not serializable")
        return serialize(data)

    def offspring(self, partners: Sequence["ArrayGenotype"], method: CrossoverMethod) -> list["ArrayGenotype"]:
        """Cross these genes with the partners' genes.

        Args:
            partners: Other genotypes taking part in the crossover.
            method: Receives ``[self.data(), *partner datas]`` and returns a
                list of child gene arrays.

        Returns:
            One new ArrayGenotype per child.
        """
        if not callable(method):
            raise TypeError(f"crossover method must be callable, got {type(method).__name__}")
        parents = [self.data(), *(partner.data() for partner in partners)]
        return [ArrayGenotype(child) for child in method(parents)]

    def __repr__(self) -> str:
        return f"ArrayGenotype({self._genes.tolist()!r})"
