"""Registry for selection strategies.

Instead of hardcoding a selection method, callers can register factories that
create configured selectors and retrieve them by name:

- **Configuration-driven experiments**: select strategies by string name
- **Discoverability**: list all available strategies programmatically
- **Factory pattern**: register functions that create configured selectors

Basic usage:
    ```python
    from evokit.registry import SelectionRegistry, list_selections

    def first_factory():
        def selector(amount, individuals, rng=None):
            return list(individuals[:amount])
        return selector

    SelectionRegistry.register("first", first_factory)

    selector = SelectionRegistry.get("tournament", size=3)
    available = list_selections()  # ["best", "first", ...]
    ```
"""

from collections.abc import Callable

from evokit.protocols import SelectionMethod


class SelectionRegistry:
    """Class-level registry of selection strategy factories.

    Factories accept keyword arguments and return SelectionMethod callables,
    so strategies are configured at retrieval time.

    Class Attributes:
        _registry: Dictionary mapping strategy names to factory functions.
    """

    _registry: dict[str, Callable[..., SelectionMethod]] = {}

    @classmethod
    def register(cls, name: str, factory: Callable[..., SelectionMethod]) -> None:
        """Register a selection strategy factory.

        Args:
            name: Unique name for the strategy. Will overwrite if already exists.
            factory: Callable that returns a SelectionMethod. Should accept
                keyword arguments for configuration.

        Raises:
            TypeError: If factory is not callable.
        """
        if not callable(factory):
            raise TypeError(f"factory must be callable, got {type(factory).__name__}")
        cls._registry[name] = factory

    @classmethod
    def get(cls, name: str, **kwargs) -> SelectionMethod:
        """Get a configured selector by name.

        Args:
            name: Name of the registered strategy.
            **kwargs: Configuration parameters passed to the factory function.

        Returns:
            A configured SelectionMethod callable.

        Raises:
            KeyError: If the strategy name is not registered. Error message
                includes list of available strategies.

        Example:
            ```python
            selector = SelectionRegistry.get("tournament", size=5)
            parents = selector(20, individuals, rng=rng)
            ```
        """
        if name not in cls._registry:
            available = ", ".join(sorted(cls._registry.keys())) or "none"
            raise KeyError(f"Selection strategy '{name}' not found. Available strategies: {available}")
        factory = cls._registry[name]
        return factory(**kwargs)

    @classmethod
    def list(cls) -> list[str]:
        """Return sorted list of registered strategy names."""
        return sorted(cls._registry.keys())


def list_selections() -> list[str]:
    """List all registered selection strategies.

    Convenience function that returns SelectionRegistry.list().
    """
    return SelectionRegistry.list()
