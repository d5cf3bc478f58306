"""Named, lazily computed bindings attached to an individual."""

import copy
from collections.abc import Callable, Mapping
from typing import Any

from evokit.serialization import serialize


class State:
    """Mutable mapping of names to zero-argument functions.

    Values are produced on demand, so a binding can reflect something that
    changes over time (a generation counter, a shared schedule). Plain values
    passed to the constructor are wrapped in constant bindings.

    Example:
        >>> state = State({"age": 0})
        >>> state.bind({"label": lambda: "elite"})
        >>> state.computed()
        {'age': 0, 'label': 'elite'}
    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        if data is not None and not isinstance(data, Mapping):
            raise TypeError(f"state data must be a mapping, got {type(data).__name__}")
        self._bindings: dict[str, Callable[[], Any]] = {}
        for key, value in (data or {}).items():
            self._bindings[key] = lambda value=value: value

    def bind(self, bindings: Mapping[str, Callable[[], Any]]) -> None:
        """Add or replace bindings.

        Raises:
            TypeError: If any binding is not callable.
        """
        for key, fn in bindings.items():
            if not callable(fn):
                raise TypeError(f"binding '{key}' must be callable, got {type(fn).__name__}")
        self._bindings.update(bindings)

    def get(self, key: str) -> Any:
        if key not in self._bindings:
            raise KeyError(f"state has no binding '{key}'")
        return self._bindings[key]()

    def keys(self) -> list[str]:
        return list(self._bindings)

    def computed(self) -> dict[str, Any]:
        """Evaluate every binding and return the results as a dict."""
        return {key: fn() for key, fn in self._bindings.items()}

    def clone(self) -> "State":
        """Snapshot the current values into a new, independent State."""
        return State(copy.deepcopy(self.computed()))

    def serialize(self) -> dict[str, Any]:
        return serialize(self.computed())

    def __contains__(self, key: object) -> bool:
        return key in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:
        return f"State(keys={self.keys()!r})"
