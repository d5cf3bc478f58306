"""Weighted scalar criteria attached to individuals.

An Objective pairs a measured ``value`` with a signed ``weight``. The product
``value * weight`` is the objective's fitness, and larger fitness is always
better: a positive weight maximizes the value, a negative weight minimizes it.

Example:
    >>> cost = minimize(12.5)
    >>> cost.fitness()
    -12.5
    >>> Objective.deserialize(Objective(float("inf"), 1.0).serialize()).value
    inf
"""

import json
import math
from numbers import Real

from evokit.serialization import deserialize, serialize


def _check_number(name: str, number: float) -> float:
    if isinstance(number, bool) or not isinstance(number, Real):
        raise TypeError(f"{name} must be a real number, got {type(number).__name__}")
    number = float(number)
    if math.isnan(number):
        raise ValueError(f"{name} must not be NaN")
    return number


class Objective:
    """A single weighted evaluation criterion.

    Attributes:
        value: The raw measured criterion. May be infinite, never NaN.
        weight: Signed importance. Positive maximizes, negative minimizes.

    Note:
        ``Objective(inf, 0).fitness()`` is NaN under IEEE arithmetic. Such an
        objective is accepted, but it compares as neither better nor worse than
        anything, so avoid zero weights on unbounded values.
    """

    __slots__ = ("_value", "_weight")

    def __init__(self, value: float, weight: float) -> None:
        """Create an objective.

        Raises:
            TypeError: If value or weight is not a real number.
            ValueError: If value or weight is NaN.
        """
        self._value = _check_number("value", value)
        self._weight = _check_number("weight", weight)

    @property
    def value(self) -> float:
        return self._value

    @value.setter
    def value(self, value: float) -> None:
        self._value = _check_number("value", value)

    @property
    def weight(self) -> float:
        return self._weight

    @weight.setter
    def weight(self, weight: float) -> None:
        self._weight = _check_number("weight", weight)

    def fitness(self) -> float:
        """Return ``value * weight``."""
        return self._value * self._weight

    def clone(self) -> "Objective":
        return Objective(self._value, self._weight)

    def serialize(self) -> dict:
        """Encode as a plain dict with sentinel tokens for infinities."""
        return serialize({"value": self._value, "weight": self._weight})

    @classmethod
    def deserialize(cls, data: dict) -> "Objective":
        """Rebuild an objective from :meth:`serialize` output.

        Raises:
            TypeError: If data is not a dict with numeric ``value`` and ``weight``.
            ValueError: If either field decodes to NaN.
        """
        if not isinstance(data, dict):
            raise TypeError(f"serialized objective must be a dict, got {type(data).__name__}")
        decoded = deserialize(data)
        return cls(decoded.get("value"), decoded.get("weight"))

    def to_json(self) -> str:
        return json.dumps(self.serialize())

    @classmethod
    def from_json(cls, data: str) -> "Objective":
        return cls.deserialize(json.loads(data))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Objective):
            return NotImplemented
        return self._value == other._value and self._weight == other._weight

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Objective(value={self._value!r}, weight={self._weight!r})"


def objective(value: float, weight: float) -> Objective:
    return Objective(value, weight)


def maximize(value: float) -> Objective:
    """Objective whose value should be as large as possible (weight 1)."""
    return Objective(value, 1.0)


def minimize(value: float) -> Objective:
    """Objective whose value should be as small as possible (weight -1)."""
    return Objective(value, -1.0)
