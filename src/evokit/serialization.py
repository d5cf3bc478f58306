"""Plain-data encoding with sentinel tokens for non-finite numbers.

JSON cannot carry NaN, infinities, or an explicit "absent" marker. The
functions in this module walk nested dicts/lists/tuples and swap those values
for string tokens on the way out, and back on the way in:

- ``nan``   <-> ``"__NAN__"``
- ``+inf``  <-> ``"__POSITIVE_INFINITY__"``
- ``-inf``  <-> ``"__NEGATIVE_INFINITY__"``
- ``None``  <-> ``"__UNDEFINED__"``

Example:
    >>> serialize({"value": float("inf"), "weight": 1.0})
    {'value': '__POSITIVE_INFINITY__', 'weight': 1.0}
    >>> deserialize({"value": "__NEGATIVE_INFINITY__"})
    {'value': -inf}
"""

import math
from collections.abc import Callable
from typing import Any

import numpy as np

NAN = "__NAN__"
POSITIVE_INFINITY = "__POSITIVE_INFINITY__"
NEGATIVE_INFINITY = "__NEGATIVE_INFINITY__"
UNDEFINED = "__UNDEFINED__"

_TOKENS: dict[str, float | None] = {
    NAN: math.nan,
    POSITIVE_INFINITY: math.inf,
    NEGATIVE_INFINITY: -math.inf,
    UNDEFINED: None,
}


def _map_values(data: Any, fn: Callable[[Any], Any]) -> Any:
    if isinstance(data, dict):
        return {key: _map_values(value, fn) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [_map_values(value, fn) for value in data]
    return fn(data)


def _encode(value: Any) -> Any:
    if value is None:
        return UNDEFINED
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float):
        if math.isnan(value):
            return NAN
        if value == math.inf:
            return POSITIVE_INFINITY
        if value == -math.inf:
            return NEGATIVE_INFINITY
    return value


def _decode(value: Any) -> Any:
    if isinstance(value, str) and value in _TOKENS:
        return _TOKENS[value]
    return value


def serialize(data: Any) -> Any:
    """Replace non-finite floats and ``None`` with sentinel tokens.

    Args:
        data: A scalar or an arbitrarily nested structure of dicts, lists and tuples.
            Tuples come back as lists.

    Returns:
        A new structure safe to pass to ``json.dumps``.
    """
    return _map_values(data, _encode)


def deserialize(data: Any) -> Any:
    """Inverse of :func:`serialize`."""
    return _map_values(data, _decode)


def is_serializable(data: Any) -> bool:
    """Check that every leaf of ``data`` is a str, int, float, bool or None."""
    if isinstance(data, dict):
        return all(isinstance(key, str) and is_serializable(value) for key, value in data.items())
    if isinstance(data, (list, tuple)):
        return all(is_serializable(value) for value in data)
    return data is None or isinstance(data, (str, int, float, bool, np.generic))
