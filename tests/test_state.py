"""Tests for State bindings."""

import pytest

from evokit import State


class TestState:
    def test_constant_bindings_from_mapping(self) -> None:
        state = State({"age": 3, "tag": "x"})
        assert state.get("age") == 3
        assert state.computed() == {"age": 3, "tag": "x"}
        assert len(state) == 2
        assert "tag" in state

    def test_bind_is_lazy(self) -> None:
        counter = {"n": 0}
        state = State()
        state.bind({"n": lambda: counter["n"]})
        counter["n"] = 5
        assert state.get("n") == 5

    def test_bind_rejects_non_callable(self) -> None:
        with pytest.raises(TypeError, match="binding 'x' must be callable"):
            State().bind({"x": 1})

    def test_missing_key_raises(self) -> None:
        with pytest.raises(KeyError, match="no binding 'missing'"):
            State().get("missing")

    def test_rejects_non_mapping(self) -> None:
        with pytest.raises(TypeError, match="must be a mapping"):
            State([("a", 1)])

    def test_clone_snapshots_values(self) -> None:
        items = [1]
        state = State()
        state.bind({"items": lambda: items})
        clone = state.clone()
        items.append(2)
        assert clone.get("items") == [1]
        assert state.get("items") == [1, 2]

    def test_serialize_uses_tokens(self) -> None:
        assert State({"best": float("inf"), "note": None}).serialize() == {
            "best": "__POSITIVE_INFINITY__",
            "note": "__UNDEFINED__",
        }
