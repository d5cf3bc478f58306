"""Tests for selection strategies."""

import numpy as np
import pytest

from evokit import SelectionMethod, maximize, minimize, scalarization, selection
from evokit.selection.sampling import spin


def _values(individuals) -> list[float]:
    return [individual.values()[0] for individual in individuals]


# =============================================================================
# Shared amount handling
# =============================================================================


class TestAmountValidation:
    @pytest.mark.parametrize(
        "factory",
        [selection.best, selection.worst, selection.random, selection.tournament, selection.nsga2],
    )
    def test_rejects_amount_above_population(self, factory, ranked_values, rng) -> None:
        with pytest.raises(ValueError, match="cannot exceed population size"):
            factory()(6, ranked_values, rng=rng)

    @pytest.mark.parametrize(
        "factory",
        [selection.best, selection.random, selection.roulette, selection.rank, selection.nsga2],
    )
    def test_zero_amount(self, factory, ranked_values, rng) -> None:
        assert factory()(0, ranked_values, rng=rng) == []

    def test_negative_amount(self, ranked_values) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            selection.best()(-1, ranked_values)

    def test_non_integer_amount(self, ranked_values) -> None:
        with pytest.raises(TypeError, match="amount must be an integer"):
            selection.best()(1.5, ranked_values)

    def test_empty_population(self, rng) -> None:
        with pytest.raises(ValueError, match="empty population"):
            selection.roulette()(1, [], rng=rng)

    def test_selectors_satisfy_protocol(self) -> None:
        assert isinstance(selection.tournament(), SelectionMethod)


# =============================================================================
# best / worst
# =============================================================================


class TestBestWorst:
    def test_best_picks_highest(self, ranked_values) -> None:
        assert _values(selection.best()(1, ranked_values)) == [5.0]

    def test_worst_picks_lowest(self, ranked_values) -> None:
        assert _values(selection.worst()(1, ranked_values)) == [1.0]

    def test_best_order(self, ranked_values) -> None:
        assert _values(selection.best()(3, ranked_values)) == [5.0, 4.0, 3.0]

    def test_does_not_reorder_input(self, ranked_values) -> None:
        original = list(ranked_values)
        selection.best()(5, ranked_values)
        assert ranked_values == original

    def test_minimized_objective(self, make_individual) -> None:
        individuals = [make_individual(minimize(v)) for v in (3, 1, 2)]
        assert _values(selection.best()(1, individuals)) == [1.0]

    def test_custom_target(self, ranked_values) -> None:
        distance_to_three = lambda individual: -abs(individual.values()[0] - 3)  # noqa: E731
        assert _values(selection.best(distance_to_three)(1, ranked_values)) == [3.0]

    def test_ties_keep_input_order(self, make_individual) -> None:
        a, b = make_individual(maximize(1)), make_individual(maximize(1))
        assert selection.best()(2, [a, b]) == [a, b]
        assert selection.worst()(2, [a, b]) == [a, b]

    def test_target_must_be_callable(self) -> None:
        with pytest.raises(TypeError, match="target must be callable"):
            selection.best(3)


# =============================================================================
# random
# =============================================================================


class TestRandom:
    def test_distinct_members(self, ranked_values, rng) -> None:
        chosen = selection.random()(5, ranked_values, rng=rng)
        assert sorted(_values(chosen)) == [1.0, 2.0, 3.0, 4.0, 5.0]

    def test_reproducible_with_seed(self, ranked_values) -> None:
        first = selection.random()(3, ranked_values, rng=np.random.default_rng(7))
        second = selection.random()(3, ranked_values, rng=np.random.default_rng(7))
        assert first == second

    def test_works_without_rng(self, ranked_values) -> None:
        assert len(selection.random()(2, ranked_values)) == 2


# =============================================================================
# tournament
# =============================================================================


class TestTournament:
    def test_full_size_tournament_picks_best(self, ranked_values, rng) -> None:
        assert _values(selection.tournament(size=5)(1, ranked_values, rng=rng)) == [5.0]

    def test_custom_winner(self, ranked_values, rng) -> None:
        selector = selection.tournament(size=5, winner=selection.worst())
        assert _values(selector(1, ranked_values, rng=rng)) == [1.0]

    def test_without_duplicates_returns_each_once(self, ranked_values, rng) -> None:
        chosen = selection.tournament(size=3)(5, ranked_values, rng=rng)
        assert sorted(_values(chosen)) == [1.0, 2.0, 3.0, 4.0, 5.0]

    def test_full_size_without_duplicates_is_sorted(self, ranked_values, rng) -> None:
        chosen = selection.tournament(size=5)(5, ranked_values, rng=rng)
        assert _values(chosen) == [5.0, 4.0, 3.0, 2.0, 1.0]

    def test_duplicates_allow_oversampling(self, ranked_values, rng) -> None:
        chosen = selection.tournament(size=5, duplicates=True)(8, ranked_values, rng=rng)
        assert _values(chosen) == [5.0] * 8

    def test_selection_pressure(self, ranked_values, rng) -> None:
        chosen = selection.tournament(size=2, duplicates=True)(500, ranked_values, rng=rng)
        counts = {v: _values(chosen).count(v) for v in (1.0, 5.0)}
        # 1 never wins a binary tournament, 5 always does when drawn
        assert counts[1.0] == 0
        assert counts[5.0] > 150

    def test_size_above_population(self, ranked_values, rng) -> None:
        with pytest.raises(ValueError, match="tournament size \\(6\\) cannot exceed population size"):
            selection.tournament(size=6)(1, ranked_values, rng=rng)

    @pytest.mark.parametrize("size", [0, -2])
    def test_size_must_be_positive(self, size) -> None:
        with pytest.raises(ValueError, match="must be positive"):
            selection.tournament(size=size)

    def test_size_must_be_integer(self) -> None:
        with pytest.raises(TypeError, match="must be an integer"):
            selection.tournament(size=2.0)

    def test_duplicates_must_be_bool(self) -> None:
        with pytest.raises(TypeError, match="duplicates must be a bool"):
            selection.tournament(duplicates=1)

    def test_winner_outside_sample(self, ranked_values, make_individual, rng) -> None:
        outsider = make_individual(maximize(0))
        selector = selection.tournament(size=2, winner=lambda amount, sample, rng=None: [outsider])
        with pytest.raises(ValueError, match="outside the tournament"):
            selector(1, ranked_values, rng=rng)

    def test_nsga2_scalarized_winner(self, tradeoff_front, rng) -> None:
        score = scalarization.nsga2(tradeoff_front)
        selector = selection.tournament(size=5, winner=selection.worst(score))
        chosen = selector(1, tradeoff_front, rng=rng)
        assert chosen[0] in tradeoff_front[:4]
        assert chosen[0] is not tradeoff_front[4]


# =============================================================================
# proportionate / roulette / rank
# =============================================================================


class TestSpin:
    def test_single_positive_weight(self, rng) -> None:
        indices = spin(np.array([0.0, 3.0, 0.0]), 50, rng)
        assert np.all(indices == 1)

    def test_all_zero_weights_fall_back_to_uniform(self, rng) -> None:
        indices = spin(np.zeros(4), 400, rng)
        assert set(indices.tolist()) == {0, 1, 2, 3}

    def test_indices_in_range(self, rng) -> None:
        indices = spin(np.array([1.0, 1e-12, 2.0]), 1000, rng)
        assert np.all((indices >= 0) & (indices < 3))

    def test_huge_weights_do_not_overflow(self, rng) -> None:
        indices = spin(np.array([1e308, 1e308]), 2000, rng)
        counts = np.bincount(indices, minlength=2)
        assert counts[0] == pytest.approx(1000, abs=150)
        assert counts[1] == pytest.approx(1000, abs=150)


class TestProportionate:
    def test_frequencies_follow_weights(self, ranked_values, rng) -> None:
        chosen = selection.proportionate([1, 0, 0, 0, 3])(4000, ranked_values, rng=rng)
        values = _values(chosen)
        assert set(values) == {1.0, 5.0}
        assert 0.7 < values.count(5.0) / len(values) < 0.8

    def test_negative_weight_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            selection.proportionate([1.0, -1.0])

    def test_nan_weight_rejected(self) -> None:
        with pytest.raises(ValueError, match="finite"):
            selection.proportionate([1.0, float("nan")])

    def test_weight_count_mismatch(self, ranked_values, rng) -> None:
        with pytest.raises(ValueError, match="got 2 weights for 5 individuals"):
            selection.proportionate([1.0, 1.0])(1, ranked_values, rng=rng)


class TestRoulette:
    def test_favours_higher_fitness(self, ranked_values, rng) -> None:
        values = _values(selection.roulette()(3000, ranked_values, rng=rng))
        assert values.count(5.0) > values.count(1.0) * 3

    def test_negative_targets_are_shifted(self, make_individual, rng) -> None:
        individuals = [make_individual(maximize(v)) for v in (-10.0, -5.0)]
        values = _values(selection.roulette()(2000, individuals, rng=rng))
        # Shifted weights are ROULETTE_EPSILON and 5 + ROULETTE_EPSILON
        assert values.count(-10.0) == 0
        assert values.count(-5.0) == 2000

    def test_infinite_target_rejected(self, make_individual, rng) -> None:
        individuals = [make_individual(maximize(float("inf"))), make_individual(maximize(1))]
        with pytest.raises(ValueError, match="finite target values"):
            selection.roulette()(1, individuals, rng=rng)

    def test_extreme_finite_targets(self, make_individual, rng) -> None:
        individuals = [make_individual(maximize(-1e308)), make_individual(maximize(1e308))]
        values = _values(selection.roulette()(200, individuals, rng=rng))
        assert values.count(1e308) == 200

    def test_scaling_keeps_proportions(self, make_individual, rng) -> None:
        individuals = [make_individual(maximize(v)) for v in (1e300, 3e300)]
        values = _values(selection.roulette()(4000, individuals, rng=rng))
        assert 0.7 < values.count(3e300) / len(values) < 0.8


class TestRank:
    def test_weights_by_position(self, ranked_values, rng) -> None:
        values = _values(selection.rank()(6000, ranked_values, rng=rng))
        # Weights 1..5 out of 15
        assert values.count(5.0) / len(values) == pytest.approx(5 / 15, abs=0.03)
        assert values.count(1.0) / len(values) == pytest.approx(1 / 15, abs=0.02)

    def test_ignores_scale(self, make_individual, rng) -> None:
        individuals = [make_individual(maximize(v)) for v in (-1e9, 0.0, 1e9)]
        values = _values(selection.rank()(3000, individuals, rng=rng))
        assert values.count(-1e9) > 0


# =============================================================================
# nsga2
# =============================================================================


class TestNsga2Selection:
    def test_whole_fronts_first(self, tradeoff_front) -> None:
        chosen = selection.nsga2()(4, tradeoff_front)
        assert chosen == tradeoff_front[:4]

    def test_critical_front_keeps_boundaries(self, tradeoff_front) -> None:
        chosen = selection.nsga2()(2, tradeoff_front)
        assert chosen == [tradeoff_front[0], tradeoff_front[3]]

    def test_all_members(self, tradeoff_front) -> None:
        chosen = selection.nsga2()(5, tradeoff_front)
        assert chosen == tradeoff_front

    def test_precomputed_fronts(self, make_individual) -> None:
        a, b, c = (make_individual(maximize(v)) for v in (1, 2, 3))
        # Deliberately inverted order to show the fronts are trusted as given
        selector = selection.nsga2(frontiers=[[a], [b, c]])
        assert selector(2, [a, b, c])[0] is a

    def test_precomputed_distances(self, make_individual) -> None:
        a, b, c = (make_individual(maximize(v)) for v in (1, 2, 3))
        selector = selection.nsga2(frontiers=[[a, b, c]], distances=[np.array([0.1, 0.5, 0.3])])
        assert selector(2, [a, b, c]) == [b, c]

    def test_distances_require_frontiers(self) -> None:
        with pytest.raises(ValueError, match="require the frontiers"):
            selection.nsga2(distances=[np.array([1.0])])

    def test_distance_length_mismatch(self, make_individual) -> None:
        a = make_individual(maximize(1))
        with pytest.raises(ValueError, match="front 0 has 1 members but 2 distances"):
            selection.nsga2(frontiers=[[a]], distances=[np.array([1.0, 2.0])])

    def test_fronts_too_small(self, make_individual) -> None:
        a, b = make_individual(maximize(1)), make_individual(maximize(2))
        with pytest.raises(ValueError, match="fronts hold 1 individuals, cannot select 2"):
            selection.nsga2(frontiers=[[a]])(2, [a, b])
