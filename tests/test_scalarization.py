"""Tests for scalarization methods."""

import gc

import pytest

from evokit import Objective, maximize, scalarization, weighted_sum


class TestWeightedSum:
    def test_sums_fitness(self, make_individual) -> None:
        individual = make_individual(Objective(2, 2), Objective(-3, 3), Objective(7, 1))
        assert weighted_sum(individual) == 2.0

    def test_no_objectives(self, make_individual) -> None:
        assert weighted_sum(make_individual()) == 0.0


class TestNsga2Scalarization:
    def test_better_front_scores_lower(self, tradeoff_front) -> None:
        score = scalarization.nsga2(tradeoff_front)
        worst_first_front = max(score(individual) for individual in tradeoff_front[:4])
        assert worst_first_front < score(tradeoff_front[4])

    def test_boundary_score(self, tradeoff_front) -> None:
        score = scalarization.nsga2(tradeoff_front)
        assert score(tradeoff_front[0]) == pytest.approx(1 - scalarization.EPSILON)
        assert score(tradeoff_front[4]) == pytest.approx(2 - scalarization.EPSILON)

    def test_interior_score(self, tradeoff_front) -> None:
        score = scalarization.nsga2(tradeoff_front)
        # Front 1, crowding distance 2/3: 1 + (1 - 1 / max(1, 1.5)) - eps
        assert score(tradeoff_front[1]) == pytest.approx(1 + 1 / 3 - scalarization.EPSILON)

    def test_isolated_members_score_lower_within_front(self, make_individual) -> None:
        points = [(0.0, 10.0), (1.0, 9.0), (5.0, 5.0), (10.0, 0.0), (1.5, 8.5)]
        individuals = [make_individual(maximize(a), maximize(b)) for a, b in points]
        score = scalarization.nsga2(individuals)
        # Member 2 sits in the sparse middle, member 4 is crowded near member 1
        assert score(individuals[2]) < score(individuals[4])

    def test_zero_distance_scores_just_below_next_front(self, make_individual) -> None:
        individuals = [make_individual(maximize(1), maximize(1)) for _ in range(4)]
        score = scalarization.nsga2(individuals)
        assert score(individuals[1]) == pytest.approx(2 - scalarization.EPSILON)

    def test_non_member_rejected(self, tradeoff_front, make_individual) -> None:
        score = scalarization.nsga2(tradeoff_front)
        with pytest.raises(ValueError, match="not part of the population"):
            score(make_individual(maximize(1), maximize(1)))

    def test_new_individuals_are_not_confused_with_members(self, make_individual) -> None:
        score = scalarization.nsga2([make_individual(maximize(v), maximize(-v)) for v in range(3)])
        gc.collect()
        newcomers = [make_individual(maximize(9), maximize(9)) for _ in range(3)]
        for newcomer in newcomers:
            with pytest.raises(ValueError, match="not part of the population"):
                score(newcomer)
