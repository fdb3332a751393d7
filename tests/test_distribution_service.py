"""
Unit Tests for Distribution Service

Tests the Poisson scoreline grid and the goal markets derived from it.
"""

import math

import pytest

from winmix.domain.services.distribution_service import DistributionService


class TestPoisson:
    """Tests for the Poisson probability mass function."""

    def test_poisson_probability(self):
        # P(X=2) when λ=2 should be about 0.27
        assert 0.26 < DistributionService.poisson_probability(2, 2.0) < 0.28
        # P(X=0) when λ=1 should be about 0.37
        assert DistributionService.poisson_probability(0, 1.0) == pytest.approx(math.exp(-1))

    def test_zero_expectation(self):
        assert DistributionService.poisson_probability(0, 0.0) == 1.0
        assert DistributionService.poisson_probability(1, 0.0) == 0.0


class TestScorelineDistribution:
    """Tests for the scoreline grid."""

    @pytest.fixture
    def service(self):
        return DistributionService()

    @pytest.mark.parametrize("home, away", [(1.4, 1.1), (0.3, 2.9), (4.5, 3.8), (0.0, 1.2)])
    def test_grid_has_36_cells_summing_to_one(self, service, home, away):
        distribution = service.scoreline_distribution(home, away)

        assert len(distribution) == 36
        assert sum(distribution.values()) == pytest.approx(1.0, abs=1e-6)
        assert "5-5" in distribution

    def test_outcomes_sum_to_one(self, service):
        outcomes = service.outcome_probabilities(service.scoreline_distribution(1.65, 1.2))

        assert outcomes.home + outcomes.draw + outcomes.away == pytest.approx(1.0)
        assert outcomes.home > outcomes.away

    def test_both_teams_score_matches_closed_form_roughly(self, service):
        distribution = service.scoreline_distribution(1.5, 1.2)
        closed_form = DistributionService.btts_from_expected_goals(1.5, 1.2)

        assert service.both_teams_score(distribution) == pytest.approx(closed_form, abs=1.0)

    def test_goal_markets_ordered(self, service):
        markets = service.goal_markets(service.scoreline_distribution(1.5, 1.2))
        assert markets.over_15 >= markets.over_25 >= markets.over_35

    def test_zero_expected_goals_is_certain_goalless_draw(self, service):
        distribution = service.scoreline_distribution(0.0, 0.0)

        assert distribution["0-0"] == pytest.approx(1.0)
        assert service.outcome_probabilities(distribution).draw == pytest.approx(1.0)
        assert service.both_teams_score(distribution) == 0.0

    def test_most_likely_scorelines(self, service):
        top = DistributionService.most_likely_scorelines(service.scoreline_distribution(1.0, 1.0), top=3)

        assert len(top) == 3
        assert top[0]["score"] in ("0-0", "1-0", "0-1", "1-1")
        assert top[0]["probability"] >= top[1]["probability"] >= top[2]["probability"]


class TestGoalMarketApproximation:
    """Tests for the closed-form over/under approximation."""

    def test_bounds(self):
        low = DistributionService.approximate_goal_markets(0.0)
        high = DistributionService.approximate_goal_markets(20.0)

        assert (low.over_15, low.over_25, low.over_35) == (5.0, 5.0, 5.0)
        assert (high.over_15, high.over_25, high.over_35) == (95.0, 90.0, 85.0)

    def test_monotone_and_ordered(self):
        previous = None
        for step in range(0, 61):
            markets = DistributionService.approximate_goal_markets(step / 10)

            assert markets.over_15 >= markets.over_25 >= markets.over_35
            if previous:
                assert markets.over_15 >= previous.over_15
                assert markets.over_25 >= previous.over_25
                assert markets.over_35 >= previous.over_35
            previous = markets

    def test_known_value(self):
        markets = DistributionService.approximate_goal_markets(2.5)
        assert markets.over_25 == round((1 - math.exp(-1.5)) * 100, 1)

    def test_btts_from_expected_goals(self):
        assert DistributionService.btts_from_expected_goals(0.0, 2.0) == 0.0
        assert DistributionService.btts_from_expected_goals(1.0, 1.0) == round((1 - math.exp(-1)) ** 2 * 100, 1)
