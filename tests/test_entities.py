"""
Unit Tests for Domain Entities

Tests entity validation, derived properties and value objects.
"""

import pytest
from datetime import date

from winmix.domain.entities.entities import (
    Algorithm,
    MatchRecord,
    MatchResult,
    PredictionResult,
    TeamAggregateStats,
)
from winmix.domain.exceptions import UnknownAlgorithmException
from winmix.domain.value_objects.value_objects import (
    ExpectedGoals,
    GoalMarkets,
    OutcomeProbabilities,
)


class TestMatchRecord:
    """Tests for MatchRecord entity."""

    @pytest.fixture
    def played(self):
        return MatchRecord(
            match_date=date(2024, 5, 4),
            home_team="Ferencvaros",
            away_team="Ujpest",
            home_score=3,
            away_score=1,
        )

    @pytest.fixture
    def scheduled(self):
        return MatchRecord(
            match_date=date(2025, 5, 4),
            home_team="Ferencvaros",
            away_team="Ujpest",
        )

    def test_played_match_properties(self, played):
        assert played.is_played
        assert played.result == MatchResult.HOME_WIN
        assert played.total_goals == 4
        assert played.both_teams_scored is True
        assert played.goal_difference == 2
        assert played.is_high_scoring is True
        assert played.is_over(2.5) is True
        assert played.is_over(4.5) is False

    def test_unplayed_match_properties_are_none(self, scheduled):
        assert not scheduled.is_played
        assert scheduled.result == MatchResult.NOT_PLAYED
        assert scheduled.total_goals is None
        assert scheduled.both_teams_scored is None
        assert scheduled.goal_difference is None
        assert scheduled.is_over(1.5) is None
        assert scheduled.outcome_for("Ferencvaros") is None

    def test_goal_difference_is_absolute_margin(self):
        match = MatchRecord(date(2024, 1, 1), "A", "B", 0, 3)
        assert match.goal_difference == 3
        assert match.result == MatchResult.AWAY_WIN

    def test_team_oriented_helpers(self, played):
        assert played.involves("Ujpest")
        assert not played.involves("Honved")
        assert played.goals_for("Ujpest") == 1
        assert played.goals_against("Ujpest") == 3
        assert played.outcome_for("Ferencvaros") == "W"
        assert played.outcome_for("Ujpest") == "L"

    def test_draw_outcome(self):
        match = MatchRecord(date(2024, 1, 1), "A", "B", 2, 2)
        assert match.result == MatchResult.DRAW
        assert match.outcome_for("A") == "D"
        assert match.outcome_for("B") == "D"

    def test_is_recent(self, played):
        assert played.is_recent(days=30, today=date(2024, 5, 20))
        assert not played.is_recent(days=7, today=date(2024, 5, 20))

    def test_half_score_rejected(self):
        with pytest.raises(ValueError):
            MatchRecord(date(2024, 1, 1), "A", "B", home_score=1)

    def test_negative_score_rejected(self):
        with pytest.raises(ValueError):
            MatchRecord(date(2024, 1, 1), "A", "B", -1, 0)

    def test_empty_team_rejected(self):
        with pytest.raises(ValueError):
            MatchRecord(date(2024, 1, 1), "", "B", 1, 0)

    def test_str(self, played, scheduled):
        assert str(played) == "Ferencvaros vs Ujpest (3-1)"
        assert str(scheduled) == "Ferencvaros vs Ujpest"


class TestAlgorithm:
    """Tests for Algorithm enum parsing."""

    def test_parse_known_identifier(self):
        assert Algorithm.parse("poisson") is Algorithm.POISSON
        assert Algorithm.parse(Algorithm.ELO) is Algorithm.ELO

    def test_seven_algorithms(self):
        assert len(list(Algorithm)) == 7

    def test_parse_unknown_identifier_names_it(self):
        with pytest.raises(UnknownAlgorithmException) as exc_info:
            Algorithm.parse("nonexistent")

        assert exc_info.value.algorithm == "nonexistent"
        assert "nonexistent" in str(exc_info.value)

    def test_unknown_algorithm_is_value_error(self):
        with pytest.raises(ValueError):
            Algorithm.parse("magic")


class TestPredictionResult:
    """Tests for PredictionResult validation and serialization."""

    def make_result(self, **overrides):
        values = dict(
            home_win_probability=50.0,
            draw_probability=25.0,
            away_win_probability=25.0,
            expected_goals=ExpectedGoals(1.6, 1.1),
            both_teams_score=52.0,
            total_goals=GoalMarkets(over_15=80.0, over_25=60.0, over_35=40.0),
            confidence=0.8,
            algorithm="Poisson Distribution",
            algorithm_id=Algorithm.POISSON,
        )
        values.update(overrides)
        return PredictionResult(**values)

    def test_valid_result(self):
        result = self.make_result()
        assert result.most_likely_result == MatchResult.HOME_WIN

    def test_sum_tolerance(self):
        # 100.9 is within tolerance, 102 is not
        self.make_result(home_win_probability=50.9)
        with pytest.raises(ValueError):
            self.make_result(home_win_probability=52.0)

    def test_probability_out_of_range(self):
        with pytest.raises(ValueError):
            self.make_result(home_win_probability=-1.0, draw_probability=76.0)

    def test_confidence_out_of_range(self):
        with pytest.raises(ValueError):
            self.make_result(confidence=1.2)

    def test_to_dict_wire_shape(self):
        data = self.make_result(details={"trees": 100}).to_dict()

        assert data["homeWinProbability"] == 50.0
        assert data["drawProbability"] == 25.0
        assert data["awayWinProbability"] == 25.0
        assert data["expectedGoals"] == {"home": 1.6, "away": 1.1}
        assert data["bothTeamsScore"] == 52.0
        assert data["totalGoals"] == {"over15": 80.0, "over25": 60.0, "over35": 40.0}
        assert data["algorithm"] == "Poisson Distribution"
        assert data["details"] == {"trees": 100}

    def test_to_dict_omits_empty_details(self):
        assert "details" not in self.make_result().to_dict()


class TestValueObjects:
    """Tests for value objects."""

    def test_expected_goals(self):
        xg = ExpectedGoals(1.25, 0.75)
        assert xg.total == 2.0
        assert str(xg) == "1.25-0.75"

    def test_negative_expected_goals_rejected(self):
        with pytest.raises(ValueError):
            ExpectedGoals(-0.1, 1.0)

    def test_goal_markets_range(self):
        with pytest.raises(ValueError):
            GoalMarkets(over_15=101.0, over_25=50.0, over_35=20.0)

    def test_outcome_probabilities_as_percentages(self):
        probs = OutcomeProbabilities(home=0.5, draw=0.3, away=0.2)
        assert probs.as_percentages() == pytest.approx((50.0, 30.0, 20.0))

    def test_team_stats_defaults(self):
        stats = TeamAggregateStats(team="Nobody")
        assert stats.total_matches == 0
        assert stats.to_dict()["win_rate"] == 0.0
