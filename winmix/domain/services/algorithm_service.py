"""
Algorithm Domain Service

This domain service contains the seven prediction strategies:
1. Default - head-to-head record adjusted by form and home advantage
2. Attack-Defense - attacking output against the opponent's defense
3. Poisson - exact scoreline enumeration
4. ELO - logistic conversion of a rating difference
5. Machine Learning - weighted ensemble of 1-4
6. Random Forest - vote of fixed-rule decision trees
7. Seasonal Trends - default prediction shifted by momentum

None of them is a trained model; all are deterministic heuristics.
"""

import logging
from dataclasses import asdict
from typing import Callable, Optional

from winmix.domain.constants import (
    ALGORITHMS_METADATA,
    ATTACK_DEFENSE_DRAW_FLOOR,
    ATTACK_DEFENSE_GAP_THRESHOLD,
    ATTACK_DEFENSE_HOME_MULTIPLIER,
    CONFIDENCE_ELO,
    CONFIDENCE_ENSEMBLE,
    CONFIDENCE_FOREST,
    CONFIDENCE_POISSON,
    CONFIDENCE_SEASONAL,
    ELO_AVERAGE_GOALS,
    ELO_AWAY_GOAL_SHARE,
    ELO_HOME_GOAL_SHARE,
    ELO_SCALE,
    ELO_STRENGTH_DIVISOR,
    ELO_STRENGTH_GOAL_FACTOR,
    ELO_WIN_SHARE,
    ENSEMBLE_WEIGHTS,
    EXTENDED_FORM_WINDOW,
    FOREST_ATTACK_MARGIN,
    FOREST_DRAW_WIN_RATE_GAP,
    FOREST_TREES,
    FORM_FACTOR_SCALE,
    HOME_ADVANTAGE,
    MIN_DEFENSE,
    MOMENTUM_ADJUSTMENT,
    MOMENTUM_WINDOW,
    POISSON_HOME_MULTIPLIER,
    TREND_MAX_PROBABILITY,
    TREND_MIN_PROBABILITY,
)
from winmix.domain.entities.entities import (
    Algorithm,
    HeadToHeadSummary,
    MatchResult,
    PredictionResult,
    TeamFormSummary,
)
from winmix.domain.repositories.repositories import MatchDataSource
from winmix.domain.services.distribution_service import DistributionService
from winmix.domain.services.rating_service import RatingService
from winmix.domain.services.statistics_service import StatisticsService
from winmix.domain.value_objects.value_objects import (
    ExpectedGoals,
    ForestFeatures,
    GoalMarkets,
)

logger = logging.getLogger(__name__)

Strategy = Callable[[str, str, Optional[str]], PredictionResult]


class AlgorithmService:
    """
    Runs one of the prediction strategies for a fixture.

    The set of strategies is closed: dispatch is a table keyed by the
    Algorithm enum, and the ensemble re-enters the same table for its
    components.
    """

    def __init__(
        self,
        data_source: MatchDataSource,
        statistics_service: Optional[StatisticsService] = None,
        rating_service: Optional[RatingService] = None,
        distribution_service: Optional[DistributionService] = None,
    ):
        self.data_source = data_source
        self.statistics = statistics_service or StatisticsService(data_source)
        self.ratings = rating_service or RatingService(data_source)
        self.distribution = distribution_service or DistributionService()

        self._strategies: dict[Algorithm, Strategy] = {
            Algorithm.DEFAULT: self._default_prediction,
            Algorithm.ATTACK_DEFENSE: self._attack_defense_prediction,
            Algorithm.POISSON: self._poisson_prediction,
            Algorithm.ELO: self._elo_prediction,
            Algorithm.MACHINE_LEARNING: self._machine_learning_prediction,
            Algorithm.RANDOM_FOREST: self._random_forest_prediction,
            Algorithm.SEASONAL_TRENDS: self._seasonal_trends_prediction,
        }

    def run(
        self,
        algorithm: "str | Algorithm",
        home_team: str,
        away_team: str,
        season: Optional[str] = None,
    ) -> PredictionResult:
        """
        Run a strategy.

        Raises:
            UnknownAlgorithmException: If ``algorithm`` is not a known identifier
        """
        algorithm = Algorithm.parse(algorithm)
        logger.debug(f"Running {algorithm.value} for {home_team} vs {away_team} (season={season})")
        return self._strategies[algorithm](home_team, away_team, season)

    # --- Strategies ---

    def _default_prediction(self, home_team: str, away_team: str, season: Optional[str]) -> PredictionResult:
        h2h = self.statistics.head_to_head(home_team, away_team)
        home_form = self.statistics.team_form(home_team)
        away_form = self.statistics.team_form(away_team)

        # Base probabilities from H2H
        divisor = max(h2h.total_matches, 1)
        home_prob = h2h.home_wins / divisor * 100
        draw_prob = h2h.draws / divisor * 100
        away_prob = h2h.away_wins / divisor * 100

        # Adjust with form and home advantage
        form_factor = (home_form.form_index - away_form.form_index) * FORM_FACTOR_SCALE
        home_prob += form_factor + HOME_ADVANTAGE * 100
        away_prob -= form_factor

        home_prob, draw_prob, away_prob = self._normalize(home_prob, draw_prob, away_prob)

        home_expected = home_form.avg_goals_for * (1 + HOME_ADVANTAGE)
        away_expected = away_form.avg_goals_for * (1 - HOME_ADVANTAGE * 0.5)

        return self._build_result(
            Algorithm.DEFAULT,
            home_prob,
            draw_prob,
            away_prob,
            home_expected,
            away_expected,
            both_teams_score=self.statistics.both_teams_score_probability(home_team, away_team),
            total_goals=self.distribution.approximate_goal_markets(home_expected + away_expected),
            confidence=self._form_confidence(h2h, home_form, away_form),
            details={
                "h2h_stats": h2h.to_dict(),
                "home_form": home_form.to_dict(),
                "away_form": away_form.to_dict(),
            },
        )

    def _attack_defense_prediction(self, home_team: str, away_team: str, season: Optional[str]) -> PredictionResult:
        home_stats = self.data_source.get_team_statistics(home_team, season)
        away_stats = self.data_source.get_team_statistics(away_team, season)

        home_expected = (
            home_stats.avg_goals_for / max(away_stats.avg_goals_against, MIN_DEFENSE)
            * ATTACK_DEFENSE_HOME_MULTIPLIER
        )
        away_expected = away_stats.avg_goals_for / max(home_stats.avg_goals_against, MIN_DEFENSE)

        gap = home_expected - away_expected
        if gap > ATTACK_DEFENSE_GAP_THRESHOLD:
            home_prob = 50 + min(gap * 10, 35)
            away_prob = 50 - min(gap * 8, 30)
        elif -gap > ATTACK_DEFENSE_GAP_THRESHOLD:
            away_prob = 50 + min(-gap * 10, 35)
            home_prob = 50 - min(-gap * 8, 30)
        else:
            home_prob = 35.0
            away_prob = 35.0

        draw_prob = max(100 - home_prob - away_prob, ATTACK_DEFENSE_DRAW_FLOOR)
        home_prob, draw_prob, away_prob = self._normalize(home_prob, draw_prob, away_prob)

        sample_size = min((home_stats.total_matches + away_stats.total_matches) / 40, 1.0)

        return self._build_result(
            Algorithm.ATTACK_DEFENSE,
            home_prob,
            draw_prob,
            away_prob,
            home_expected,
            away_expected,
            both_teams_score=self.distribution.btts_from_expected_goals(home_expected, away_expected),
            total_goals=self.distribution.approximate_goal_markets(home_expected + away_expected),
            confidence=round(0.6 + sample_size * 0.3, 2),
            details={
                "home_stats": home_stats.to_dict(),
                "away_stats": away_stats.to_dict(),
            },
        )

    def _poisson_prediction(self, home_team: str, away_team: str, season: Optional[str]) -> PredictionResult:
        home_stats = self.data_source.get_team_statistics(home_team, season)
        away_stats = self.data_source.get_team_statistics(away_team, season)

        home_expected = home_stats.avg_goals_for * POISSON_HOME_MULTIPLIER
        away_expected = away_stats.avg_goals_for

        distribution = self.distribution.scoreline_distribution(home_expected, away_expected)
        home_prob, draw_prob, away_prob = (
            self.distribution.outcome_probabilities(distribution).as_percentages()
        )

        return self._build_result(
            Algorithm.POISSON,
            home_prob,
            draw_prob,
            away_prob,
            home_expected,
            away_expected,
            both_teams_score=self.distribution.both_teams_score(distribution),
            total_goals=self.distribution.goal_markets(distribution),
            confidence=CONFIDENCE_POISSON,
            details={
                "most_likely_scorelines": self.distribution.most_likely_scorelines(distribution),
            },
        )

    def _elo_prediction(self, home_team: str, away_team: str, season: Optional[str]) -> PredictionResult:
        home_elo = self.ratings.elo_rating(home_team, season)
        away_elo = self.ratings.elo_rating(away_team, season)
        elo_diff = home_elo - away_elo

        home_share = 1 / (1 + 10 ** (-elo_diff / ELO_SCALE))

        # Part of each side's share goes to the draw
        home_prob = home_share * ELO_WIN_SHARE
        away_prob = (1 - home_share) * ELO_WIN_SHARE
        draw_prob = 100 - home_prob - away_prob

        strength = elo_diff / ELO_STRENGTH_DIVISOR
        home_expected = ELO_AVERAGE_GOALS * (ELO_HOME_GOAL_SHARE + strength * ELO_STRENGTH_GOAL_FACTOR)
        away_expected = ELO_AVERAGE_GOALS * (ELO_AWAY_GOAL_SHARE - strength * ELO_STRENGTH_GOAL_FACTOR)
        home_expected = max(home_expected, 0.0)
        away_expected = max(away_expected, 0.0)

        return self._build_result(
            Algorithm.ELO,
            home_prob,
            draw_prob,
            away_prob,
            home_expected,
            away_expected,
            both_teams_score=self.distribution.btts_from_expected_goals(home_expected, away_expected),
            total_goals=self.distribution.approximate_goal_markets(home_expected + away_expected),
            confidence=CONFIDENCE_ELO,
            details={
                "home_elo": home_elo,
                "away_elo": away_elo,
                "elo_difference": elo_diff,
            },
        )

    def _machine_learning_prediction(self, home_team: str, away_team: str, season: Optional[str]) -> PredictionResult:
        home_prob = draw_prob = away_prob = 0.0
        home_expected = away_expected = 0.0
        btts = 0.0
        components = {}

        for algorithm_id, weight in ENSEMBLE_WEIGHTS.items():
            prediction = self.run(algorithm_id, home_team, away_team, season)

            home_prob += prediction.home_win_probability * weight
            draw_prob += prediction.draw_probability * weight
            away_prob += prediction.away_win_probability * weight
            home_expected += prediction.expected_goals.home * weight
            away_expected += prediction.expected_goals.away * weight
            btts += prediction.both_teams_score * weight

            components[algorithm_id] = {
                "weight": weight,
                "homeWinProbability": prediction.home_win_probability,
                "drawProbability": prediction.draw_probability,
                "awayWinProbability": prediction.away_win_probability,
            }

        return self._build_result(
            Algorithm.MACHINE_LEARNING,
            home_prob,
            draw_prob,
            away_prob,
            home_expected,
            away_expected,
            both_teams_score=round(btts, 1),
            total_goals=self.distribution.approximate_goal_markets(home_expected + away_expected),
            confidence=CONFIDENCE_ENSEMBLE,
            details={"components": components},
        )

    def _random_forest_prediction(self, home_team: str, away_team: str, season: Optional[str]) -> PredictionResult:
        features = self._extract_features(home_team, away_team, season)

        # The trees share identical fixed rules, so every tree casts the
        # same vote: one evaluation gives the full tally.
        votes = {
            MatchResult.HOME_WIN: 0,
            MatchResult.DRAW: 0,
            MatchResult.AWAY_WIN: 0,
        }
        votes[self._simulate_decision_tree(features)] += FOREST_TREES

        home_prob = votes[MatchResult.HOME_WIN] / FOREST_TREES * 100
        draw_prob = votes[MatchResult.DRAW] / FOREST_TREES * 100
        away_prob = votes[MatchResult.AWAY_WIN] / FOREST_TREES * 100

        home_expected = max(0.0, features.home_attack * (1 - features.away_defense_strength))
        away_expected = max(0.0, features.away_attack * (1 - features.home_defense_strength))

        return self._build_result(
            Algorithm.RANDOM_FOREST,
            home_prob,
            draw_prob,
            away_prob,
            home_expected,
            away_expected,
            both_teams_score=self.distribution.btts_from_expected_goals(home_expected, away_expected),
            total_goals=self.distribution.approximate_goal_markets(home_expected + away_expected),
            confidence=CONFIDENCE_FOREST,
            details={
                "features": asdict(features),
                "votes": {result.value: count for result, count in votes.items()},
                "trees": FOREST_TREES,
            },
        )

    def _seasonal_trends_prediction(self, home_team: str, away_team: str, season: Optional[str]) -> PredictionResult:
        home_form = self.statistics.team_form(home_team, EXTENDED_FORM_WINDOW)
        away_form = self.statistics.team_form(away_team, EXTENDED_FORM_WINDOW)

        home_recent = self.data_source.get_team_matches(home_team, MOMENTUM_WINDOW)
        away_recent = self.data_source.get_team_matches(away_team, MOMENTUM_WINDOW)

        home_momentum = self.statistics.momentum(home_recent, home_team)
        away_momentum = self.statistics.momentum(away_recent, away_team)

        base = self.run(Algorithm.DEFAULT, home_team, away_team, season)

        momentum_diff = home_momentum - away_momentum
        adjustment = momentum_diff * MOMENTUM_ADJUSTMENT

        home_prob = self._clamp(base.home_win_probability + adjustment, TREND_MIN_PROBABILITY, TREND_MAX_PROBABILITY)
        away_prob = self._clamp(base.away_win_probability - adjustment, TREND_MIN_PROBABILITY, TREND_MAX_PROBABILITY)
        draw_prob = max(100 - home_prob - away_prob, 0.0)

        return self._build_result(
            Algorithm.SEASONAL_TRENDS,
            home_prob,
            draw_prob,
            away_prob,
            base.expected_goals.home,
            base.expected_goals.away,
            both_teams_score=base.both_teams_score,
            total_goals=base.total_goals,
            confidence=CONFIDENCE_SEASONAL,
            details={
                "home_momentum": round(home_momentum, 3),
                "away_momentum": round(away_momentum, 3),
                "momentum_difference": round(momentum_diff, 3),
                "home_form": home_form.to_dict(),
                "away_form": away_form.to_dict(),
            },
        )

    # --- Helpers ---

    def _extract_features(self, home_team: str, away_team: str, season: Optional[str]) -> ForestFeatures:
        home_stats = self.data_source.get_team_statistics(home_team, season)
        away_stats = self.data_source.get_team_statistics(away_team, season)

        return ForestFeatures(
            home_attack=home_stats.avg_goals_for,
            home_defense_strength=1 / max(home_stats.avg_goals_against, MIN_DEFENSE),
            away_attack=away_stats.avg_goals_for,
            away_defense_strength=1 / max(away_stats.avg_goals_against, MIN_DEFENSE),
            home_win_rate=home_stats.win_rate,
            away_win_rate=away_stats.win_rate,
        )

    @staticmethod
    def _simulate_decision_tree(features: ForestFeatures) -> MatchResult:
        if features.home_attack > features.away_defense_strength + FOREST_ATTACK_MARGIN:
            return MatchResult.HOME_WIN
        elif features.away_attack > features.home_defense_strength + FOREST_ATTACK_MARGIN:
            return MatchResult.AWAY_WIN
        elif abs(features.home_win_rate - features.away_win_rate) < FOREST_DRAW_WIN_RATE_GAP:
            return MatchResult.DRAW
        elif features.home_win_rate > features.away_win_rate:
            return MatchResult.HOME_WIN
        return MatchResult.AWAY_WIN

    @staticmethod
    def _form_confidence(
        h2h: HeadToHeadSummary,
        home_form: TeamFormSummary,
        away_form: TeamFormSummary,
    ) -> float:
        data_quality = min(h2h.total_matches / 10, 1.0)
        form_consistency = 1 - abs(home_form.form_index - away_form.form_index)
        return round(data_quality * 0.6 + form_consistency * 0.4, 2)

    @staticmethod
    def _normalize(home: float, draw: float, away: float) -> tuple[float, float, float]:
        """Clamp negatives to zero and rescale the three outcomes to sum to 100."""
        home, draw, away = max(home, 0.0), max(draw, 0.0), max(away, 0.0)
        total = home + draw + away
        if total <= 0:
            return (100 / 3, 100 / 3, 100 / 3)
        return (home / total * 100, draw / total * 100, away / total * 100)

    @staticmethod
    def _clamp(value: float, lower: float, upper: float) -> float:
        return max(lower, min(upper, value))

    @staticmethod
    def _build_result(
        algorithm: Algorithm,
        home_prob: float,
        draw_prob: float,
        away_prob: float,
        home_expected: float,
        away_expected: float,
        both_teams_score: float,
        total_goals: GoalMarkets,
        confidence: float,
        details: Optional[dict] = None,
    ) -> PredictionResult:
        return PredictionResult(
            home_win_probability=round(home_prob, 1),
            draw_probability=round(draw_prob, 1),
            away_win_probability=round(away_prob, 1),
            expected_goals=ExpectedGoals(
                home=round(max(0.0, home_expected), 2),
                away=round(max(0.0, away_expected), 2),
            ),
            both_teams_score=both_teams_score,
            total_goals=total_goals,
            confidence=confidence,
            algorithm=ALGORITHMS_METADATA[algorithm.value]["name"],
            algorithm_id=algorithm,
            details=details or {},
        )
