"""
Distribution Domain Service

Poisson goal model and the goal markets derived from it.

This is a pure domain service with no external dependencies.
"""

import functools
import math

from winmix.domain.constants import (
    GOAL_MARKET_CURVES,
    GOAL_MARKET_FLOOR,
    POISSON_MAX_GOALS,
)
from winmix.domain.value_objects.value_objects import GoalMarkets, OutcomeProbabilities


class DistributionService:
    """
    Scoreline distribution from two independent Poisson processes.

    Independence between the two sides is a deliberate simplification.
    """

    @staticmethod
    @functools.lru_cache(maxsize=1024)
    def poisson_probability(actual: int, expected: float) -> float:
        """
        Calculate Poisson probability.

        P(X = k) = (λ^k * e^(-λ)) / k!

        Args:
            actual: Actual value (k)
            expected: Expected value (λ)

        Returns:
            Probability of exactly 'actual' events occurring
        """
        if expected <= 0:
            return 0.0 if actual > 0 else 1.0

        return (math.pow(expected, actual) * math.exp(-expected)) / math.factorial(actual)

    def scoreline_distribution(
        self,
        home_expected: float,
        away_expected: float,
        max_goals: int = POISSON_MAX_GOALS,
    ) -> dict[str, float]:
        """
        Joint probability of every scoreline up to ``max_goals`` per side.

        The grid is truncated, so the cells are rescaled to sum to exactly 1.

        Returns:
            Mapping "home-away" -> probability
        """
        distribution = {}
        for home_goals in range(max_goals + 1):
            home_prob = self.poisson_probability(home_goals, home_expected)
            for away_goals in range(max_goals + 1):
                away_prob = self.poisson_probability(away_goals, away_expected)
                distribution[f"{home_goals}-{away_goals}"] = home_prob * away_prob

        total = sum(distribution.values())
        if total > 0:
            distribution = {score: prob / total for score, prob in distribution.items()}

        return distribution

    @staticmethod
    def _parse_scoreline(scoreline: str) -> tuple[int, int]:
        home, away = scoreline.split("-")
        return int(home), int(away)

    def outcome_probabilities(self, distribution: dict[str, float]) -> OutcomeProbabilities:
        """Sum the scoreline grid into home win / draw / away win."""
        home_win = draw = away_win = 0.0

        for scoreline, prob in distribution.items():
            home_goals, away_goals = self._parse_scoreline(scoreline)
            if home_goals > away_goals:
                home_win += prob
            elif home_goals < away_goals:
                away_win += prob
            else:
                draw += prob

        return OutcomeProbabilities(
            home=min(1.0, home_win),
            draw=min(1.0, draw),
            away=min(1.0, away_win),
        )

    def both_teams_score(self, distribution: dict[str, float]) -> float:
        """Probability (0-100) of both sides scoring."""
        btts = 0.0
        for scoreline, prob in distribution.items():
            home_goals, away_goals = self._parse_scoreline(scoreline)
            if home_goals > 0 and away_goals > 0:
                btts += prob
        return round(min(btts, 1.0) * 100, 1)

    def goal_markets(self, distribution: dict[str, float]) -> GoalMarkets:
        """Exact over 1.5/2.5/3.5 probabilities (0-100) from the grid."""
        over_15 = over_25 = over_35 = 0.0

        for scoreline, prob in distribution.items():
            total_goals = sum(self._parse_scoreline(scoreline))
            if total_goals > 1.5:
                over_15 += prob
            if total_goals > 2.5:
                over_25 += prob
            if total_goals > 3.5:
                over_35 += prob

        return GoalMarkets(
            over_15=round(min(over_15, 1.0) * 100, 1),
            over_25=round(min(over_25, 1.0) * 100, 1),
            over_35=round(min(over_35, 1.0) * 100, 1),
        )

    @staticmethod
    def approximate_goal_markets(expected_total: float) -> GoalMarkets:
        """
        Closed-form over/under approximation.

        over = clamp(5, cap, (1 - e^(-total * k)) * 100) with k = 0.8/0.6/0.4
        and cap = 95/90/85 for the 1.5/2.5/3.5 lines. Cheaper than the full grid
        and numerically different from it.
        """
        markets = {}
        for line, (decay, cap) in GOAL_MARKET_CURVES.items():
            raw = (1 - math.exp(-max(expected_total, 0.0) * decay)) * 100
            markets[line] = round(min(cap, max(GOAL_MARKET_FLOOR, raw)), 1)
        return GoalMarkets(**markets)

    @staticmethod
    def btts_from_expected_goals(home_expected: float, away_expected: float) -> float:
        """Probability (0-100) that both teams score, P(X>0) * P(Y>0)."""
        home_score_prob = 1 - math.exp(-max(home_expected, 0.0))
        away_score_prob = 1 - math.exp(-max(away_expected, 0.0))
        return round(home_score_prob * away_score_prob * 100, 1)

    @staticmethod
    def most_likely_scorelines(distribution: dict[str, float], top: int = 5) -> list[dict]:
        ranked = sorted(distribution.items(), key=lambda item: item[1], reverse=True)
        return [
            {"score": score, "probability": round(prob * 100, 1)}
            for score, prob in ranked[:top]
        ]
