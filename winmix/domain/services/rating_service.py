"""
Rating Domain Service

Single-number relative strength estimate (ELO-style) per team.
"""

from typing import Optional

from winmix.domain.constants import (
    ELO_BASELINE,
    ELO_GOAL_DIFF_FACTOR,
    ELO_LOSS_PENALTY,
    ELO_WIN_BONUS,
)
from winmix.domain.entities.entities import TeamAggregateStats
from winmix.domain.repositories.repositories import MatchDataSource


class RatingService:
    """
    Static rating estimate recomputed from aggregate stats on every call.

    This is not an incrementally updated ELO system: no rating state is kept
    between calls.
    """

    def __init__(self, data_source: MatchDataSource):
        self.data_source = data_source

    def elo_rating(self, team: str, season: Optional[str] = None) -> int:
        """
        Estimate the rating of a team for a season (all time if None).

        rating = 1500 + 15 * wins - 10 * losses + 5 * average goal difference
        """
        stats = self.data_source.get_team_statistics(team, season)
        return self.rating_from_stats(stats)

    @staticmethod
    def rating_from_stats(stats: TeamAggregateStats) -> int:
        return (
            ELO_BASELINE
            + stats.wins * ELO_WIN_BONUS
            - stats.losses * ELO_LOSS_PENALTY
            + int(stats.goal_difference * ELO_GOAL_DIFF_FACTOR)
        )
