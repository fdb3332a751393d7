"""
Unit Tests for Rating Service
"""

from winmix.domain.entities.entities import TeamAggregateStats
from winmix.domain.services.rating_service import RatingService


class TestRatingService:
    """Tests for the ELO-style rating estimate."""

    def test_baseline_without_matches(self, empty_source):
        assert RatingService(empty_source).elo_rating("Nobody") == 1500

    def test_all_time_rating(self, data_source):
        service = RatingService(data_source)

        # 1500 + 8*15 - 2*10 + int(1.17*5)
        assert service.elo_rating("Ferencvaros") == 1605
        # 1500 + 3*15 - 6*10 + int(-0.75*5), truncated towards zero
        assert service.elo_rating("Ujpest") == 1482

    def test_season_rating(self, data_source):
        assert RatingService(data_source).elo_rating("Ferencvaros", "2024/25") == 1555

    def test_more_wins_never_lower(self):
        base = TeamAggregateStats(team="A", total_matches=10, wins=4, draws=3, losses=3, goal_difference=0.5)
        better = TeamAggregateStats(team="A", total_matches=11, wins=5, draws=3, losses=3, goal_difference=0.5)

        assert RatingService.rating_from_stats(better) >= RatingService.rating_from_stats(base)

    def test_more_losses_never_higher(self):
        base = TeamAggregateStats(team="A", total_matches=10, wins=4, draws=3, losses=3, goal_difference=0.5)
        worse = TeamAggregateStats(team="A", total_matches=11, wins=4, draws=3, losses=4, goal_difference=0.5)

        assert RatingService.rating_from_stats(worse) <= RatingService.rating_from_stats(base)

    def test_rating_rises_with_goal_difference(self):
        ratings = [
            RatingService.rating_from_stats(
                TeamAggregateStats(team="A", total_matches=10, wins=4, draws=3, losses=3, goal_difference=gd)
            )
            for gd in (-2.0, -0.5, 0.0, 0.4, 1.0, 2.5)
        ]

        assert ratings == sorted(ratings)
        assert ratings[0] < ratings[-1]
        # 1500 + 60 - 30 + int(2.5 * 5)
        assert ratings[-1] == 1542
