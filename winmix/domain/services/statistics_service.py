"""
Statistics Domain Service

Handles calculation of team statistics from match history.
"""

import logging
from collections import defaultdict
from typing import Iterable, Optional

from winmix.domain.constants import (
    DEFAULT_SCORING_RATE,
    FORM_WINDOW,
    H2H_LIMIT,
    MOMENTUM_DECAY,
    MOMENTUM_DRAW_POINTS,
    MOMENTUM_WIN_POINTS,
    NEUTRAL_AVG_GOALS,
    NEUTRAL_FORM_INDEX,
    SCORING_RATE_WINDOW,
    TOP_SCORERS_LIMIT,
)
from winmix.domain.entities.entities import (
    HeadToHeadSummary,
    MatchRecord,
    TeamAggregateStats,
    TeamFormSummary,
    TeamScoringAverage,
)
from winmix.domain.repositories.repositories import MatchDataSource

logger = logging.getLogger(__name__)


class StatisticsService:
    """
    Derives head-to-head, form, scoring rate and momentum figures
    from the match history exposed by a MatchDataSource.
    """

    def __init__(self, data_source: MatchDataSource):
        self.data_source = data_source

    def head_to_head(
        self,
        team_a: str,
        team_b: str,
        limit: int = H2H_LIMIT,
    ) -> HeadToHeadSummary:
        """
        Summarize the most recent meetings between two teams.

        Every meeting is reoriented so that ``home`` means ``team_a``,
        regardless of where the historical match was played.

        Args:
            team_a: Home team of the queried fixture
            team_b: Away team of the queried fixture
            limit: Maximum meetings to consider

        Returns:
            HeadToHeadSummary (all zero when the teams never met)
        """
        matches = self.data_source.get_head_to_head(team_a, team_b, limit)

        home_wins = draws = away_wins = 0
        home_goals = away_goals = 0
        btts = 0

        for match in matches:
            if not match.is_played:
                continue

            outcome = match.outcome_for(team_a)
            if outcome == "W":
                home_wins += 1
            elif outcome == "L":
                away_wins += 1
            else:
                draws += 1

            home_goals += match.goals_for(team_a)
            away_goals += match.goals_against(team_a)

            if match.both_teams_scored:
                btts += 1

        total = home_wins + draws + away_wins
        if total == 0:
            return HeadToHeadSummary(home_team=team_a, away_team=team_b)

        return HeadToHeadSummary(
            home_team=team_a,
            away_team=team_b,
            total_matches=total,
            home_wins=home_wins,
            draws=draws,
            away_wins=away_wins,
            avg_goals_home=round(home_goals / total, 2),
            avg_goals_away=round(away_goals / total, 2),
            btts_percentage=round(btts / total * 100, 1),
        )

    def team_form(self, team: str, window_size: int = FORM_WINDOW) -> TeamFormSummary:
        """
        Calculate recent form over the last ``window_size`` matches.

        With no scored match in the window the form index falls back to 0.5
        and both goal averages to 1.0, so downstream models never see zeros.
        """
        matches = self.data_source.get_team_matches(team, window_size)

        wins = draws = losses = 0
        goals_for = goals_against = 0

        for match in matches:
            if not match.is_played:
                continue

            goals_for += match.goals_for(team)
            goals_against += match.goals_against(team)

            outcome = match.outcome_for(team)
            if outcome == "W":
                wins += 1
            elif outcome == "L":
                losses += 1
            else:
                draws += 1

        played = wins + draws + losses
        points = wins * 3 + draws

        if played == 0:
            return TeamFormSummary(
                team=team,
                matches=0,
                wins=0,
                draws=0,
                losses=0,
                points=0,
                form_index=NEUTRAL_FORM_INDEX,
                avg_goals_for=NEUTRAL_AVG_GOALS,
                avg_goals_against=NEUTRAL_AVG_GOALS,
            )

        return TeamFormSummary(
            team=team,
            matches=played,
            wins=wins,
            draws=draws,
            losses=losses,
            points=points,
            form_index=points / (played * 3),
            avg_goals_for=goals_for / played,
            avg_goals_against=goals_against / played,
        )

    def both_teams_score_probability(
        self,
        home_team: str,
        away_team: str,
        window_size: int = SCORING_RATE_WINDOW,
    ) -> float:
        """Probability (0-100) that both teams score, from recent scoring rates."""
        home_matches = self.data_source.get_team_matches(home_team, window_size)
        away_matches = self.data_source.get_team_matches(away_team, window_size)

        home_rate = self.scoring_rate(home_matches, home_team)
        away_rate = self.scoring_rate(away_matches, away_team)

        return round(home_rate * away_rate * 100, 1)

    @staticmethod
    def scoring_rate(matches: Iterable[MatchRecord], team: str) -> float:
        """
        Fraction of matches in which ``team`` scored at least once.

        Returns 0.7 when no scored match is available.
        """
        scored = 0
        total = 0

        for match in matches:
            if not match.is_played:
                continue
            if match.goals_for(team) > 0:
                scored += 1
            total += 1

        return scored / total if total > 0 else DEFAULT_SCORING_RATE

    @staticmethod
    def momentum(matches: Iterable[MatchRecord], team: str) -> float:
        """
        Decay-weighted result score over a short run of matches.

        Matches are supplied most-recent-first and walked oldest to newest.
        The oldest scored match has weight 1.0 and each following one is
        decayed by 0.8 again; unplayed matches are skipped without decay.
        A win adds 3 x weight, a draw 1 x weight, a loss nothing.

        Example:
            # newest first: W, D, L
            momentum = 0*1.0 + 1*0.8 + 3*0.64  # = 2.72
        """
        momentum = 0.0
        weight = 1.0

        for match in reversed(list(matches)):
            if not match.is_played:
                continue

            outcome = match.outcome_for(team)
            if outcome == "W":
                momentum += MOMENTUM_WIN_POINTS * weight
            elif outcome == "D":
                momentum += MOMENTUM_DRAW_POINTS * weight

            weight *= MOMENTUM_DECAY

        return momentum

    @staticmethod
    def aggregate_team_stats(
        team: str,
        matches: Iterable[MatchRecord],
        season: Optional[str] = None,
    ) -> TeamAggregateStats:
        """
        Calculate aggregate statistics for a team from match history.

        Args:
            team: Team key
            matches: Matches to aggregate (others are ignored)
            season: Only count matches from this season, if given

        Returns:
            TeamAggregateStats for the team
        """
        total = wins = draws = 0
        goals_for = goals_against = 0

        for match in matches:
            if not match.is_played or not match.involves(team):
                continue
            if season and match.season != season:
                continue

            total += 1
            goals_for += match.goals_for(team)
            goals_against += match.goals_against(team)

            outcome = match.outcome_for(team)
            if outcome == "W":
                wins += 1
            elif outcome == "D":
                draws += 1

        if total == 0:
            return TeamAggregateStats(team=team)

        avg_for = goals_for / total
        avg_against = goals_against / total

        return TeamAggregateStats(
            team=team,
            total_matches=total,
            wins=wins,
            draws=draws,
            losses=total - wins - draws,
            win_rate=round(wins / total, 4),
            avg_goals_for=round(avg_for, 2),
            avg_goals_against=round(avg_against, 2),
            goal_difference=round(avg_for - avg_against, 2),
        )

    @staticmethod
    def top_scorers(matches: Iterable[MatchRecord], limit: int = TOP_SCORERS_LIMIT) -> list[TeamScoringAverage]:
        """
        Rank teams by average goals scored over scored matches.

        A team's home average and away average count equally; a side the
        team never played is left out. Ties are broken by team key.
        """
        # team -> [home goals per match], [away goals per match]
        sides: dict[str, tuple[list[int], list[int]]] = defaultdict(lambda: ([], []))
        for match in matches:
            if not match.is_played:
                continue
            sides[match.home_team][0].append(match.home_score)
            sides[match.away_team][1].append(match.away_score)

        averages = []
        for team, (home_goals, away_goals) in sides.items():
            side_averages = [sum(goals) / len(goals) for goals in (home_goals, away_goals) if goals]
            averages.append((team, sum(side_averages) / len(side_averages)))

        averages.sort(key=lambda item: (-item[1], item[0]))
        return [TeamScoringAverage(team=team, avg_goals=round(avg, 2)) for team, avg in averages[:limit]]
