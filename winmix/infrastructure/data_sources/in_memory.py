"""
In-Memory Data Source

Match data source over a fixed list of matches. Used for file-backed data
and in tests.
"""

from typing import Iterable, Optional

from winmix.domain.entities.entities import MatchRecord, TeamAggregateStats, TeamScoringAverage
from winmix.domain.repositories.repositories import MatchDataSource
from winmix.domain.services.statistics_service import StatisticsService


class InMemoryMatchSource(MatchDataSource):
    """Read-only data source over an immutable snapshot of matches."""

    def __init__(self, matches: Iterable[MatchRecord] = ()):
        # Most recent first; ties keep insertion order reversed like an id DESC sort
        indexed = list(enumerate(matches))
        indexed.sort(key=lambda item: (item[1].match_date, item[0]), reverse=True)
        self._matches: tuple[MatchRecord, ...] = tuple(match for _, match in indexed)

    def __len__(self) -> int:
        return len(self._matches)

    def get_head_to_head(self, team1: str, team2: str, limit: int = 20) -> list[MatchRecord]:
        pair = {team1, team2}
        meetings = [m for m in self._matches if {m.home_team, m.away_team} == pair]
        return meetings[:limit]

    def get_team_matches(self, team: str, limit: int = 10, season: Optional[str] = None) -> list[MatchRecord]:
        matches = [
            m for m in self._matches
            if m.involves(team) and (not season or m.season == season)
        ]
        return matches[:limit]

    def get_team_statistics(self, team: str, season: Optional[str] = None) -> TeamAggregateStats:
        return StatisticsService.aggregate_team_stats(team, self._matches, season)

    def get_teams(self) -> list[str]:
        teams = set()
        for match in self._matches:
            teams.add(match.home_team)
            teams.add(match.away_team)
        return sorted(teams)

    def get_seasons(self) -> list[str]:
        return sorted({m.season for m in self._matches if m.season}, reverse=True)

    def _filtered(self, season: Optional[str], team: Optional[str]) -> list[MatchRecord]:
        return [
            m for m in self._matches
            if (not season or m.season == season) and (not team or m.involves(team))
        ]

    def get_matches(
        self,
        limit: int = 100,
        offset: int = 0,
        season: Optional[str] = None,
        team: Optional[str] = None,
        played_only: bool = False,
    ) -> list[MatchRecord]:
        matches = [m for m in self._filtered(season, team) if m.is_played or not played_only]
        return matches[offset:offset + limit]

    def count_matches(self, season: Optional[str] = None, team: Optional[str] = None) -> int:
        return len(self._filtered(season, team))

    def get_top_scorers(self, limit: int = 5) -> list[TeamScoringAverage]:
        return StatisticsService.top_scorers(self._matches, limit)
