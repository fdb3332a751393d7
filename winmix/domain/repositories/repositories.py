"""
Domain Repository Interfaces Module

These are abstract interfaces that define how the domain layer accesses data.
Concrete implementations are provided in the infrastructure layer.
This follows the Dependency Inversion Principle (DIP).
"""

from abc import ABC, abstractmethod
from typing import Optional

from winmix.domain.entities.entities import (
    MatchRecord,
    TeamAggregateStats,
    TeamScoringAverage,
)


class MatchDataSource(ABC):
    """
    Read-only access to historical matches.

    All match lists are ordered most-recent-first. Implementations raise
    DataSourceException when the underlying store cannot be read.
    """

    @abstractmethod
    def get_head_to_head(
        self,
        team1: str,
        team2: str,
        limit: int = 20,
    ) -> list[MatchRecord]:
        """Get matches between two teams, in either orientation."""
        pass

    @abstractmethod
    def get_team_matches(
        self,
        team: str,
        limit: int = 10,
        season: Optional[str] = None,
    ) -> list[MatchRecord]:
        """Get recent matches involving a team on either side."""
        pass

    @abstractmethod
    def get_team_statistics(
        self,
        team: str,
        season: Optional[str] = None,
    ) -> TeamAggregateStats:
        """Get aggregate statistics for a team over its scored matches."""
        pass

    @abstractmethod
    def get_teams(self) -> list[str]:
        """Get all team keys, sorted."""
        pass

    @abstractmethod
    def get_seasons(self) -> list[str]:
        """Get all season labels, most recent first."""
        pass

    @abstractmethod
    def get_matches(
        self,
        limit: int = 100,
        offset: int = 0,
        season: Optional[str] = None,
        team: Optional[str] = None,
        played_only: bool = False,
    ) -> list[MatchRecord]:
        """Get a page of matches, optionally filtered by season and team."""
        pass

    @abstractmethod
    def count_matches(
        self,
        season: Optional[str] = None,
        team: Optional[str] = None,
    ) -> int:
        """Count matches under the same filters as ``get_matches``."""
        pass

    @abstractmethod
    def get_top_scorers(self, limit: int = 5) -> list[TeamScoringAverage]:
        """Get the teams with the highest average goals scored, best first."""
        pass
