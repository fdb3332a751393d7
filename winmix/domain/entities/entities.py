"""
Domain Entities Module

This module contains the core domain entities for the football match prediction engine.
These entities represent the core business concepts and are independent of any infrastructure.
"""

from dataclasses import dataclass, field, asdict
from datetime import date, timedelta
from typing import Any, Optional
from enum import Enum

from winmix.domain.constants import PROBABILITY_SUM_TOLERANCE
from winmix.domain.exceptions import UnknownAlgorithmException
from winmix.domain.value_objects.value_objects import ExpectedGoals, GoalMarkets


class MatchResult(str, Enum):
    """Result code of a football match (1X2 notation)."""
    HOME_WIN = "1"
    DRAW = "X"
    AWAY_WIN = "2"
    NOT_PLAYED = "N/A"


class Algorithm(str, Enum):
    """The closed set of prediction strategies."""
    DEFAULT = "default"
    ATTACK_DEFENSE = "attack_defense"
    POISSON = "poisson"
    ELO = "elo"
    MACHINE_LEARNING = "machine_learning"
    RANDOM_FOREST = "random_forest"
    SEASONAL_TRENDS = "seasonal_trends"

    @classmethod
    def parse(cls, value: "str | Algorithm") -> "Algorithm":
        """
        Resolve an algorithm identifier.

        Raises:
            UnknownAlgorithmException: If the identifier is not a known algorithm
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownAlgorithmException(str(value)) from None


@dataclass(frozen=True)
class MatchRecord:
    """
    An historical (or scheduled) match between two teams.

    Attributes:
        match_date: Date the match was played
        home_team: Key of the home team
        away_team: Key of the away team
        home_score: Goals scored by home team (None if not played)
        away_score: Goals scored by away team (None if not played)
        season: Season label (e.g., "2023/24")
        competition: Competition label
        id: Storage identifier, if any
    """
    match_date: date
    home_team: str
    away_team: str
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    season: str = ""
    competition: str = ""
    id: Optional[int] = None

    def __post_init__(self):
        if not self.home_team or not self.away_team:
            raise ValueError("Match teams cannot be empty")
        if (self.home_score is None) != (self.away_score is None):
            raise ValueError("Match scores must be both present or both absent")
        if self.home_score is not None and (self.home_score < 0 or self.away_score < 0):
            raise ValueError("Goals cannot be negative")

    @property
    def is_played(self) -> bool:
        """Check if the match has been played."""
        return self.home_score is not None and self.away_score is not None

    @property
    def result(self) -> MatchResult:
        """Get the 1X2 result code."""
        if not self.is_played:
            return MatchResult.NOT_PLAYED
        if self.home_score > self.away_score:
            return MatchResult.HOME_WIN
        elif self.home_score < self.away_score:
            return MatchResult.AWAY_WIN
        return MatchResult.DRAW

    @property
    def total_goals(self) -> Optional[int]:
        """Get total goals scored in the match."""
        if not self.is_played:
            return None
        return self.home_score + self.away_score

    @property
    def both_teams_scored(self) -> Optional[bool]:
        if not self.is_played:
            return None
        return self.home_score > 0 and self.away_score > 0

    @property
    def goal_difference(self) -> Optional[int]:
        """Winning margin (absolute)."""
        if not self.is_played:
            return None
        return abs(self.home_score - self.away_score)

    @property
    def is_high_scoring(self) -> Optional[bool]:
        """Four or more goals."""
        if not self.is_played:
            return None
        return self.total_goals >= 4

    def is_over(self, goal_line: float) -> Optional[bool]:
        """Check if total goals exceed a goal line such as 2.5."""
        if not self.is_played:
            return None
        return self.total_goals > goal_line

    def is_recent(self, days: int = 30, today: Optional[date] = None) -> bool:
        """Check if the match was played within the last ``days`` days."""
        today = today or date.today()
        return self.match_date >= today - timedelta(days=days)

    def involves(self, team: str) -> bool:
        return team in (self.home_team, self.away_team)

    def goals_for(self, team: str) -> Optional[int]:
        """Goals scored by ``team`` in this match."""
        if not self.is_played:
            return None
        return self.home_score if self.home_team == team else self.away_score

    def goals_against(self, team: str) -> Optional[int]:
        """Goals conceded by ``team`` in this match."""
        if not self.is_played:
            return None
        return self.away_score if self.home_team == team else self.home_score

    def outcome_for(self, team: str) -> Optional[str]:
        """
        Result from the perspective of ``team``.

        Returns:
            'W', 'D', 'L', or None if not played
        """
        if not self.is_played:
            return None
        scored = self.goals_for(team)
        conceded = self.goals_against(team)
        if scored > conceded:
            return "W"
        elif scored < conceded:
            return "L"
        return "D"

    def __str__(self) -> str:
        score = f" ({self.home_score}-{self.away_score})" if self.is_played else ""
        return f"{self.home_team} vs {self.away_team}{score}"


@dataclass(frozen=True)
class TeamAggregateStats:
    """
    Aggregate statistics for a team over a season (or all time).

    Attributes:
        team: Team key
        total_matches: Scored matches played
        wins: Total wins
        draws: Total draws
        losses: Total losses
        win_rate: Wins / matches (0-1)
        avg_goals_for: Average goals scored per match
        avg_goals_against: Average goals conceded per match
        goal_difference: Average goals scored minus average goals conceded
    """
    team: str
    total_matches: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    win_rate: float = 0.0
    avg_goals_for: float = 0.0
    avg_goals_against: float = 0.0
    goal_difference: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class TeamScoringAverage:
    """Average goals a team scores per match, home and away sides weighted equally."""
    team: str
    avg_goals: float


@dataclass(frozen=True)
class TeamFormSummary:
    """
    Recent form of a team over a bounded window of matches.

    Attributes:
        team: Team key
        matches: Scored matches in the window
        wins: Wins in the window
        draws: Draws in the window
        losses: Losses in the window
        points: Points earned (3/1/0)
        form_index: Points earned / maximum possible points (0-1)
        avg_goals_for: Average goals scored
        avg_goals_against: Average goals conceded
    """
    team: str
    matches: int
    wins: int
    draws: int
    losses: int
    points: int
    form_index: float
    avg_goals_for: float
    avg_goals_against: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class HeadToHeadSummary:
    """
    Summary of prior meetings, oriented to the queried fixture.

    ``home_*`` always refers to the queried home team, whichever side
    it played on in the historical match.
    """
    home_team: str
    away_team: str
    total_matches: int = 0
    home_wins: int = 0
    draws: int = 0
    away_wins: int = 0
    avg_goals_home: float = 0.0
    avg_goals_away: float = 0.0
    btts_percentage: float = 0.0

    @property
    def home_win_rate(self) -> float:
        if self.total_matches == 0:
            return 0.0
        return self.home_wins / self.total_matches

    @property
    def draw_rate(self) -> float:
        if self.total_matches == 0:
            return 0.0
        return self.draws / self.total_matches

    @property
    def away_win_rate(self) -> float:
        if self.total_matches == 0:
            return 0.0
        return self.away_wins / self.total_matches

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PredictionResult:
    """
    Output of a prediction algorithm.

    Attributes:
        home_win_probability: Probability of home team winning (0-100)
        draw_probability: Probability of a draw (0-100)
        away_win_probability: Probability of away team winning (0-100)
        expected_goals: Expected goals for each side
        both_teams_score: Probability both teams score (0-100)
        total_goals: Over 1.5/2.5/3.5 goals probabilities (0-100)
        confidence: Confidence in the prediction (0-1)
        algorithm: Display name of the algorithm
        algorithm_id: Algorithm identifier
        details: Algorithm-specific diagnostics
    """
    home_win_probability: float
    draw_probability: float
    away_win_probability: float
    expected_goals: ExpectedGoals
    both_teams_score: float
    total_goals: GoalMarkets
    confidence: float
    algorithm: str
    algorithm_id: Algorithm
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate probability values."""
        probs = [
            self.home_win_probability,
            self.draw_probability,
            self.away_win_probability,
        ]
        for prob in probs + [self.both_teams_score]:
            if not 0 <= prob <= 100:
                raise ValueError(f"Probability must be between 0 and 100, got {prob}")

        # Probabilities should sum to approximately 100
        total = sum(probs)
        if abs(total - 100.0) > PROBABILITY_SUM_TOLERANCE:
            raise ValueError(f"Match outcome probabilities must sum to 100, got {total}")

        if not 0 <= self.confidence <= 1:
            raise ValueError(f"Confidence must be between 0 and 1, got {self.confidence}")

    @property
    def most_likely_result(self) -> MatchResult:
        """Get the result with the highest probability."""
        probs = {
            MatchResult.HOME_WIN: self.home_win_probability,
            MatchResult.DRAW: self.draw_probability,
            MatchResult.AWAY_WIN: self.away_win_probability,
        }
        return max(probs, key=probs.get)

    def to_dict(self) -> dict[str, Any]:
        """Render the result in the API wire shape."""
        data = {
            "homeWinProbability": self.home_win_probability,
            "drawProbability": self.draw_probability,
            "awayWinProbability": self.away_win_probability,
            "expectedGoals": {
                "home": self.expected_goals.home,
                "away": self.expected_goals.away,
            },
            "bothTeamsScore": self.both_teams_score,
            "totalGoals": self.total_goals.to_dict(),
            "confidence": self.confidence,
            "algorithm": self.algorithm,
        }
        if self.details:
            data["details"] = self.details
        return data
