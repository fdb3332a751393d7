"""
Domain Value Objects Module

Value objects are immutable objects that are defined by their attributes rather than identity.
They encapsulate validation logic and provide type safety.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ExpectedGoals:
    """
    Model-estimated mean goals for each side of a fixture.
    """
    home: float
    away: float

    def __post_init__(self):
        if self.home < 0 or self.away < 0:
            raise ValueError(f"Expected goals cannot be negative, got {self.home}-{self.away}")

    @property
    def total(self) -> float:
        """Expected total goals in the match."""
        return self.home + self.away

    def __str__(self) -> str:
        return f"{self.home:.2f}-{self.away:.2f}"


@dataclass(frozen=True)
class GoalMarkets:
    """
    Over X.5 goals probabilities, expressed as percentages (0-100).
    """
    over_15: float
    over_25: float
    over_35: float

    def __post_init__(self):
        for value in (self.over_15, self.over_25, self.over_35):
            if not 0.0 <= value <= 100.0:
                raise ValueError(f"Goal market probability must be between 0 and 100, got {value}")

    def to_dict(self) -> dict[str, float]:
        return {
            "over15": self.over_15,
            "over25": self.over_25,
            "over35": self.over_35,
        }


@dataclass(frozen=True)
class OutcomeProbabilities:
    """
    Home win / draw / away win probabilities as fractions (0-1).
    """
    home: float
    draw: float
    away: float

    def __post_init__(self):
        for value in (self.home, self.draw, self.away):
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"Probability must be between 0 and 1, got {value}")

    def as_percentages(self) -> tuple[float, float, float]:
        """Convert to percentages (0-100)."""
        return (self.home * 100, self.draw * 100, self.away * 100)


@dataclass(frozen=True)
class ForestFeatures:
    """
    Strength features fed to the simulated decision trees.

    Defense strength is the inverse of goals conceded per match,
    so higher means a tighter defense.
    """
    home_attack: float
    home_defense_strength: float
    away_attack: float
    away_defense_strength: float
    home_win_rate: float
    away_win_rate: float
