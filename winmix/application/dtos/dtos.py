"""
Data Transfer Objects (DTOs) Module

DTOs are used to transfer data between layers and to/from the API.
They use Pydantic for validation and serialization.

Prediction payloads keep the camelCase field names the web client expects
(``homeWinProbability``, ``expectedGoals`` ...); the rest of the API uses
snake_case.
"""

from datetime import date, datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field

from winmix.domain.entities.entities import PredictionResult


# ============================================================
# Request DTOs
# ============================================================

class FixtureDTO(BaseModel):
    """A fixture to predict. Teams are validated by the use case."""
    home_team: Optional[str] = Field(default=None, description="Home team key")
    away_team: Optional[str] = Field(default=None, description="Away team key")


class BatchPredictionRequestDTO(BaseModel):
    """Request for predicting several fixtures with one algorithm."""
    fixtures: list[FixtureDTO] = Field(..., min_length=1, max_length=50)
    algorithm: str = Field(default="default", description="Algorithm identifier")
    season: Optional[str] = Field(default=None, description="Restrict statistics to a season")


# ============================================================
# Response DTOs
# ============================================================

class ExpectedGoalsDTO(BaseModel):
    home: float = Field(..., ge=0)
    away: float = Field(..., ge=0)


class GoalMarketsDTO(BaseModel):
    over15: float = Field(..., ge=0, le=100)
    over25: float = Field(..., ge=0, le=100)
    over35: float = Field(..., ge=0, le=100)


class PredictionDTO(BaseModel):
    """Prediction data transfer object (percentages 0-100)."""
    homeWinProbability: float = Field(..., ge=0, le=100)
    drawProbability: float = Field(..., ge=0, le=100)
    awayWinProbability: float = Field(..., ge=0, le=100)
    expectedGoals: ExpectedGoalsDTO
    bothTeamsScore: float = Field(..., ge=0, le=100)
    totalGoals: GoalMarketsDTO
    confidence: float = Field(..., ge=0, le=1)
    algorithm: str
    details: Optional[dict[str, Any]] = None

    @classmethod
    def from_result(cls, result: PredictionResult) -> "PredictionDTO":
        return cls.model_validate(result.to_dict())


class PredictionMetaDTO(BaseModel):
    """Context of a prediction."""
    algorithm: str
    home_team: str
    away_team: str
    season: Optional[str] = None
    generated_at: datetime


class PredictionResponseDTO(BaseModel):
    """Response containing a single fixture prediction."""
    prediction: PredictionDTO
    meta: PredictionMetaDTO


class BatchPredictionsResponseDTO(BaseModel):
    """Response containing predictions for a batch of fixtures."""
    predictions: list[PredictionResponseDTO]
    skipped: int = 0
    generated_at: datetime


class AlgorithmDTO(BaseModel):
    """Catalogue entry of a prediction algorithm."""
    id: str
    name: str
    description: str
    speed: str


class AlgorithmsResponseDTO(BaseModel):
    algorithms: list[AlgorithmDTO]
    default: str = "default"


class TeamStatsDTO(BaseModel):
    """Aggregate team statistics."""
    team: str
    total_matches: int
    wins: int
    draws: int
    losses: int
    win_rate: float = Field(..., ge=0, le=1)
    avg_goals_for: float
    avg_goals_against: float
    goal_difference: float

    model_config = ConfigDict(from_attributes=True)


class TeamFormDTO(BaseModel):
    """Recent form of a team."""
    matches: int
    wins: int
    draws: int
    losses: int
    points: int
    form_index: float = Field(..., ge=0, le=1)
    avg_goals_for: float
    avg_goals_against: float

    model_config = ConfigDict(from_attributes=True)


class MatchDTO(BaseModel):
    """Historical match data transfer object."""
    id: Optional[int] = None
    match_date: date
    home_team: str
    away_team: str
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    season: str = ""
    competition: str = ""

    model_config = ConfigDict(from_attributes=True)


class TeamDetailsDTO(BaseModel):
    """Statistics, form and recent results of a team."""
    team: str
    season: Optional[str] = None
    statistics: TeamStatsDTO
    form: TeamFormDTO
    recent_matches: list[MatchDTO] = Field(default_factory=list)
    seasons: list[str] = Field(default_factory=list)


class TeamsResponseDTO(BaseModel):
    teams: list[str]
    total: int


class MatchesMetaDTO(BaseModel):
    """Paging window and filters of a match listing."""
    limit: int
    offset: int
    total: int = Field(..., description="Matches under the same filters, ignoring paging")
    season: Optional[str] = None
    team: Optional[str] = None


class MatchesResponseDTO(BaseModel):
    matches: list[MatchDTO]
    meta: MatchesMetaDTO


class TopScorerDTO(BaseModel):
    team: str
    avg_goals: float = Field(..., ge=0)

    model_config = ConfigDict(from_attributes=True)


class StatisticsResponseDTO(BaseModel):
    """League-wide overview of the match history."""
    total_matches: int
    recent_matches: list[MatchDTO] = Field(default_factory=list)
    top_scorers: list[TopScorerDTO] = Field(default_factory=list)
    algorithms_available: int
    last_updated: datetime


class HealthResponseDTO(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str = "1.0.0"
    timestamp: datetime


class ErrorResponseDTO(BaseModel):
    """Error response."""
    error: str
    message: str
    details: Optional[dict] = None
