"""
Prediction Service Module

Public entry point of the prediction engine.

The service resolves the requested algorithm, runs it once against the
match data source and returns the structured result. Data source failures
propagate unchanged: there is no retry and no fallback prediction.
"""

import logging
from typing import Optional

from winmix.domain.entities.entities import Algorithm, PredictionResult
from winmix.domain.repositories.repositories import MatchDataSource
from winmix.domain.services.algorithm_service import AlgorithmService

logger = logging.getLogger(__name__)


class PredictionService:
    """
    Domain service for generating match predictions.

    Stateless: every call recomputes all statistics from the data source.
    """

    def __init__(
        self,
        data_source: MatchDataSource,
        algorithm_service: Optional[AlgorithmService] = None,
    ):
        """Initialize the prediction service."""
        self.data_source = data_source
        self.algorithm_service = algorithm_service or AlgorithmService(data_source)

    def predict(
        self,
        home_team: str,
        away_team: str,
        algorithm: "str | Algorithm" = Algorithm.DEFAULT,
        season: Optional[str] = None,
    ) -> PredictionResult:
        """
        Predict the outcome of a fixture.

        Team keys are expected to be non-empty and distinct; the calling
        layer enforces this.

        Args:
            home_team: Home team key
            away_team: Away team key
            algorithm: Algorithm identifier (see Algorithm)
            season: Restrict season-aware statistics to this season

        Returns:
            PredictionResult

        Raises:
            UnknownAlgorithmException: If the algorithm is unknown (no query is made)
            DataSourceException: If match data cannot be read
        """
        resolved = Algorithm.parse(algorithm)

        result = self.algorithm_service.run(resolved, home_team, away_team, season)

        logger.info(
            f"Prediction {home_team} vs {away_team} [{resolved.value}]: "
            f"{result.home_win_probability}/{result.draw_probability}/{result.away_win_probability} "
            f"(confidence {result.confidence})"
        )
        return result

    @staticmethod
    def available_algorithms() -> list[Algorithm]:
        return list(Algorithm)
