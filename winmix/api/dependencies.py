"""
API Dependencies Module

Provides dependency injection for FastAPI routes.
Contains factory functions for creating use case dependencies.
"""

from functools import lru_cache

from fastapi import Depends

from winmix.config import MATCHES_FILE
from winmix.domain.repositories.repositories import MatchDataSource
from winmix.domain.services.prediction_service import PredictionService
from winmix.domain.services.statistics_service import StatisticsService
from winmix.infrastructure.cache.cache_service import CacheService, get_cache_service
from winmix.infrastructure.data_sources.file_source import FileMatchSource
from winmix.infrastructure.repositories.sql_match_repository import SqlMatchRepository
from winmix.application.use_cases.use_cases import (
    GetAlgorithmsUseCase,
    GetBatchPredictionsUseCase,
    GetMatchesUseCase,
    GetPredictionUseCase,
    GetStatisticsUseCase,
    GetTeamDetailsUseCase,
    GetTeamsUseCase,
)


@lru_cache()
def get_data_source() -> MatchDataSource:
    """Get the match data source (cached): the matches file when configured, else the database."""
    if MATCHES_FILE:
        return FileMatchSource(MATCHES_FILE)
    return SqlMatchRepository()


@lru_cache()
def get_cache() -> CacheService:
    """Get cache service (cached)."""
    return get_cache_service()


def get_prediction_service(
    data_source: MatchDataSource = Depends(get_data_source),
) -> PredictionService:
    return PredictionService(data_source)


def get_statistics_service(
    data_source: MatchDataSource = Depends(get_data_source),
) -> StatisticsService:
    return StatisticsService(data_source)


def get_prediction_use_case(
    prediction_service: PredictionService = Depends(get_prediction_service),
    cache: CacheService = Depends(get_cache),
) -> GetPredictionUseCase:
    return GetPredictionUseCase(prediction_service, cache)


def get_batch_predictions_use_case(
    prediction_use_case: GetPredictionUseCase = Depends(get_prediction_use_case),
) -> GetBatchPredictionsUseCase:
    return GetBatchPredictionsUseCase(prediction_use_case)


def get_algorithms_use_case() -> GetAlgorithmsUseCase:
    return GetAlgorithmsUseCase()


def get_teams_use_case(
    data_source: MatchDataSource = Depends(get_data_source),
) -> GetTeamsUseCase:
    return GetTeamsUseCase(data_source)


def get_team_details_use_case(
    data_source: MatchDataSource = Depends(get_data_source),
    statistics_service: StatisticsService = Depends(get_statistics_service),
) -> GetTeamDetailsUseCase:
    return GetTeamDetailsUseCase(data_source, statistics_service)


def get_matches_use_case(
    data_source: MatchDataSource = Depends(get_data_source),
) -> GetMatchesUseCase:
    return GetMatchesUseCase(data_source)


def get_statistics_use_case(
    data_source: MatchDataSource = Depends(get_data_source),
) -> GetStatisticsUseCase:
    return GetStatisticsUseCase(data_source)
