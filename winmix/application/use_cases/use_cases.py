"""
Application Use Cases Module

Use cases represent application-specific business rules and orchestrate
the flow of data between the domain layer and the infrastructure layer.
"""

from typing import Optional
import logging

from winmix.domain.constants import (
    ALGORITHMS_METADATA,
    EXTENDED_FORM_WINDOW,
    FORM_WINDOW,
    MATCHES_PAGE_DEFAULT,
    MATCHES_PAGE_MAX,
    RECENT_RESULTS_LIMIT,
    TOP_SCORERS_LIMIT,
)
from winmix.domain.entities.entities import Algorithm
from winmix.domain.exceptions import InvalidFixtureException, TeamNotFoundException
from winmix.domain.repositories.repositories import MatchDataSource
from winmix.domain.services.prediction_service import PredictionService
from winmix.domain.services.statistics_service import StatisticsService
from winmix.infrastructure.cache.cache_service import CacheService
from winmix.utils.time_utils import get_current_time
from winmix.application.dtos.dtos import (
    AlgorithmDTO,
    AlgorithmsResponseDTO,
    BatchPredictionRequestDTO,
    BatchPredictionsResponseDTO,
    MatchDTO,
    MatchesMetaDTO,
    MatchesResponseDTO,
    PredictionDTO,
    PredictionMetaDTO,
    PredictionResponseDTO,
    StatisticsResponseDTO,
    TeamDetailsDTO,
    TeamFormDTO,
    TeamStatsDTO,
    TeamsResponseDTO,
    TopScorerDTO,
)


logger = logging.getLogger(__name__)


def validate_fixture(home_team: Optional[str], away_team: Optional[str]) -> tuple[str, str]:
    """
    Normalize and validate the team pair of a fixture.

    Raises:
        InvalidFixtureException: If a team is missing or both teams are the same
    """
    home = (home_team or "").strip()
    away = (away_team or "").strip()

    if not home or not away:
        raise InvalidFixtureException("Both home_team and away_team are required")
    if home == away:
        raise InvalidFixtureException(f"A team cannot play itself: {home}")

    return home, away


class GetPredictionUseCase:
    """Use case for predicting a single fixture."""

    def __init__(
        self,
        prediction_service: PredictionService,
        cache_service: Optional[CacheService] = None,
    ):
        self.prediction_service = prediction_service
        self.cache = cache_service

    def execute(
        self,
        home_team: Optional[str],
        away_team: Optional[str],
        algorithm: str = Algorithm.DEFAULT.value,
        season: Optional[str] = None,
    ) -> PredictionResponseDTO:
        """
        Predict a fixture, serving repeated requests from the cache.

        Invalid input is rejected before the cache or the data source is
        touched.

        Raises:
            InvalidFixtureException: If the team pair is invalid
            UnknownAlgorithmException: If the algorithm is unknown
            DataSourceException: If match data cannot be read
        """
        home, away = validate_fixture(home_team, away_team)
        resolved = Algorithm.parse(algorithm)
        season = season or None

        if self.cache is not None:
            cached = self.cache.get_prediction(home, away, resolved.value, season)
            if cached is not None:
                return PredictionResponseDTO.model_validate(cached)

        result = self.prediction_service.predict(home, away, resolved, season)

        response = PredictionResponseDTO(
            prediction=PredictionDTO.from_result(result),
            meta=PredictionMetaDTO(
                algorithm=resolved.value,
                home_team=home,
                away_team=away,
                season=season,
                generated_at=get_current_time(),
            ),
        )

        if self.cache is not None:
            self.cache.set_prediction(home, away, resolved.value, season, response.model_dump(mode="json"))

        return response


class GetBatchPredictionsUseCase:
    """Use case for predicting several fixtures with one algorithm."""

    def __init__(self, prediction_use_case: GetPredictionUseCase):
        self.prediction_use_case = prediction_use_case

    def execute(self, request: BatchPredictionRequestDTO) -> BatchPredictionsResponseDTO:
        """
        Predict every valid fixture of the batch.

        Fixtures with a missing or repeated team are skipped and counted.
        An unknown algorithm or a data source failure aborts the whole batch.
        """
        Algorithm.parse(request.algorithm)

        predictions = []
        skipped = 0

        for index, fixture in enumerate(request.fixtures):
            try:
                validate_fixture(fixture.home_team, fixture.away_team)
            except InvalidFixtureException as e:
                logger.warning(f"Skipping fixture #{index}: {e}")
                skipped += 1
                continue

            predictions.append(
                self.prediction_use_case.execute(
                    fixture.home_team,
                    fixture.away_team,
                    request.algorithm,
                    request.season,
                )
            )

        logger.info(f"Batch prediction: {len(predictions)} predicted, {skipped} skipped")

        return BatchPredictionsResponseDTO(
            predictions=predictions,
            skipped=skipped,
            generated_at=get_current_time(),
        )


class GetAlgorithmsUseCase:
    """Use case for listing the algorithm catalogue."""

    def execute(self) -> AlgorithmsResponseDTO:
        algorithms = [
            AlgorithmDTO(id=algorithm.value, **ALGORITHMS_METADATA[algorithm.value])
            for algorithm in PredictionService.available_algorithms()
        ]
        return AlgorithmsResponseDTO(algorithms=algorithms, default=Algorithm.DEFAULT.value)


class GetTeamsUseCase:
    """Use case for listing known teams."""

    def __init__(self, data_source: MatchDataSource):
        self.data_source = data_source

    def execute(self) -> TeamsResponseDTO:
        teams = self.data_source.get_teams()
        return TeamsResponseDTO(teams=teams, total=len(teams))


class GetTeamDetailsUseCase:
    """Use case for a team's statistics, form and recent results."""

    def __init__(
        self,
        data_source: MatchDataSource,
        statistics_service: Optional[StatisticsService] = None,
    ):
        self.data_source = data_source
        self.statistics_service = statistics_service or StatisticsService(data_source)

    def execute(self, team: str, season: Optional[str] = None) -> TeamDetailsDTO:
        """
        Raises:
            TeamNotFoundException: If the team never appears in the history
        """
        team = team.strip()
        if team not in self.data_source.get_teams():
            raise TeamNotFoundException(team)

        season = season or None
        stats = self.data_source.get_team_statistics(team, season)
        form = self.statistics_service.team_form(team, FORM_WINDOW)
        recent = self.data_source.get_team_matches(team, EXTENDED_FORM_WINDOW, season)

        return TeamDetailsDTO(
            team=team,
            season=season,
            statistics=TeamStatsDTO.model_validate(stats),
            form=TeamFormDTO.model_validate(form),
            recent_matches=[MatchDTO.model_validate(match) for match in recent],
            seasons=self.data_source.get_seasons(),
        )


class GetMatchesUseCase:
    """Use case for paging through the match history."""

    def __init__(self, data_source: MatchDataSource):
        self.data_source = data_source

    def execute(
        self,
        limit: int = MATCHES_PAGE_DEFAULT,
        offset: int = 0,
        season: Optional[str] = None,
        team: Optional[str] = None,
    ) -> MatchesResponseDTO:
        """
        List matches most recent first.

        ``limit`` is clamped to 1..500 and a negative ``offset`` reads from
        the start; season and team filters combine.
        """
        limit = min(max(limit, 1), MATCHES_PAGE_MAX)
        offset = max(offset, 0)
        season = season or None
        team = (team or "").strip() or None

        matches = self.data_source.get_matches(limit, offset, season, team)
        total = self.data_source.count_matches(season, team)

        return MatchesResponseDTO(
            matches=[MatchDTO.model_validate(match) for match in matches],
            meta=MatchesMetaDTO(limit=limit, offset=offset, total=total, season=season, team=team),
        )


class GetStatisticsUseCase:
    """Use case for the league-wide overview."""

    def __init__(self, data_source: MatchDataSource):
        self.data_source = data_source

    def execute(self) -> StatisticsResponseDTO:
        recent = self.data_source.get_matches(limit=RECENT_RESULTS_LIMIT, played_only=True)
        scorers = self.data_source.get_top_scorers(TOP_SCORERS_LIMIT)

        return StatisticsResponseDTO(
            total_matches=self.data_source.count_matches(),
            recent_matches=[MatchDTO.model_validate(match) for match in recent],
            top_scorers=[TopScorerDTO.model_validate(scorer) for scorer in scorers],
            algorithms_available=len(PredictionService.available_algorithms()),
            last_updated=get_current_time(),
        )
