"""
Unit Tests for Prediction Service

Tests algorithm resolution and error propagation of the orchestrator.
"""

import pytest
from unittest.mock import MagicMock

from winmix.domain.entities.entities import Algorithm
from winmix.domain.exceptions import DataSourceException, UnknownAlgorithmException
from winmix.domain.repositories.repositories import MatchDataSource
from winmix.domain.services.prediction_service import PredictionService


class TestPredictionService:
    """Tests for PredictionService."""

    @pytest.fixture
    def service(self, data_source):
        """Create prediction service instance."""
        return PredictionService(data_source)

    def test_default_algorithm(self, service):
        result = service.predict("Ferencvaros", "Ujpest")

        assert result.algorithm_id == Algorithm.DEFAULT
        assert result.algorithm == "Default (Form + H2H)"

    @pytest.mark.parametrize("algorithm", [a.value for a in Algorithm])
    def test_every_algorithm_by_identifier(self, service, algorithm):
        result = service.predict("Ferencvaros", "Ujpest", algorithm)
        assert result.algorithm_id.value == algorithm

    def test_unknown_algorithm_makes_no_query(self):
        source = MagicMock(spec=MatchDataSource)
        service = PredictionService(source)

        with pytest.raises(UnknownAlgorithmException) as exc_info:
            service.predict("Ferencvaros", "Ujpest", "nonexistent")

        assert exc_info.value.algorithm == "nonexistent"
        assert source.method_calls == []

    def test_data_source_failure_propagates(self):
        source = MagicMock(spec=MatchDataSource)
        source.get_head_to_head.side_effect = DataSourceException("database is down")

        with pytest.raises(DataSourceException, match="database is down"):
            PredictionService(source).predict("Ferencvaros", "Ujpest")

    def test_stateless_between_calls(self, service):
        first = service.predict("Ferencvaros", "Ujpest", "elo")
        service.predict("Honved", "Debrecen", "poisson")
        second = service.predict("Ferencvaros", "Ujpest", "elo")

        assert first == second

    def test_available_algorithms(self):
        algorithms = PredictionService.available_algorithms()

        assert len(algorithms) == 7
        assert algorithms[0] == Algorithm.DEFAULT
