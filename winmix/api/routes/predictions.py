"""
Predictions Router

API endpoints for getting match predictions.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from winmix.application.dtos.dtos import (
    BatchPredictionRequestDTO,
    BatchPredictionsResponseDTO,
    ErrorResponseDTO,
    PredictionResponseDTO,
)
from winmix.application.use_cases.use_cases import GetBatchPredictionsUseCase, GetPredictionUseCase
from winmix.api.dependencies import get_batch_predictions_use_case, get_prediction_use_case


router = APIRouter(prefix="/predictions", tags=["Predictions"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponseDTO, "description": "Invalid fixture or unknown algorithm"},
    503: {"model": ErrorResponseDTO, "description": "Match data unavailable"},
    500: {"model": ErrorResponseDTO, "description": "Internal server error"},
}


@router.get(
    "",
    response_model=PredictionResponseDTO,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
    summary="Predict a fixture",
    description="Returns outcome probabilities, expected goals and goal markets for a fixture using the selected algorithm.",
)
def get_prediction(
    home: Optional[str] = Query(default=None, description="Home team key"),
    away: Optional[str] = Query(default=None, description="Away team key"),
    algorithm: str = Query(default="default", description="Algorithm identifier (see /algorithms)"),
    season: Optional[str] = Query(default=None, description="Restrict statistics to a season"),
    use_case: GetPredictionUseCase = Depends(get_prediction_use_case),
) -> PredictionResponseDTO:
    """Get the prediction for a single fixture."""
    return use_case.execute(home, away, algorithm, season)


@router.post(
    "/batch",
    response_model=BatchPredictionsResponseDTO,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
    summary="Predict several fixtures",
    description="Predicts every valid fixture with one algorithm. Fixtures with a missing or repeated team are skipped and counted.",
)
def get_batch_predictions(
    request: BatchPredictionRequestDTO,
    use_case: GetBatchPredictionsUseCase = Depends(get_batch_predictions_use_case),
) -> BatchPredictionsResponseDTO:
    """Get predictions for a batch of fixtures."""
    return use_case.execute(request)
