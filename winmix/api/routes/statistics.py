"""
Statistics Router

League-wide overview of the match history.
"""

from fastapi import APIRouter, Depends

from winmix.application.dtos.dtos import ErrorResponseDTO, StatisticsResponseDTO
from winmix.application.use_cases.use_cases import GetStatisticsUseCase
from winmix.api.dependencies import get_statistics_use_case


router = APIRouter(prefix="/statistics", tags=["Statistics"])


@router.get(
    "",
    response_model=StatisticsResponseDTO,
    responses={503: {"model": ErrorResponseDTO, "description": "Match data unavailable"}},
    summary="League overview",
    description="Total matches, the 10 latest results, the 5 highest-scoring teams and the algorithm count.",
)
def get_statistics(
    use_case: GetStatisticsUseCase = Depends(get_statistics_use_case),
) -> StatisticsResponseDTO:
    return use_case.execute()
