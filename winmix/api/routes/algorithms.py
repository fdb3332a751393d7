"""
Algorithms Router

API endpoint for the prediction algorithm catalogue.
"""

from fastapi import APIRouter, Depends

from winmix.application.dtos.dtos import AlgorithmsResponseDTO
from winmix.application.use_cases.use_cases import GetAlgorithmsUseCase
from winmix.api.dependencies import get_algorithms_use_case


router = APIRouter(prefix="/algorithms", tags=["Algorithms"])


@router.get(
    "",
    response_model=AlgorithmsResponseDTO,
    summary="List prediction algorithms",
)
def get_algorithms(
    use_case: GetAlgorithmsUseCase = Depends(get_algorithms_use_case),
) -> AlgorithmsResponseDTO:
    return use_case.execute()
