"""
Matches Router

Read-only listing of the match history.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from winmix.application.dtos.dtos import ErrorResponseDTO, MatchesResponseDTO
from winmix.application.use_cases.use_cases import GetMatchesUseCase
from winmix.api.dependencies import get_matches_use_case


router = APIRouter(prefix="/matches", tags=["Matches"])


@router.get(
    "",
    response_model=MatchesResponseDTO,
    responses={503: {"model": ErrorResponseDTO, "description": "Match data unavailable"}},
    summary="List matches",
    description="Pages through matches, most recent first. Limits above 500 are capped.",
)
def get_matches(
    limit: int = Query(default=100, description="Page size (1-500)"),
    offset: int = Query(default=0, description="Matches to skip"),
    season: Optional[str] = Query(default=None, description="Only this season"),
    team: Optional[str] = Query(default=None, description="Only matches involving this team"),
    use_case: GetMatchesUseCase = Depends(get_matches_use_case),
) -> MatchesResponseDTO:
    return use_case.execute(limit, offset, season, team)
