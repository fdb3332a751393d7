"""
Teams Router

API endpoints for team listing and team details.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from winmix.application.dtos.dtos import ErrorResponseDTO, TeamDetailsDTO, TeamsResponseDTO
from winmix.application.use_cases.use_cases import GetTeamDetailsUseCase, GetTeamsUseCase
from winmix.api.dependencies import get_team_details_use_case, get_teams_use_case


router = APIRouter(prefix="/teams", tags=["Teams"])


@router.get(
    "",
    response_model=TeamsResponseDTO,
    responses={503: {"model": ErrorResponseDTO, "description": "Match data unavailable"}},
    summary="List teams",
    description="Returns every team key found in the match history, sorted.",
)
def get_teams(
    use_case: GetTeamsUseCase = Depends(get_teams_use_case),
) -> TeamsResponseDTO:
    return use_case.execute()


@router.get(
    "/{team}",
    response_model=TeamDetailsDTO,
    responses={
        404: {"model": ErrorResponseDTO, "description": "Team not found"},
        503: {"model": ErrorResponseDTO, "description": "Match data unavailable"},
    },
    summary="Get team details",
    description="Returns aggregate statistics, 5-match form, the 10 most recent matches and the available seasons.",
)
def get_team_details(
    team: str,
    season: Optional[str] = Query(default=None, description="Restrict statistics to a season"),
    use_case: GetTeamDetailsUseCase = Depends(get_team_details_use_case),
) -> TeamDetailsDTO:
    """Get statistics and recent results for a team."""
    return use_case.execute(team, season)
