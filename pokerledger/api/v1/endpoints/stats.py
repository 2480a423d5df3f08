"""
Stats API endpoints.

Leaderboard and per-player rollups, optionally limited to a calendar year.
"""

from typing import Annotated

from fastapi import APIRouter, Query
from loguru import logger

from pokerledger.api.deps import SessionDep
from pokerledger.schemas.errors import ErrorResponse
from pokerledger.schemas.stats import PlayerStatsResult
from pokerledger.services.stats_service import compute_leaderboard, compute_player_stats

router = APIRouter()

YearQuery = Annotated[int | None, Query(ge=2000, le=2100, description="Calendar year")]


@router.get("/", response_model=list[PlayerStatsResult])
def read_leaderboard(
    session: SessionDep,
    year: YearQuery = None,
    include_guests: bool = False,
) -> list[PlayerStatsResult]:
    """Rank active players by total P&L."""
    logger.info(f"Leaderboard requested (year={year}, include_guests={include_guests})")
    return compute_leaderboard(session, year=year, include_guests=include_guests)


@router.get(
    "/{player_id}",
    response_model=PlayerStatsResult,
    responses={404: {"model": ErrorResponse}},
)
def read_player_stats(
    player_id: int, session: SessionDep, year: YearQuery = None
) -> PlayerStatsResult:
    """Return one player's rollup. Unknown players are a 404."""
    logger.info(f"Stats requested for player {player_id} (year={year})")
    return compute_player_stats(session, player_id, year=year)
