from typing import Annotated

from fastapi import APIRouter, Query
from loguru import logger

from pokerledger.api.deps import SessionDep
from pokerledger.core.exceptions import NotFoundError
from pokerledger.dao.player_dao import get_player_by_id, list_players
from pokerledger.models import Player
from pokerledger.schemas.errors import ErrorResponse

router = APIRouter()


@router.get("/", response_model=list[Player])
def read_players(
    session: SessionDep,
    include_inactive: Annotated[bool, Query(alias="all")] = False,
) -> list[Player]:
    """List active players (every player with ?all=true), guests last."""
    logger.info(f"Fetching players list (all={include_inactive})")
    players = list_players(session, include_inactive=include_inactive)
    logger.debug(f"Retrieved {len(players)} players")
    return players


@router.get(
    "/{player_id}", response_model=Player, responses={404: {"model": ErrorResponse}}
)
def read_player(player_id: int, session: SessionDep) -> Player:
    """Retrieve a specific player by ID from the database."""
    logger.info(f"Fetching player with ID: {player_id}")
    player = get_player_by_id(session, player_id)
    if player is None:
        logger.warning(f"Player with ID {player_id} not found")
        raise NotFoundError(
            message=f"Player {player_id} not found",
            details={"player_id": player_id},
        )
    logger.debug(f"Found player: {player.name}")
    return player
