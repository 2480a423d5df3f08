from fastapi import APIRouter
from loguru import logger

from pokerledger.api.deps import SessionDep
from pokerledger.dao.session_dao import list_game_types
from pokerledger.models import GameType

router = APIRouter()


@router.get("/", response_model=list[GameType])
def read_game_types(session: SessionDep) -> list[GameType]:
    """List game types ordered by name."""
    logger.info("Fetching game types")
    return list_game_types(session)
