"""
Session API endpoints.

Read-only browsing of recorded sessions, filterable by year, game type and player.
"""

from fastapi import APIRouter
from loguru import logger

from pokerledger.api.deps import SessionDep
from pokerledger.api.v1.endpoints.stats import YearQuery
from pokerledger.core.exceptions import NotFoundError
from pokerledger.dao.session_dao import get_session_with_details, list_sessions
from pokerledger.schemas.errors import ErrorResponse
from pokerledger.schemas.sessions import SessionRead
from pokerledger.services.stats_service import year_date_range

router = APIRouter()


@router.get("/", response_model=list[SessionRead])
def read_sessions(
    session: SessionDep,
    year: YearQuery = None,
    game_type_id: int | None = None,
    player_id: int | None = None,
) -> list[SessionRead]:
    """List sessions, newest first."""
    logger.info(
        f"Fetching sessions (year={year}, game_type_id={game_type_id}, "
        + f"player_id={player_id})"
    )
    sessions = list_sessions(
        session,
        date_range=year_date_range(year),
        game_type_id=game_type_id,
        player_id=player_id,
    )
    logger.debug(f"Retrieved {len(sessions)} sessions")
    return [SessionRead.from_session(s) for s in sessions]


@router.get(
    "/{session_id}",
    response_model=SessionRead,
    responses={404: {"model": ErrorResponse}},
)
def read_session(session_id: int, session: SessionDep) -> SessionRead:
    """Retrieve one session with its participants."""
    logger.info(f"Fetching session with ID: {session_id}")
    poker_session = get_session_with_details(session, session_id)
    if poker_session is None:
        logger.warning(f"Session with ID {session_id} not found")
        raise NotFoundError(
            message=f"Session {session_id} not found",
            details={"session_id": session_id},
        )
    return SessionRead.from_session(poker_session)
