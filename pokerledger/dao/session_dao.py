"""Data Access Object for poker sessions and game types."""

from sqlalchemy.orm import selectinload
from sqlmodel import Session, col, func, select
from sqlmodel.sql.expression import SelectOfScalar

from pokerledger.models import GameType, Participation, PokerSession
from pokerledger.schemas.records import DateRange


def get_session_by_id(session: Session, session_id: int) -> PokerSession | None:
    """Get a poker session by ID."""
    return session.get(PokerSession, session_id)


def create_session(session: Session, poker_session: PokerSession) -> PokerSession:
    """Create a new poker session (with its participants) and populate its ID."""
    session.add(poker_session)
    session.flush()
    return poker_session


def _with_details(
    statement: SelectOfScalar[PokerSession],
) -> SelectOfScalar[PokerSession]:
    return statement.options(
        selectinload(PokerSession.game_type),  # type: ignore[arg-type]
        selectinload(PokerSession.event),  # type: ignore[arg-type]
        selectinload(PokerSession.participants)  # type: ignore[arg-type]
        .selectinload(Participation.player),  # type: ignore[arg-type]
    )


def list_sessions(
    session: Session,
    date_range: DateRange | None = None,
    game_type_id: int | None = None,
    player_id: int | None = None,
) -> list[PokerSession]:
    """List sessions newest first, with game type, event and participants loaded.

    Args:
        session: Database session
        date_range: Optional half-open date scope
        game_type_id: Only sessions of this game type
        player_id: Only sessions this player took part in

    Returns:
        Sessions ordered by date then ID, both descending
    """
    statement = _with_details(select(PokerSession)).order_by(
        col(PokerSession.date).desc(), col(PokerSession.id).desc()
    )
    if date_range is not None:
        statement = statement.where(
            col(PokerSession.date) >= date_range.start,
            col(PokerSession.date) < date_range.end,
        )
    if game_type_id is not None:
        statement = statement.where(PokerSession.game_type_id == game_type_id)
    if player_id is not None:
        statement = statement.where(
            col(PokerSession.id).in_(
                select(Participation.session_id).where(
                    Participation.player_id == player_id
                )
            )
        )
    return list(session.exec(statement).all())


def get_session_with_details(session: Session, session_id: int) -> PokerSession | None:
    """Get one session with game type, event and participants loaded."""
    statement = _with_details(select(PokerSession)).where(PokerSession.id == session_id)
    return session.exec(statement).first()


def delete_session(session: Session, poker_session: PokerSession) -> None:
    """Delete a poker session; its participations go with it."""
    session.delete(poker_session)
    session.flush()


def get_participations_for_session(
    session: Session, session_id: int
) -> list[Participation]:
    """Get the participation rows of one session."""
    return list(
        session.exec(
            select(Participation).where(Participation.session_id == session_id)
        ).all()
    )


def get_game_type_by_id(session: Session, game_type_id: int) -> GameType | None:
    """Get a game type by ID."""
    return session.get(GameType, game_type_id)


def list_game_types(session: Session) -> list[GameType]:
    """List every game type ordered by name."""
    return list(session.exec(select(GameType).order_by(col(GameType.name))).all())


def get_game_type_by_name(session: Session, name: str) -> GameType | None:
    """Get a game type by name."""
    return session.exec(select(GameType).where(GameType.name == name)).first()


def create_game_type(session: Session, game_type: GameType) -> GameType:
    """Create a new game type and return it with ID populated."""
    session.add(game_type)
    session.flush()
    return game_type


def count_sessions_for_game_type(session: Session, game_type_id: int) -> int:
    """Count sessions played with the given game type."""
    return session.exec(
        select(func.count(col(PokerSession.id))).where(
            PokerSession.game_type_id == game_type_id
        )
    ).one()


def delete_game_type(session: Session, game_type: GameType) -> None:
    """Delete a game type. Callers must check it is unreferenced first."""
    session.delete(game_type)
    session.flush()
