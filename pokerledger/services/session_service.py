"""Write-side business rules for players, sessions and game types.

This is the only place session data is validated. The stats engine trusts
whatever ends up in the database.
"""

from collections.abc import Sequence
from decimal import Decimal

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from pokerledger.core.exceptions import ConflictError, NotFoundError, ValidationError
from pokerledger.dao import player_dao, session_dao
from pokerledger.dao.event_dao import get_event_by_id
from pokerledger.models import Participation, Player, PokerSession
from pokerledger.schemas.schemas import (
    ParticipantIn,
    PlayerCreate,
    PlayerUpdate,
    SessionCreate,
)


def create_player(session: Session, data: PlayerCreate) -> Player:
    """Register a new player.

    Raises:
        ConflictError: If the name is already taken.
    """
    if player_dao.get_player_by_name(session, data.name) is not None:
        raise ConflictError(
            message=f"Player name already exists: {data.name}",
            details={"name": data.name},
        )
    try:
        player = player_dao.create_player(
            session, Player(name=data.name, is_guest=data.is_guest)
        )
    except IntegrityError as e:
        session.rollback()
        raise ConflictError(
            message=f"Player name already exists: {data.name}",
            details={"name": data.name},
        ) from e
    logger.info(f"Created player {player.name} (guest={player.is_guest})")
    return player


def update_player(session: Session, player_id: int, data: PlayerUpdate) -> Player:
    """Apply a partial update. Archiving is is_active=False, never deletion."""
    player = player_dao.get_player_by_id(session, player_id)
    if player is None:
        raise NotFoundError(
            message=f"Player {player_id} not found",
            details={"player_id": player_id},
        )
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in changes and changes["name"] != player.name:
        existing = player_dao.get_player_by_name(session, changes["name"])
        if existing is not None:
            raise ConflictError(
                message=f"Player name already exists: {changes['name']}",
                details={"name": changes["name"]},
            )
    for key, value in changes.items():
        setattr(player, key, value)
    player_dao.update_player(session, player)
    logger.info(f"Updated player {player_id}: {sorted(changes)}")
    return player


def _validate_participants(
    session: Session, participants: Sequence[ParticipantIn]
) -> None:
    """Check a participant list before it is written.

    Raises:
        ValidationError: Empty list, a player listed twice, or P&L not netting to zero.
        NotFoundError: A referenced player does not exist.
    """
    if not participants:
        raise ValidationError(message="A session needs at least one participant")

    player_ids = [p.player_id for p in participants]
    duplicates = sorted({pid for pid in player_ids if player_ids.count(pid) > 1})
    if duplicates:
        raise ValidationError(
            message="A player can only appear once per session",
            details={"player_ids": [str(pid) for pid in duplicates]},
        )

    missing = [
        pid for pid in player_ids if player_dao.get_player_by_id(session, pid) is None
    ]
    if missing:
        raise NotFoundError(
            message=f"Unknown players: {missing}",
            details={"player_ids": [str(pid) for pid in missing]},
        )

    # Money only changes hands at the table, so every session nets to zero
    net = sum((p.profit_loss for p in participants), Decimal(0))
    if net != 0:
        raise ValidationError(
            message=f"Profit/loss must sum to zero, got {net}",
            details={"net": str(net)},
        )


def create_session(session: Session, data: SessionCreate) -> PokerSession:
    """Record a played session with its participants.

    Raises:
        NotFoundError: Unknown game type, event or player.
        ValidationError: Participant list fails validation.
    """
    if session_dao.get_game_type_by_id(session, data.game_type_id) is None:
        raise NotFoundError(
            message=f"Game type {data.game_type_id} not found",
            details={"game_type_id": data.game_type_id},
        )
    if data.event_id is not None and get_event_by_id(session, data.event_id) is None:
        raise NotFoundError(
            message=f"Event {data.event_id} not found",
            details={"event_id": data.event_id},
        )
    _validate_participants(session, data.participants)

    poker_session = PokerSession(
        date=data.date,
        game_type_id=data.game_type_id,
        max_buy_in=data.max_buy_in,
        event_id=data.event_id,
        notes=data.notes,
        participants=[
            Participation(
                player_id=p.player_id, rebuys=p.rebuys, profit_loss=p.profit_loss
            )
            for p in data.participants
        ],
    )
    session_dao.create_session(session, poker_session)
    logger.info(
        f"Recorded session {poker_session.id} on {data.date} "
        + f"with {len(data.participants)} players"
    )
    return poker_session


def replace_participants(
    session: Session, session_id: int, participants: Sequence[ParticipantIn]
) -> PokerSession:
    """Swap a session's whole participant list for a new, validated one."""
    poker_session = session_dao.get_session_by_id(session, session_id)
    if poker_session is None:
        raise NotFoundError(
            message=f"Session {session_id} not found",
            details={"session_id": session_id},
        )
    _validate_participants(session, participants)

    poker_session.participants.clear()
    # Flush the deletes first so the (session, player) unique key is free again
    session.flush()
    poker_session.participants.extend(
        Participation(player_id=p.player_id, rebuys=p.rebuys, profit_loss=p.profit_loss)
        for p in participants
    )
    session.add(poker_session)
    session.flush()
    logger.info(f"Replaced participants of session {session_id} ({len(participants)})")
    return poker_session


def delete_session(session: Session, session_id: int) -> None:
    """Delete a session and, by cascade, its participations."""
    poker_session = session_dao.get_session_by_id(session, session_id)
    if poker_session is None:
        raise NotFoundError(
            message=f"Session {session_id} not found",
            details={"session_id": session_id},
        )
    session_dao.delete_session(session, poker_session)
    logger.info(f"Deleted session {session_id}")


def delete_game_type(session: Session, game_type_id: int) -> None:
    """Delete a game type that no session uses.

    Raises:
        NotFoundError: Unknown game type.
        ConflictError: The game type is referenced by sessions.
    """
    game_type = session_dao.get_game_type_by_id(session, game_type_id)
    if game_type is None:
        raise NotFoundError(
            message=f"Game type {game_type_id} not found",
            details={"game_type_id": game_type_id},
        )
    in_use = session_dao.count_sessions_for_game_type(session, game_type_id)
    if in_use > 0:
        raise ConflictError(
            message="Cannot delete: game type is used by existing sessions",
            details={"game_type_id": game_type_id, "session_count": in_use},
        )
    session_dao.delete_game_type(session, game_type)
    logger.info(f"Deleted game type {game_type.name}")
