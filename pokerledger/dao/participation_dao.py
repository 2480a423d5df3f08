"""Data Access Object for reading participation records joined with their session."""

from collections import defaultdict
from collections.abc import Sequence
from typing import Any

from sqlmodel import Session, col, select
from sqlmodel.sql.expression import Select

from pokerledger.models import GameType, Participation, PokerSession
from pokerledger.schemas.records import DateRange, ParticipationRecord


def _participation_query(date_range: DateRange | None) -> Select[Any]:
    statement = (
        select(
            Participation.player_id,
            PokerSession.id,
            PokerSession.date,
            GameType.name,
            Participation.rebuys,
            Participation.profit_loss,
        )
        .join(PokerSession, col(Participation.session_id) == col(PokerSession.id))
        .join(GameType, col(PokerSession.game_type_id) == col(GameType.id))
        # Oldest first, so "first encountered" means "earliest session"
        .order_by(col(PokerSession.date), col(PokerSession.id))
    )
    if date_range is not None:
        statement = statement.where(
            col(PokerSession.date) >= date_range.start,
            col(PokerSession.date) < date_range.end,
        )
    return statement


def get_participations_for_players(
    session: Session,
    player_ids: Sequence[int],
    date_range: DateRange | None = None,
) -> dict[int, list[ParticipationRecord]]:
    """Fetch every participation of the given players in a single query.

    Players without any record in range are absent from the result.
    """
    if not player_ids:
        return {}

    statement = _participation_query(date_range).where(
        col(Participation.player_id).in_(list(player_ids))
    )
    grouped: dict[int, list[ParticipationRecord]] = defaultdict(list)
    for player_id, session_id, session_date, game_type_name, rebuys, profit_loss in (
        session.exec(statement).all()
    ):
        grouped[player_id].append(
            ParticipationRecord(
                session_id=session_id,
                session_date=session_date,
                game_type_name=game_type_name,
                rebuys=rebuys,
                profit_loss=profit_loss,
            )
        )
    return dict(grouped)


def get_participations_for_player(
    session: Session, player_id: int, date_range: DateRange | None = None
) -> list[ParticipationRecord]:
    """Get all participation records for one player, optionally date-scoped."""
    return get_participations_for_players(session, [player_id], date_range).get(
        player_id, []
    )
