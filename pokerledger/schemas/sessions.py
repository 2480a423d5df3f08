"""Read-side views of recorded sessions."""

import datetime as dt
from decimal import Decimal
from typing import cast

from pydantic import BaseModel

from pokerledger.models import PokerSession


class SessionParticipantRead(BaseModel):
    player_id: int
    player_name: str
    is_guest: bool
    rebuys: int
    profit_loss: Decimal


class SessionRead(BaseModel):
    """A session with its game type, optional event and participants."""

    id: int
    date: dt.date
    game_type_id: int
    game_type_name: str
    max_buy_in: Decimal
    event_id: int | None
    event_name: str | None
    notes: str | None
    participants: list[SessionParticipantRead]

    @classmethod
    def from_session(cls, poker_session: PokerSession) -> "SessionRead":
        """Flatten a session whose relationships are already loaded."""
        event = poker_session.event
        return cls(
            id=cast("int", poker_session.id),
            date=poker_session.date,
            game_type_id=poker_session.game_type_id,
            game_type_name=poker_session.game_type.name,
            max_buy_in=poker_session.max_buy_in,
            event_id=poker_session.event_id,
            event_name=event.name if event is not None else None,
            notes=poker_session.notes,
            participants=[
                SessionParticipantRead(
                    player_id=p.player_id,
                    player_name=p.player.name,
                    is_guest=p.player.is_guest,
                    rebuys=p.rebuys,
                    profit_loss=p.profit_loss,
                )
                for p in poker_session.participants
            ],
        )
