"""SQLModel data models for pokerledger."""

import datetime as dt
from decimal import Decimal

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel  # type: ignore


class Player(SQLModel, table=True):
    """A person who sits at the table. Archived via is_active, never deleted."""

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(index=True, unique=True, max_length=50)
    is_guest: bool = False
    is_active: bool = True
    created_at: dt.datetime = Field(default_factory=lambda: dt.datetime.now(dt.UTC))

    participations: list["Participation"] = Relationship(back_populates="player")  # type: ignore


class GameType(SQLModel, table=True):
    """A named poker variant, e.g. 'Texas' or 'PLO'."""

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(index=True, unique=True, max_length=50)
    default_buy_in: Decimal = Field(default=Decimal(20), max_digits=10, decimal_places=2)

    sessions: list["PokerSession"] = Relationship(back_populates="game_type")  # type: ignore


class Event(SQLModel, table=True):
    """A named window grouping sessions (a trip, a league season...).

    The date window is descriptive only; membership is the session's event_id.
    """

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=100)
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    description: str | None = None

    sessions: list["PokerSession"] = Relationship(back_populates="event")  # type: ignore


class PokerSession(SQLModel, table=True):
    """A single recorded game. Named to avoid clashing with the DB Session."""

    __tablename__ = "poker_session"  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True)
    date: dt.date = Field(index=True)
    game_type_id: int = Field(foreign_key="gametype.id")
    max_buy_in: Decimal = Field(max_digits=10, decimal_places=2)
    event_id: int | None = Field(default=None, foreign_key="event.id", index=True)
    notes: str | None = None

    game_type: GameType = Relationship(back_populates="sessions")  # type: ignore
    event: Event | None = Relationship(back_populates="sessions")  # type: ignore
    participants: list["Participation"] = Relationship(  # type: ignore
        back_populates="session",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "Participation.id",
        },
    )


class Participation(SQLModel, table=True):
    """One player's outcome within one session."""

    __table_args__ = (UniqueConstraint("session_id", "player_id"),)

    id: int | None = Field(default=None, primary_key=True)

    session_id: int = Field(foreign_key="poker_session.id", index=True)
    player_id: int = Field(foreign_key="player.id", index=True)

    rebuys: int = 0
    profit_loss: Decimal = Field(max_digits=10, decimal_places=2)

    session: PokerSession = Relationship(back_populates="participants")  # type: ignore
    player: Player = Relationship(back_populates="participations")  # type: ignore
