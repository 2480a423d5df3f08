"""Immutable snapshots handed from the DAO layer to the stats engine.

The engine never touches ORM objects: DAOs copy what it needs into these
frozen records so a computation cannot observe the database mid-flight.
"""

from dataclasses import dataclass
import datetime as dt
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class DateRange:
    """Half-open calendar range: start <= day < end."""

    start: dt.date
    end: dt.date


@dataclass(frozen=True, slots=True)
class PlayerIdentity:
    player_id: int
    name: str


@dataclass(frozen=True, slots=True)
class ParticipationRecord:
    """One player's result in one session, joined with the session's date and variant."""

    session_id: int
    session_date: dt.date
    game_type_name: str
    rebuys: int
    profit_loss: Decimal


@dataclass(frozen=True, slots=True)
class EventParticipant:
    player_id: int
    name: str
    rebuys: int
    profit_loss: Decimal


@dataclass(frozen=True, slots=True)
class EventSessionRecord:
    session_id: int
    participants: tuple[EventParticipant, ...]


@dataclass(frozen=True, slots=True)
class EventSnapshot:
    """An event's metadata plus every session that references it."""

    event_id: int
    name: str
    start_date: dt.date | None
    end_date: dt.date | None
    description: str | None
    sessions: tuple[EventSessionRecord, ...]
