"""Data Access Object for Event operations."""

from typing import cast

from sqlalchemy.orm import selectinload
from sqlmodel import Session, col, func, select

from pokerledger.models import Event, Participation, PokerSession
from pokerledger.schemas.records import (
    EventParticipant,
    EventSessionRecord,
    EventSnapshot,
)


def get_event_by_id(session: Session, event_id: int) -> Event | None:
    """Get an event by ID."""
    return session.get(Event, event_id)


def create_event(session: Session, event: Event) -> Event:
    """Create a new event and return it with ID populated."""
    session.add(event)
    session.flush()
    return event


def list_events_with_session_counts(session: Session) -> list[tuple[Event, int]]:
    """List events newest first, each with the number of sessions it groups."""
    statement = (
        select(Event, func.count(col(PokerSession.id)))
        .outerjoin(PokerSession, col(PokerSession.event_id) == col(Event.id))
        .group_by(col(Event.id))
        .order_by(col(Event.start_date).desc(), col(Event.id).desc())
    )
    return [(event, count) for event, count in session.exec(statement).all()]


def get_event_with_sessions(session: Session, event_id: int) -> EventSnapshot | None:
    """Load an event with every session referencing it and their participants.

    Membership is decided by the session's event_id only, not by the
    event's date window.
    """
    event = session.exec(
        select(Event)
        .where(Event.id == event_id)
        .options(
            selectinload(Event.sessions)  # type: ignore[arg-type]
            .selectinload(PokerSession.participants)  # type: ignore[arg-type]
            .selectinload(Participation.player)  # type: ignore[arg-type]
        )
    ).first()
    if event is None or event.id is None:
        return None

    sessions = tuple(
        EventSessionRecord(
            session_id=cast("int", poker_session.id),
            participants=tuple(
                EventParticipant(
                    player_id=participant.player_id,
                    name=participant.player.name,
                    rebuys=participant.rebuys,
                    profit_loss=participant.profit_loss,
                )
                for participant in poker_session.participants
            ),
        )
        for poker_session in event.sessions
    )
    return EventSnapshot(
        event_id=event.id,
        name=event.name,
        start_date=event.start_date,
        end_date=event.end_date,
        description=event.description,
        sessions=sessions,
    )
