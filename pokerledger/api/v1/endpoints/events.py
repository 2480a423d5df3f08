from typing import cast

from fastapi import APIRouter
from loguru import logger

from pokerledger.api.deps import SessionDep
from pokerledger.dao.event_dao import list_events_with_session_counts
from pokerledger.schemas.errors import ErrorResponse
from pokerledger.schemas.stats import EventStatsResult, EventSummary
from pokerledger.services.stats_service import compute_event_stats

router = APIRouter()


@router.get("/", response_model=list[EventSummary])
def read_events(session: SessionDep) -> list[EventSummary]:
    """List events, newest first, with their session counts."""
    logger.info("Fetching events list")
    return [
        EventSummary(
            id=cast("int", event.id),
            name=event.name,
            start_date=event.start_date,
            end_date=event.end_date,
            description=event.description,
            session_count=count,
        )
        for event, count in list_events_with_session_counts(session)
    ]


@router.get(
    "/{event_id}/stats",
    response_model=EventStatsResult,
    responses={404: {"model": ErrorResponse}},
)
def read_event_stats(event_id: int, session: SessionDep) -> EventStatsResult:
    """Per-player totals across the sessions of one event."""
    logger.info(f"Event stats requested for event {event_id}")
    return compute_event_stats(session, event_id)
