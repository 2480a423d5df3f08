"""Response schemas for the stats engine. Derived on every request, never stored."""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

# Aggregates must carry whatever values storage hands over, NaN included
_LENIENT = ConfigDict(allow_inf_nan=True)


class SessionRef(BaseModel):
    """Pointer to a single session result (used for best/worst session)."""

    model_config = _LENIENT

    session_id: int
    date: dt.date
    pnl: Decimal


class PlayerStatsResult(BaseModel):
    """Rollup of one player's participations within a scope."""

    model_config = _LENIENT

    player_id: int
    player_name: str
    total_pnl: Decimal = Decimal(0)
    total_sessions: int = 0
    total_rebuys: int = 0
    avg_rebuys_per_session: Decimal = Decimal(0)
    avg_pnl_per_session: Decimal = Decimal(0)
    best_session: SessionRef | None = None
    worst_session: SessionRef | None = None
    pnl_by_game_type: dict[str, Decimal] = Field(default_factory=dict)


class EventInfo(BaseModel):
    id: int
    name: str
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    description: str | None = None


class EventPlayerStats(BaseModel):
    """Per-player totals confined to one event's sessions."""

    model_config = _LENIENT

    player_id: int
    name: str
    pnl: Decimal = Decimal(0)
    sessions: int = 0
    rebuys: int = 0


class EventStatsResult(BaseModel):
    event: EventInfo
    total_sessions: int
    player_stats: list[EventPlayerStats]


class EventSummary(BaseModel):
    """Event listing entry with the number of sessions it groups."""

    id: int
    name: str
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    description: str | None = None
    session_count: int = 0
