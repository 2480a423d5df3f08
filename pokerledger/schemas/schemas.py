"""Pydantic input schemas for the write boundary (players, sessions)."""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field


class PlayerCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    is_guest: bool = False


class PlayerUpdate(BaseModel):
    """Partial update; omitted fields are left untouched."""

    name: str | None = Field(default=None, min_length=1, max_length=50)
    is_guest: bool | None = None
    is_active: bool | None = None


class ParticipantIn(BaseModel):
    player_id: int = Field(gt=0)
    rebuys: int = Field(default=0, ge=0)
    profit_loss: Decimal = Field(max_digits=10, decimal_places=2)


class SessionCreate(BaseModel):
    """A new session with its full participant list."""

    date: dt.date
    game_type_id: int = Field(gt=0)
    max_buy_in: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    event_id: int | None = Field(default=None, gt=0)
    notes: str | None = None
    participants: list[ParticipantIn] = Field(min_length=1)
