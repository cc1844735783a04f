"""Pydantic models for API request bodies."""

from uuid import UUID

from pydantic import BaseModel, Field


class CreatePlayerRequest(BaseModel):
    """Payload for adding a player."""

    name: str
    nickname: str | None = None


class CreateSessionRequest(BaseModel):
    """Payload for creating a session."""

    date: str
    location: str


class UpdateSessionRequest(BaseModel):
    """Payload for renaming a session location."""

    location: str


class SeatPlayerRequest(BaseModel):
    """Payload for adding a player to a session."""

    player_id: UUID


class BuyInRequest(BaseModel):
    """Payload for a buy-in."""

    player_id: UUID
    amount: float = Field(gt=0)


class CashOutRequest(BaseModel):
    """Payload for setting a cash-out."""

    player_id: UUID
    amount: float = Field(ge=0)


class CompleteSessionRequest(BaseModel):
    """Payload for completing a session."""

    duration_hours: float | None = Field(default=None, ge=0)
