"""Domain records for sessions, players and transactions."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from bankroll_tracker.domain.money import (
    UNKNOWN_PLAYER,
    parse_amount,
    parse_optional_amount,
)

ACTIVE = "active"
COMPLETED = "completed"


@dataclass(frozen=True)
class PlayerRecord:
    """Represents a tracked player."""

    id: UUID
    name: str
    nickname: str | None = None


@dataclass(frozen=True)
class SessionRecord:
    """Represents one dated poker session."""

    id: UUID
    date: date | None
    location: str
    status: str = ACTIVE
    duration_hours: float | None = None

    def __post_init__(self) -> None:
        duration = parse_optional_amount(self.duration_hours)
        if duration is not None and duration < 0:
            duration = None
        object.__setattr__(self, "duration_hours", duration)

    @property
    def is_completed(self) -> bool:
        return self.status == COMPLETED


@dataclass(frozen=True)
class TransactionRecord:
    """A player's buy-in and cash-out for one session.

    Amounts are coerced on construction; a missing net profit is derived
    from the amounts.
    """

    session_id: UUID
    player_id: UUID
    buy_in_amount: float = 0.0
    cash_out_amount: float = 0.0
    net_profit: float | None = None
    id: UUID | None = None
    player: PlayerRecord | None = None

    def __post_init__(self) -> None:
        buy_in = parse_amount(self.buy_in_amount)
        cash_out = parse_amount(self.cash_out_amount)
        object.__setattr__(self, "buy_in_amount", buy_in)
        object.__setattr__(self, "cash_out_amount", cash_out)
        if self.net_profit is None:
            object.__setattr__(self, "net_profit", cash_out - buy_in)
        else:
            object.__setattr__(self, "net_profit", parse_amount(self.net_profit))

    @property
    def participated(self) -> bool:
        """True when any money moved for this player in the session."""
        return self.buy_in_amount != 0 or self.cash_out_amount != 0

    @property
    def player_name(self) -> str:
        if self.player is not None and self.player.name:
            return self.player.name
        return UNKNOWN_PLAYER
