"""Domain models for aggregated bankroll statistics."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from bankroll_tracker.domain.money import to_cents
from bankroll_tracker.domain.records import PlayerRecord, SessionRecord


@dataclass(frozen=True)
class DateRange:
    """Inclusive civil date window; a missing bound is unbounded."""

    start: date | None = None
    end: date | None = None

    @property
    def is_bounded(self) -> bool:
        return self.start is not None or self.end is not None

    def contains(self, day: date | None) -> bool:
        if not self.is_bounded:
            return True
        if day is None:
            return False
        if self.start is not None and day < self.start:
            return False
        return self.end is None or day <= self.end


@dataclass(frozen=True)
class LeaderboardEntry:
    """Aggregated results for one player."""

    player_id: UUID
    name: str
    total_profit: float
    sessions_played: int
    winning_sessions: int
    win_rate: float


@dataclass(frozen=True)
class PlayerListRow:
    """Row of the players list."""

    player_id: UUID
    name: str
    nickname: str | None
    total_profit: float
    sessions_played: int


@dataclass(frozen=True)
class SessionTotals:
    """Money moved in a single session."""

    total_buy_ins: float
    total_cash_outs: float

    @property
    def table_profit(self) -> float:
        return self.total_cash_outs - self.total_buy_ins

    @property
    def is_balanced(self) -> bool:
        return to_cents(self.total_buy_ins) == to_cents(self.total_cash_outs)


@dataclass(frozen=True)
class MoneyPoint:
    """Total buy-in volume of one session."""

    session_id: UUID
    date: date
    value: float


@dataclass(frozen=True)
class ProfitPoint:
    """Point of a player's cumulative profit series."""

    date: date
    net: float
    cumulative: float
    participated: bool = True


@dataclass(frozen=True)
class PlayerSeries:
    """Cumulative profit series for one player."""

    player_id: UUID
    name: str
    points: list[ProfitPoint] = field(default_factory=list)

    @property
    def final_cumulative(self) -> float:
        return self.points[-1].cumulative if self.points else 0.0


@dataclass(frozen=True)
class SessionResult:
    """A player's net result in one session."""

    session_id: UUID
    date: date
    net: float
    participated: bool = True


@dataclass(frozen=True)
class TopEarner:
    """Best performer of a single session."""

    session: SessionRecord
    player_id: UUID
    name: str
    net_profit: float


@dataclass(frozen=True)
class PlayerDetail:
    """Per-player summary for the player detail view."""

    player: PlayerRecord
    total_profit: float
    best_win: float | None
    worst_loss: float | None
    avg_profit: float | None
    results: list[SessionResult]
    series: list[ProfitPoint]
