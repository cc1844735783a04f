"""Dashboard views computed from a snapshot of row-store data."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from bankroll_tracker.domain.errors import PlayerNotFoundError, SessionNotFoundError
from bankroll_tracker.domain.records import (
    PlayerRecord,
    SessionRecord,
    TransactionRecord,
)
from bankroll_tracker.domain.stats import (
    DateRange,
    LeaderboardEntry,
    MoneyPoint,
    PlayerDetail,
    PlayerListRow,
    PlayerSeries,
    SessionTotals,
    TopEarner,
)
from bankroll_tracker.services.filtering import filter_sessions, scope_transactions
from bankroll_tracker.services.leaderboard import (
    aggregate_players,
    session_totals,
    sort_leaderboard,
    summarize_players,
    top_winner,
)
from bankroll_tracker.services.series import (
    DEFAULT_TOP_N,
    cumulative_series,
    money_on_table_series,
    per_session_results,
    player_profit_series,
    top_players,
)

logger = logging.getLogger(__name__)

RECENT_SESSIONS = 5


class DashboardRepository(Protocol):
    """Read-only access to the rows behind the dashboard."""

    def list_sessions(self) -> list[SessionRecord]:
        """Return all sessions, most recent first."""

    def list_players(self) -> list[PlayerRecord]:
        """Return all players ordered by name."""

    def get_player(self, player_id: UUID) -> PlayerRecord | None:
        """Return a player by id, if present."""

    def get_session(self, session_id: UUID) -> SessionRecord | None:
        """Return a session by id, if present."""

    def list_transactions(
        self, player_id: UUID | None = None, session_id: UUID | None = None
    ) -> list[TransactionRecord]:
        """Return transactions joined with their player."""


@dataclass
class DashboardSummary:
    """Everything the home dashboard renders."""

    date_range: DateRange
    total_sessions: int
    total_money_circulated: float | None
    top_winner: LeaderboardEntry | None
    last_session_top_earner: TopEarner | None
    leaderboard: list[LeaderboardEntry]
    money_on_table: list[MoneyPoint]
    top_player_series: list[PlayerSeries]
    recent_sessions: list[SessionRecord]


@dataclass
class SessionDetail:
    """A session with its transactions and totals."""

    session: SessionRecord
    transactions: list[TransactionRecord]
    totals: SessionTotals

    @property
    def hourly_rate(self) -> float | None:
        duration = self.session.duration_hours
        if not duration or duration <= 0:
            return None
        return self.totals.table_profit / duration


@dataclass
class DashboardService:
    """Service for the aggregated bankroll views."""

    repository: DashboardRepository
    top_n: int = DEFAULT_TOP_N

    def get_dashboard(self, date_range: DateRange | None = None) -> DashboardSummary:
        """Return summary scalars, leaderboard and chart series for a range."""
        date_range = date_range or DateRange()
        all_sessions = self.repository.list_sessions()
        all_transactions = self.repository.list_transactions()
        sessions = filter_sessions(all_sessions, date_range)
        transactions = scope_transactions(all_transactions, sessions)
        logger.info(
            "Computing dashboard",
            extra={"sessions": len(sessions), "transactions": len(transactions)},
        )

        entries = aggregate_players(transactions).values()
        totals = session_totals(transactions)
        return DashboardSummary(
            date_range=date_range,
            total_sessions=len(sessions),
            total_money_circulated=totals.total_buy_ins or None,
            top_winner=top_winner(aggregate_players(all_transactions).values()),
            last_session_top_earner=_last_session_top_earner(sessions, transactions),
            leaderboard=sort_leaderboard(entries),
            money_on_table=money_on_table_series(transactions, sessions),
            top_player_series=top_players(
                player_profit_series(transactions, sessions), self.top_n
            ),
            recent_sessions=_recent_sessions(sessions),
        )

    def get_leaderboard(
        self,
        date_range: DateRange | None = None,
        key: str = "total_profit",
        descending: bool = True,
    ) -> list[LeaderboardEntry]:
        """Return the leaderboard for a range sorted by a column."""
        sessions = filter_sessions(
            self.repository.list_sessions(), date_range or DateRange()
        )
        transactions = scope_transactions(
            self.repository.list_transactions(), sessions
        )
        entries = aggregate_players(transactions).values()
        return sort_leaderboard(entries, key=key, descending=descending)

    def list_players(self) -> list[PlayerListRow]:
        """Return every player with total profit and sessions played."""
        return summarize_players(
            self.repository.list_players(), self.repository.list_transactions()
        )

    def get_player_detail(
        self, player_id: UUID, date_range: DateRange | None = None
    ) -> PlayerDetail:
        """Return results and the cumulative profit series for one player."""
        player = self.repository.get_player(player_id)
        if player is None:
            raise PlayerNotFoundError(f"Player {player_id} not found")
        sessions = filter_sessions(
            self.repository.list_sessions(), date_range or DateRange()
        )
        transactions = scope_transactions(
            self.repository.list_transactions(player_id=player_id), sessions
        )
        results = per_session_results(transactions, sessions)
        nets = [result.net for result in results]
        total_profit = sum(nets)
        return PlayerDetail(
            player=player,
            total_profit=total_profit,
            best_win=max(nets) if nets else None,
            worst_loss=min(nets) if nets else None,
            avg_profit=total_profit / len(nets) if nets else None,
            results=results,
            series=cumulative_series(results),
        )

    def get_session_detail(self, session_id: UUID) -> SessionDetail:
        """Return a session with its transactions and money totals."""
        session = self.repository.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(f"Session {session_id} not found")
        transactions = self.repository.list_transactions(session_id=session_id)
        return SessionDetail(
            session=session,
            transactions=transactions,
            totals=session_totals(transactions),
        )


def _recent_sessions(sessions: list[SessionRecord]) -> list[SessionRecord]:
    dated = [session for session in sessions if session.date is not None]
    return sorted(dated, key=lambda session: session.date, reverse=True)[
        :RECENT_SESSIONS
    ]


def _last_session_top_earner(
    sessions: list[SessionRecord], transactions: list[TransactionRecord]
) -> TopEarner | None:
    completed = [s for s in sessions if s.is_completed and s.date is not None]
    if not completed:
        return None
    last = max(completed, key=lambda session: session.date)
    entries = aggregate_players(
        tx for tx in transactions if tx.session_id == last.id
    ).values()
    best = top_winner(entries)
    if best is None:
        return None
    return TopEarner(
        session=last,
        player_id=best.player_id,
        name=best.name,
        net_profit=best.total_profit,
    )
