"""Per-player aggregation of transaction rows."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from decimal import Decimal
from operator import attrgetter
from uuid import UUID

from bankroll_tracker.domain.money import to_cents
from bankroll_tracker.domain.records import PlayerRecord, TransactionRecord
from bankroll_tracker.domain.stats import (
    LeaderboardEntry,
    PlayerListRow,
    SessionTotals,
)

SORT_KEYS = ("total_profit", "sessions_played", "win_rate")

_SORT_COLUMNS: dict[str, tuple[Callable[[LeaderboardEntry], float], ...]] = {
    "total_profit": (
        attrgetter("total_profit"),
        attrgetter("sessions_played"),
    ),
    "sessions_played": (
        attrgetter("sessions_played"),
        attrgetter("total_profit"),
    ),
    "win_rate": (attrgetter("win_rate"), attrgetter("sessions_played")),
}


@dataclass
class _PlayerTally:
    name: str
    total_profit: float = 0.0
    sessions_played: int = 0
    winning_sessions: int = 0


def aggregate_players(
    transactions: Iterable[TransactionRecord],
) -> dict[UUID, LeaderboardEntry]:
    """Fold transactions into per-player leaderboard entries.

    Every row counts toward total profit. Only (player, session) pairs
    where money moved count as sessions played, and a played session is
    a win when the pair's summed net profit is positive.
    """
    tallies: dict[UUID, _PlayerTally] = {}
    pair_net: dict[tuple[UUID, UUID], float] = {}
    played_pairs: set[tuple[UUID, UUID]] = set()

    for tx in transactions:
        key = (tx.player_id, tx.session_id)
        pair_net[key] = pair_net.get(key, 0.0) + tx.net_profit
        if tx.participated:
            played_pairs.add(key)
        tally = tallies.setdefault(tx.player_id, _PlayerTally(name=tx.player_name))
        tally.total_profit += tx.net_profit

    for (player_id, session_id), net in pair_net.items():
        if (player_id, session_id) not in played_pairs:
            continue
        tally = tallies[player_id]
        tally.sessions_played += 1
        if net > 0:
            tally.winning_sessions += 1

    return {
        player_id: LeaderboardEntry(
            player_id=player_id,
            name=tally.name,
            total_profit=tally.total_profit,
            sessions_played=tally.sessions_played,
            winning_sessions=tally.winning_sessions,
            win_rate=win_rate(tally.winning_sessions, tally.sessions_played),
        )
        for player_id, tally in tallies.items()
    }


def win_rate(winning_sessions: int, sessions_played: int) -> float:
    """Return the win percentage, 0 when no sessions were played."""
    if sessions_played == 0:
        return 0.0
    return winning_sessions / sessions_played * 100


def sort_leaderboard(
    entries: Iterable[LeaderboardEntry],
    key: str = "total_profit",
    descending: bool = True,
) -> list[LeaderboardEntry]:
    """Sort leaderboard entries by a column with a secondary tie-break.

    Ties on total profit or win rate break toward more sessions played; ties
    on sessions played break toward higher total profit. The tie-break is
    descending in both sort directions and full ties keep their input order.
    """
    if key not in SORT_KEYS:
        raise ValueError(f"Unknown leaderboard sort key: {key}")
    primary, secondary = _SORT_COLUMNS[key]
    ranked = sorted(entries, key=secondary, reverse=True)
    return sorted(ranked, key=primary, reverse=descending)


def top_winner(entries: Iterable[LeaderboardEntry]) -> LeaderboardEntry | None:
    """Return the entry with the highest total profit, if any."""
    ranked = sort_leaderboard(entries)
    return ranked[0] if ranked else None


def session_totals(transactions: Iterable[TransactionRecord]) -> SessionTotals:
    """Sum buy-ins and cash-outs across transactions in whole cents."""
    total_buy_ins = Decimal(0)
    total_cash_outs = Decimal(0)
    for tx in transactions:
        total_buy_ins += to_cents(tx.buy_in_amount)
        total_cash_outs += to_cents(tx.cash_out_amount)
    return SessionTotals(
        total_buy_ins=float(total_buy_ins), total_cash_outs=float(total_cash_outs)
    )


def summarize_players(
    players: Iterable[PlayerRecord], transactions: Iterable[TransactionRecord]
) -> list[PlayerListRow]:
    """Build the players list, including players without transactions."""
    known = {player.id: player for player in players}
    totals = {player_id: 0.0 for player_id in known}
    played: dict[UUID, set[UUID]] = {player_id: set() for player_id in known}

    for tx in transactions:
        if tx.player_id not in known:
            continue
        totals[tx.player_id] += tx.net_profit
        if tx.participated:
            played[tx.player_id].add(tx.session_id)

    rows = [
        PlayerListRow(
            player_id=player.id,
            name=player.name,
            nickname=player.nickname,
            total_profit=totals[player.id],
            sessions_played=len(played[player.id]),
        )
        for player in known.values()
    ]
    return sorted(rows, key=lambda row: row.total_profit, reverse=True)


