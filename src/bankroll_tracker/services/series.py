"""Time series for the bankroll charts."""

from collections.abc import Iterable
from datetime import date
from uuid import UUID

from bankroll_tracker.domain.records import SessionRecord, TransactionRecord
from bankroll_tracker.domain.stats import (
    MoneyPoint,
    PlayerSeries,
    ProfitPoint,
    SessionResult,
)

DEFAULT_TOP_N = 5


def money_on_table_series(
    transactions: Iterable[TransactionRecord], sessions: Iterable[SessionRecord]
) -> list[MoneyPoint]:
    """Return the total buy-in volume of each session, ordered by date.

    Each point holds that session's own volume, not a running total.
    Sessions without a date are dropped.
    """
    session_dates = _session_dates(sessions)
    buy_ins: dict[UUID, float] = {}
    for tx in transactions:
        buy_ins[tx.session_id] = buy_ins.get(tx.session_id, 0.0) + tx.buy_in_amount

    points = [
        MoneyPoint(session_id=session_id, date=session_dates[session_id], value=amount)
        for session_id, amount in buy_ins.items()
        if session_dates.get(session_id) is not None
    ]
    return sorted(points, key=lambda point: point.date)


def per_session_results(
    transactions: Iterable[TransactionRecord], sessions: Iterable[SessionRecord]
) -> list[SessionResult]:
    """Sum net profit per session and order the results by date.

    A session result counts as participated when any of its rows moved money.
    """
    session_dates = _session_dates(sessions)
    nets: dict[UUID, float] = {}
    participated: set[UUID] = set()
    for tx in transactions:
        nets[tx.session_id] = nets.get(tx.session_id, 0.0) + tx.net_profit
        if tx.participated:
            participated.add(tx.session_id)

    results = [
        SessionResult(
            session_id=session_id,
            date=session_dates[session_id],
            net=net,
            participated=session_id in participated,
        )
        for session_id, net in nets.items()
        if session_dates.get(session_id) is not None
    ]
    return sorted(results, key=lambda result: result.date)


def cumulative_series(
    results: list[SessionResult], session_days: Iterable[date] = ()
) -> list[ProfitPoint]:
    """Build a running profit total from per-session results.

    The series starts at the first participated result. Dates in
    ``session_days`` after that where the player has no result become flat,
    non-participating points.
    """
    first = next((result for result in results if result.participated), None)
    if first is None:
        return []
    first_day = first.date
    active = [result for result in results if result.date >= first_day]
    played_days = {result.date for result in active}
    fillers = sorted(
        {day for day in session_days if day >= first_day and day not in played_days}
    )

    entries: list[tuple[date, float, bool]] = [
        (result.date, result.net, result.participated) for result in active
    ]
    entries.extend((day, 0.0, False) for day in fillers)
    entries.sort(key=lambda entry: entry[0])

    points: list[ProfitPoint] = []
    cumulative = 0.0
    for day, net, participated in entries:
        cumulative += net
        points.append(
            ProfitPoint(
                date=day, net=net, cumulative=cumulative, participated=participated
            )
        )
    return points


def player_profit_series(
    transactions: Iterable[TransactionRecord], sessions: Iterable[SessionRecord]
) -> list[PlayerSeries]:
    """Return cumulative profit series for players who participated.

    Players whose rows never moved money have no series.
    """
    sessions = list(sessions)
    session_days = [session.date for session in sessions if session.date is not None]
    names: dict[UUID, str] = {}
    by_player: dict[UUID, list[TransactionRecord]] = {}
    for tx in transactions:
        names.setdefault(tx.player_id, tx.player_name)
        by_player.setdefault(tx.player_id, []).append(tx)

    series = []
    for player_id, player_txs in by_player.items():
        points = cumulative_series(
            per_session_results(player_txs, sessions), session_days
        )
        if points:
            series.append(
                PlayerSeries(player_id=player_id, name=names[player_id], points=points)
            )
    return series


def top_players(
    series: Iterable[PlayerSeries], limit: int = DEFAULT_TOP_N
) -> list[PlayerSeries]:
    """Pick the players with the highest final cumulative profit."""
    ranked = sorted(series, key=lambda item: item.final_cumulative, reverse=True)
    return ranked[:limit]


def _session_dates(sessions: Iterable[SessionRecord]) -> dict[UUID, date | None]:
    return {session.id: session.date for session in sessions}
