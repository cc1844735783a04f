"""JSON serialization for domain and view models."""

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
    ProfitPoint,
    SessionResult,
    TopEarner,
)
from bankroll_tracker.services.dashboard import DashboardSummary, SessionDetail


def serialize_dashboard(summary: DashboardSummary) -> dict[str, object]:
    return {
        "range": serialize_range(summary.date_range),
        "total_sessions": summary.total_sessions,
        "total_money_circulated": summary.total_money_circulated,
        "top_winner": serialize_entry(summary.top_winner)
        if summary.top_winner
        else None,
        "last_session_top_earner": _serialize_top_earner(
            summary.last_session_top_earner
        ),
        "leaderboard": [serialize_entry(entry) for entry in summary.leaderboard],
        "money_on_table": [_serialize_money(point) for point in summary.money_on_table],
        "player_comparison": [
            _serialize_series(series) for series in summary.top_player_series
        ],
        "recent_sessions": [
            serialize_session(session) for session in summary.recent_sessions
        ],
    }


def serialize_range(date_range: DateRange) -> dict[str, str | None]:
    return {
        "start": date_range.start.isoformat() if date_range.start else None,
        "end": date_range.end.isoformat() if date_range.end else None,
    }


def serialize_entry(entry: LeaderboardEntry) -> dict[str, object]:
    return {
        "player_id": str(entry.player_id),
        "name": entry.name,
        "total_profit": entry.total_profit,
        "sessions_played": entry.sessions_played,
        "winning_sessions": entry.winning_sessions,
        "win_rate": entry.win_rate,
    }


def serialize_player(player: PlayerRecord) -> dict[str, object]:
    return {"id": str(player.id), "name": player.name, "nickname": player.nickname}


def serialize_player_row(row: PlayerListRow) -> dict[str, object]:
    return {
        "player_id": str(row.player_id),
        "name": row.name,
        "nickname": row.nickname,
        "total_profit": row.total_profit,
        "sessions_played": row.sessions_played,
    }


def serialize_player_detail(detail: PlayerDetail) -> dict[str, object]:
    return {
        "player": serialize_player(detail.player),
        "total_profit": detail.total_profit,
        "best_win": detail.best_win,
        "worst_loss": detail.worst_loss,
        "avg_profit": detail.avg_profit,
        "results": [_serialize_result(result) for result in detail.results],
        "series": [_serialize_point(point) for point in detail.series],
    }


def serialize_session(session: SessionRecord) -> dict[str, object]:
    return {
        "id": str(session.id),
        "date": session.date.isoformat() if session.date else None,
        "location": session.location,
        "status": session.status,
        "duration_hours": session.duration_hours,
    }


def serialize_session_detail(detail: SessionDetail) -> dict[str, object]:
    return {
        "session": serialize_session(detail.session),
        "transactions": [serialize_transaction(tx) for tx in detail.transactions],
        "total_buy_ins": detail.totals.total_buy_ins,
        "total_cash_outs": detail.totals.total_cash_outs,
        "table_profit": detail.totals.table_profit,
        "is_balanced": detail.totals.is_balanced,
        "hourly_rate": detail.hourly_rate,
    }


def serialize_transaction(tx: TransactionRecord) -> dict[str, object]:
    return {
        "id": str(tx.id) if tx.id else None,
        "session_id": str(tx.session_id),
        "player_id": str(tx.player_id),
        "player_name": tx.player_name,
        "buy_in_amount": tx.buy_in_amount,
        "cash_out_amount": tx.cash_out_amount,
        "net_profit": tx.net_profit,
    }


def _serialize_top_earner(earner: TopEarner | None) -> dict[str, object] | None:
    if earner is None:
        return None
    return {
        "session": serialize_session(earner.session),
        "player_id": str(earner.player_id),
        "name": earner.name,
        "net_profit": earner.net_profit,
    }


def _serialize_money(point: MoneyPoint) -> dict[str, object]:
    return {
        "session_id": str(point.session_id),
        "date": point.date.isoformat(),
        "value": point.value,
    }


def _serialize_series(series: PlayerSeries) -> dict[str, object]:
    return {
        "player_id": str(series.player_id),
        "name": series.name,
        "series": [_serialize_point(point) for point in series.points],
    }


def _serialize_point(point: ProfitPoint) -> dict[str, object]:
    return {
        "date": point.date.isoformat(),
        "net": point.net,
        "cumulative": point.cumulative,
        "participated": point.participated,
    }


def _serialize_result(result: SessionResult) -> dict[str, object]:
    return {
        "session_id": str(result.session_id),
        "date": result.date.isoformat(),
        "net": result.net,
    }
