"""Parsing helpers for Supabase rows."""

from uuid import UUID

from postgrest.exceptions import APIError

from bankroll_tracker.domain.records import (
    ACTIVE,
    PlayerRecord,
    SessionRecord,
    TransactionRecord,
)
from bankroll_tracker.services.filtering import parse_civil_date

UNIQUE_VIOLATION = "23505"

SESSION_COLUMNS = "id, date, location, status, duration_hours"
PLAYER_COLUMNS = "id, name, nickname"
TRANSACTION_COLUMNS = (
    "id, session_id, player_id, buy_in_amount, cash_out_amount, net_profit, "
    "player:players(id, name, nickname)"
)


def is_unique_violation(exc: APIError) -> bool:
    """Return True when Postgres rejected a duplicate key."""
    return str(getattr(exc, "code", "")) == UNIQUE_VIOLATION


def parse_session(row: dict[str, object]) -> SessionRecord:
    """Parse a sessions row into a domain record."""
    return SessionRecord(
        id=UUID(str(row["id"])),
        date=parse_civil_date(row.get("date")),
        location=str(row.get("location") or ""),
        status=str(row.get("status") or ACTIVE),
        duration_hours=row.get("duration_hours"),
    )


def parse_player(row: dict[str, object]) -> PlayerRecord:
    """Parse a players row into a domain record."""
    nickname = row.get("nickname")
    return PlayerRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name") or ""),
        nickname=str(nickname) if nickname else None,
    )


def parse_transaction(row: dict[str, object]) -> TransactionRecord:
    """Parse a transactions row, with its optional player join."""
    player_row = row.get("player")
    player = (
        parse_player(player_row)
        if isinstance(player_row, dict) and player_row.get("id")
        else None
    )
    raw_id = row.get("id")
    return TransactionRecord(
        id=UUID(str(raw_id)) if raw_id else None,
        session_id=UUID(str(row["session_id"])),
        player_id=UUID(str(row["player_id"])),
        buy_in_amount=row.get("buy_in_amount"),
        cash_out_amount=row.get("cash_out_amount"),
        net_profit=row.get("net_profit"),
        player=player,
    )
