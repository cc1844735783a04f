"""Supabase-backed session and transaction repository."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from bankroll_tracker.adapters.supabase_rows import (
    SESSION_COLUMNS,
    TRANSACTION_COLUMNS,
    is_unique_violation,
    parse_session,
    parse_transaction,
)
from bankroll_tracker.domain.records import SessionRecord, TransactionRecord
from bankroll_tracker.services.sessions import SessionRepository


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for sessions and transactions."""

    client: Client

    def create_session(
        self, session_date: date, location: str, status: str
    ) -> SessionRecord:
        """Create a session row and return it."""
        response = (
            self.client.table("sessions")
            .insert(
                {
                    "date": session_date.isoformat(),
                    "location": location,
                    "status": status,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create session")
        return parse_session(response.data[0])

    def get_session(self, session_id: UUID) -> SessionRecord | None:
        """Return a session by id, if present."""
        response = (
            self.client.table("sessions")
            .select(SESSION_COLUMNS)
            .eq("id", str(session_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_session(response.data[0])

    def find_session(self, session_date: date, location: str) -> SessionRecord | None:
        """Return the session held on a date at a location, if present."""
        response = (
            self.client.table("sessions")
            .select(SESSION_COLUMNS)
            .eq("date", session_date.isoformat())
            .eq("location", location)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_session(response.data[0])

    def list_sessions(self) -> list[SessionRecord]:
        """Return all sessions, most recent first."""
        response = (
            self.client.table("sessions")
            .select(SESSION_COLUMNS)
            .order("date", desc=True)
            .execute()
        )
        return [parse_session(row) for row in response.data or []]

    def update_session(self, session_id: UUID, payload: dict[str, object]) -> None:
        """Update session columns."""
        self.client.table("sessions").update(payload).eq(
            "id", str(session_id)
        ).execute()

    def delete_session(self, session_id: UUID) -> None:
        """Delete a session and its transactions."""
        self.client.table("transactions").delete().eq(
            "session_id", str(session_id)
        ).execute()
        self.client.table("sessions").delete().eq("id", str(session_id)).execute()

    def list_transactions(self, session_id: UUID) -> list[TransactionRecord]:
        """Return the transactions of a session with their players."""
        response = (
            self.client.table("transactions")
            .select(TRANSACTION_COLUMNS)
            .eq("session_id", str(session_id))
            .execute()
        )
        return [parse_transaction(row) for row in response.data or []]

    def get_transaction(
        self, session_id: UUID, player_id: UUID
    ) -> TransactionRecord | None:
        """Return the transaction of a player in a session, if present."""
        response = (
            self.client.table("transactions")
            .select(TRANSACTION_COLUMNS)
            .eq("session_id", str(session_id))
            .eq("player_id", str(player_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_transaction(response.data[0])

    def create_transaction(self, session_id: UUID, player_id: UUID) -> bool:
        """Insert a zero transaction; return False when the pair already exists."""
        try:
            self.client.table("transactions").insert(
                {
                    "session_id": str(session_id),
                    "player_id": str(player_id),
                    "buy_in_amount": "0",
                    "cash_out_amount": "0",
                }
            ).execute()
        except APIError as exc:
            if is_unique_violation(exc):
                return False
            raise
        return True

    def update_transaction(
        self, transaction_id: UUID, payload: dict[str, object]
    ) -> None:
        """Update transaction amounts."""
        self.client.table("transactions").update(payload).eq(
            "id", str(transaction_id)
        ).execute()

    def upsert_transaction(
        self, session_id: UUID, player_id: UUID, buy_in: float, cash_out: float
    ) -> None:
        """Insert or overwrite the amounts of a (session, player) pair."""
        self.client.table("transactions").upsert(
            {
                "session_id": str(session_id),
                "player_id": str(player_id),
                "buy_in_amount": str(buy_in),
                "cash_out_amount": str(cash_out),
            },
            on_conflict="session_id,player_id",
        ).execute()

    def delete_transaction(self, session_id: UUID, player_id: UUID) -> None:
        """Remove a player's transaction from a session."""
        self.client.table("transactions").delete().eq(
            "session_id", str(session_id)
        ).eq("player_id", str(player_id)).execute()
