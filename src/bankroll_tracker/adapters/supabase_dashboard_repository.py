"""Supabase repository for dashboard reads."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from supabase import Client

from bankroll_tracker.adapters.supabase_rows import (
    PLAYER_COLUMNS,
    SESSION_COLUMNS,
    TRANSACTION_COLUMNS,
    parse_player,
    parse_session,
    parse_transaction,
)
from bankroll_tracker.domain.records import (
    PlayerRecord,
    SessionRecord,
    TransactionRecord,
)
from bankroll_tracker.services.dashboard import DashboardRepository

DEFAULT_PAGE_SIZE = 1000


@dataclass
class SupabaseDashboardRepository(DashboardRepository):
    """Supabase implementation for dashboard queries."""

    client: Client
    page_size: int = DEFAULT_PAGE_SIZE

    def list_sessions(self) -> list[SessionRecord]:
        """Return all sessions, most recent first."""
        rows = self._fetch_all(
            lambda: self.client.table("sessions")
            .select(SESSION_COLUMNS)
            .order("date", desc=True)
            .order("id")
        )
        return [parse_session(row) for row in rows]

    def list_players(self) -> list[PlayerRecord]:
        """Return all players ordered by name."""
        response = (
            self.client.table("players")
            .select(PLAYER_COLUMNS)
            .order("name", desc=False)
            .execute()
        )
        return [parse_player(row) for row in response.data or []]

    def get_player(self, player_id: UUID) -> PlayerRecord | None:
        """Return a player by id, if present."""
        response = (
            self.client.table("players")
            .select(PLAYER_COLUMNS)
            .eq("id", str(player_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_player(response.data[0])

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

    def list_transactions(
        self, player_id: UUID | None = None, session_id: UUID | None = None
    ) -> list[TransactionRecord]:
        """Return transactions joined with their player."""

        def build_query() -> Any:
            query = self.client.table("transactions").select(TRANSACTION_COLUMNS)
            if player_id is not None:
                query = query.eq("player_id", str(player_id))
            if session_id is not None:
                query = query.eq("session_id", str(session_id))
            return query.order("id")

        return [parse_transaction(row) for row in self._fetch_all(build_query)]

    def _fetch_all(self, build_query: Callable[[], Any]) -> list[dict[str, object]]:
        """Read every row of a query in pages of at most ``page_size`` rows.

        PostgREST may cap a response below the requested page at its
        ``max-rows`` setting, so paging continues from the rows actually
        returned until an empty page comes back.
        """
        rows: list[dict[str, object]] = []
        while True:
            start = len(rows)
            response = (
                build_query().range(start, start + self.page_size - 1).execute()
            )
            page = response.data or []
            if not page:
                return rows
            rows.extend(page)
