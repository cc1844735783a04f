"""Supabase-backed player repository."""

from dataclasses import dataclass
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from bankroll_tracker.adapters.supabase_rows import (
    PLAYER_COLUMNS,
    is_unique_violation,
    parse_player,
)
from bankroll_tracker.domain.errors import DuplicatePlayerError
from bankroll_tracker.domain.records import PlayerRecord
from bankroll_tracker.services.players import PlayerRepository


@dataclass
class SupabasePlayerRepository(PlayerRepository):
    """Supabase implementation for player persistence."""

    client: Client

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

    def get_by_name(self, name: str) -> PlayerRecord | None:
        """Return the player with an exact name, if present."""
        response = (
            self.client.table("players")
            .select(PLAYER_COLUMNS)
            .eq("name", name)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_player(response.data[0])

    def list_players(self) -> list[PlayerRecord]:
        """Return all players ordered by name."""
        response = (
            self.client.table("players")
            .select(PLAYER_COLUMNS)
            .order("name", desc=False)
            .execute()
        )
        return [parse_player(row) for row in response.data or []]

    def create_player(self, name: str, nickname: str | None) -> PlayerRecord:
        """Create a player row and return it."""
        try:
            response = (
                self.client.table("players")
                .insert({"name": name, "nickname": nickname})
                .execute()
            )
        except APIError as exc:
            if is_unique_violation(exc):
                raise DuplicatePlayerError(
                    "A player with that name already exists."
                ) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create player in Supabase")
        return parse_player(response.data[0])
