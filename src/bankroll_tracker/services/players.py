"""Player management."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from bankroll_tracker.domain.errors import DuplicatePlayerError, ValidationError
from bankroll_tracker.domain.records import PlayerRecord


class PlayerRepository(Protocol):
    """Persistence interface for players."""

    def get_player(self, player_id: UUID) -> PlayerRecord | None:
        """Return a player by id, if present."""

    def get_by_name(self, name: str) -> PlayerRecord | None:
        """Return the player with an exact name, if present."""

    def list_players(self) -> list[PlayerRecord]:
        """Return all players ordered by name."""

    def create_player(self, name: str, nickname: str | None) -> PlayerRecord:
        """Create a player; raise DuplicatePlayerError when the name is taken."""


@dataclass
class PlayerService:
    """Application service for player lifecycle actions."""

    repository: PlayerRepository

    def create_player(self, name: str, nickname: str | None = None) -> PlayerRecord:
        """Create a player with a unique, non-empty name."""
        cleaned = name.strip() if name else ""
        if not cleaned:
            raise ValidationError("Name is required.")
        if self.repository.get_by_name(cleaned) is not None:
            raise DuplicatePlayerError("A player with that name already exists.")
        return self.repository.create_player(cleaned, _clean_nickname(nickname))

    def get_or_create(self, name: str, nickname: str | None = None) -> PlayerRecord:
        """Return the player with this name, creating it on first reference."""
        existing = self.repository.get_by_name(name.strip())
        if existing:
            return existing
        return self.create_player(name, nickname)


def _clean_nickname(nickname: str | None) -> str | None:
    if nickname is None:
        return None
    return nickname.strip() or None
