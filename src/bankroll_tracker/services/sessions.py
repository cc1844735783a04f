"""Session lifecycle: seating players, buy-ins, cash-outs and settlement."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from bankroll_tracker.domain.errors import (
    SessionCompletedError,
    SessionNotFoundError,
    TransactionNotFoundError,
    UnbalancedSessionError,
    ValidationError,
)
from bankroll_tracker.domain.records import (
    ACTIVE,
    COMPLETED,
    SessionRecord,
    TransactionRecord,
)
from bankroll_tracker.services.filtering import parse_civil_date
from bankroll_tracker.services.leaderboard import session_totals

logger = logging.getLogger(__name__)


class SessionRepository(Protocol):
    """Persistence interface for sessions and their transactions."""

    def create_session(
        self, session_date: date, location: str, status: str
    ) -> SessionRecord:
        """Create a session and return it."""

    def get_session(self, session_id: UUID) -> SessionRecord | None:
        """Return a session by id, if present."""

    def find_session(self, session_date: date, location: str) -> SessionRecord | None:
        """Return the session held on a date at a location, if present."""

    def list_sessions(self) -> list[SessionRecord]:
        """Return all sessions, most recent first."""

    def update_session(self, session_id: UUID, payload: dict[str, object]) -> None:
        """Update session columns."""

    def delete_session(self, session_id: UUID) -> None:
        """Delete a session and its transactions."""

    def list_transactions(self, session_id: UUID) -> list[TransactionRecord]:
        """Return the transactions of a session."""

    def get_transaction(
        self, session_id: UUID, player_id: UUID
    ) -> TransactionRecord | None:
        """Return the transaction of a player in a session, if present."""

    def create_transaction(self, session_id: UUID, player_id: UUID) -> bool:
        """Insert a zero transaction; return False when the pair already exists."""

    def update_transaction(
        self, transaction_id: UUID, payload: dict[str, object]
    ) -> None:
        """Update transaction amounts."""

    def upsert_transaction(
        self, session_id: UUID, player_id: UUID, buy_in: float, cash_out: float
    ) -> None:
        """Insert or overwrite the amounts of a (session, player) pair."""

    def delete_transaction(self, session_id: UUID, player_id: UUID) -> None:
        """Remove a player's transaction from a session."""


@dataclass
class SessionService:
    """Application service enforcing the session lifecycle rules."""

    repository: SessionRepository

    def create_session(self, session_date: str, location: str) -> SessionRecord:
        """Create an active session on a civil date at a location."""
        parsed = parse_civil_date(session_date)
        cleaned = location.strip() if location else ""
        if parsed is None or not cleaned:
            raise ValidationError("Date and location are required.")
        session = self.repository.create_session(parsed, cleaned, status=ACTIVE)
        logger.info("Created session", extra={"session_id": str(session.id)})
        return session

    def list_sessions(self) -> list[SessionRecord]:
        """Return all sessions, most recent first."""
        return self.repository.list_sessions()

    def update_location(self, session_id: UUID, location: str) -> None:
        """Rename the location of an active session."""
        cleaned = location.strip() if location else ""
        if not cleaned:
            raise ValidationError("Location is required.")
        self._ensure_active(session_id)
        self.repository.update_session(session_id, {"location": cleaned})

    def add_player(self, session_id: UUID, player_id: UUID) -> None:
        """Seat a player with a zero buy-in; seating twice is a no-op."""
        self._ensure_active(session_id)
        if not self.repository.create_transaction(session_id, player_id):
            logger.info(
                "Player already seated",
                extra={"session_id": str(session_id), "player_id": str(player_id)},
            )

    def remove_player(self, session_id: UUID, player_id: UUID) -> None:
        """Remove a player and their transaction from an active session."""
        self._ensure_active(session_id)
        self.repository.delete_transaction(session_id, player_id)

    def add_buy_in(
        self, session_id: UUID, player_id: UUID, amount: float
    ) -> TransactionRecord:
        """Increase a player's buy-in by a positive amount."""
        if amount <= 0:
            raise ValidationError("Buy-in amount must be positive.")
        self._ensure_active(session_id)
        tx = self._get_transaction(session_id, player_id)
        new_total = tx.buy_in_amount + amount
        self.repository.update_transaction(
            tx.id, {"buy_in_amount": _format_amount(new_total)}
        )
        return TransactionRecord(
            id=tx.id,
            session_id=session_id,
            player_id=player_id,
            buy_in_amount=new_total,
            cash_out_amount=tx.cash_out_amount,
            player=tx.player,
        )

    def set_cash_out(
        self, session_id: UUID, player_id: UUID, amount: float
    ) -> TransactionRecord:
        """Overwrite a player's cash-out amount."""
        if amount < 0:
            raise ValidationError("Cash-out amount cannot be negative.")
        self._ensure_active(session_id)
        tx = self._get_transaction(session_id, player_id)
        self.repository.update_transaction(
            tx.id, {"cash_out_amount": _format_amount(amount)}
        )
        return TransactionRecord(
            id=tx.id,
            session_id=session_id,
            player_id=player_id,
            buy_in_amount=tx.buy_in_amount,
            cash_out_amount=amount,
            player=tx.player,
        )

    def complete_session(
        self, session_id: UUID, duration_hours: float | None = None
    ) -> None:
        """Mark a session completed once buy-ins equal cash-outs."""
        self._get_session(session_id)
        if duration_hours is not None and duration_hours < 0:
            raise ValidationError("Duration cannot be negative.")
        totals = session_totals(self.repository.list_transactions(session_id))
        if not totals.is_balanced:
            raise UnbalancedSessionError(
                "Session cannot be completed until total buy-ins equal "
                "total cash-outs."
            )
        payload: dict[str, object] = {"status": COMPLETED}
        if duration_hours is not None:
            payload["duration_hours"] = _format_amount(duration_hours)
        self.repository.update_session(session_id, payload)
        logger.info("Completed session", extra={"session_id": str(session_id)})

    def reopen_session(self, session_id: UUID) -> None:
        """Move a completed session back to active."""
        self._get_session(session_id)
        self.repository.update_session(session_id, {"status": ACTIVE})

    def delete_session(self, session_id: UUID) -> None:
        """Delete a session that has not been completed."""
        self._ensure_active(session_id)
        self.repository.delete_session(session_id)
        logger.info("Deleted session", extra={"session_id": str(session_id)})

    def _get_session(self, session_id: UUID) -> SessionRecord:
        session = self.repository.get_session(session_id)
        if session is None:
            raise SessionNotFoundError("Session not found.")
        return session

    def _ensure_active(self, session_id: UUID) -> SessionRecord:
        session = self._get_session(session_id)
        if session.is_completed:
            raise SessionCompletedError(
                "This session is completed and can no longer be modified."
            )
        return session

    def _get_transaction(self, session_id: UUID, player_id: UUID) -> TransactionRecord:
        tx = self.repository.get_transaction(session_id, player_id)
        if tx is None or tx.id is None:
            raise TransactionNotFoundError(
                "Transaction not found for player in this session."
            )
        return tx


def _format_amount(amount: float) -> str:
    """Render an amount as the decimal string stored in the row store."""
    return f"{amount:.2f}"
