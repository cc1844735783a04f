"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import date
from uuid import UUID, uuid4

import pytest

from bankroll_tracker.config import Settings
from bankroll_tracker.containers import AppContainer
from bankroll_tracker.domain.errors import DuplicatePlayerError
from bankroll_tracker.domain.money import parse_amount
from bankroll_tracker.domain.records import (
    PlayerRecord,
    SessionRecord,
    TransactionRecord,
)
from bankroll_tracker.services.dashboard import DashboardRepository, DashboardService
from bankroll_tracker.services.filtering import Clock
from bankroll_tracker.services.importer import CsvImporter
from bankroll_tracker.services.players import PlayerRepository, PlayerService
from bankroll_tracker.services.sessions import SessionRepository, SessionService


@dataclass(frozen=True)
class FixedClock(Clock):
    """Clock pinned to a single civil date."""

    day: str = "2024-02-01"

    def today(self) -> str:
        return self.day


@dataclass
class InMemoryPlayerRepository(PlayerRepository):
    """In-memory player repository for tests."""

    players: dict[UUID, PlayerRecord] = field(default_factory=dict)

    def add(self, name: str, nickname: str | None = None) -> PlayerRecord:
        return self.create_player(name, nickname)

    def get_player(self, player_id: UUID) -> PlayerRecord | None:
        return self.players.get(player_id)

    def get_by_name(self, name: str) -> PlayerRecord | None:
        for player in self.players.values():
            if player.name == name:
                return player
        return None

    def list_players(self) -> list[PlayerRecord]:
        return sorted(self.players.values(), key=lambda player: player.name)

    def create_player(self, name: str, nickname: str | None) -> PlayerRecord:
        if self.get_by_name(name):
            raise DuplicatePlayerError("A player with that name already exists.")
        player = PlayerRecord(id=uuid4(), name=name, nickname=nickname)
        self.players[player.id] = player
        return player


@dataclass
class InMemorySessionRepository(SessionRepository):
    """In-memory session and transaction repository for tests."""

    sessions: dict[UUID, SessionRecord] = field(default_factory=dict)
    transactions: dict[UUID, TransactionRecord] = field(default_factory=dict)

    def add(
        self, day: str | None, location: str = "Home Game", status: str = "active"
    ) -> SessionRecord:
        session = SessionRecord(
            id=uuid4(),
            date=date.fromisoformat(day) if day else None,
            location=location,
            status=status,
        )
        self.sessions[session.id] = session
        return session

    def add_transaction(
        self,
        session: SessionRecord,
        player: PlayerRecord,
        buy_in: float,
        cash_out: float,
    ) -> TransactionRecord:
        tx = TransactionRecord(
            id=uuid4(),
            session_id=session.id,
            player_id=player.id,
            buy_in_amount=buy_in,
            cash_out_amount=cash_out,
            player=player,
        )
        self.transactions[tx.id] = tx
        return tx

    def create_session(
        self, session_date: date, location: str, status: str
    ) -> SessionRecord:
        return self.add(session_date.isoformat(), location, status)

    def get_session(self, session_id: UUID) -> SessionRecord | None:
        return self.sessions.get(session_id)

    def find_session(self, session_date: date, location: str) -> SessionRecord | None:
        for session in self.sessions.values():
            if session.date == session_date and session.location == location:
                return session
        return None

    def list_sessions(self) -> list[SessionRecord]:
        return sorted(
            self.sessions.values(),
            key=lambda session: session.date or date.min,
            reverse=True,
        )

    def update_session(self, session_id: UUID, payload: dict[str, object]) -> None:
        self.sessions[session_id] = replace(self.sessions[session_id], **payload)

    def delete_session(self, session_id: UUID) -> None:
        self.sessions.pop(session_id, None)
        for tx_id, tx in list(self.transactions.items()):
            if tx.session_id == session_id:
                del self.transactions[tx_id]

    def list_transactions(self, session_id: UUID) -> list[TransactionRecord]:
        return [tx for tx in self.transactions.values() if tx.session_id == session_id]

    def get_transaction(
        self, session_id: UUID, player_id: UUID
    ) -> TransactionRecord | None:
        for tx in self.transactions.values():
            if tx.session_id == session_id and tx.player_id == player_id:
                return tx
        return None

    def create_transaction(self, session_id: UUID, player_id: UUID) -> bool:
        if self.get_transaction(session_id, player_id):
            return False
        tx = TransactionRecord(id=uuid4(), session_id=session_id, player_id=player_id)
        self.transactions[tx.id] = tx
        return True

    def update_transaction(
        self, transaction_id: UUID, payload: dict[str, object]
    ) -> None:
        current = self.transactions[transaction_id]
        buy_in = parse_amount(payload.get("buy_in_amount", current.buy_in_amount))
        cash_out = parse_amount(payload.get("cash_out_amount", current.cash_out_amount))
        self.transactions[transaction_id] = TransactionRecord(
            id=current.id,
            session_id=current.session_id,
            player_id=current.player_id,
            buy_in_amount=buy_in,
            cash_out_amount=cash_out,
            player=current.player,
        )

    def upsert_transaction(
        self, session_id: UUID, player_id: UUID, buy_in: float, cash_out: float
    ) -> None:
        existing = self.get_transaction(session_id, player_id)
        tx = TransactionRecord(
            id=existing.id if existing else uuid4(),
            session_id=session_id,
            player_id=player_id,
            buy_in_amount=buy_in,
            cash_out_amount=cash_out,
        )
        self.transactions[tx.id] = tx

    def delete_transaction(self, session_id: UUID, player_id: UUID) -> None:
        tx = self.get_transaction(session_id, player_id)
        if tx is not None:
            del self.transactions[tx.id]


@dataclass
class InMemoryDashboardRepository(DashboardRepository):
    """Dashboard reads served from the in-memory session and player stores."""

    session_repository: InMemorySessionRepository
    player_repository: InMemoryPlayerRepository

    def list_sessions(self) -> list[SessionRecord]:
        return self.session_repository.list_sessions()

    def list_players(self) -> list[PlayerRecord]:
        return self.player_repository.list_players()

    def get_player(self, player_id: UUID) -> PlayerRecord | None:
        return self.player_repository.get_player(player_id)

    def get_session(self, session_id: UUID) -> SessionRecord | None:
        return self.session_repository.get_session(session_id)

    def list_transactions(
        self, player_id: UUID | None = None, session_id: UUID | None = None
    ) -> list[TransactionRecord]:
        rows = []
        for tx in self.session_repository.transactions.values():
            if player_id is not None and tx.player_id != player_id:
                continue
            if session_id is not None and tx.session_id != session_id:
                continue
            player = self.player_repository.get_player(tx.player_id)
            rows.append(replace(tx, player=player))
        return rows


def make_transaction(
    session: SessionRecord,
    player: PlayerRecord | None,
    buy_in: object,
    cash_out: object,
    net_profit: object = None,
) -> TransactionRecord:
    """Build a joined transaction row for pure aggregation tests."""
    return TransactionRecord(
        session_id=session.id,
        player_id=player.id if player else uuid4(),
        buy_in_amount=buy_in,
        cash_out_amount=cash_out,
        net_profit=net_profit,
        player=player,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def player_repository() -> InMemoryPlayerRepository:
    return InMemoryPlayerRepository()


@pytest.fixture
def session_repository() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture
def dashboard_repository(
    session_repository: InMemorySessionRepository,
    player_repository: InMemoryPlayerRepository,
) -> InMemoryDashboardRepository:
    return InMemoryDashboardRepository(session_repository, player_repository)


@pytest.fixture
def container(
    settings: Settings,
    clock: FixedClock,
    session_repository: InMemorySessionRepository,
    player_repository: InMemoryPlayerRepository,
    dashboard_repository: InMemoryDashboardRepository,
) -> AppContainer:
    player_service = PlayerService(player_repository)
    return AppContainer(
        settings=settings,
        clock=clock,
        dashboard_service=DashboardService(dashboard_repository),
        session_service=SessionService(session_repository),
        player_service=player_service,
        csv_importer=CsvImporter(
            player_service=player_service,
            session_repository=session_repository,
        ),
    )


@pytest.fixture
def weekly_game(
    session_repository: InMemorySessionRepository,
    player_repository: InMemoryPlayerRepository,
) -> dict[str, object]:
    """Two completed sessions a week apart with two players."""
    alice = player_repository.add("Alice")
    bob = player_repository.add("Bob")
    first = session_repository.add("2024-01-01", status="completed")
    second = session_repository.add("2024-01-08", status="completed")
    session_repository.add_transaction(first, alice, 100, 150)
    session_repository.add_transaction(first, bob, 0, 0)
    session_repository.add_transaction(second, alice, 50, 50)
    session_repository.add_transaction(second, bob, 100, 80)
    return {"alice": alice, "bob": bob, "first": first, "second": second}
