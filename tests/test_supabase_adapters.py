"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID, uuid4

import pytest
from postgrest.exceptions import APIError

from bankroll_tracker.adapters.supabase_dashboard_repository import (
    SupabaseDashboardRepository,
)
from bankroll_tracker.adapters.supabase_player_repository import (
    SupabasePlayerRepository,
)
from bankroll_tracker.adapters.supabase_rows import parse_transaction
from bankroll_tracker.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from bankroll_tracker.domain.errors import DuplicatePlayerError


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "update": [],
            "upsert": [],
            "delete": [],
        }
    )
    error: Exception | None = None
    last_payload: object | None = None
    last_options: dict[str, object] = field(default_factory=dict)
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    ranges: list[tuple[int, int]] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def upsert(self, payload, **options) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        self.last_options = options
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def range(self, start: int, end: int) -> "FakeTable":
        self.ranges.append((start, end))
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        if self.error is not None:
            raise self.error
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _unique_violation() -> APIError:
    return APIError({"message": "duplicate key", "code": "23505"})


def test_supabase_player_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    players_table = client.table("players")
    player_id = str(uuid4())
    players_table.queue("insert", [{"id": player_id, "name": "Alice"}])
    players_table.queue("select", [{"id": player_id, "name": "Alice", "nickname": ""}])

    repository = SupabasePlayerRepository(client)
    created = repository.create_player("Alice", None)
    fetched = repository.get_by_name("Alice")

    assert str(created.id) == player_id
    assert fetched is not None
    assert fetched.nickname is None
    assert ("name", "Alice") in players_table.last_filters
    assert repository.get_player(uuid4()) is None


def test_supabase_player_repository_duplicate_name() -> None:
    client = FakeSupabaseClient()
    client.table("players").error = _unique_violation()

    repository = SupabasePlayerRepository(client)

    with pytest.raises(DuplicatePlayerError):
        repository.create_player("Alice", None)


def test_supabase_session_repository_sessions() -> None:
    client = FakeSupabaseClient()
    sessions_table = client.table("sessions")
    session_id = str(uuid4())
    sessions_table.queue(
        "insert",
        [
            {
                "id": session_id,
                "date": "2024-01-05",
                "location": "Home",
                "status": "active",
                "duration_hours": None,
            }
        ],
    )
    sessions_table.queue(
        "select",
        [
            {
                "id": session_id,
                "date": "2024-01-05T00:00:00",
                "location": "Home",
                "status": "completed",
                "duration_hours": "4.5",
            }
        ],
    )

    repository = SupabaseSessionRepository(client)
    created = repository.create_session(date(2024, 1, 5), "Home", status="active")
    fetched = repository.find_session(date(2024, 1, 5), "Home")

    assert sessions_table.last_payload == {
        "date": "2024-01-05",
        "location": "Home",
        "status": "active",
    }
    assert created.date == date(2024, 1, 5)
    assert fetched is not None
    assert fetched.is_completed
    assert fetched.duration_hours == 4.5


def test_supabase_session_repository_transactions() -> None:
    client = FakeSupabaseClient()
    transactions_table = client.table("transactions")
    session_id = uuid4()
    player_id = uuid4()
    transactions_table.queue(
        "select",
        [
            {
                "id": str(uuid4()),
                "session_id": str(session_id),
                "player_id": str(player_id),
                "buy_in_amount": "100.00",
                "cash_out_amount": "145.50",
                "net_profit": "45.50",
                "player": {"id": str(player_id), "name": "Alice", "nickname": None},
            }
        ],
    )

    repository = SupabaseSessionRepository(client)
    (tx,) = repository.list_transactions(session_id)
    repository.upsert_transaction(session_id, player_id, buy_in=20.0, cash_out=0.0)

    assert tx.net_profit == 45.5
    assert tx.player_name == "Alice"
    assert transactions_table.last_options == {"on_conflict": "session_id,player_id"}
    assert transactions_table.last_payload["buy_in_amount"] == "20.0"


def test_supabase_create_transaction_reports_existing_seat() -> None:
    client = FakeSupabaseClient()
    client.table("transactions").error = _unique_violation()

    repository = SupabaseSessionRepository(client)

    assert repository.create_transaction(uuid4(), uuid4()) is False


def test_supabase_create_transaction_propagates_other_errors() -> None:
    client = FakeSupabaseClient()
    client.table("transactions").error = APIError({"message": "boom", "code": "500"})

    repository = SupabaseSessionRepository(client)

    with pytest.raises(APIError):
        repository.create_transaction(uuid4(), uuid4())


def test_supabase_dashboard_repository() -> None:
    client = FakeSupabaseClient()
    transactions_table = client.table("transactions")
    client.table("sessions").queue(
        "select",
        [{"id": str(uuid4()), "date": None, "location": "Home", "status": "active"}],
    )
    transactions_table.queue(
        "select",
        [
            {
                "session_id": str(uuid4()),
                "player_id": str(uuid4()),
                "buy_in_amount": None,
                "cash_out_amount": "abc",
                "player": None,
            }
        ],
    )

    repository = SupabaseDashboardRepository(client)
    (session,) = repository.list_sessions()
    player_id = uuid4()
    (tx,) = repository.list_transactions(player_id=player_id)

    assert session.date is None
    assert tx.net_profit == 0
    assert tx.player_name == "Unknown"
    assert set(transactions_table.last_filters) == {("player_id", str(player_id))}


def test_parse_transaction_keeps_stored_net_profit() -> None:
    row = {
        "id": str(uuid4()),
        "session_id": str(uuid4()),
        "player_id": str(uuid4()),
        "buy_in_amount": 100,
        "cash_out_amount": 150,
        "net_profit": 40,
    }

    tx = parse_transaction(row)

    assert tx.net_profit == 40
    assert isinstance(tx.id, UUID)


def test_supabase_dashboard_repository_reads_every_page() -> None:
    client = FakeSupabaseClient()
    transactions_table = client.table("transactions")
    session_id = str(uuid4())

    def _row(buy_in: str) -> dict[str, object]:
        return {
            "id": str(uuid4()),
            "session_id": session_id,
            "player_id": str(uuid4()),
            "buy_in_amount": buy_in,
            "cash_out_amount": "0",
        }

    transactions_table.queue("select", [_row("10"), _row("20")])
    # A server row cap can return fewer rows than the requested page.
    transactions_table.queue("select", [_row("30")])
    transactions_table.queue("select", [_row("40"), _row("50")])

    repository = SupabaseDashboardRepository(client, page_size=2)
    transactions = repository.list_transactions()

    assert [tx.buy_in_amount for tx in transactions] == [10, 20, 30, 40, 50]
    assert transactions_table.ranges == [(0, 1), (2, 3), (3, 4), (5, 6)]
