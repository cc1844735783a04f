"""Session endpoints: listing, detail and lifecycle actions."""

from __future__ import annotations

from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request, Response, status

from bankroll_tracker.api.dependencies import get_container
from bankroll_tracker.api.schemas import (  # noqa: TC001
    BuyInRequest,
    CashOutRequest,
    CompleteSessionRequest,
    CreateSessionRequest,
    SeatPlayerRequest,
    UpdateSessionRequest,
)
from bankroll_tracker.api.serializers import (
    serialize_session,
    serialize_session_detail,
    serialize_transaction,
)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("")
async def list_sessions(request: Request) -> dict[str, object]:
    """Return all sessions, most recent first."""
    sessions = get_container(request).session_service.list_sessions()
    return {"sessions": [serialize_session(session) for session in sessions]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_session(
    payload: CreateSessionRequest, request: Request
) -> dict[str, object]:
    """Create an active session."""
    session = get_container(request).session_service.create_session(
        payload.date, payload.location
    )
    return serialize_session(session)


@router.get("/{session_id}")
async def session_detail(session_id: UUID, request: Request) -> dict[str, object]:
    """Return a session with its transactions, totals and hourly rate."""
    detail = get_container(request).dashboard_service.get_session_detail(session_id)
    return serialize_session_detail(detail)


@router.patch("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_session(
    session_id: UUID, payload: UpdateSessionRequest, request: Request
) -> Response:
    """Rename the session location."""
    get_container(request).session_service.update_location(
        session_id, payload.location
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: UUID, request: Request) -> Response:
    """Delete a session that is still active."""
    get_container(request).session_service.delete_session(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{session_id}/players", status_code=status.HTTP_204_NO_CONTENT)
async def seat_player(
    session_id: UUID, payload: SeatPlayerRequest, request: Request
) -> Response:
    """Add a player to the session with a zero buy-in."""
    get_container(request).session_service.add_player(session_id, payload.player_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{session_id}/players/{player_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def unseat_player(
    session_id: UUID, player_id: UUID, request: Request
) -> Response:
    """Remove a player from the session."""
    get_container(request).session_service.remove_player(session_id, player_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{session_id}/buy-ins")
async def add_buy_in(
    session_id: UUID, payload: BuyInRequest, request: Request
) -> dict[str, object]:
    """Add to a player's buy-in."""
    tx = get_container(request).session_service.add_buy_in(
        session_id, payload.player_id, payload.amount
    )
    return serialize_transaction(tx)


@router.put("/{session_id}/cash-outs")
async def set_cash_out(
    session_id: UUID, payload: CashOutRequest, request: Request
) -> dict[str, object]:
    """Set a player's cash-out."""
    tx = get_container(request).session_service.set_cash_out(
        session_id, payload.player_id, payload.amount
    )
    return serialize_transaction(tx)


@router.post("/{session_id}/complete", status_code=status.HTTP_204_NO_CONTENT)
async def complete_session(
    session_id: UUID, request: Request, payload: CompleteSessionRequest | None = None
) -> Response:
    """Complete a balanced session."""
    duration = payload.duration_hours if payload else None
    get_container(request).session_service.complete_session(session_id, duration)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{session_id}/reopen", status_code=status.HTTP_204_NO_CONTENT)
async def reopen_session(session_id: UUID, request: Request) -> Response:
    """Reopen a completed session."""
    get_container(request).session_service.reopen_session(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
