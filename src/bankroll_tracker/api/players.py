"""Player endpoints."""

from __future__ import annotations

from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from bankroll_tracker.api.dependencies import date_range_query, get_container
from bankroll_tracker.api.schemas import CreatePlayerRequest  # noqa: TC001
from bankroll_tracker.api.serializers import (
    serialize_player,
    serialize_player_detail,
    serialize_player_row,
)
from bankroll_tracker.domain.stats import DateRange  # noqa: TC001

router = APIRouter(prefix="/players", tags=["players"])


@router.get("")
async def list_players(request: Request) -> dict[str, object]:
    """Return all players with profit and session counts."""
    rows = get_container(request).dashboard_service.list_players()
    return {"players": [serialize_player_row(row) for row in rows]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_player(
    payload: CreatePlayerRequest, request: Request
) -> dict[str, object]:
    """Add a player with a unique name."""
    player = get_container(request).player_service.create_player(
        payload.name, payload.nickname
    )
    return serialize_player(player)


@router.get("/{player_id}")
async def player_detail(
    player_id: UUID,
    request: Request,
    date_range: DateRange = Depends(date_range_query),
) -> dict[str, object]:
    """Return results and cumulative profit for one player."""
    detail = get_container(request).dashboard_service.get_player_detail(
        player_id, date_range
    )
    return serialize_player_detail(detail)
