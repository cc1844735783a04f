"""Dashboard and leaderboard endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request

from bankroll_tracker.api.dependencies import date_range_query, get_container
from bankroll_tracker.api.serializers import (
    serialize_dashboard,
    serialize_entry,
    serialize_range,
)
from bankroll_tracker.domain.stats import DateRange  # noqa: TC001
from bankroll_tracker.services.leaderboard import SORT_KEYS

router = APIRouter(tags=["dashboard"])

_SORT_PATTERN = "^(" + "|".join(SORT_KEYS) + ")$"


@router.get("/dashboard")
async def dashboard(
    request: Request, date_range: DateRange = Depends(date_range_query)
) -> dict[str, object]:
    """Return summary scalars, leaderboard and chart series."""
    summary = get_container(request).dashboard_service.get_dashboard(date_range)
    return serialize_dashboard(summary)


@router.get("/leaderboard")
async def leaderboard(
    request: Request,
    date_range: DateRange = Depends(date_range_query),
    sort: str = Query(default="total_profit", pattern=_SORT_PATTERN),
    order: str = Query(default="desc", pattern="^(asc|desc)$"),
) -> dict[str, object]:
    """Return the leaderboard sorted by a column."""
    entries = get_container(request).dashboard_service.get_leaderboard(
        date_range, key=sort, descending=order == "desc"
    )
    return {
        "range": serialize_range(date_range),
        "leaderboard": [serialize_entry(entry) for entry in entries],
    }
