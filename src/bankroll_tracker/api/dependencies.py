"""Shared request dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Query, Request

from bankroll_tracker.domain.stats import DateRange  # noqa: TC001
from bankroll_tracker.services.filtering import resolve_date_range

if TYPE_CHECKING:
    from bankroll_tracker.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the app."""
    return request.app.state.container


def date_range_query(
    request: Request,
    preset: str | None = Query(default=None, alias="range"),
    start: str | None = Query(default=None),
    end: str | None = Query(default=None),
) -> DateRange:
    """Resolve range query parameters against the container clock."""
    container = get_container(request)
    return resolve_date_range(container.clock, preset=preset, start=start, end=end)
