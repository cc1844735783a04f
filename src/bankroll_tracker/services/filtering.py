"""Session filtering and date range resolution."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Protocol
from zoneinfo import ZoneInfo

from bankroll_tracker.domain.errors import InvalidDateRangeError
from bankroll_tracker.domain.records import SessionRecord, TransactionRecord
from bankroll_tracker.domain.stats import DateRange

PRESET_DAYS = {"7d": 7, "30d": 30, "90d": 90}
ALL_TIME = "all"


class Clock(Protocol):
    """Source of the current civil date."""

    def today(self) -> str:
        """Return today's date as YYYY-MM-DD."""


@dataclass(frozen=True)
class ZoneClock(Clock):
    """Clock that reads the civil date in a fixed timezone, not the host clock."""

    timezone_name: str

    def today(self) -> str:
        """Return today's date in the configured timezone."""
        return datetime.now(tz=ZoneInfo(self.timezone_name)).date().isoformat()


def parse_civil_date(value: object) -> date | None:
    """Parse a YYYY-MM-DD string, returning None for blank or malformed values."""
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def resolve_date_range(
    clock: Clock,
    preset: str | None = None,
    start: str | None = None,
    end: str | None = None,
) -> DateRange:
    """Resolve a named preset or explicit bounds into a DateRange.

    Explicit bounds take precedence over the preset.
    """
    if start or end:
        start_date = _parse_bound(start)
        end_date = _parse_bound(end)
        if start_date and end_date and start_date > end_date:
            raise InvalidDateRangeError(f"Range start {start} is after end {end}")
        return DateRange(start=start_date, end=end_date)

    if not preset or preset == ALL_TIME:
        return DateRange()
    days = PRESET_DAYS.get(preset)
    if days is None:
        raise InvalidDateRangeError(f"Unknown range preset: {preset}")
    today = _parse_bound(clock.today())
    return DateRange(start=today - timedelta(days=days), end=today)


def filter_sessions(
    sessions: Iterable[SessionRecord], date_range: DateRange
) -> list[SessionRecord]:
    """Return sessions within the range, preserving order."""
    return [session for session in sessions if date_range.contains(session.date)]


def scope_transactions(
    transactions: Iterable[TransactionRecord], sessions: Iterable[SessionRecord]
) -> list[TransactionRecord]:
    """Keep transactions that belong to the given sessions."""
    session_ids = {session.id for session in sessions}
    return [tx for tx in transactions if tx.session_id in session_ids]


def _parse_bound(value: str | None) -> date | None:
    if not value:
        return None
    parsed = parse_civil_date(value)
    if parsed is None:
        raise InvalidDateRangeError(f"Invalid date: {value}")
    return parsed
