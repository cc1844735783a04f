"""Backfill historical sessions from CSV exports.

Each CSV has one row per player-session with the columns
``date,location,player,nickname,buy_in,cash_out``. Players are matched by
name and created when missing, sessions are matched by date and location
and created as completed, and transactions are upserted per pair.
"""

import csv
import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from bankroll_tracker.domain.money import parse_amount
from bankroll_tracker.domain.records import COMPLETED, SessionRecord
from bankroll_tracker.services.filtering import parse_civil_date
from bankroll_tracker.services.players import PlayerService
from bankroll_tracker.services.sessions import SessionRepository

logger = logging.getLogger(__name__)


@dataclass
class ImportReport:
    """Counts from an import run."""

    files: list[Path] = field(default_factory=list)
    rows_imported: int = 0
    rows_skipped: int = 0


@dataclass
class CsvImporter:
    """Imports CSV exports into the row store."""

    player_service: PlayerService
    session_repository: SessionRepository

    def import_directory(self, directory: Path) -> ImportReport:
        """Import every .csv file in a directory."""
        csv_files = sorted(
            path
            for path in directory.iterdir()
            if path.is_file() and path.suffix.lower() == ".csv"
        )
        if not csv_files:
            raise FileNotFoundError(f"No .csv files found in {directory}")

        report = ImportReport()
        for path in csv_files:
            logger.info("Processing %s", path)
            self.import_file(path, report)
            report.files.append(path)
        return report

    def import_file(
        self, path: Path, report: ImportReport | None = None
    ) -> ImportReport:
        """Import a single CSV file."""
        report = report or ImportReport()
        with path.open(encoding="utf-8", newline="") as handle:
            rows = list(csv.DictReader(handle))
        logger.info("Importing %d rows from %s", len(rows), path)

        sessions: dict[tuple[str, str], SessionRecord] = {}
        for raw in rows:
            row = {
                key.strip(): (value or "").strip() for key, value in raw.items() if key
            }
            if not any(row.values()):
                continue
            session_date = parse_civil_date(row.get("date"))
            location = row.get("location", "")
            name = row.get("player", "")
            if session_date is None or not location or not name:
                logger.warning(
                    "Skipping row with missing date/location/player: %s", row
                )
                report.rows_skipped += 1
                continue

            player = self.player_service.get_or_create(
                name, row.get("nickname") or None
            )
            key = (session_date.isoformat(), location)
            session = sessions.get(key)
            if session is None:
                session = self._get_or_create_session(session_date, location)
                sessions[key] = session
            self.session_repository.upsert_transaction(
                session.id,
                player.id,
                buy_in=parse_amount(row.get("buy_in")),
                cash_out=parse_amount(row.get("cash_out")),
            )
            report.rows_imported += 1
        return report

    def _get_or_create_session(
        self, session_date: date, location: str
    ) -> SessionRecord:
        existing = self.session_repository.find_session(session_date, location)
        if existing:
            return existing
        return self.session_repository.create_session(
            session_date, location, status=COMPLETED
        )
