"""Command line entry point for backfilling sessions from CSV files."""

import argparse
import logging
import sys
from collections.abc import Callable
from pathlib import Path

from bankroll_tracker.app_logging import configure_logging
from bankroll_tracker.containers import AppContainer, build_container

logger = logging.getLogger(__name__)


def main(
    argv: list[str] | None = None,
    container_factory: Callable[[], AppContainer] = build_container,
) -> int:
    """Import every CSV file in a directory and return an exit status."""
    parser = argparse.ArgumentParser(
        prog="bankroll-import",
        description="Backfill sessions, players and transactions from CSV files.",
    )
    parser.add_argument("directory", nargs="?", help="directory containing .csv files")
    parser.add_argument(
        "--log-level", default="INFO", help="logging level (default: INFO)"
    )
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    if not args.directory:
        logger.error("Usage: bankroll-import ./path/to/csv-directory")
        return 1
    directory = Path(args.directory).resolve()
    if not directory.is_dir():
        logger.error("Not a directory: %s", directory)
        return 1

    try:
        importer = container_factory().csv_importer
        report = importer.import_directory(directory)
    except FileNotFoundError as exc:
        logger.error("%s", exc)
        return 1
    except Exception:
        logger.exception("Import failed")
        return 1

    logger.info(
        "Import complete: %d files, %d rows imported, %d rows skipped",
        len(report.files),
        report.rows_imported,
        report.rows_skipped,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
