"""Serverless entrypoint exposing the bankroll tracker ASGI app."""

from __future__ import annotations

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent.parent / "src"
if SRC_DIR.is_dir() and str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from bankroll_tracker.api.asgi import app  # noqa: E402

__all__ = ["app"]
