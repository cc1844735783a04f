"""ASGI entrypoint for the bankroll tracker API."""

from bankroll_tracker.api.app import create_app
from bankroll_tracker.config import Settings
from bankroll_tracker.containers import build_container

settings = Settings()
app = create_app(build_container(settings))
