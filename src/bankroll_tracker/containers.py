"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from bankroll_tracker.adapters.supabase_dashboard_repository import (
    SupabaseDashboardRepository,
)
from bankroll_tracker.adapters.supabase_player_repository import (
    SupabasePlayerRepository,
)
from bankroll_tracker.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from bankroll_tracker.config import Settings
from bankroll_tracker.services.dashboard import DashboardService
from bankroll_tracker.services.filtering import Clock, ZoneClock
from bankroll_tracker.services.importer import CsvImporter
from bankroll_tracker.services.players import PlayerService
from bankroll_tracker.services.sessions import SessionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Clock
    dashboard_service: DashboardService
    session_service: SessionService
    player_service: PlayerService
    csv_importer: CsvImporter


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    session_repository = SupabaseSessionRepository(supabase_client)
    player_repository = SupabasePlayerRepository(supabase_client)
    dashboard_repository = SupabaseDashboardRepository(supabase_client)
    player_service = PlayerService(player_repository)
    return AppContainer(
        settings=resolved_settings,
        clock=ZoneClock(resolved_settings.dashboard_timezone),
        dashboard_service=DashboardService(
            dashboard_repository, top_n=resolved_settings.comparison_top_n
        ),
        session_service=SessionService(session_repository),
        player_service=player_service,
        csv_importer=CsvImporter(
            player_service=player_service,
            session_repository=session_repository,
        ),
    )
