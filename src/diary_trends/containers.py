"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from diary_trends.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from diary_trends.adapters.supabase_timeline_repository import (
    SupabaseTimelineRepository,
)
from diary_trends.config import Settings
from diary_trends.services.trends import TrendsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    trends_service: TrendsService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    trends_service = TrendsService(
        timeline_repository=SupabaseTimelineRepository(supabase_client),
        profile_repository=SupabaseProfileRepository(supabase_client),
        config=resolved_settings.analytics_config(),
    )
    return AppContainer(settings=resolved_settings, trends_service=trends_service)
