"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

import pytest

from diary_trends.config import AnalyticsConfig, Settings
from diary_trends.containers import AppContainer
from diary_trends.domain.profile import UserProfile
from diary_trends.services.trends import (
    ProfileRepository,
    TimelineRepository,
    TrendsService,
)


@dataclass
class InMemoryTimelineRepository(TimelineRepository):
    """In-memory timeline repository for tests."""

    entries: dict[UUID, list[dict[str, object]]] = field(default_factory=dict)
    requested_since: list[datetime | None] = field(default_factory=list)

    def add(self, user_id: UUID, *entries: dict[str, object]) -> None:
        self.entries.setdefault(user_id, []).extend(entries)

    def list_entries(
        self, user_id: UUID, since: datetime | None
    ) -> list[dict[str, object]]:
        self.requested_since.append(since)
        rows = self.entries.get(user_id, [])
        if since is None:
            return list(rows)
        return [
            row
            for row in rows
            if not isinstance(row.get("timestamp"), datetime)
            or row["timestamp"] >= since
        ]


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, UserProfile] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        return self.profiles.get(user_id)


def food(
    timestamp: object, calories: float | None, **macros: float
) -> dict[str, object]:
    """Build a raw food row."""
    return {
        "entry_type": "food",
        "timestamp": timestamp,
        "calories": calories,
        **macros,
    }


def steps(
    timestamp: object, count: int, entry_type: str = "fitbit_data"
) -> dict[str, object]:
    """Build a raw activity row."""
    return {"entry_type": entry_type, "timestamp": timestamp, "steps": count}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def analytics_config() -> AnalyticsConfig:
    return AnalyticsConfig()


@pytest.fixture
def timeline_repository() -> InMemoryTimelineRepository:
    return InMemoryTimelineRepository()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def trends_service(
    timeline_repository: InMemoryTimelineRepository,
    profile_repository: InMemoryProfileRepository,
    analytics_config: AnalyticsConfig,
) -> TrendsService:
    return TrendsService(
        timeline_repository=timeline_repository,
        profile_repository=profile_repository,
        config=analytics_config,
    )


@pytest.fixture
def container(settings: Settings, trends_service: TrendsService) -> AppContainer:
    return AppContainer(settings=settings, trends_service=trends_service)
