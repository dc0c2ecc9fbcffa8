"""Application configuration."""

import logging
import os
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalyticsConfig:
    """Policy constants handed to the analytics engine at construction."""

    default_timezone: str = "UTC"
    default_calorie_target: float = 2000.0
    step_threshold: int = 7500
    fasting_calorie_threshold: float = 5.0
    max_fast_gap_hours: float = 48.0
    min_fast_hours: float = 0.0
    fixed_fast_target_hours: float = 16.0
    default_fast_projection_hours: float = 12.0
    guardrail_min_calories: float = 800.0
    fetch_limit_days: int = 90
    free_window_days: int = 7
    unlock_all_features: bool = False


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    environment: str = _ENVIRONMENT
    default_timezone: str = "UTC"
    default_calorie_target: float = 2000.0
    step_threshold: int = 7500
    fasting_calorie_threshold: float = 5.0
    max_fast_gap_hours: float = 48.0
    min_fast_hours: float = 0.0
    fixed_fast_target_hours: float = 16.0
    default_fast_projection_hours: float = 12.0
    guardrail_min_calories: float = 800.0
    fetch_limit_days: int = 90
    free_window_days: int = 7
    unlock_all_features: bool = False

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def analytics_config(self) -> AnalyticsConfig:
        """Return the engine configuration derived from these settings."""
        return AnalyticsConfig(
            default_timezone=self.default_timezone,
            default_calorie_target=self.default_calorie_target,
            step_threshold=self.step_threshold,
            fasting_calorie_threshold=self.fasting_calorie_threshold,
            max_fast_gap_hours=self.max_fast_gap_hours,
            min_fast_hours=self.min_fast_hours,
            fixed_fast_target_hours=self.fixed_fast_target_hours,
            default_fast_projection_hours=self.default_fast_projection_hours,
            guardrail_min_calories=self.guardrail_min_calories,
            fetch_limit_days=self.fetch_limit_days,
            free_window_days=self.free_window_days,
            unlock_all_features=self.unlock_all_features,
        )


def parse_timezone(name: str | None, fallback: str = "UTC") -> ZoneInfo:
    """Return a ZoneInfo for a timezone name, falling back on bad input."""
    cleaned = (name or "").strip()
    if cleaned:
        try:
            return ZoneInfo(cleaned)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Unknown timezone %r, using %s", cleaned, fallback)
    return ZoneInfo(fallback)
