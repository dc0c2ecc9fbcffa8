"""Trend analytics service combining the per-day calculators."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from operator import attrgetter
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from diary_trends.config import AnalyticsConfig, parse_timezone
from diary_trends.domain.entries import ClassifiedLog
from diary_trends.domain.profile import UserProfile
from diary_trends.domain.trends import (
    DailyActivity,
    DailyNutritionSummary,
    DailyRecord,
    FastingProjection,
    HourlyCaloriePoint,
    LookbackWindow,
    TrendsAnalysis,
    WeightPoint,
)
from diary_trends.services.activity import (
    MergePolicy,
    activity_series,
    attach_steps,
    merge_activity,
    weight_series,
)
from diary_trends.services.aggregation import (
    aggregate_daily,
    hourly_calorie_profile,
    summarize_day,
)
from diary_trends.services.balance import (
    cumulative_balance,
    running_balance,
    select_recent_days,
)
from diary_trends.services.classifier import classify_entries, split_entries
from diary_trends.services.correlation import compute_correlation
from diary_trends.services.fasting import project_fast
from diary_trends.services.flux import count_flux_zones

logger = logging.getLogger(__name__)


class TimelineRepository(Protocol):
    """Read-only access to a user's raw timeline entries."""

    def list_entries(
        self, user_id: UUID, since: datetime | None
    ) -> list[dict[str, object]]:
        """Return raw entries logged at or after ``since`` (all when None)."""


class ProfileRepository(Protocol):
    """Read-only access to profile values used by the analytics."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the user's profile, if present."""


def build_trends_analysis(
    records: Sequence[DailyRecord],
    calorie_target: float,
    window: LookbackWindow,
    config: AnalyticsConfig,
    activity: Sequence[DailyActivity] = (),
    weights: Sequence[WeightPoint] = (),
) -> TrendsAnalysis:
    """Compute window statistics from per-day records with steps attached.

    The activity and weight series are cut to the most recent days each of
    them has, using the same day count as the food records.
    """
    recent = select_recent_days(records, window)
    tail = slice(-window.days, None) if window.days else slice(None)
    days_analyzed = len(recent)
    total_calories = sum(record.total_calories for record in recent)
    return TrendsAnalysis(
        window=window,
        correlation=compute_correlation(recent),
        flux_zones=count_flux_zones(recent, calorie_target, config.step_threshold),
        balance=cumulative_balance(
            recent, calorie_target, config.guardrail_min_calories
        ),
        days_analyzed=days_analyzed,
        average_daily_calories=(
            round(total_calories / days_analyzed) if days_analyzed else 0
        ),
        days_over_calorie_target=sum(
            1 for record in recent if record.total_calories > calorie_target
        ),
        daily_calorie_target=calorie_target,
        daily_records=recent,
        balance_series=running_balance(
            recent, calorie_target, config.guardrail_min_calories
        ),
        activity_series=sorted(activity, key=attrgetter("day"))[tail],
        weight_series=sorted(weights, key=attrgetter("day"))[tail],
    )


@dataclass
class TrendsService:
    """Service for computing a user's trends from their timeline snapshot."""

    timeline_repository: TimelineRepository
    profile_repository: ProfileRepository
    config: AnalyticsConfig
    merge_policy: MergePolicy | None = None

    def load_log(
        self, user_id: UUID, tz: ZoneInfo, now: datetime, since: datetime | None
    ) -> ClassifiedLog:
        """Fetch and classify the user's entries."""
        raws = self.timeline_repository.list_entries(user_id, since)
        log = split_entries(classify_entries(raws, tz, now))
        if log.degraded_count:
            logger.warning(
                "User %s has %d entries with substituted timestamps",
                user_id,
                log.degraded_count,
            )
        return log

    def daily_records(self, log: ClassifiedLog, tz: ZoneInfo) -> list[DailyRecord]:
        """Return per-day food totals with merged steps."""
        activity = merge_activity(log.activity, tz, self.merge_policy)
        return attach_steps(aggregate_daily(log.food, tz), activity)

    def analyze(
        self,
        user_id: UUID,
        window: LookbackWindow = LookbackWindow.SEVEN_DAYS,
        now: datetime | None = None,
    ) -> TrendsAnalysis:
        """Return the trends analysis for the requested lookback window."""
        profile = self._get_profile(user_id)
        tz = self._timezone(profile)
        resolved_now = now or datetime.now(tz=UTC)
        resolved_window = self._allowed_window(window, profile)
        log = self.load_log(
            user_id, tz, resolved_now, self._since(resolved_now, resolved_window)
        )
        activity = merge_activity(log.activity, tz, self.merge_policy)
        return build_trends_analysis(
            attach_steps(aggregate_daily(log.food, tz), activity),
            self._calorie_target(profile),
            resolved_window,
            self.config,
            activity=activity_series(activity),
            weights=weight_series(log.activity, tz),
        )

    def fasting(self, user_id: UUID, now: datetime | None = None) -> FastingProjection:
        """Return the fasting projection as of ``now``."""
        profile = self._get_profile(user_id)
        tz = self._timezone(profile)
        resolved_now = now or datetime.now(tz=UTC)
        log = self.load_log(user_id, tz, resolved_now, self._since(resolved_now, None))
        return project_fast(log.food, resolved_now, tz, self.config)

    def daily_summary(
        self, user_id: UUID, day: date | None = None, now: datetime | None = None
    ) -> DailyNutritionSummary:
        """Return macro totals for a day, today in the user's timezone by default."""
        profile = self._get_profile(user_id)
        tz = self._timezone(profile)
        resolved_now = now or datetime.now(tz=UTC)
        target_day = day or resolved_now.astimezone(tz).date()
        start = datetime.combine(target_day, datetime.min.time(), tzinfo=tz)
        log = self.load_log(user_id, tz, resolved_now, start.astimezone(UTC))
        return summarize_day(log.food, target_day, tz)

    def hourly_profile(
        self,
        user_id: UUID,
        window: LookbackWindow = LookbackWindow.THIRTY_DAYS,
        now: datetime | None = None,
    ) -> list[HourlyCaloriePoint]:
        """Return the hour-of-day calorie profile for the window."""
        profile = self._get_profile(user_id)
        tz = self._timezone(profile)
        resolved_now = now or datetime.now(tz=UTC)
        resolved_window = self._allowed_window(window, profile)
        since = None
        if resolved_window.days is not None:
            start_day = resolved_now.astimezone(tz).date() - timedelta(
                days=resolved_window.days
            )
            since = datetime.combine(start_day, datetime.min.time(), tzinfo=tz)
        log = self.load_log(user_id, tz, resolved_now, since)
        return hourly_calorie_profile(log.food, tz)

    def _get_profile(self, user_id: UUID) -> UserProfile:
        return self.profile_repository.get_profile(user_id) or UserProfile(
            user_id=user_id
        )

    def _timezone(self, profile: UserProfile) -> ZoneInfo:
        return parse_timezone(profile.timezone, self.config.default_timezone)

    def _calorie_target(self, profile: UserProfile) -> float:
        if profile.calorie_target and profile.calorie_target > 0:
            return profile.calorie_target
        return self.config.default_calorie_target

    def _allowed_window(
        self, window: LookbackWindow, profile: UserProfile
    ) -> LookbackWindow:
        if self.config.unlock_all_features or profile.premium:
            return window
        limit = self.config.free_window_days
        if window.days is not None and window.days <= limit:
            return window
        allowed = [
            option
            for option in LookbackWindow
            if option.days is not None and option.days <= limit
        ]
        clamped = max(
            allowed, key=lambda option: option.days or 0, default=LookbackWindow.ONE_DAY
        )
        logger.info(
            "Clamping %s window to %s for user %s", window, clamped, profile.user_id
        )
        return clamped

    def _since(self, now: datetime, window: LookbackWindow | None) -> datetime | None:
        if window is not None and window.days is None:
            return None
        window_days = window.days if window is not None else 0
        return now - timedelta(days=max(self.config.fetch_limit_days, window_days or 0))
