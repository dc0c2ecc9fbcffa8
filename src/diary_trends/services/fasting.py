"""Fasting window statistics from the food log."""

from collections import defaultdict
from collections.abc import Iterable
from datetime import UTC, date, datetime, timedelta, tzinfo

from diary_trends.config import AnalyticsConfig
from diary_trends.domain.entries import FoodEntry
from diary_trends.domain.trends import FastingProjection
from diary_trends.services.aggregation import local_day, time_of_day

SECONDS_PER_HOUR = 3600


def qualifying_entries(
    entries: Iterable[FoodEntry], calorie_threshold: float
) -> list[FoodEntry]:
    """Return entries that break a fast, oldest first."""
    return sorted(
        (entry for entry in entries if (entry.calories or 0) >= calorie_threshold),
        key=lambda entry: entry.timestamp,
    )


def overnight_gaps(entries: Iterable[FoodEntry], tz: tzinfo) -> list[float]:
    """Return hours between the last meal of a day and the first of the next.

    Days are the local calendar days that have at least one entry; a pair is
    formed for every two neighbouring days in that list, whether or not they
    are consecutive on the calendar.
    """
    by_day: dict[date, list[FoodEntry]] = defaultdict(list)
    for entry in sorted(entries, key=lambda item: item.timestamp):
        by_day[local_day(entry.timestamp, tz)].append(entry)

    days = sorted(by_day)
    gaps = []
    for earlier, later in zip(days, days[1:], strict=False):
        last_meal = by_day[earlier][-1]
        first_meal = by_day[later][0]
        gaps.append(_hours_between(last_meal.timestamp, first_meal.timestamp))
    return gaps


def max_historical_fast_hours(
    entries: Iterable[FoodEntry], tz: tzinfo, config: AnalyticsConfig
) -> float:
    """Return the longest plausible overnight fast in hours, to one decimal."""
    fasting_entries = qualifying_entries(entries, config.fasting_calorie_threshold)
    if len(fasting_entries) < 2:  # noqa: PLR2004
        return 0.0

    max_hours = 0.0
    for gap in overnight_gaps(fasting_entries, tz):
        if gap >= config.max_fast_gap_hours or gap < config.min_fast_hours:
            continue
        max_hours = max(max_hours, gap)
    return round(max_hours, 1)


def project_fast(
    entries: Iterable[FoodEntry],
    now: datetime,
    tz: tzinfo,
    config: AnalyticsConfig,
) -> FastingProjection:
    """Describe the fast in progress and when it reaches its targets."""
    fasting_entries = qualifying_entries(entries, config.fasting_calorie_threshold)
    max_hours = max_historical_fast_hours(fasting_entries, tz, config)
    if not fasting_entries:
        return FastingProjection(
            hours_since_last_qualifying_meal=0.0,
            max_historical_fast_hours=max_hours,
        )

    last_meal_at = fasting_entries[-1].timestamp.astimezone(tz)
    hours_since = round(_hours_between(last_meal_at, now), 1)
    if hours_since <= 0:
        return FastingProjection(
            hours_since_last_qualifying_meal=hours_since,
            max_historical_fast_hours=max_hours,
            last_qualifying_meal_at=last_meal_at,
            last_meal_time_of_day=time_of_day(last_meal_at),
        )

    projection_hours = max_hours or config.default_fast_projection_hours
    last_meal_utc = last_meal_at.astimezone(UTC)
    return FastingProjection(
        hours_since_last_qualifying_meal=hours_since,
        max_historical_fast_hours=max_hours,
        projected_fixed_target_end=(
            last_meal_utc + timedelta(hours=config.fixed_fast_target_hours)
        ).astimezone(tz),
        projected_historical_max_end=(
            last_meal_utc + timedelta(hours=projection_hours)
        ).astimezone(tz),
        last_qualifying_meal_at=last_meal_at,
        last_meal_time_of_day=time_of_day(last_meal_at),
    )


def _hours_between(start: datetime, end: datetime) -> float:
    # Aware datetimes sharing a tzinfo subtract in wall-clock time.
    elapsed = end.astimezone(UTC) - start.astimezone(UTC)
    return elapsed.total_seconds() / SECONDS_PER_HOUR
