"""Tests for fasting window calculations."""

from dataclasses import replace
from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

from diary_trends.config import AnalyticsConfig
from diary_trends.domain.entries import FoodEntry
from diary_trends.domain.trends import TimeOfDay
from diary_trends.services.fasting import (
    max_historical_fast_hours,
    overnight_gaps,
    project_fast,
    qualifying_entries,
)

CONFIG = AnalyticsConfig()
NEW_YORK = ZoneInfo("America/New_York")


def _meal(moment: datetime, calories: float | None = 400) -> FoodEntry:
    return FoodEntry(timestamp=moment, calories=calories)


def test_qualifying_entries_drop_negligible_items() -> None:
    coffee = _meal(datetime(2026, 1, 1, 7, tzinfo=UTC), 2)
    breakfast = _meal(datetime(2026, 1, 1, 8, tzinfo=UTC), 5)

    assert qualifying_entries([coffee, breakfast], 5) == [breakfast]


def test_twenty_hour_gap() -> None:
    entries = [
        _meal(datetime(2026, 1, 1, 12, tzinfo=UTC)),
        _meal(datetime(2026, 1, 1, 14, tzinfo=UTC)),
        _meal(datetime(2026, 1, 2, 10, tzinfo=UTC)),
    ]

    assert max_historical_fast_hours(entries, UTC, CONFIG) == 20.0


def test_gap_over_sanity_bound_is_ignored() -> None:
    entries = [
        _meal(datetime(2026, 1, 1, 8, tzinfo=UTC)),
        _meal(datetime(2026, 1, 2, 8, tzinfo=UTC)),
        _meal(datetime(2026, 1, 4, 10, tzinfo=UTC)),
    ]

    assert overnight_gaps(entries, UTC) == [24.0, 50.0]
    assert max_historical_fast_hours(entries, UTC, CONFIG) == 24.0


def test_non_qualifying_entries_do_not_break_fast() -> None:
    entries = [
        _meal(datetime(2026, 1, 1, 19, tzinfo=UTC)),
        _meal(datetime(2026, 1, 2, 7, tzinfo=UTC), 3),
        _meal(datetime(2026, 1, 2, 11, 30, tzinfo=UTC)),
    ]

    assert max_historical_fast_hours(entries, UTC, CONFIG) == 16.5


def test_minimum_fast_is_configurable() -> None:
    entries = [
        _meal(datetime(2026, 1, 1, 23, 30, tzinfo=UTC)),
        _meal(datetime(2026, 1, 2, 1, tzinfo=UTC)),
    ]

    assert max_historical_fast_hours(entries, UTC, CONFIG) == 1.5
    strict = replace(CONFIG, min_fast_hours=4)
    assert max_historical_fast_hours(entries, UTC, strict) == 0.0


def test_single_entry_has_no_history() -> None:
    entries = [_meal(datetime(2026, 1, 1, 8, tzinfo=UTC))]

    assert max_historical_fast_hours(entries, UTC, CONFIG) == 0.0


def test_projection_uses_historical_max() -> None:
    entries = [
        _meal(datetime(2026, 1, 1, 18, tzinfo=UTC)),
        _meal(datetime(2026, 1, 2, 10, tzinfo=UTC)),
        _meal(datetime(2026, 1, 2, 20, tzinfo=UTC)),
    ]
    now = datetime(2026, 1, 3, 10, tzinfo=UTC)

    projection = project_fast(entries, now, UTC, CONFIG)

    assert projection.hours_since_last_qualifying_meal == 14.0
    assert projection.max_historical_fast_hours == 16.0
    assert projection.projected_historical_max_end == datetime(
        2026, 1, 3, 12, tzinfo=UTC
    )
    assert projection.projected_fixed_target_end == datetime(
        2026, 1, 3, 12, tzinfo=UTC
    )
    assert projection.last_qualifying_meal_at == datetime(2026, 1, 2, 20, tzinfo=UTC)


def test_projection_defaults_to_twelve_hours_without_history() -> None:
    last_meal = datetime(2026, 1, 2, 20, tzinfo=UTC)
    now = last_meal + timedelta(hours=3)

    projection = project_fast([_meal(last_meal)], now, UTC, CONFIG)

    assert projection.max_historical_fast_hours == 0.0
    assert projection.projected_historical_max_end == last_meal + timedelta(hours=12)
    assert projection.projected_fixed_target_end == last_meal + timedelta(hours=16)


def test_projection_without_meals() -> None:
    projection = project_fast(
        [_meal(datetime(2026, 1, 2, 7, tzinfo=UTC), 0)],
        datetime(2026, 1, 2, 9, tzinfo=UTC),
        UTC,
        CONFIG,
    )

    assert projection.hours_since_last_qualifying_meal == 0.0
    assert projection.projected_fixed_target_end is None
    assert projection.projected_historical_max_end is None


def test_no_projection_when_last_meal_is_not_in_the_past() -> None:
    moment = datetime(2026, 1, 2, 9, tzinfo=UTC)

    projection = project_fast([_meal(moment)], moment, UTC, CONFIG)

    assert projection.hours_since_last_qualifying_meal == 0.0
    assert projection.projected_fixed_target_end is None


def test_gap_across_spring_forward_counts_elapsed_hours() -> None:
    last_meal = datetime(2026, 3, 8, 1, tzinfo=UTC).astimezone(NEW_YORK)
    first_meal = datetime(2026, 3, 8, 16, tzinfo=UTC).astimezone(NEW_YORK)

    assert overnight_gaps([_meal(last_meal), _meal(first_meal)], NEW_YORK) == [15.0]
    assert (
        max_historical_fast_hours(
            [_meal(last_meal), _meal(first_meal)], NEW_YORK, CONFIG
        )
        == 15.0
    )


def test_projection_across_spring_forward_adds_elapsed_hours() -> None:
    last_meal = datetime(2026, 3, 8, 1, tzinfo=UTC).astimezone(NEW_YORK)
    now = datetime(2026, 3, 8, 4, tzinfo=UTC)

    projection = project_fast([_meal(last_meal)], now, NEW_YORK, CONFIG)

    assert projection.hours_since_last_qualifying_meal == 3.0
    fixed_end = projection.projected_fixed_target_end
    assert fixed_end is not None
    assert fixed_end.astimezone(UTC) == datetime(2026, 3, 8, 17, tzinfo=UTC)
    assert (fixed_end.hour, fixed_end.utcoffset()) == (13, timedelta(hours=-4))
    historical_end = projection.projected_historical_max_end
    assert historical_end is not None
    assert historical_end.astimezone(UTC) == datetime(2026, 3, 8, 13, tzinfo=UTC)


def test_projection_reports_time_of_day_of_last_meal() -> None:
    last_meal = datetime(2026, 1, 2, 22, 30, tzinfo=UTC)

    projection = project_fast(
        [_meal(last_meal)], last_meal + timedelta(hours=2), UTC, CONFIG
    )

    assert projection.last_meal_time_of_day == TimeOfDay.LATE_NIGHT
