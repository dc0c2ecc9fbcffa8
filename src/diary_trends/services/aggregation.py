"""Daily aggregation of food entries by local calendar day."""

from collections import defaultdict
from collections.abc import Iterable
from datetime import date, datetime, tzinfo

from diary_trends.domain.entries import FoodEntry
from diary_trends.domain.trends import (
    DailyNutritionSummary,
    DailyRecord,
    HourlyCaloriePoint,
    TimeOfDay,
)

MORNING_START_HOUR = 5
AFTERNOON_START_HOUR = 12
EVENING_START_HOUR = 17
LATE_NIGHT_START_HOUR = 22


def local_day(moment: datetime, tz: tzinfo) -> date:
    """Return the calendar date of an instant in the given zone."""
    return moment.astimezone(tz).date()


def aggregate_daily(entries: Iterable[FoodEntry], tz: tzinfo) -> list[DailyRecord]:
    """Sum macros per local day, ordered by day; empty days are omitted."""
    grouped: dict[date, list[FoodEntry]] = defaultdict(list)
    for entry in entries:
        grouped[local_day(entry.timestamp, tz)].append(entry)

    return [
        DailyRecord(
            day=day,
            total_calories=_total(grouped[day], "calories"),
            total_protein=_total(grouped[day], "protein"),
            total_carbs=_total(grouped[day], "carbs"),
            total_fat=_total(grouped[day], "fat"),
        )
        for day in sorted(grouped)
    ]


def summarize_day(
    entries: Iterable[FoodEntry], day: date, tz: tzinfo
) -> DailyNutritionSummary:
    """Return macro totals for one local day."""
    on_day = [entry for entry in entries if local_day(entry.timestamp, tz) == day]
    return DailyNutritionSummary(
        day=day,
        calories=_total(on_day, "calories"),
        protein=_total(on_day, "protein"),
        carbs=_total(on_day, "carbs"),
        fat=_total(on_day, "fat"),
    )


def hourly_calorie_profile(
    entries: Iterable[FoodEntry], tz: tzinfo
) -> list[HourlyCaloriePoint]:
    """Return average calories per entry and entry counts for each local hour.

    The average only considers entries that carry calories; the count covers
    every food entry logged in that hour.
    """
    sums: dict[int, float] = defaultdict(float)
    calorie_counts: dict[int, int] = defaultdict(int)
    meal_counts: dict[int, int] = defaultdict(int)
    for entry in entries:
        hour = entry.timestamp.astimezone(tz).hour
        meal_counts[hour] += 1
        if entry.calories and entry.calories > 0:
            sums[hour] += entry.calories
            calorie_counts[hour] += 1

    points = []
    for hour in range(24):
        count = calorie_counts[hour]
        points.append(
            HourlyCaloriePoint(
                hour=f"{hour:02d}:00",
                average_calories=float(round(sums[hour] / count)) if count else 0.0,
                meal_count=meal_counts[hour],
            )
        )
    return points


def time_of_day(moment: datetime) -> TimeOfDay:
    """Map a wall-clock time to a coarse segment of the day."""
    hour = moment.hour
    if MORNING_START_HOUR <= hour < AFTERNOON_START_HOUR:
        return TimeOfDay.MORNING
    if AFTERNOON_START_HOUR <= hour < EVENING_START_HOUR:
        return TimeOfDay.AFTERNOON
    if EVENING_START_HOUR <= hour < LATE_NIGHT_START_HOUR:
        return TimeOfDay.EVENING
    return TimeOfDay.LATE_NIGHT


def _total(entries: list[FoodEntry], field_name: str) -> float:
    return float(sum(getattr(entry, field_name) or 0.0 for entry in entries))
