"""Cumulative calorie balance against a daily target."""

from collections.abc import Sequence

from diary_trends.domain.trends import (
    CumulativeBalance,
    DailyRecord,
    LookbackWindow,
    RunningBalancePoint,
)

DEFAULT_GUARDRAIL_MIN_CALORIES = 800.0


def select_recent_days(
    records: Sequence[DailyRecord], window: LookbackWindow
) -> list[DailyRecord]:
    """Return the most recent logged days covered by the window.

    Counts days present in the records rather than wall-clock days, so gaps
    in logging shrink the span that gets summed.
    """
    ordered = sorted(records, key=lambda record: record.day)
    days = window.days
    if days is None:
        return ordered
    return ordered[-days:]


def cumulative_balance(
    records: Sequence[DailyRecord],
    calorie_target: float,
    guardrail_min_calories: float = DEFAULT_GUARDRAIL_MIN_CALORIES,
) -> CumulativeBalance:
    """Sum (target - consumed) with and without the low-intake guardrail."""
    raw_total = 0.0
    guardrailed_total = 0.0
    for record in records:
        diff = calorie_target - record.total_calories
        raw_total += diff
        if record.total_calories >= guardrail_min_calories:
            guardrailed_total += diff
    return CumulativeBalance(raw_total=raw_total, guardrailed_total=guardrailed_total)


def running_balance(
    records: Sequence[DailyRecord],
    calorie_target: float,
    guardrail_min_calories: float = DEFAULT_GUARDRAIL_MIN_CALORIES,
) -> list[RunningBalancePoint]:
    """Return the guardrailed running balance after each qualifying day."""
    points = []
    running_total = 0.0
    for record in sorted(records, key=lambda item: item.day):
        if record.total_calories < guardrail_min_calories:
            continue
        daily_diff = calorie_target - record.total_calories
        running_total += daily_diff
        points.append(
            RunningBalancePoint(
                day=record.day, daily_diff=daily_diff, value=running_total
            )
        )
    return points
