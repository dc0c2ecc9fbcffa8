"""Tests for cumulative balance."""

from datetime import date, timedelta

from diary_trends.domain.trends import DailyRecord, LookbackWindow
from diary_trends.services.balance import (
    cumulative_balance,
    running_balance,
    select_recent_days,
)


def _record(offset: int, calories: float) -> DailyRecord:
    return DailyRecord(
        day=date(2026, 1, 1) + timedelta(days=offset),
        total_calories=calories,
        total_protein=0,
        total_carbs=0,
        total_fat=0,
    )


def test_raw_and_guardrailed_totals() -> None:
    balance = cumulative_balance([_record(0, 1000), _record(1, 500)], 2000)

    assert balance.raw_total == 2500
    assert balance.guardrailed_total == 1000


def test_surplus_is_negative() -> None:
    balance = cumulative_balance([_record(0, 2600), _record(1, 2300)], 2000)

    assert balance.raw_total == -900
    assert balance.guardrailed_total == -900


def test_guardrail_never_increases_same_sign_deficit() -> None:
    records = [_record(0, 1500), _record(1, 300), _record(2, 1800), _record(3, 700)]

    balance = cumulative_balance(records, 2000)

    assert balance.raw_total > 0
    assert abs(balance.guardrailed_total) <= abs(balance.raw_total)


def test_select_recent_days_counts_present_days() -> None:
    records = [_record(offset, 1500) for offset in (0, 3, 4, 10, 11, 12, 20, 21)]

    recent = select_recent_days(records, LookbackWindow.SEVEN_DAYS)

    assert len(recent) == 7
    assert recent[0].day == date(2026, 1, 4)
    assert recent[-1].day == date(2026, 1, 22)
    assert len(select_recent_days(records, LookbackWindow.ALL)) == 8
    assert len(select_recent_days(records, LookbackWindow.ONE_DAY)) == 1


def test_running_balance_skips_guardrailed_days() -> None:
    points = running_balance(
        [_record(1, 1500), _record(0, 2500), _record(2, 400)], 2000
    )

    assert [point.value for point in points] == [-500, 0]
    assert [point.daily_diff for point in points] == [-500, 500]
