"""Tests for flux zone classification."""

from datetime import date, timedelta

from diary_trends.domain.trends import DailyRecord, FluxZone
from diary_trends.services.flux import classify_day, count_flux_zones


def _record(offset: int, calories: float, count: int | None) -> DailyRecord:
    return DailyRecord(
        day=date(2026, 1, 1) + timedelta(days=offset),
        total_calories=calories,
        total_protein=0,
        total_carbs=0,
        total_fat=0,
        steps=count,
    )


def test_quadrant_mapping() -> None:
    assert classify_day(7500, 2000, 2000, 7500) == FluxZone.OPTIMAL_FLUX
    assert classify_day(9000, 1500, 2000, 7500) == FluxZone.GRIND
    assert classify_day(7499, 2500, 2000, 7500) == FluxZone.SEDENTARY_STORAGE
    assert classify_day(0, 1999, 2000, 7500) == FluxZone.METABOLIC_STAGNATION


def test_two_day_scenario() -> None:
    counts = count_flux_zones(
        [_record(0, 2200, 9000), _record(1, 1500, 3000)], calorie_target=2000
    )

    assert counts.optimal_flux_days == 1
    assert counts.metabolic_stagnation_days == 1
    assert counts.grind_days == 0
    assert counts.sedentary_storage_days == 0


def test_counts_cover_every_day_with_calories() -> None:
    records = [
        _record(0, 2500, None),
        _record(1, 0, 12000),
        _record(2, 1200, 8000),
        _record(3, 2100, 0),
        _record(4, 900, 11000),
    ]

    counts = count_flux_zones(records, calorie_target=2000, step_threshold=7500)

    assert counts.total == 4
    assert counts.sedentary_storage_days == 2
    assert counts.grind_days == 2
