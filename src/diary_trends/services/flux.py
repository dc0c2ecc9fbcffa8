"""Energy flux zone classification of logged days."""

from collections import Counter
from collections.abc import Iterable

from diary_trends.domain.trends import DailyRecord, FluxZone, FluxZoneCounts

DEFAULT_STEP_THRESHOLD = 7500


def classify_day(
    steps: int, calories: float, calorie_target: float, step_threshold: int
) -> FluxZone:
    """Place a day in one of the four activity/intake quadrants."""
    is_high_activity = steps >= step_threshold
    is_high_calorie = calories >= calorie_target
    if is_high_activity and is_high_calorie:
        return FluxZone.OPTIMAL_FLUX
    if is_high_activity:
        return FluxZone.GRIND
    if is_high_calorie:
        return FluxZone.SEDENTARY_STORAGE
    return FluxZone.METABOLIC_STAGNATION


def count_flux_zones(
    records: Iterable[DailyRecord],
    calorie_target: float,
    step_threshold: int = DEFAULT_STEP_THRESHOLD,
) -> FluxZoneCounts:
    """Count days per zone; only days with logged calories are considered."""
    zones = Counter(
        classify_day(
            record.steps or 0, record.total_calories, calorie_target, step_threshold
        )
        for record in records
        if record.total_calories > 0
    )
    return FluxZoneCounts(
        optimal_flux_days=zones[FluxZone.OPTIMAL_FLUX],
        grind_days=zones[FluxZone.GRIND],
        sedentary_storage_days=zones[FluxZone.SEDENTARY_STORAGE],
        metabolic_stagnation_days=zones[FluxZone.METABOLIC_STAGNATION],
    )
