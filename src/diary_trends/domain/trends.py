"""Domain models for trend analytics."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum


class LookbackWindow(StrEnum):
    """Trailing windows selectable by callers."""

    ONE_DAY = "1D"
    SEVEN_DAYS = "7D"
    THIRTY_DAYS = "30D"
    NINETY_DAYS = "90D"
    ONE_YEAR = "1Y"
    ALL = "ALL"

    @property
    def days(self) -> int | None:
        """Number of most recent logged days covered, or None for all."""
        return _WINDOW_DAYS[self]


_WINDOW_DAYS: dict[LookbackWindow, int | None] = {
    LookbackWindow.ONE_DAY: 1,
    LookbackWindow.SEVEN_DAYS: 7,
    LookbackWindow.THIRTY_DAYS: 30,
    LookbackWindow.NINETY_DAYS: 90,
    LookbackWindow.ONE_YEAR: 365,
    LookbackWindow.ALL: None,
}


class CorrelationStrength(StrEnum):
    """Qualitative label for the steps/calories slope."""

    NONE = "None"
    NEGLIGIBLE = "None/Negligible"
    WEAK_POSITIVE = "Weak Positive"
    STRONG_POSITIVE = "Strong Positive"
    WEAK_NEGATIVE = "Weak Negative"
    STRONG_NEGATIVE = "Strong Negative"


class FluxZone(StrEnum):
    """Energy flux quadrants."""

    OPTIMAL_FLUX = "Optimal Flux"
    GRIND = "The Grind"
    SEDENTARY_STORAGE = "Sedentary Storage"
    METABOLIC_STAGNATION = "Metabolic Stagnation"


class TimeOfDay(StrEnum):
    """Coarse segment of the local day."""

    MORNING = "Morning"
    AFTERNOON = "Afternoon"
    EVENING = "Evening"
    LATE_NIGHT = "Late Night"


@dataclass(frozen=True)
class DailyRecord:
    """Per-day totals for a local calendar day with logged food."""

    day: date
    total_calories: float
    total_protein: float
    total_carbs: float
    total_fat: float
    steps: int | None = None


@dataclass(frozen=True)
class DailyActivity:
    """Merged activity for one local calendar day."""

    day: date
    steps: int
    calories_burned: float
    sources: tuple[str, ...]


@dataclass(frozen=True)
class WeightPoint:
    """Latest body-weight reading of a local calendar day."""

    day: date
    weight: float
    fat_percent: float | None = None
    fat_mass: float | None = None


@dataclass(frozen=True)
class CorrelationResult:
    """Slope of daily calories against daily steps."""

    slope: float
    strength: CorrelationStrength
    points: int = 0


@dataclass(frozen=True)
class FluxZoneCounts:
    """Number of days that fell into each flux zone."""

    optimal_flux_days: int = 0
    grind_days: int = 0
    sedentary_storage_days: int = 0
    metabolic_stagnation_days: int = 0

    @property
    def total(self) -> int:
        return (
            self.optimal_flux_days
            + self.grind_days
            + self.sedentary_storage_days
            + self.metabolic_stagnation_days
        )


@dataclass(frozen=True)
class CumulativeBalance:
    """Accumulated (target - consumed); positive means net deficit."""

    raw_total: float
    guardrailed_total: float


@dataclass(frozen=True)
class RunningBalancePoint:
    """Cumulative balance after a given day."""

    day: date
    daily_diff: float
    value: float


@dataclass(frozen=True)
class FastingProjection:
    """Current fast status and projected end times."""

    hours_since_last_qualifying_meal: float
    max_historical_fast_hours: float
    projected_fixed_target_end: datetime | None = None
    projected_historical_max_end: datetime | None = None
    last_qualifying_meal_at: datetime | None = None
    last_meal_time_of_day: TimeOfDay | None = None


@dataclass(frozen=True)
class DailyNutritionSummary:
    """Macro totals for a single day."""

    day: date
    calories: float
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class HourlyCaloriePoint:
    """Calories and meal counts for an hour of the day."""

    hour: str
    average_calories: float
    meal_count: int


@dataclass(frozen=True)
class TrendsAnalysis:
    """Bundle of window statistics for narrative and chart collaborators."""

    window: LookbackWindow
    correlation: CorrelationResult
    flux_zones: FluxZoneCounts
    balance: CumulativeBalance
    days_analyzed: int
    average_daily_calories: int
    days_over_calorie_target: int
    daily_calorie_target: float
    daily_records: list[DailyRecord]
    balance_series: list[RunningBalancePoint]
    activity_series: list[DailyActivity] = field(default_factory=list)
    weight_series: list[WeightPoint] = field(default_factory=list)
