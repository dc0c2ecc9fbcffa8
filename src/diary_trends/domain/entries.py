"""Domain models for timeline log entries."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


class EntryKind(StrEnum):
    """Kinds of entries the analytics engine understands."""

    FOOD = "food"
    SYMPTOM = "symptom"
    ACTIVITY = "activity"


@dataclass(frozen=True)
class FoodEntry:
    """A logged food item or manual macro entry."""

    timestamp: datetime
    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None
    entry_id: str | None = None
    name: str | None = None


@dataclass(frozen=True)
class SymptomEntry:
    """A symptom log; its payload is opaque to the analytics engine."""

    timestamp: datetime
    entry_id: str | None = None
    payload: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class ActivitySample:
    """A daily sample reported by a wearable or pedometer source.

    Wearable rows may also carry a body-weight reading in kilograms and a
    body fat percentage.
    """

    timestamp: datetime
    steps: int
    source: str
    calories_burned: float | None = None
    entry_id: str | None = None
    distance: float | None = None
    floors: float | None = None
    weight: float | None = None
    fat_percent: float | None = None


LogEntry = FoodEntry | SymptomEntry | ActivitySample


@dataclass(frozen=True)
class ClassifiedEntry:
    """A normalized entry and whether its timestamp had to be substituted."""

    entry: LogEntry
    degraded: bool = False


@dataclass(frozen=True)
class ClassifiedLog:
    """Classified entries partitioned by kind."""

    food: list[FoodEntry]
    symptoms: list[SymptomEntry]
    activity: list[ActivitySample]
    degraded_count: int = 0
