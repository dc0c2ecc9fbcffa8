"""Classification and timestamp normalization of raw timeline records."""

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime, tzinfo
from typing import assert_never

from diary_trends.domain.entries import (
    ActivitySample,
    ClassifiedEntry,
    ClassifiedLog,
    EntryKind,
    FoodEntry,
    LogEntry,
    SymptomEntry,
)

logger = logging.getLogger(__name__)

ENTRY_TYPES: dict[str, tuple[EntryKind, str | None]] = {
    "food": (EntryKind.FOOD, None),
    "manual_macro": (EntryKind.FOOD, None),
    "symptom": (EntryKind.SYMPTOM, None),
    "fitbit_data": (EntryKind.ACTIVITY, "fitbit"),
    "pedometer_data": (EntryKind.ACTIVITY, "pedometer"),
}

_RESERVED_KEYS = {"entry_type", "timestamp", "id"}


class UnknownEntryTypeError(ValueError):
    """Raised when a record carries an entry type the engine does not know."""

    def __init__(self, entry_type: object) -> None:
        super().__init__(f"Unknown entry type: {entry_type!r}")
        self.entry_type = entry_type


def classify_entry(
    raw: Mapping[str, object], tz: tzinfo, now: datetime
) -> ClassifiedEntry:
    """Turn a raw record into a typed entry with a local, valid timestamp."""
    entry_type = raw.get("entry_type")
    if not isinstance(entry_type, str) or entry_type not in ENTRY_TYPES:
        raise UnknownEntryTypeError(entry_type)
    kind, default_source = ENTRY_TYPES[entry_type]

    timestamp = parse_timestamp(raw.get("timestamp"), tz)
    degraded = timestamp is None
    if timestamp is None:
        logger.warning(
            "Invalid or missing timestamp for %s entry %s, using current time",
            entry_type,
            raw.get("id"),
        )
        timestamp = now.astimezone(tz)

    entry_id = _optional_str(raw.get("id"))
    entry: LogEntry
    match kind:
        case EntryKind.FOOD:
            entry = FoodEntry(
                timestamp=timestamp,
                calories=_optional_float(raw.get("calories")),
                protein=_optional_float(raw.get("protein")),
                carbs=_optional_float(raw.get("carbs")),
                fat=_optional_float(raw.get("fat")),
                entry_id=entry_id,
                name=_optional_str(raw.get("name")),
            )
        case EntryKind.SYMPTOM:
            entry = SymptomEntry(
                timestamp=timestamp,
                entry_id=entry_id,
                payload={
                    key: value
                    for key, value in raw.items()
                    if key not in _RESERVED_KEYS
                },
            )
        case EntryKind.ACTIVITY:
            steps = _optional_float(raw.get("steps"))
            entry = ActivitySample(
                timestamp=timestamp,
                steps=int(steps) if steps is not None else 0,
                source=default_source or "unknown",
                calories_burned=_optional_float(
                    raw.get("calories_burned", raw.get("active_energy"))
                ),
                entry_id=entry_id,
                distance=_optional_float(raw.get("distance")),
                floors=_optional_float(raw.get("floors_ascended", raw.get("floors"))),
                weight=_optional_float(raw.get("weight")),
                fat_percent=_optional_float(raw.get("fat_percent")),
            )
        case _:
            assert_never(kind)
    return ClassifiedEntry(entry=entry, degraded=degraded)


def classify_entries(
    raws: Iterable[Mapping[str, object]], tz: tzinfo, now: datetime
) -> list[ClassifiedEntry]:
    """Classify a batch, skipping records of unknown type."""
    classified = []
    for raw in raws:
        try:
            classified.append(classify_entry(raw, tz, now))
        except UnknownEntryTypeError as exc:
            logger.warning("Skipping entry %s: %s", raw.get("id"), exc)
    return classified


def split_entries(classified: Iterable[ClassifiedEntry]) -> ClassifiedLog:
    """Partition classified entries by kind."""
    food: list[FoodEntry] = []
    symptoms: list[SymptomEntry] = []
    activity: list[ActivitySample] = []
    degraded_count = 0
    for item in classified:
        if item.degraded:
            degraded_count += 1
        entry = item.entry
        match entry:
            case FoodEntry():
                food.append(entry)
            case SymptomEntry():
                symptoms.append(entry)
            case ActivitySample():
                activity.append(entry)
            case _:
                assert_never(entry)
    return ClassifiedLog(
        food=food,
        symptoms=symptoms,
        activity=activity,
        degraded_count=degraded_count,
    )


def parse_timestamp(value: object, tz: tzinfo) -> datetime | None:
    """Parse a timestamp into an aware datetime in ``tz``.

    Naive values are read as wall-clock time in ``tz``. Numbers are epoch
    seconds. Returns None when the value cannot be interpreted.
    """
    parsed: datetime | None = None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, bool):
        return None
    elif isinstance(value, int | float):
        try:
            parsed = datetime.fromtimestamp(value, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str) and value.strip():
        cleaned = value.strip()
        if cleaned.endswith("Z"):
            cleaned = cleaned[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(cleaned)
        except ValueError:
            return None
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=tz)
    return parsed.astimezone(tz)


def _optional_float(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    number: float | None = None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.replace(",", "").strip())
        except ValueError:
            return None
    if number is None or not math.isfinite(number):
        return None
    return number


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
