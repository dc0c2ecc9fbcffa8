"""Parser for pedometer app CSV exports."""

import csv
import io
import math
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, tzinfo

from diary_trends.domain.entries import ActivitySample

logger = logging.getLogger(__name__)

PEDOMETER_SOURCE = "pedometer"
_DATE_FORMATS = ("%m/%d/%y", "%m/%d/%Y", "%d.%m.%Y")


class PedometerImportError(ValueError):
    """Raised when an export has no usable rows at all."""


@dataclass(frozen=True)
class PedometerImport:
    """Samples parsed from an export and the lines that were skipped."""

    samples: list[ActivitySample]
    skipped: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class _Columns:
    date: int
    steps: int
    energy: int | None
    distance: int | None = None
    floors: int | None = None


def parse_pedometer_csv(content: str, tz: tzinfo) -> PedometerImport:
    """Parse a daily step export into activity samples at local midnight."""
    rows = [
        row
        for row in csv.reader(io.StringIO(content))
        if any(cell.strip() for cell in row)
    ]
    if len(rows) < 2:  # noqa: PLR2004
        raise PedometerImportError("CSV file is empty or missing data")

    columns = _detect_columns(rows[0])
    samples: list[ActivitySample] = []
    skipped: list[str] = []
    for row in rows[1:]:
        cells = [cell.strip() for cell in row]
        day = _parse_date(_cell(cells, columns.date))
        steps = _parse_int(_cell(cells, columns.steps))
        if day is None or steps is None:
            logger.info("Skipping pedometer line: %s", ",".join(cells))
            skipped.append(",".join(cells))
            continue
        energy = _optional_column(cells, columns.energy)
        distance = _optional_column(cells, columns.distance)
        floors = _optional_column(cells, columns.floors)
        samples.append(
            ActivitySample(
                timestamp=datetime.combine(day, time.min, tzinfo=tz),
                steps=steps,
                source=PEDOMETER_SOURCE,
                calories_burned=energy,
                entry_id=f"pedometer_{day.isoformat()}",
                distance=distance,
                floors=floors,
            )
        )
    return PedometerImport(samples=samples, skipped=skipped)


def _detect_columns(header: list[str]) -> _Columns:
    names = [name.strip().strip('"').lower() for name in header]
    date_index = _find(names, ("date", "day"))
    steps_index = _find(names, ("steps", "count"))
    energy_index = _find(names, ("active", "cal"))
    distance_index = _find(names, ("distance",))
    floors_index = _find(names, ("floors",))
    if date_index is None and steps_index is None:
        return _Columns(
            date=0,
            steps=1,
            energy=energy_index,
            distance=distance_index,
            floors=floors_index,
        )
    return _Columns(
        date=date_index if date_index is not None else 0,
        steps=steps_index if steps_index is not None else 1,
        energy=energy_index,
        distance=distance_index,
        floors=floors_index,
    )


def _find(names: list[str], needles: tuple[str, ...]) -> int | None:
    for index, name in enumerate(names):
        if any(needle in name for needle in needles):
            return index
    return None


def _cell(cells: list[str], index: int) -> str:
    return cells[index] if 0 <= index < len(cells) else ""


def _parse_date(value: str) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()  # noqa: DTZ007
        except ValueError:
            continue
    return None


def _parse_int(value: str) -> int | None:
    number = _parse_float(value)
    if number is None:
        return None
    return int(number)


def _parse_float(value: str) -> float | None:
    cleaned = value.replace(",", "").lower().removesuffix("km").removesuffix("mi")
    try:
        number = float(cleaned.strip())
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _optional_column(cells: list[str], index: int | None) -> float | None:
    if index is None:
        return None
    return _parse_float(_cell(cells, index))
