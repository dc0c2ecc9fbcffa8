"""Merging of step samples from multiple activity sources."""

from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from datetime import date, tzinfo
from typing import Protocol

from diary_trends.domain.entries import ActivitySample
from diary_trends.domain.trends import DailyActivity, DailyRecord, WeightPoint
from diary_trends.services.aggregation import local_day


class MergePolicy(Protocol):
    """Strategy that reduces one day's samples to a single activity record."""

    def merge(self, day: date, samples: list[ActivitySample]) -> DailyActivity:
        """Return the merged activity for the day."""


@dataclass(frozen=True)
class MaxStepsPolicy(MergePolicy):
    """Keep the highest step count reported for the day by any source.

    Consumer step counters under-report far more often than they over-report
    (flat battery, device left on the desk), so the largest count is taken as
    the best estimate. Energy burned is taken from that same sample so steps
    and energy always describe one device. This is a heuristic, not a
    measurement rule.
    """

    def merge(self, day: date, samples: list[ActivitySample]) -> DailyActivity:
        best = max(
            samples,
            key=lambda sample: (
                sample.steps, sample.calories_burned or 0.0, sample.source
            ),
            default=None,
        )
        return DailyActivity(
            day=day,
            steps=best.steps if best else 0,
            calories_burned=(best.calories_burned or 0.0) if best else 0.0,
            sources=tuple(sorted({sample.source for sample in samples})),
        )


def merge_activity(
    samples: Iterable[ActivitySample],
    tz: tzinfo,
    policy: MergePolicy | None = None,
) -> dict[date, DailyActivity]:
    """Group samples by local day and merge them with the given policy."""
    resolved_policy = policy or MaxStepsPolicy()
    grouped: dict[date, list[ActivitySample]] = defaultdict(list)
    for sample in samples:
        grouped[local_day(sample.timestamp, tz)].append(sample)
    return {day: resolved_policy.merge(day, grouped[day]) for day in sorted(grouped)}


def attach_steps(
    records: Iterable[DailyRecord], activity: Mapping[date, DailyActivity]
) -> list[DailyRecord]:
    """Return copies of the records with steps filled from merged activity."""
    return [
        replace(
            record,
            steps=activity[record.day].steps if record.day in activity else 0,
        )
        for record in records
    ]


def activity_series(activity: Mapping[date, DailyActivity]) -> list[DailyActivity]:
    """Return the merged days that recorded any steps, oldest first."""
    return [activity[day] for day in sorted(activity) if activity[day].steps > 0]


def weight_series(samples: Iterable[ActivitySample], tz: tzinfo) -> list[WeightPoint]:
    """Return the latest body-weight reading for each local day."""
    latest: dict[date, ActivitySample] = {}
    for sample in sorted(samples, key=lambda item: item.timestamp):
        if sample.weight is not None and sample.weight > 0:
            latest[local_day(sample.timestamp, tz)] = sample
    points = []
    for day in sorted(latest):
        sample = latest[day]
        weight = sample.weight or 0.0
        fat_mass = None
        if sample.fat_percent:
            fat_mass = weight * sample.fat_percent / 100
        points.append(
            WeightPoint(
                day=day,
                weight=weight,
                fat_percent=sample.fat_percent,
                fat_mass=fat_mass,
            )
        )
    return points
