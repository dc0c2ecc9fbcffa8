"""Least-squares relationship between daily steps and calories."""

from collections.abc import Iterable

from diary_trends.domain.trends import (
    CorrelationResult,
    CorrelationStrength,
    DailyRecord,
)

NEGLIGIBLE_SLOPE = 0.05
STRONG_SLOPE = 0.15
SLOPE_PRECISION = 4


def regression_points(records: Iterable[DailyRecord]) -> list[tuple[float, float]]:
    """Return (steps, calories) pairs for days with both logged food and steps."""
    return [
        (float(record.steps), record.total_calories)
        for record in records
        if record.total_calories > 0 and record.steps
    ]


def ols_slope(points: list[tuple[float, float]]) -> float | None:
    """Return the OLS slope of y on x, or None when it is undefined."""
    n = len(points)
    if n < 2:  # noqa: PLR2004
        return None
    sum_x = sum(x for x, _ in points)
    sum_y = sum(y for _, y in points)
    sum_xy = sum(x * y for x, y in points)
    sum_xx = sum(x * x for x, _ in points)
    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        return None
    return (n * sum_xy - sum_x * sum_y) / denominator


def strength_label(slope: float) -> CorrelationStrength:
    """Label a slope using fixed magnitude thresholds."""
    if abs(slope) < NEGLIGIBLE_SLOPE:
        return CorrelationStrength.NEGLIGIBLE
    if slope > 0:
        if slope > STRONG_SLOPE:
            return CorrelationStrength.STRONG_POSITIVE
        return CorrelationStrength.WEAK_POSITIVE
    if slope < -STRONG_SLOPE:
        return CorrelationStrength.STRONG_NEGATIVE
    return CorrelationStrength.WEAK_NEGATIVE


def compute_correlation(records: Iterable[DailyRecord]) -> CorrelationResult:
    """Correlate calories with steps; degrades to a zero slope on thin data."""
    points = regression_points(records)
    slope = ols_slope(points)
    if slope is None:
        return CorrelationResult(
            slope=0.0, strength=CorrelationStrength.NONE, points=len(points)
        )
    return CorrelationResult(
        slope=round(slope, SLOPE_PRECISION) + 0.0,
        strength=strength_label(slope),
        points=len(points),
    )
