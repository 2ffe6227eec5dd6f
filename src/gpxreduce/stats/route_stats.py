"""
Route statistics.

Statistics compare a route before and after simplification:
- distances (`straight_line_distance`, `path_distance`) describe the ORIGINAL track, i.e.
  how far was actually travelled;
- legs (`directions`, `direction_changes`) describe the SIMPLIFIED track, i.e. the shape
  that remains after redundant points are dropped.

Per-pair failures (a malformed sample) are logged and skipped: one bad point never
invalidates the statistics of an otherwise valid track, and `compute_statistics` always
returns a record.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from math import isnan
from typing import Any

from gpxreduce.core.errors import GeometryError
from gpxreduce.core.geo import bearing_deg, distance_nm
from gpxreduce.core.time import hours_between
from gpxreduce.domain.models import DirectionSegment, RouteStatistics

logger = logging.getLogger(__name__)

# Bearing difference (degrees) above which two consecutive legs count as a direction change.
DIRECTION_CHANGE_TOLERANCE_DEG = 1.0

# Decimal places for lengths, hours, speeds.
OUTPUT_DECIMALS = 2


def _field(point: Any, name: str) -> Any:
    if point is None:
        return None
    if isinstance(point, Mapping):
        return point.get(name)
    return getattr(point, name, None)


def _is_point_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def reduction_percent(original_count: int, reduced_count: int) -> str:
    """Share of points removed, formatted like `"37.50%"`."""
    if original_count <= 0:
        return "0.00%"
    return f"{(1 - reduced_count / original_count) * 100:.2f}%"


def path_distance_nm(points: Sequence[Any]) -> float:
    """Sum of consecutive-pair distances (unrounded); bad pairs are logged and skipped."""
    total = 0.0
    for i in range(1, len(points)):
        try:
            total += distance_nm(points[i - 1], points[i])
        except GeometryError as e:
            logger.warning("Skipping distance between points %d and %d: %s", i - 1, i, e)
    return total


def route_legs(points: Sequence[Any]) -> tuple[list[DirectionSegment], int]:
    """Bearing/length for each consecutive pair, plus the number of direction changes."""
    legs: list[DirectionSegment] = []
    changes = 0
    previous_bearing: float | None = None

    for i in range(1, len(points)):
        start, end = points[i - 1], points[i]
        try:
            bearing = bearing_deg(start, end)
            length = distance_nm(start, end)
        except GeometryError as e:
            logger.warning("Skipping bearing between reduced points %d and %d: %s", i - 1, i, e)
            continue

        legs.append(DirectionSegment(direction=bearing, length=round(length, OUTPUT_DECIMALS)))
        if previous_bearing is not None and abs(bearing - previous_bearing) > DIRECTION_CHANGE_TOLERANCE_DEG:
            changes += 1
        previous_bearing = bearing

    return legs, changes


def total_hours(points: Sequence[Any]) -> float:
    """Hours between the first and last timestamps; 0 when either is missing or unreadable."""
    if len(points) < 2:
        return 0.0
    start = _field(points[0], "timestamp")
    end = _field(points[-1], "timestamp")
    if not start or not end:
        return 0.0
    try:
        return hours_between(start, end)
    except (TypeError, ValueError) as e:
        logger.warning("Ignoring unreadable route timestamps (%r, %r): %s", start, end, e)
        return 0.0


def max_speed(points: Sequence[Any]) -> float:
    """Largest numeric `speed` found on any point (0 if none)."""
    best = 0.0
    for point in points:
        raw = _field(point, "speed")
        if raw is None or raw == "":
            continue
        try:
            speed = float(raw)
        except (TypeError, ValueError):
            continue
        if not isnan(speed) and speed > best:
            best = speed
    return best


def compute_statistics(original: Sequence[Any] | None, reduced: Sequence[Any] | None) -> RouteStatistics:
    """Compute the statistics record for one route.

    Empty or non-sequence inputs yield `RouteStatistics.empty()`.
    """
    if not _is_point_sequence(original) or not original:
        logger.warning("Original points array is empty or invalid")
        return RouteStatistics.empty()
    if not _is_point_sequence(reduced) or not reduced:
        logger.warning("Reduced points array is empty or invalid")
        return RouteStatistics.empty()

    try:
        original_count = len(original)
        reduced_count = len(reduced)

        straight_line = 0.0
        if original_count >= 2:
            try:
                straight_line = distance_nm(original[0], original[-1])
            except GeometryError as e:
                logger.warning("Skipping straight-line distance: %s", e)

        legs, changes = route_legs(reduced)

        return RouteStatistics(
            original_points=original_count,
            reduced_points=reduced_count,
            reduction=reduction_percent(original_count, reduced_count),
            straight_line_distance=round(straight_line, OUTPUT_DECIMALS),
            path_distance=round(path_distance_nm(original), OUTPUT_DECIMALS),
            direction_changes=changes,
            directions=legs,
            total_hours=round(total_hours(original), OUTPUT_DECIMALS),
            max_speed=round(max_speed(original), OUTPUT_DECIMALS),
        )
    except Exception:
        logger.exception("Error computing route statistics")
        return RouteStatistics.empty()
