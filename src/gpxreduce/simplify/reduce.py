"""
Direction-change track simplification.

A point is kept only where the track changes direction on the latitude or longitude axis.
Points inside a direction run carry no shape information and are dropped. The first two
points anchor the initial direction, and the final point is always kept.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from gpxreduce.core.direction import current_directions, has_direction_changed

P = TypeVar("P")


def reduce_points(points: Sequence[P] | None) -> list[P]:
    """Return the subsequence of `points` that defines the route's shape.

    Notes:
    - Inputs of 0, 1 or 2 points are returned unchanged (as a new list).
    - The retained point for a direction flip is the point at which the flip is detected.
    - Never raises: unparseable coordinates compare as "unchanged".
    """
    if not points or len(points) <= 2:
        return list(points or [])

    reduced = [points[0], points[1]]
    current = points[1]
    directions = current_directions(current, points[0])

    for next_point in points[2:]:
        if has_direction_changed(next_point, current, directions):
            reduced.append(next_point)
            directions = current_directions(next_point, current)
        current = next_point

    last = points[-1]
    if reduced[-1] is not last:
        reduced.append(last)
    return reduced
