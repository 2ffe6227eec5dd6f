"""
Per-axis direction tracking.

A track is split into "direction runs": stretches where latitude and longitude each keep
moving the same way (increasing, decreasing, or unchanged). Comparisons are exact, with no
epsilon: any change in a coordinate, however small, counts as movement on that axis.

These helpers never raise. A coordinate that cannot be parsed compares as NaN, which is
neither greater nor smaller than anything and therefore reads as "unchanged".
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

Sign = Literal[-1, 0, 1]


@dataclass(frozen=True)
class DirectionState:
    """Signs of the latitude/longitude change across the most recent retained step."""

    lat: Sign = 0
    lon: Sign = 0


NO_DIRECTION = DirectionState()


def _as_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return float("nan")


def _coord(point: Any, name: str) -> float:
    if isinstance(point, Mapping):
        return _as_float(point.get(name))
    return _as_float(getattr(point, name, None))


def axis_direction(current: float, previous: float) -> Sign:
    """Return 1 if `current > previous`, -1 if `current < previous`, else 0."""
    if current > previous:
        return 1
    if current < previous:
        return -1
    return 0


def current_directions(current: Any, previous: Any) -> DirectionState:
    """Direction of travel from `previous` to `current` on each axis."""
    if current is None or previous is None:
        return NO_DIRECTION
    return DirectionState(
        lat=axis_direction(_coord(current, "lat"), _coord(previous, "lat")),
        lon=axis_direction(_coord(current, "lon"), _coord(previous, "lon")),
    )


def has_direction_changed(current: Any, previous: Any, state: DirectionState) -> bool:
    """True if moving `previous -> current` flips either axis relative to `state`.

    With no `previous` point this is always True, so a track's first point is kept.
    """
    if previous is None:
        return True
    return current_directions(current, previous) != state
