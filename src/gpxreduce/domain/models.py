"""
Domain models (Pydantic).

These types are the contract between the track I/O layer, the simplifier/statistics
core, and the CLI/API surfaces:
- track samples (`TrackPoint`) grouped into `Route`s inside a `TrackDocument`
- the per-route statistics record (`RouteStatistics`)
- per-file processing output (`ProcessFileResult`)

Coordinates are stored exactly as received (number or numeric string). Validation of
coordinate values happens in the geometry layer, so that a malformed sample can be
reported and skipped instead of failing the whole file at parse time.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TrackPoint(BaseModel):
    """One GPS sample on a track."""

    model_config = ConfigDict(frozen=True)

    lat: float | str | None = None
    lon: float | str | None = None
    elevation: float | str | None = None
    timestamp: datetime | str | None = None
    speed: float | str | None = None
    name: str | None = None


class DirectionSegment(BaseModel):
    """One leg of the simplified route: initial bearing (degrees) and length (nm)."""

    model_config = ConfigDict(frozen=True)

    direction: float
    length: float


class RouteStatistics(BaseModel):
    """Aggregate statistics for one route (original vs. simplified)."""

    model_config = ConfigDict(frozen=True)

    original_points: int = 0
    reduced_points: int = 0
    reduction: str = "0.00%"
    straight_line_distance: float = 0.0
    path_distance: float = 0.0
    direction_changes: int = 0
    directions: list[DirectionSegment] = Field(default_factory=list)
    total_hours: float = 0.0
    max_speed: float = 0.0
    name: str | None = None

    @classmethod
    def empty(cls) -> "RouteStatistics":
        """The all-zero record returned when there is nothing to measure."""
        return cls()


class Route(BaseModel):
    """A named, ordered point sequence (one GPX track segment or route)."""

    name: str | None = None
    points: list[TrackPoint] = Field(default_factory=list)
    stats: RouteStatistics | None = None


class TrackDocument(BaseModel):
    """All routes read from one track file."""

    name: str | None = None
    creator: str | None = None
    routes: list[Route] = Field(default_factory=list)
    waypoint_count: int = 0
    track_count: int = 0


class ProcessFileResult(BaseModel):
    """Summary of processing one input file."""

    input_file: str
    output_file: str
    gpx_output_file: str | None = None
    route_count: int = 0
    waypoint_count: int = 0
    track_count: int = 0
    stats: list[RouteStatistics] = Field(default_factory=list)
