"""
GPX reader.

Parses a GPX file with `gpxpy` and flattens it into `Route`s: every track segment and every
`<rte>` route becomes one `Route` of `TrackPoint`s. Only the fields the core uses are kept
(coordinates, elevation, time, speed, name).

Speed comes from the point's own `speed` value when present, otherwise from the first
extension element whose tag ends with the configured suffix (Navionics tracks store it as
`<navionics_speed>`).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable

import gpxpy
import gpxpy.gpx

from gpxreduce.domain.models import Route, TrackDocument, TrackPoint

logger = logging.getLogger(__name__)

DEFAULT_SPEED_SUFFIX = "speed"


def _local_tag(tag: Any) -> str:
    text = str(tag)
    if "}" in text:
        text = text.rsplit("}", 1)[1]
    return text.lower()


def extension_speed(extensions: Iterable[Any], *, suffix: str = DEFAULT_SPEED_SUFFIX) -> str | None:
    """Return the text of the first extension element (at any depth) whose tag ends with `suffix`."""
    suffix = suffix.lower()
    for root in extensions or []:
        for element in root.iter():
            if _local_tag(element.tag).endswith(suffix) and element.text and element.text.strip():
                return element.text.strip()
    return None


def _to_track_point(point: gpxpy.gpx.GPXTrackPoint | gpxpy.gpx.GPXRoutePoint, *, speed_suffix: str) -> TrackPoint:
    speed: float | str | None = getattr(point, "speed", None)
    if speed is None:
        speed = extension_speed(getattr(point, "extensions", None) or [], suffix=speed_suffix)
    return TrackPoint(
        lat=point.latitude,
        lon=point.longitude,
        elevation=point.elevation,
        timestamp=point.time,
        speed=speed,
        name=point.name,
    )


def parse_gpx(text: str, *, speed_suffix: str = DEFAULT_SPEED_SUFFIX) -> TrackDocument:
    """Parse GPX XML text into a `TrackDocument`.

    Raises `gpxpy.gpx.GPXException` when the document is not valid GPX.
    """
    gpx = gpxpy.parse(text)

    routes: list[Route] = []
    for track in gpx.tracks:
        for segment in track.segments:
            points = [_to_track_point(p, speed_suffix=speed_suffix) for p in segment.points]
            routes.append(Route(name=track.name, points=points))
    for rte in gpx.routes:
        points = [_to_track_point(p, speed_suffix=speed_suffix) for p in rte.points]
        routes.append(Route(name=rte.name, points=points))

    logger.debug(
        "Parsed GPX: tracks=%d routes=%d waypoints=%d", len(gpx.tracks), len(gpx.routes), len(gpx.waypoints)
    )
    return TrackDocument(
        name=gpx.name,
        creator=gpx.creator,
        routes=routes,
        waypoint_count=len(gpx.waypoints),
        track_count=len(gpx.tracks),
    )


def read_gpx(path: str | Path, *, speed_suffix: str = DEFAULT_SPEED_SUFFIX) -> TrackDocument:
    """Read and parse a GPX file from disk."""
    text = Path(path).read_text(encoding="utf-8")
    return parse_gpx(text, speed_suffix=speed_suffix)
