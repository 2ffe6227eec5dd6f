"""
GPX writer.

Serializes a (processed) `TrackDocument` back to GPX 1.1 with `gpxpy`. Each `Route` becomes
one `<trk>` with a single `<trkseg>`. Speeds are written as a `<speed>` extension element so
that the reader picks them up again.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

import gpxpy.gpx

from gpxreduce.core.time import parse_timestamp
from gpxreduce.domain.models import TrackDocument, TrackPoint

logger = logging.getLogger(__name__)


def _optional_float(value: float | str | None) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_gpx_point(point: TrackPoint) -> gpxpy.gpx.GPXTrackPoint:
    out = gpxpy.gpx.GPXTrackPoint(
        latitude=float(point.lat),
        longitude=float(point.lon),
        elevation=_optional_float(point.elevation),
        name=point.name,
    )
    if point.timestamp:
        try:
            out.time = parse_timestamp(point.timestamp)
        except ValueError:
            logger.warning("Dropping unreadable timestamp %r from output point", point.timestamp)

    speed = _optional_float(point.speed)
    if speed is not None:
        ext = ET.Element("speed")
        ext.text = f"{speed:g}"
        out.extensions.append(ext)
    return out


def build_gpx(document: TrackDocument, *, creator: str = "gpxreduce") -> str:
    """Build GPX XML text from a `TrackDocument`."""
    gpx = gpxpy.gpx.GPX()
    gpx.creator = document.creator or creator
    gpx.name = document.name

    for route in document.routes:
        track = gpxpy.gpx.GPXTrack(name=route.name)
        segment = gpxpy.gpx.GPXTrackSegment()
        segment.points.extend(_to_gpx_point(p) for p in route.points)
        track.segments.append(segment)
        gpx.tracks.append(track)

    return gpx.to_xml(version="1.1")


def write_gpx(document: TrackDocument, path: str | Path, *, creator: str = "gpxreduce") -> Path:
    """Write `document` as GPX to `path`, creating parent directories."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(build_gpx(document, creator=creator), encoding="utf-8")
    logger.info("GPX saved to: %s", out)
    return out
