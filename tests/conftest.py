"""Shared fixtures: a small real-world track and its GPX rendering."""

from __future__ import annotations

import pytest

from gpxreduce.domain.models import TrackPoint

# Latitude falls for points 0-4 then rises; longitude falls throughout.
TRACK_COORDS = [
    ("43.307228", "16.457782"),
    ("43.306211", "16.454683"),
    ("43.305673", "16.453812"),
    ("43.302485", "16.447676"),
    ("43.302471", "16.447443"),
    ("43.305502", "16.433061"),
    ("43.315637", "16.408790"),
]

TRACK_SPEEDS = ["3.2", "4.1", "5.6", "6.0", "2.4", "7.35", "5.0"]


def _gpx_trkpt(i: int, lat: str, lon: str) -> str:
    return (
        f'<trkpt lat="{lat}" lon="{lon}">'
        f"<ele>{i}.0</ele>"
        f"<time>2024-05-01T{10 + i // 2:02d}:{(i % 2) * 30:02d}:00Z</time>"
        f"<extensions><navionics_speed>{TRACK_SPEEDS[i]}</navionics_speed></extensions>"
        "</trkpt>"
    )


SAMPLE_GPX = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<gpx version="1.1" creator="Navionics" xmlns="http://www.topografix.com/GPX/1/1">'
    '<wpt lat="43.30" lon="16.45"><name>Anchorage</name></wpt>'
    "<trk><name>Hvar crossing</name><trkseg>"
    + "".join(_gpx_trkpt(i, lat, lon) for i, (lat, lon) in enumerate(TRACK_COORDS))
    + "</trkseg></trk></gpx>"
)


@pytest.fixture
def track_points() -> list[TrackPoint]:
    return [TrackPoint(lat=lat, lon=lon) for lat, lon in TRACK_COORDS]


@pytest.fixture
def sample_gpx() -> str:
    return SAMPLE_GPX


@pytest.fixture
def gpx_file(tmp_path):
    path = tmp_path / "input" / "hvar.gpx"
    path.parent.mkdir(parents=True)
    path.write_text(SAMPLE_GPX, encoding="utf-8")
    return path


@pytest.fixture
def track_coords() -> list[tuple[str, str]]:
    return list(TRACK_COORDS)
