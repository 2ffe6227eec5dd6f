import xml.etree.ElementTree as ET

import gpxpy
import pytest

from gpxreduce.domain.models import Route, TrackDocument, TrackPoint
from gpxreduce.io.gpx_reader import extension_speed, parse_gpx, read_gpx
from gpxreduce.io.gpx_writer import build_gpx, write_gpx
from gpxreduce.io.json_store import load_document_json, save_json


def test_parse_gpx_flattens_track_segments(sample_gpx):
    doc = parse_gpx(sample_gpx)

    assert doc.creator == "Navionics"
    assert doc.track_count == 1
    assert doc.waypoint_count == 1
    assert len(doc.routes) == 1

    route = doc.routes[0]
    assert route.name == "Hvar crossing"
    assert len(route.points) == 7
    first = route.points[0]
    assert float(first.lat) == pytest.approx(43.307228)
    assert float(first.lon) == pytest.approx(16.457782)
    assert first.elevation == 0.0
    assert first.timestamp is not None


def test_parse_gpx_reads_speed_from_extensions(sample_gpx):
    doc = parse_gpx(sample_gpx)
    assert [float(p.speed) for p in doc.routes[0].points][:3] == [3.2, 4.1, 5.6]


def test_extension_speed_matches_namespaced_tags():
    root = ET.fromstring('<TrackPointExtension xmlns="urn:x"><Speed> 4.5 </Speed></TrackPointExtension>')
    assert extension_speed([root]) == "4.5"
    assert extension_speed([ET.Element("heading")]) is None


def test_gpx_routes_become_routes():
    text = (
        '<gpx version="1.1" creator="t" xmlns="http://www.topografix.com/GPX/1/1">'
        "<rte><name>Plan</name>"
        '<rtept lat="1.0" lon="2.0"/><rtept lat="1.5" lon="2.5"/>'
        "</rte></gpx>"
    )
    doc = parse_gpx(text)
    assert doc.track_count == 0
    assert [r.name for r in doc.routes] == ["Plan"]
    assert len(doc.routes[0].points) == 2


def test_invalid_gpx_raises():
    with pytest.raises(gpxpy.gpx.GPXException):
        parse_gpx("this is not xml")


def test_build_gpx_round_trips_points_and_speed():
    doc = TrackDocument(
        name="Trip",
        routes=[
            Route(
                name="Leg 1",
                points=[
                    TrackPoint(lat="43.1", lon="16.1", elevation="2", timestamp="2024-05-01T10:00:00Z", speed="4.5"),
                    TrackPoint(lat=43.2, lon=16.2),
                ],
            )
        ],
    )

    parsed = parse_gpx(build_gpx(doc))

    assert parsed.creator == "gpxreduce"
    route = parsed.routes[0]
    assert route.name == "Leg 1"
    assert [(float(p.lat), float(p.lon)) for p in route.points] == [(43.1, 16.1), (43.2, 16.2)]
    assert float(route.points[0].speed) == 4.5
    assert route.points[0].timestamp is not None
    assert route.points[1].speed is None


def test_write_and_read_gpx_file(tmp_path, sample_gpx):
    doc = parse_gpx(sample_gpx)
    out = write_gpx(doc, tmp_path / "nested" / "out.gpx")
    assert out.is_file()
    assert len(read_gpx(out).routes[0].points) == 7


def test_json_store_round_trip(tmp_path, sample_gpx):
    doc = parse_gpx(sample_gpx)
    path = save_json("hvar", doc, tmp_path)
    assert path.name == "hvar.json"
    loaded = load_document_json(path)
    assert len(loaded.routes[0].points) == 7
    assert loaded.routes[0].name == "Hvar crossing"
