import json

import pytest

from gpxreduce.config.settings import Settings
from gpxreduce.domain.models import Route, RouteStatistics, TrackPoint
from gpxreduce.io.json_store import load_document_json
from gpxreduce.pipeline.process import (
    ProcessingConfig,
    discover_inputs,
    filter_valid_points,
    process_all,
    process_file,
    process_route,
)


@pytest.fixture
def config(tmp_path):
    return ProcessingConfig(input_dir=tmp_path / "input", output_dir=tmp_path / "output")


def test_filter_valid_points_drops_unusable_coordinates():
    points = [
        TrackPoint(lat="1.0", lon="2.0"),
        TrackPoint(lat="x", lon="2.0"),
        TrackPoint(lon=2.0),
        None,
        TrackPoint(lat=3.0, lon=4.0),
    ]
    assert filter_valid_points(points) == [points[0], points[4]]


def test_process_route_reduces_and_attaches_named_statistics(track_points):
    route = process_route(Route(name="Hvar crossing", points=track_points))

    assert len(route.points) == 4
    assert route.stats.name == "Hvar crossing"
    assert route.stats.original_points == 7
    assert route.stats.reduced_points == 4
    assert route.stats.reduction == "42.86%"


def test_process_route_with_too_few_valid_points_gets_default_stats():
    route = process_route(Route(name="stub", points=[TrackPoint(lat=1.0, lon=1.0), TrackPoint(lat="?", lon=1.0)]))
    assert route.stats == RouteStatistics.empty()
    assert route.points == [TrackPoint(lat=1.0, lon=1.0)]


def test_process_file_writes_outputs(gpx_file, config):
    result = process_file(gpx_file, config)

    assert result.route_count == 1
    assert result.track_count == 1
    assert result.waypoint_count == 1
    assert (config.output_dir / "hvar.json").is_file()
    assert (config.output_dir / "hvar.gpx").is_file()

    stats = result.stats[0]
    assert stats.original_points == 7
    assert stats.reduced_points == 4
    assert stats.total_hours == 3.0
    assert stats.max_speed == 7.35
    assert stats.path_distance >= stats.straight_line_distance > 0

    saved = load_document_json(result.output_file)
    assert len(saved.routes[0].points) == 4
    assert saved.routes[0].stats.reduced_points == 4


def test_process_file_can_skip_gpx_output(gpx_file, tmp_path):
    config = ProcessingConfig(input_dir=gpx_file.parent, output_dir=tmp_path / "out", write_gpx=False)
    result = process_file(gpx_file, config)
    assert result.gpx_output_file is None
    assert not (tmp_path / "out" / "hvar.gpx").exists()


def test_discover_inputs_is_case_insensitive(config):
    config.input_dir.mkdir(parents=True)
    (config.input_dir / "a.gpx").write_text("x", encoding="utf-8")
    (config.input_dir / "B.GPX").write_text("x", encoding="utf-8")
    (config.input_dir / "notes.txt").write_text("x", encoding="utf-8")
    assert [p.name for p in discover_inputs(config)] == ["B.GPX", "a.gpx"]


def test_discover_inputs_missing_dir_is_empty(config):
    assert discover_inputs(config) == []


def test_process_all_skips_broken_files_and_writes_summary(gpx_file, config):
    broken = gpx_file.parent / "broken.gpx"
    broken.write_text("not xml at all", encoding="utf-8")

    results = process_all([broken, gpx_file], config)

    assert [r.input_file for r in results] == [str(gpx_file)]
    summary = json.loads((config.output_dir / "statistics.json").read_text(encoding="utf-8"))
    assert summary[0]["file_name"] == "hvar.gpx"
    assert summary[0]["stats"][0]["reduction"] == "42.86%"


def test_config_from_settings_prefers_explicit_arguments(tmp_path):
    settings = Settings()
    config = ProcessingConfig.from_settings(settings, output_dir=tmp_path / "custom", write_gpx=False)
    assert config.output_dir == tmp_path / "custom"
    assert config.write_gpx is False
    assert config.input_dir.name == "input"
