"""
File processing pipeline.

Glue between the track file layer and the simplifier/statistics core:
1) read a GPX file into routes,
2) drop samples without usable coordinates,
3) reduce each route and attach its statistics,
4) write the processed JSON (and optionally GPX) to the output directory.

Directories are passed in through `ProcessingConfig`; nothing here reads global state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from math import isnan
from pathlib import Path
from typing import Iterable

from gpxreduce.config.settings import Settings
from gpxreduce.core.env import resolve_project_path
from gpxreduce.domain.models import ProcessFileResult, Route, TrackDocument, TrackPoint
from gpxreduce.io.gpx_reader import read_gpx
from gpxreduce.io.gpx_writer import write_gpx
from gpxreduce.io.json_store import save_json
from gpxreduce.simplify.reduce import reduce_points
from gpxreduce.stats.route_stats import compute_statistics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessingConfig:
    input_dir: Path
    output_dir: Path
    write_gpx: bool = True
    statistics_file: str = "statistics.json"
    creator: str = "gpxreduce"
    speed_suffix: str = "speed"

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        input_dir: str | Path | None = None,
        output_dir: str | Path | None = None,
        write_gpx: bool | None = None,
    ) -> "ProcessingConfig":
        """Build a config from settings; explicit arguments win."""
        return cls(
            input_dir=resolve_project_path(input_dir or settings.io.input_dir),
            output_dir=resolve_project_path(output_dir or settings.io.output_dir),
            write_gpx=settings.io.write_gpx if write_gpx is None else write_gpx,
            statistics_file=settings.io.statistics_file,
            creator=settings.gpx.creator,
            speed_suffix=settings.gpx.speed_extension_suffix,
        )


def _is_number(value: object) -> bool:
    if value is None or isinstance(value, bool):
        return False
    try:
        return not isnan(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return False


def filter_valid_points(points: Iterable[TrackPoint | None]) -> list[TrackPoint]:
    """Keep only points whose `lat` and `lon` parse as numbers."""
    return [p for p in points if p is not None and _is_number(p.lat) and _is_number(p.lon)]


def process_route(route: Route) -> Route:
    """Return a copy of `route` with reduced points and attached statistics."""
    valid = filter_valid_points(route.points)
    dropped = len(route.points) - len(valid)
    if dropped:
        logger.warning("Route %r: dropped %d point(s) without usable coordinates", route.name, dropped)

    if len(valid) < 2:
        return route.model_copy(update={"points": valid, "stats": compute_statistics([], [])})

    reduced = reduce_points(valid)
    stats = compute_statistics(valid, reduced)
    if route.name:
        stats = stats.model_copy(update={"name": route.name})
    return route.model_copy(update={"points": reduced, "stats": stats})


def process_document(document: TrackDocument) -> TrackDocument:
    """Process every route of a document."""
    return document.model_copy(update={"routes": [process_route(r) for r in document.routes]})


def process_file(path: str | Path, config: ProcessingConfig) -> ProcessFileResult:
    """Process one GPX file and write its outputs; errors are logged and re-raised."""
    path = Path(path)
    logger.info("Processing file: %s", path)
    try:
        document = process_document(read_gpx(path, speed_suffix=config.speed_suffix))
        json_path = save_json(path.stem, document, config.output_dir)
        gpx_path = (
            write_gpx(document, config.output_dir / f"{path.stem}.gpx", creator=config.creator)
            if config.write_gpx
            else None
        )
    except Exception:
        logger.exception("Error processing file %s", path)
        raise

    return ProcessFileResult(
        input_file=str(path),
        output_file=str(json_path),
        gpx_output_file=str(gpx_path) if gpx_path else None,
        route_count=len(document.routes),
        waypoint_count=document.waypoint_count,
        track_count=document.track_count,
        stats=[r.stats for r in document.routes if r.stats is not None],
    )


def discover_inputs(config: ProcessingConfig) -> list[Path]:
    """List `*.gpx` files (case-insensitive) in the input directory, sorted by name."""
    if not config.input_dir.is_dir():
        return []
    return sorted(p for p in config.input_dir.iterdir() if p.is_file() and p.suffix.lower() == ".gpx")


def process_all(paths: Iterable[str | Path], config: ProcessingConfig) -> list[ProcessFileResult]:
    """Process many files, skipping failures, and write the aggregated statistics file."""
    results: list[ProcessFileResult] = []
    for path in paths:
        try:
            results.append(process_file(path, config))
        except Exception as e:
            logger.error("Failed to process %s: %s", path, e)

    summary = [
        {
            "file_name": Path(r.input_file).name,
            "route_count": r.route_count,
            "waypoint_count": r.waypoint_count,
            "track_count": r.track_count,
            "stats": [s.model_dump(mode="json") for s in r.stats],
        }
        for r in results
    ]
    save_json(Path(config.statistics_file).stem, summary, config.output_dir)
    return results
