"""
gpxreduce CLI entrypoint.

Commands:
- `process`: simplify GPX files and write processed JSON/GPX plus `statistics.json`
- `stats`: print route statistics for one GPX file without writing anything
- `json-to-gpx`: convert a processed JSON file back into GPX

All simplification/statistics logic lives in `gpxreduce.pipeline.process`.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from gpxpy.gpx import GPXException

from gpxreduce.config.settings import get_settings
from gpxreduce.core.logging import configure_logging
from gpxreduce.domain.models import RouteStatistics
from gpxreduce.io.gpx_reader import read_gpx
from gpxreduce.io.gpx_writer import write_gpx
from gpxreduce.io.json_store import load_document_json
from gpxreduce.pipeline.process import ProcessingConfig, discover_inputs, process_all, process_document

RULE = "-" * 50


def _print_route_stats(stat: RouteStatistics) -> None:
    print(f"\n  {stat.name or 'N/A'}")
    print("  " + RULE)
    print(f"    Points: {stat.original_points} -> {stat.reduced_points} ({stat.reduction} reduction)")
    print(f"    Straight-line distance: {stat.straight_line_distance} nm")
    print(f"    Path distance: {stat.path_distance} nm")
    print(f"    Direction changes: {stat.direction_changes}")
    print(f"    Total hours: {stat.total_hours}")
    print(f"    Max speed: {stat.max_speed}")
    if len(stat.directions) > 1:
        print("\n    Route segments:")
        for i, segment in enumerate(stat.directions, start=1):
            print(f"      Segment {i}: {segment.direction:.1f} deg for {segment.length} nm")
    print("  " + RULE)


def _cmd_process(args: argparse.Namespace) -> int:
    """Handle the `process` subcommand."""
    settings = get_settings()
    config = ProcessingConfig.from_settings(
        settings,
        input_dir=args.input_dir,
        output_dir=args.output_dir,
        write_gpx=False if args.no_gpx else None,
    )

    if args.files:
        inputs = [Path(f).expanduser().resolve() for f in args.files]
        missing = [p for p in inputs if not p.is_file()]
        if missing:
            for p in missing:
                print(f"File not found: {p}", file=sys.stderr)
            return 1
    else:
        inputs = discover_inputs(config)
        if not inputs:
            print(f"No GPX files found in {config.input_dir}")
            print("Either place GPX files in the input directory or pass file paths as arguments.")
            return 0

    print(f"Found {len(inputs)} GPX file(s) to process\n")
    results = process_all(inputs, config)

    if args.json:
        print(json.dumps([r.model_dump(mode="json") for r in results], ensure_ascii=False, indent=2))
        return 0

    for result in results:
        print(f"- Processed: {Path(result.input_file).name}")
        print(f"  Routes: {result.route_count}")
        print(f"  Waypoints: {result.waypoint_count}")
        print(f"  Tracks: {result.track_count}")
        if result.stats:
            print("\n  Route statistics:")
            for stat in result.stats:
                _print_route_stats(stat)
        print("")

    print(f"Processed {len(results)}/{len(inputs)} file(s); outputs in {config.output_dir}")
    return 0 if len(results) == len(inputs) else 1


def _cmd_stats(args: argparse.Namespace) -> int:
    """Handle the `stats` subcommand (read-only)."""
    settings = get_settings()
    path = Path(args.file).expanduser().resolve()
    if not path.is_file():
        print(f"File not found: {path}", file=sys.stderr)
        return 1
    try:
        gpx_document = read_gpx(path, speed_suffix=settings.gpx.speed_extension_suffix)
    except GPXException as e:
        print(f"Could not parse GPX file {path}: {e}", file=sys.stderr)
        return 1
    document = process_document(gpx_document)
    stats = [r.stats for r in document.routes if r.stats is not None]

    if args.json:
        print(json.dumps([s.model_dump(mode="json") for s in stats], ensure_ascii=False, indent=2))
        return 0

    for stat in stats:
        _print_route_stats(stat)
    return 0


def _cmd_json_to_gpx(args: argparse.Namespace) -> int:
    """Handle the `json-to-gpx` subcommand."""
    settings = get_settings()
    input_path = Path(args.input).expanduser().resolve()
    output_path = Path(args.output).expanduser().resolve() if args.output else input_path.with_suffix(".gpx")

    print(f"Reading JSON from: {input_path}")
    document = load_document_json(input_path)
    write_gpx(document, output_path, creator=settings.gpx.creator)
    print(f"Writing GPX to: {output_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the gpxreduce CLI."""
    parser = argparse.ArgumentParser(prog="gpxreduce")
    parser.add_argument("--log-level", default=None, help="Override the configured log level (e.g. DEBUG)")
    sub = parser.add_subparsers(dest="command", required=True)

    proc = sub.add_parser("process", help="Simplify GPX files and write processed JSON/GPX + statistics.")
    proc.add_argument("files", nargs="*", help="GPX files; defaults to every *.gpx in the input directory")
    proc.add_argument("--input-dir", default=None)
    proc.add_argument("--output-dir", default=None)
    proc.add_argument("--no-gpx", action="store_true", help="Only write JSON, skip the simplified GPX")
    proc.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    proc.set_defaults(func=_cmd_process)

    st = sub.add_parser("stats", help="Print route statistics for a GPX file (writes nothing).")
    st.add_argument("file")
    st.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    st.set_defaults(func=_cmd_stats)

    conv = sub.add_parser("json-to-gpx", help="Convert a processed JSON file back to GPX.")
    conv.add_argument("input")
    conv.add_argument("output", nargs="?", default=None, help="Defaults to INPUT with a .gpx extension")
    conv.set_defaults(func=_cmd_json_to_gpx)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m gpxreduce.cli`."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    func: Any = getattr(args, "func")
    return int(func(args))


if __name__ == "__main__":
    raise SystemExit(main())
