"""
JSON persistence for processed track documents and statistics.

The processed JSON is a Pydantic dump of `TrackDocument` (reduced points plus the attached
`RouteStatistics` per route). It can be turned back into GPX with `json-to-gpx`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from gpxreduce.domain.models import TrackDocument

logger = logging.getLogger(__name__)


def save_json(file_stem: str, payload: Any, output_dir: str | Path) -> Path:
    """Save `payload` as `<output_dir>/<file_stem>.json` (2-space indent)."""
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"{file_stem}.json"
    if hasattr(payload, "model_dump"):
        payload = payload.model_dump(mode="json")
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info("JSON saved to: %s", path)
    return path


def load_document_json(path: str | Path) -> TrackDocument:
    """Load a processed JSON file back into a `TrackDocument`."""
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    return TrackDocument.model_validate(payload)
