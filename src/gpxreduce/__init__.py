"""
gpxreduce: direction-change GPS track simplification and route statistics.

Public entry points:
- `reduce_points`: keep only the points where a track changes direction
- `compute_statistics`: distances, legs and timing for an original/reduced pair
- `distance_nm` / `bearing_deg`: great-circle geometry in nautical miles/degrees
"""

from __future__ import annotations

from gpxreduce.core.geo import bearing_deg, distance_nm
from gpxreduce.simplify.reduce import reduce_points
from gpxreduce.stats.route_stats import compute_statistics

__version__ = "0.1.0"

__all__ = ["bearing_deg", "compute_statistics", "distance_nm", "reduce_points", "__version__"]
