from __future__ import annotations

from collections.abc import Mapping
from math import asin, atan2, cos, degrees, isnan, radians, sin, sqrt
from typing import Any

from gpxreduce.core.errors import InvalidCoordinateValue, InvalidInput, OutOfRangeCoordinate

"""
Spherical geometry helpers.

Distances are great-circle (Haversine) distances in nautical miles; bearings are initial
great-circle bearings in degrees clockwise from north. Both accept any point-like value:
a `TrackPoint`, an object with `lat`/`lon` attributes, or a mapping with `lat`/`lon` keys.
Coordinates may be numbers or numeric strings (GPX attributes arrive as strings).
"""

# Mean Earth radius (6371.0088 km) expressed in nautical miles (1 nm = 1.852 km).
EARTH_RADIUS_NM = 6371.0088 / 1.852

# Rounding applied to distances so trailing float noise does not leak into comparisons.
DISTANCE_DECIMALS = 6


def _field(point: Any, name: str) -> Any:
    if isinstance(point, Mapping):
        return point.get(name)
    return getattr(point, name, None)


def _coordinates(a: Any, b: Any, *, op: str) -> tuple[float, float, float, float]:
    """Extract and validate `(lat1, lon1, lat2, lon2)` as floats in decimal degrees."""
    if a is None or b is None:
        raise InvalidInput(f"Invalid points provided to {op}")

    raw = (_field(a, "lat"), _field(a, "lon"), _field(b, "lat"), _field(b, "lon"))
    if any(v is None for v in raw):
        raise InvalidInput(f"Invalid points provided to {op}")

    try:
        lat1, lon1, lat2, lon2 = (float(v) for v in raw)
    except (TypeError, ValueError) as e:
        raise InvalidCoordinateValue("Invalid coordinate values") from e

    if any(isnan(v) for v in (lat1, lon1, lat2, lon2)):
        raise InvalidCoordinateValue("Invalid coordinate values")
    if abs(lat1) > 90 or abs(lat2) > 90:
        raise OutOfRangeCoordinate("Latitude must be between -90 and 90 degrees")
    if abs(lon1) > 180 or abs(lon2) > 180:
        raise OutOfRangeCoordinate("Longitude must be between -180 and 180 degrees")

    return lat1, lon1, lat2, lon2


def distance_nm(a: Any, b: Any) -> float:
    """Compute great-circle distance in nautical miles between two points (Haversine)."""
    lat1, lon1, lat2, lon2 = _coordinates(a, b, op="distance_nm")

    rlat1 = radians(lat1)
    rlat2 = radians(lat2)
    dlat = radians(lat2 - lat1)
    dlon = radians(lon2 - lon1)

    h = sin(dlat / 2) ** 2 + cos(rlat1) * cos(rlat2) * sin(dlon / 2) ** 2
    # Float error can push h just past 1 for antipodal points.
    c = 2 * asin(sqrt(min(1.0, h)))
    return round(EARTH_RADIUS_NM * c, DISTANCE_DECIMALS)


def bearing_deg(a: Any, b: Any) -> float:
    """Compute the initial bearing from `a` to `b` in degrees within [0, 360).

    Identical points return 0 instead of the undefined `atan2(0, 0)` heading.
    """
    lat1, lon1, lat2, lon2 = _coordinates(a, b, op="bearing_deg")
    if lat1 == lat2 and lon1 == lon2:
        return 0.0

    rlat1 = radians(lat1)
    rlat2 = radians(lat2)
    dlon = radians(lon2 - lon1)

    y = sin(dlon) * cos(rlat2)
    x = cos(rlat1) * sin(rlat2) - sin(rlat1) * cos(rlat2) * cos(dlon)
    return (degrees(atan2(y, x)) + 360) % 360
