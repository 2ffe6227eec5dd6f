"""Error types raised by the geometry layer."""

from __future__ import annotations


class GeometryError(ValueError):
    """Base error for point validation failures in distance/bearing calculations."""


class InvalidInput(GeometryError):
    """Raised when a point is missing or lacks a `lat`/`lon` field."""


class InvalidCoordinateValue(GeometryError):
    """Raised when a coordinate cannot be parsed to a finite number."""


class OutOfRangeCoordinate(GeometryError):
    """Raised when latitude exceeds +/-90 or longitude exceeds +/-180 degrees."""


__all__ = [
    "GeometryError",
    "InvalidInput",
    "InvalidCoordinateValue",
    "OutOfRangeCoordinate",
]
