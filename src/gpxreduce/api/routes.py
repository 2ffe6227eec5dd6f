"""
API routes.

Endpoints:
- POST `/api/reduce`: simplify one point sequence and return it with its statistics.
- POST `/api/geometry`: distance (nm) and initial bearing between two points.
- GET  `/api/health`: liveness check.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from gpxreduce import __version__
from gpxreduce.core.errors import GeometryError
from gpxreduce.core.geo import bearing_deg, distance_nm
from gpxreduce.domain.models import Route, RouteStatistics, TrackPoint
from gpxreduce.pipeline.process import process_route

router = APIRouter()


class ReduceRequest(BaseModel):
    name: str | None = None
    points: list[TrackPoint] = Field(default_factory=list)


class ReduceResponse(BaseModel):
    points: list[TrackPoint]
    stats: RouteStatistics


class GeometryRequest(BaseModel):
    a: TrackPoint | None = None
    b: TrackPoint | None = None


class GeometryResponse(BaseModel):
    distance_nm: float
    bearing_deg: float


@router.get("/api/health")
def get_health() -> dict:
    return {"status": "ok", "version": __version__}


@router.post("/api/reduce", response_model=ReduceResponse)
def post_reduce(request: ReduceRequest) -> ReduceResponse:
    """Drop samples without usable coordinates, simplify, and compute statistics."""
    route = process_route(Route(name=request.name, points=request.points))
    return ReduceResponse(points=route.points, stats=route.stats or RouteStatistics.empty())


@router.post("/api/geometry", response_model=GeometryResponse)
def post_geometry(request: GeometryRequest) -> GeometryResponse:
    """Compute great-circle distance and initial bearing from `a` to `b`."""
    try:
        return GeometryResponse(
            distance_nm=distance_nm(request.a, request.b),
            bearing_deg=bearing_deg(request.a, request.b),
        )
    except GeometryError as e:
        raise HTTPException(
            status_code=400,
            detail={"code": "INVALID_COORDINATES", "message": str(e)},
        ) from e
