# src/gpxreduce/api/app.py
"""
FastAPI application wiring.

This file creates the `FastAPI` instance and registers the API router.
Business logic lives in `gpxreduce.pipeline` and the simplifier/statistics core.
"""

from __future__ import annotations

from fastapi import FastAPI

from gpxreduce import __version__
from gpxreduce.core.logging import configure_logging

from .routes import router

configure_logging()

app = FastAPI(title="gpxreduce API", version=__version__)
app.include_router(router)
