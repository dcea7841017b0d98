"""
FastAPI app entry point aggregating the routers under tripstats/routes.
Run with `uvicorn tripstats.api:app`.
"""
from __future__ import annotations

from fastapi import FastAPI

from .logs import ensure_log_schema, LogContext
from .routes import base as base_routes
from .routes import logs as logs_routes
from .routes import trips as trips_routes
from .routes.base import APP_NAME, APP_VERSION

app = FastAPI(title=APP_NAME, version=APP_VERSION)


@app.on_event("startup")
def on_startup():
    ensure_log_schema()
    LogContext("STARTUP").write("OK")


app.include_router(base_routes.router)
app.include_router(trips_routes.router)
app.include_router(logs_routes.router)
