"""HTTP surface (FastAPI) for health checks and diagnostics."""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from .. import __version__
from ..counter import PulseCounterService
from ..engine import OEEEngine
from .endpoints import diagnostics, health


def create_app(
    engine: OEEEngine,
    counter: Optional[PulseCounterService] = None,
    *,
    lifespan=None,
) -> FastAPI:
    """Build the app around an existing engine.

    Without ``lifespan`` the caller owns start/stop of the engine; the ASGI
    entry point in ``oee_engine.api.main`` passes one that does it.
    """
    app = FastAPI(title="OEE Engine", version=__version__, lifespan=lifespan)
    app.state.engine = engine
    app.state.counter = counter
    app.include_router(health.router)
    app.include_router(diagnostics.router)
    return app


__all__ = ["create_app"]
