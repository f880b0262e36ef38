"""ASGI entry point.

    uvicorn oee_engine.api.main:app --port 8010

Point values come from ``OEE_POINTS_FILE`` (JSON object) and
``OEE_WITH_COUNTER=1`` also runs the pulse counter. The engine loop starts
with the app and stops on shutdown.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from ..cli import build_store, load_points
from ..common.config import Settings, get_settings
from ..counter import CounterConfig, PulseCounterService
from ..engine import OEEEngine
from . import create_app

logger = logging.getLogger(__name__)


def build_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    store = build_store(load_points(settings.points_file), with_counter=settings.with_counter)
    engine = OEEEngine(store, settings)
    counter = (
        PulseCounterService(store, CounterConfig.from_settings(settings))
        if settings.with_counter else None
    )

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        if counter is not None:
            counter.start()
        engine.start()
        logger.info("[API] Engine loop started")
        try:
            yield
        finally:
            engine.stop()
            if counter is not None:
                counter.stop()
            logger.info("[API] Engine loop stopped")

    return create_app(engine, counter, lifespan=lifespan)


app = build_app()
