"""Diagnostics endpoints for the OEE engine.

Read-only views over the last tick and the engine's internal state, plus
a reset of the output registry for when an operator fixed a host output
and does not want to wait for the retry cooldown.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request

from ..schemas import DiagnosticsOut, OEEStatusOut

router = APIRouter(prefix="/oee", tags=["diagnostics"])
logger = logging.getLogger(__name__)


@router.get("/status", response_model=OEEStatusOut)
def get_status(request: Request):
    """Last calculation result.

    Returns 404 until the engine has completed its first tick.
    """
    result = request.app.state.engine.last_result
    if result is None:
        raise HTTPException(status_code=404, detail="no calculation yet")
    return result.to_dict()


@router.get("/diagnostics", response_model=DiagnosticsOut)
def get_diagnostics(request: Request):
    """Engine, writer, configuration cache and activity state."""
    engine = request.app.state.engine
    counter = getattr(request.app.state, "counter", None)
    return {
        "engine": engine.get_stats(),
        "writer": engine.writer.get_stats(),
        "configuration": engine.config.to_dict(),
        "activity": engine.activity.to_dict(),
        "trending": engine.trending.get_stats(),
        "counter": counter.get_stats() if counter is not None else None,
    }


@router.post("/outputs/reset")
def reset_outputs(request: Request):
    engine = request.app.state.engine
    engine.reset_outputs()
    logger.info("[API] Output registry reset requested")
    return {"status": "reset", "writer": engine.writer.get_stats()}
