"""Health and readiness endpoints."""

from fastapi import APIRouter, HTTPException, Request

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    """Liveness check: ok while the process is up."""
    return {"status": "ok"}


@router.get("/ready")
def ready(request: Request):
    """Readiness check: the calculation loop must be alive."""
    engine = request.app.state.engine
    if not engine.is_running:
        raise HTTPException(status_code=503, detail="not ready")
    return {"status": "ready"}
