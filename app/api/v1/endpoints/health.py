"""Health check endpoint for load balancers and monitoring."""

import logging
import os

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.deps import get_services
from app.services.container import AppServices

logger = logging.getLogger(__name__)
router = APIRouter()

_PROBE_KEY = "__health_probe__"


@router.get("")
async def health():
    """Simple liveness check. Optionally includes built_at if BACKEND_BUILT_AT env is set."""
    payload: dict = {"status": "ok"}
    built_at = os.environ.get("BACKEND_BUILT_AT")
    if built_at:
        payload["built_at"] = built_at
    return payload


@router.get("/ready")
async def readiness(services: AppServices = Depends(get_services)):
    """Readiness: app + storage round-trip."""
    try:
        await services.store.set(_PROBE_KEY, "1")
        await services.store.delete(_PROBE_KEY)
        return {"status": "ok", "storage": "connected"}
    except Exception as e:
        logger.exception("Readiness probe failed")
        return JSONResponse(
            status_code=500,
            content={"status": "error", "storage": str(e)},
        )
