import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from rsvp_app.api.deps import StoreDep
from rsvp_app.core.config import settings
from rsvp_app.core.errors import StoreError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", summary="Health check", tags=["health"])
def read_health() -> dict[str, str]:
    """Return basic service health information."""
    return {"status": "ok"}


@router.get("/ready", summary="Readiness check", tags=["health"])
def read_ready(store: StoreDep):
    """Check if the store answers (readiness check)."""
    try:
        store.ping()
        return {"status": "ready", "store": "connected"}
    except StoreError as e:
        logger.warning(f"Readiness check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "store": "disconnected",
                "error": str(e) if settings.ENVIRONMENT != "production" else "Store connection failed",
            },
        )
