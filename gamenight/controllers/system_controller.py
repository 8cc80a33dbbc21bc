# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: System endpoints — health, readiness, metrics.
"""

from datetime import datetime, timezone

from fastapi import APIRouter
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from gamenight.core.config import settings
from gamenight.core.dependencies import get_event_bus, get_game_repo, get_user_repo

router = APIRouter(tags=["System"])


@router.get("/health")
def health_check():
    """Liveness probe."""
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "games_count": get_game_repo().count(),
        "users_count": get_user_repo().count(),
    }


@router.get("/health/ready")
def readiness_check():
    return {
        "status": "ready",
        "service": settings.SERVICE_NAME,
        "persistent": bool(settings.DATA_DIR),
        "pending_notifications": get_event_bus().pending(),
    }


@router.get("/metrics")
def prometheus_metrics():
    """Expose Prometheus metrics in text exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
