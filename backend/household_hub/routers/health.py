"""
Readiness probe.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from household_hub.config import Settings
from household_hub.core.readiness import ReadinessState
from household_hub.dependencies import get_readiness, get_settings
from household_hub.schemas import HealthResponse

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
def health(
    readiness: ReadinessState = Depends(get_readiness),
    app_settings: Settings = Depends(get_settings),
):
    """200 once startup has finished, 503 before that and during shutdown."""
    ready = readiness.ready
    return JSONResponse(
        status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ready" if ready else "not ready",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": app_settings.APP_VERSION,
            "domain": app_settings.APP_DOMAIN,
        },
    )
