"""
fontseca.dev Backend — Health Check Route
===========================================

What:  Health check endpoint for monitoring and reverse proxy probes.
How:   Reports which injected services are configured. The services own their
       own storage, so this route never reaches past the service bundle.

Status levels:
    - healthy:   every service and the page renderer are configured
    - degraded:  at least one is missing (its routes answer 500)
"""

import logging
import time

from fastapi import APIRouter, Request

from fontseca import __version__
from fontseca.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    configured = request.app.state.services.configured()

    overall = "healthy"
    if not all(configured.values()):
        overall = "degraded"
        missing = sorted(name for name, ok in configured.items() if not ok)
        logger.warning("Health check: unconfigured services: %s", ", ".join(missing))

    return HealthResponse(
        status=overall,
        version=__version__,
        services=configured,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
