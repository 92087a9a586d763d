"""
VerseNotes Backend — Health Check Route
=========================================

What:  Liveness endpoint for load balancers and container health checks.
How:   Static answer: if the process can route this request, it is alive.
       The database is deliberately not probed here.
"""

import time

from fastapi import APIRouter

from versenotes import __version__
from versenotes.schemas.common import HealthResponse

router = APIRouter(prefix="/api", tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service liveness check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        message="Server is running",
        version=__version__,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
