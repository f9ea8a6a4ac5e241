"""
Cheese Catalog Backend — Health Check Route
=============================================

What:  Liveness endpoint for Docker health checks and load balancers.
How:   Answers a fixed {"healthy": true} payload. It does not probe the
       database; an error while building the response surfaces as a 500
       through the global exception handlers.
"""

import logging

from fastapi import APIRouter

from cheese_api.config import settings
from cheese_api.schemas.cheese import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix=settings.api_prefix, tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={500: {"description": "Internal failure"}},
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(healthy=True)
