"""
Health Check Route

Simple health check endpoint for liveness checks.
"""

from fastapi import APIRouter, Request

from api.models.responses import HealthResponse


router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """
    Health check endpoint.

    Returns service status for liveness checks. `bundle_loaded` is false
    until a bundle has been supplied or read from disk.
    """
    return HealthResponse(
        ok=True,
        service="merkle-distributor-api",
        version="v1",
        bundle_loaded=getattr(request.app.state, "bundle", None) is not None,
    )


@router.get("/", response_model=HealthResponse)
async def root(request: Request) -> HealthResponse:
    """
    Root endpoint - same as health check.
    """
    return await health_check(request)
