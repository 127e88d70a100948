"""
Health and metrics API routes.
"""
from fastapi import APIRouter, Response, status
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST

from taskmind.dependencies.services import get_services
from taskmind.monitoring import get_health_info, get_metrics

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Health check with component status (database, AI oracle)."""
    services = get_services()
    health_info = get_health_info(services.store, services.oracle_enabled)

    if health_info.get("status") == "unhealthy":
        return JSONResponse(content=health_info, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    return health_info


@router.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint."""
    return Response(content=get_metrics(), media_type=CONTENT_TYPE_LATEST)
