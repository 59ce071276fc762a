"""
Health Check Handler

Provides health check endpoints for monitoring and load balancers.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from src.config.settings import settings
from src.shared.core.logging import logger
from src.shared.schemas.common import HealthResponse


router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Basic health check endpoint.

    Returns:
        HealthResponse with service status
    """
    return HealthResponse(
        status="healthy",
        service=settings.APP_NAME.lower(),
        version=settings.APP_VERSION,
    )


@router.get("/ready")
async def readiness_check(request: Request):
    """
    Readiness check for Kubernetes/load balancers.

    Ready only when the database answers.
    """
    try:
        await request.app.state.database.ping()
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Readiness check failed", error=str(e))
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "ready"}


@router.get("/live")
async def liveness_check():
    """
    Liveness check for Kubernetes.

    Returns:
        Simple alive status
    """
    return {"status": "alive"}
