"""Health check and utility routes"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
import logging

from adapters import mongo_adapter
from api.responses import HealthResponse
from app.config import settings

router = APIRouter(tags=["Health"])
logger = logging.getLogger("shoppinglist.api.health")


@router.get("/health-check", response_model=HealthResponse)
def health_check():
    """Basic health check endpoint"""
    return HealthResponse(
        status="ok", service=settings.app_name, version=settings.app_version
    )


@router.get("/health/store")
def store_status():
    """Report whether the product store answers a ping."""
    if mongo_adapter.ping():
        return {"store": "ok"}
    logger.warning("Store readiness check failed")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"store": "unavailable"},
    )
