"""
Health check and version endpoints
"""
from fastapi import APIRouter
from attendance_payroll.core.config import settings
from attendance_payroll.core.constants import SERVICE_NAME

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint

    Returns service status.
    """
    return {
        "status": "ok",
        "service": SERVICE_NAME,
    }


@router.get("/version")
async def get_version():
    """Application version, environment and reference timezone"""
    return {
        "service": SERVICE_NAME,
        "version": settings.VERSION or "1.0.0",
        "env": settings.APP_ENV,
        "tz": settings.REFERENCE_TZ,
    }
