"""
Attendance & Payroll Backend - Main Application Entry Point
"""
from urllib.parse import urlparse, urlunparse

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from attendance_payroll.api.router import api_router
from attendance_payroll.core.config import settings
from attendance_payroll.core.errors import (
    attendance_error_handler,
    generic_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from attendance_payroll.core.exceptions import AttendanceError
from attendance_payroll.core.logging import get_logger, setup_logging

# Setup logging first
setup_logging()
logger = get_logger(__name__)


def _mask_database_url(url: str) -> str:
    """Mask password in DATABASE_URL for safe logging; show full path for sqlite."""
    parsed = urlparse(url)
    if parsed.scheme.startswith("sqlite") or not parsed.password:
        return url
    netloc = f"{parsed.username}:****@{parsed.hostname or ''}"
    if parsed.port:
        netloc += f":{parsed.port}"
    return urlunparse(parsed._replace(netloc=netloc))


app = FastAPI(
    title="Attendance & Payroll Backend",
    description="Daily attendance state machine, accrual classification and monthly payroll",
    version=settings.VERSION or "1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
app.add_exception_handler(AttendanceError, attendance_error_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)


async def _operational_error_handler(request, exc: OperationalError) -> JSONResponse:
    if "no such table" in str(exc).lower():
        logger.error("Database schema missing: %s", exc)
        return JSONResponse(
            status_code=500,
            content={
                "error": True,
                "status_code": 500,
                "detail": "Run alembic upgrade head",
                "path": str(request.url.path),
            },
        )
    return await generic_exception_handler(request, exc)


app.add_exception_handler(OperationalError, _operational_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Include all API routes under /api/v1
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
def startup_log_config() -> None:
    """Log DATABASE_URL and reference timezone at startup so they can be verified against Alembic."""
    logger.info("DATABASE_URL (app): %s", _mask_database_url(settings.DATABASE_URL))
    logger.info("Reference timezone: %s", settings.REFERENCE_TZ)
