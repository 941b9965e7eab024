"""
Main API router
"""
from fastapi import APIRouter

from attendance_payroll.api.v1 import (
    health,
    auth,
    employees,
    attendance,
    payroll,
    settings,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(employees.router, prefix="/employees", tags=["employees"])
api_router.include_router(attendance.router, prefix="/attendance", tags=["attendance"])
api_router.include_router(payroll.router, prefix="/payroll", tags=["payroll"])
api_router.include_router(settings.router, prefix="/settings", tags=["settings"])
