"""
Dependencies and guards for FastAPI endpoints
"""
from typing import Generator

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from attendance_payroll.db.session import SessionLocal
from attendance_payroll.core.permissions import has_capability
from attendance_payroll.core.security import decode_token
from attendance_payroll.models.employee import Employee


security = HTTPBearer()


def get_db() -> Generator:
    """Dependency for getting database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> Employee:
    """
    Get current authenticated user from JWT token
    """
    token = credentials.credentials

    try:
        payload = decode_token(token)
        sub_value = payload.get("sub")
        if sub_value is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid authentication credentials",
                headers={"WWW-Authenticate": "Bearer"},
            )
        # sub is a string in the token
        employee_id: int = int(sub_value)
    except (ValueError, TypeError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if employee is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not employee.active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user"
        )

    return employee


def ensure_capability(actor: Employee, action: str, resource_owner_id: int = None) -> None:
    """Raise 403 unless `actor` holds `action` on the resource"""
    if not has_capability(actor, action, resource_owner_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Access denied. Missing capability: {action}"
        )


def require_capability(action: str):
    """
    Dependency factory for capability checks on endpoints without a resource owner

    Usage:
        @router.get("/payroll/all")
        async def run(user: Employee = Depends(require_capability(CAP_PAYROLL_RUN))):
            ...
    """
    def capability_checker(current_user: Employee = Depends(get_current_user)) -> Employee:
        ensure_capability(current_user, action)
        return current_user
    return capability_checker
