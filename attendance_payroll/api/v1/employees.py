"""
Employee management endpoints
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from attendance_payroll.core.constants import CAP_EMPLOYEES_MANAGE
from attendance_payroll.core.deps import get_current_user, get_db, require_capability
from attendance_payroll.models.employee import Employee
from attendance_payroll.schemas.employee import EmployeeCreate, EmployeeOut, EmployeeUpdate
from attendance_payroll.services import employee_service

router = APIRouter()


@router.post("", response_model=EmployeeOut, status_code=201)
async def create_employee_endpoint(
    employee_data: EmployeeCreate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_capability(CAP_EMPLOYEES_MANAGE)),
):
    """Create an employee (ADMIN/OWNER)."""
    return employee_service.create_employee(db, employee_data, current_user)


@router.get("/me", response_model=EmployeeOut)
async def get_me_endpoint(current_user: Employee = Depends(get_current_user)):
    return current_user


@router.get("", response_model=List[EmployeeOut])
async def list_employees_endpoint(
    active: Optional[bool] = Query(None, description="Filter by active status"),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_capability(CAP_EMPLOYEES_MANAGE)),
):
    return employee_service.list_employees(db, active=active)


@router.get("/{employee_id}", response_model=EmployeeOut)
async def get_employee_endpoint(
    employee_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_capability(CAP_EMPLOYEES_MANAGE)),
):
    return employee_service.get_employee(db, employee_id)


@router.patch("/{employee_id}", response_model=EmployeeOut)
async def update_employee_endpoint(
    employee_id: int,
    employee_data: EmployeeUpdate,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_capability(CAP_EMPLOYEES_MANAGE)),
):
    """Partial update, including salary and active flag (ADMIN/OWNER)."""
    return employee_service.update_employee(db, employee_id, employee_data, current_user)
