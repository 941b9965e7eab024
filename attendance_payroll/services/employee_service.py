"""
Employee service - business logic for employee management
"""
import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from attendance_payroll.core.exceptions import EmployeeNotFound
from attendance_payroll.core.permissions import role_name
from attendance_payroll.core.security import hash_password
from attendance_payroll.models.employee import Employee, Role
from attendance_payroll.schemas.employee import EmployeeCreate, EmployeeUpdate
from attendance_payroll.services.audit_service import log_audit

_log = logging.getLogger(__name__)


def _check_role_grant(actor: Employee, role: Role) -> None:
    """Only an OWNER may create or promote another OWNER"""
    if role == Role.OWNER and role_name(actor.role) != Role.OWNER.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only an OWNER can grant the OWNER role",
        )


def create_employee(db: Session, employee_data: EmployeeCreate, actor: Employee) -> Employee:
    """
    Create a new employee

    Raises:
        HTTPException: If emp_code is taken or the actor may not grant the role
    """
    existing = db.query(Employee).filter(Employee.emp_code == employee_data.emp_code).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Employee with emp_code '{employee_data.emp_code}' already exists"
        )
    _check_role_grant(actor, employee_data.role)

    employee = Employee(
        emp_code=employee_data.emp_code,
        name=employee_data.name,
        email=employee_data.email,
        role=employee_data.role.value,
        designation=employee_data.designation,
        salary=employee_data.salary,
        password_hash=hash_password(employee_data.password) if employee_data.password else None,
        active=employee_data.active,
    )
    db.add(employee)
    db.flush()

    log_audit(
        db=db,
        actor_id=actor.id,
        action="EMPLOYEE_CREATE",
        entity_type="employees",
        entity_id=employee.id,
        meta={"emp_code": employee.emp_code, "role": employee.role, "salary": employee.salary},
        commit=False,
    )
    db.commit()
    db.refresh(employee)
    _log.info("employee created: id=%s emp_code=%s role=%s", employee.id, employee.emp_code, employee.role)
    return employee


def get_employee(db: Session, employee_id: int) -> Employee:
    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if employee is None:
        raise EmployeeNotFound(f"Employee with id {employee_id} not found")
    return employee


def list_employees(db: Session, active: Optional[bool] = None) -> List[Employee]:
    query = db.query(Employee)
    if active is not None:
        query = query.filter(Employee.active == active)
    return query.order_by(Employee.name, Employee.id).all()


def update_employee(
    db: Session,
    employee_id: int,
    employee_data: EmployeeUpdate,
    actor: Employee,
) -> Employee:
    """Partial update; the password, when given, is re-hashed"""
    employee = get_employee(db, employee_id)
    changes = employee_data.model_dump(exclude_unset=True)

    if changes.get("role") is not None:
        _check_role_grant(actor, changes["role"])
        changes["role"] = changes["role"].value

    password = changes.pop("password", None)
    if password:
        employee.password_hash = hash_password(password)

    for field, value in changes.items():
        if value is not None or field in ("email", "designation", "salary"):
            setattr(employee, field, value)

    log_audit(
        db=db,
        actor_id=actor.id,
        action="EMPLOYEE_UPDATE",
        entity_type="employees",
        entity_id=employee.id,
        meta={"fields": sorted(changes) + (["password"] if password else [])},
        commit=False,
    )
    db.commit()
    db.refresh(employee)
    return employee
