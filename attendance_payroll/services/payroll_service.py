"""
Payroll service: fetch employees, month records and settings, then run the
pure monthly aggregator.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from attendance_payroll.core.exceptions import EmployeeNotFound
from attendance_payroll.engine.payroll import PayrollResult, compute_payroll, compute_payroll_batch
from attendance_payroll.models.employee import Employee, Role
from attendance_payroll.services.attendance_service import list_month, snapshots_by_employee
from attendance_payroll.services.settings_service import get_payroll_settings

_log = logging.getLogger(__name__)


def payroll_for_employee(
    db: Session,
    employee_id: int,
    year: int,
    month: int,
    working_days_override: Optional[int] = None,
) -> PayrollResult:
    """
    Payroll line for one employee

    Raises:
        EmployeeNotFound: If no employee has this id
        InvalidPeriod: If year/month is missing or invalid
    """
    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if employee is None:
        raise EmployeeNotFound(f"Employee with id {employee_id} not found")

    rows = list_month(db, year, month, employee_ids=[employee_id])
    result = compute_payroll(
        employee,
        year,
        month,
        snapshots_by_employee(rows).get(employee_id, []),
        get_payroll_settings(db),
        working_days_override,
    )
    _log.debug(
        "payroll: employee_id=%s period=%04d-%02d paid_days=%s salary=%s",
        employee_id, year, month, result.paid_days, result.calculated_salary,
    )
    return result


def payroll_for_all(
    db: Session,
    year: int,
    month: int,
    working_days_override: Optional[int] = None,
) -> List[PayrollResult]:
    """Payroll lines for every active employee except owners"""
    employees = (
        db.query(Employee)
        .filter(Employee.active == True, Employee.role != Role.OWNER.value)  # noqa: E712
        .order_by(Employee.name, Employee.id)
        .all()
    )
    rows = list_month(db, year, month, employee_ids=[e.id for e in employees])
    results = compute_payroll_batch(
        employees,
        year,
        month,
        snapshots_by_employee(rows),
        get_payroll_settings(db),
        working_days_override,
    )
    _log.info(
        "payroll run: period=%04d-%02d employees=%d records=%d",
        year, month, len(results), len(rows),
    )
    return results
