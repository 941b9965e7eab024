"""
Tests for the payroll and payroll settings services
"""
from datetime import date
from decimal import Decimal

import pytest
from fastapi import HTTPException
from sqlalchemy.orm import Session

from attendance_payroll.core.exceptions import EmployeeNotFound, InvalidPeriod
from attendance_payroll.engine.calendar_resolver import Holiday, PayrollSettings
from attendance_payroll.engine.records import AttendanceStatus
from attendance_payroll.models.audit_log import AuditLog
from attendance_payroll.models.employee import Employee, Role
from attendance_payroll.services import attendance_service
from attendance_payroll.services.payroll_service import payroll_for_all, payroll_for_employee
from attendance_payroll.services.settings_service import get_payroll_settings, update_payroll_settings


def make_employee(db: Session, emp_code, name, role=Role.EMPLOYEE, salary=30000, active=True):
    emp = Employee(emp_code=emp_code, name=name, role=role.value, salary=salary, active=active)
    db.add(emp)
    db.commit()
    db.refresh(emp)
    return emp


@pytest.fixture
def owner(db: Session):
    return make_employee(db, "OWN001", "Owner", role=Role.OWNER, salary=None)


@pytest.fixture
def employee(db: Session):
    return make_employee(db, "EMP001", "Asha")


def mark(db, actor, employee, days, status=AttendanceStatus.PRESENT, month=4):
    for d in days:
        attendance_service.manual_set(
            db, actor_id=actor.id, employee_id=employee.id,
            work_date=date(2024, month, d), status=status,
        )


# --- settings ---


def test_settings_default_when_not_configured(db):
    assert get_payroll_settings(db) == PayrollSettings.default()


def test_update_settings_merges_fields(db, owner):
    update_payroll_settings(db, off_days=[0, 6], actor_id=owner.id)
    updated = update_payroll_settings(
        db, holidays=[Holiday(date(2024, 4, 10), "Eid")], actor_id=owner.id
    )

    assert updated.off_days == (0, 6)
    assert updated.holidays == (Holiday(date(2024, 4, 10), "Eid"),)
    assert db.query(AuditLog).filter(AuditLog.action == "PAYROLL_SETTINGS_UPDATE").count() == 2


def test_holidays_list_replaces_previous(db, owner):
    update_payroll_settings(db, holidays=[Holiday(date(2024, 4, 10), "Eid")], actor_id=owner.id)
    updated = update_payroll_settings(db, holidays=[Holiday(date(2024, 4, 14), "New Year")], actor_id=owner.id)
    assert [h.date for h in updated.holidays] == [date(2024, 4, 14)]

    cleared = update_payroll_settings(db, holidays=[], actor_id=owner.id)
    assert cleared.holidays == ()


def test_invalid_off_day_rejected(db, owner):
    with pytest.raises(HTTPException) as exc:
        update_payroll_settings(db, off_days=[7], actor_id=owner.id)
    assert exc.value.status_code == 400


def test_duplicate_holiday_rejected(db, owner):
    holidays = [Holiday(date(2024, 4, 10), "Eid"), Holiday(date(2024, 4, 10), "Again")]
    with pytest.raises(HTTPException) as exc:
        update_payroll_settings(db, holidays=holidays, actor_id=owner.id)
    assert exc.value.status_code == 400


# --- payroll ---


def test_payroll_for_employee_uses_stored_settings(db, owner, employee):
    update_payroll_settings(db, holidays=[Holiday(date(2024, 4, 10), "Eid")], actor_id=owner.id)
    working = [d for d in range(1, 31) if d not in (7, 14, 21, 28, 10)]
    mark(db, owner, employee, working[:20])

    result = payroll_for_employee(db, employee.id, 2024, 4)

    assert result.working_days == 25
    assert result.paid_days == 25
    assert result.calculated_salary == 25000
    assert result.base_salary == Decimal("30000")
    assert result.name == "Asha"


def test_payroll_counts_half_days(db, owner, employee):
    mark(db, owner, employee, [1, 2])
    mark(db, owner, employee, [3], status=AttendanceStatus.HALF_DAY)

    result = payroll_for_employee(db, employee.id, 2024, 4)

    assert result.stats.present == 2
    assert result.stats.half_day == 1
    assert result.paid_days == 2 + 0.5 + 4


def test_payroll_ignores_other_months(db, owner, employee):
    mark(db, owner, employee, [30], month=3)
    mark(db, owner, employee, [1], month=5)
    assert payroll_for_employee(db, employee.id, 2024, 4).paid_days == 4


def test_payroll_unknown_employee(db):
    with pytest.raises(EmployeeNotFound):
        payroll_for_employee(db, 12345, 2024, 4)


def test_payroll_invalid_month(db, employee):
    with pytest.raises(InvalidPeriod):
        payroll_for_employee(db, employee.id, 2024, 13)


def test_payroll_for_all_skips_owners_and_inactive(db, owner, employee):
    make_employee(db, "EMP002", "Bala", salary=45000)
    make_employee(db, "EMP003", "Chitra", active=False)
    make_employee(db, "ADM001", "Admin", role=Role.ADMIN, salary=60000)

    results = payroll_for_all(db, 2024, 4, working_days_override=24)

    assert [r.name for r in results] == ["Admin", "Asha", "Bala"]
    assert all(r.working_days == 24 for r in results)
    # nobody attended: only the 4 Sundays are paid
    assert [r.calculated_salary for r in results] == [8000, 4000, 6000]
