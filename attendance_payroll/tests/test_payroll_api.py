"""
Tests for payroll and payroll settings endpoints
"""
import csv
import io
from datetime import date

import pytest
from fastapi import status
from sqlalchemy.orm import Session

from attendance_payroll.core.security import hash_password
from attendance_payroll.engine.records import AttendanceStatus
from attendance_payroll.models.employee import Employee, Role
from attendance_payroll.services import attendance_service
from attendance_payroll.utils.datetime_utils import current_period


def _employee(db: Session, emp_code, name, role, password, salary=None):
    employee = Employee(
        emp_code=emp_code,
        name=name,
        role=role.value,
        salary=salary,
        password_hash=hash_password(password),
        active=True,
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


@pytest.fixture
def test_owner(db: Session):
    return _employee(db, "OWN001", "Owner", Role.OWNER, "ownerpass123")


@pytest.fixture
def test_employee(db: Session):
    return _employee(db, "EMP001", "Asha", Role.EMPLOYEE, "testpass123", salary=30000)


@pytest.fixture
def other_employee(db: Session):
    return _employee(db, "EMP002", "Bala", Role.EMPLOYEE, "otherpass123", salary=45000)


def get_auth_token(client, emp_code, password):
    """Helper to get auth token"""
    response = client.post(
        "/api/v1/auth/login",
        json={"emp_code": emp_code, "password": password}
    )
    return response.json()["access_token"]


def auth(client, emp_code, password):
    return {"Authorization": f"Bearer {get_auth_token(client, emp_code, password)}"}


@pytest.fixture
def april_attendance(db, test_owner, test_employee):
    """20 present days on April 2024 working days (Sundays off, 10th a holiday)"""
    working = [d for d in range(1, 31) if d not in (7, 14, 21, 28, 10)][:20]
    for d in working:
        attendance_service.manual_set(
            db, actor_id=test_owner.id, employee_id=test_employee.id,
            work_date=date(2024, 4, d), status=AttendanceStatus.PRESENT,
        )


def test_settings_default(client, test_employee):
    headers = auth(client, "EMP001", "testpass123")
    response = client.get("/api/v1/settings/payroll", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"off_days": [0], "holidays": []}


def test_settings_update_requires_admin(client, test_employee):
    headers = auth(client, "EMP001", "testpass123")
    response = client.patch("/api/v1/settings/payroll", json={"off_days": [0, 6]}, headers=headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_settings_merge_update(client, test_owner):
    headers = auth(client, "OWN001", "ownerpass123")
    response = client.patch(
        "/api/v1/settings/payroll",
        json={"holidays": [{"date": "2024-04-10", "label": "Eid"}]},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json() == {"off_days": [0], "holidays": [{"date": "2024-04-10", "label": "Eid"}]}

    response = client.patch("/api/v1/settings/payroll", json={"off_days": [6, 0]}, headers=headers)
    assert response.json() == {"off_days": [0, 6], "holidays": [{"date": "2024-04-10", "label": "Eid"}]}


def test_settings_invalid_off_day(client, test_owner):
    headers = auth(client, "OWN001", "ownerpass123")
    response = client.patch("/api/v1/settings/payroll", json={"off_days": [9]}, headers=headers)
    assert response.status_code == 400
    assert "Invalid off day" in response.json()["detail"]


def test_payroll_my(client, test_owner, test_employee, april_attendance):
    client.patch(
        "/api/v1/settings/payroll",
        json={"holidays": [{"date": "2024-04-10", "label": "Eid"}]},
        headers=auth(client, "OWN001", "ownerpass123"),
    )

    headers = auth(client, "EMP001", "testpass123")
    response = client.get(f"/api/v1/payroll/my/{test_employee.id}?year=2024&month=4", headers=headers)

    assert response.status_code == 200
    data = response.json()
    assert data["employee_id"] == test_employee.id
    assert data["days_in_month"] == 30
    assert data["working_days"] == 25
    assert data["paid_days"] == 25
    assert data["calculated_salary"] == 25000
    assert data["base_salary"] == 30000
    assert data["stats"] == {"present": 20, "half_day": 0, "absent": 5, "paid_days": 25}
    assert len(data["daily"]) == 30
    assert data["daily"][9] == {
        "day": 10, "date": "2024-04-10", "is_working_day": False, "status": None, "contribution": 1.0,
    }


def test_payroll_my_other_employee_forbidden(client, test_employee, other_employee):
    headers = auth(client, "EMP001", "testpass123")
    response = client.get(f"/api/v1/payroll/my/{other_employee.id}?year=2024&month=4", headers=headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_payroll_my_defaults_to_current_month(client, test_employee):
    headers = auth(client, "EMP001", "testpass123")
    response = client.get(f"/api/v1/payroll/my/{test_employee.id}", headers=headers)
    assert response.status_code == 200
    assert (response.json()["year"], response.json()["month"]) == current_period()


def test_payroll_all(client, test_owner, test_employee, other_employee, april_attendance):
    headers = auth(client, "OWN001", "ownerpass123")
    response = client.get("/api/v1/payroll/all?year=2024&month=4&working_days=22", headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 2
    items = {item["name"]: item for item in body["items"]}
    assert set(items) == {"Asha", "Bala"}
    assert items["Asha"]["working_days"] == 22
    # no holiday configured: 20 present + 4 Sundays
    assert items["Asha"]["paid_days"] == 24
    assert items["Asha"]["calculated_salary"] == 24000
    assert items["Bala"]["paid_days"] == 4
    assert items["Bala"]["calculated_salary"] == 6000
    assert items["Asha"]["daily"] == []


def test_payroll_all_requires_admin(client, test_employee):
    headers = auth(client, "EMP001", "testpass123")
    response = client.get("/api/v1/payroll/all?year=2024&month=4", headers=headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_payroll_invalid_period(client, test_owner):
    headers = auth(client, "OWN001", "ownerpass123")
    response = client.get("/api/v1/payroll/all?year=2024&month=0", headers=headers)
    assert response.status_code == 400
    assert response.json()["code"] == "InvalidPeriod"

    response = client.get("/api/v1/payroll/all?year=2024&month=4&working_days=-1", headers=headers)
    assert response.status_code == 400


def test_payroll_unknown_employee(client, test_owner):
    headers = auth(client, "OWN001", "ownerpass123")
    response = client.get("/api/v1/payroll/my/4242?year=2024&month=4", headers=headers)
    assert response.status_code == 404
    assert response.json()["code"] == "EmployeeNotFound"


def test_payroll_csv_export(client, test_owner, test_employee, april_attendance):
    headers = auth(client, "OWN001", "ownerpass123")
    response = client.get("/api/v1/payroll/all.csv?year=2024&month=4", headers=headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="payroll_2024_04.csv"' in response.headers["content-disposition"]

    rows = list(csv.DictReader(io.StringIO(response.text)))
    assert len(rows) == 1
    assert rows[0]["name"] == "Asha"
    assert rows[0]["present"] == "20"
    assert rows[0]["calculated_salary"] == "24000"
