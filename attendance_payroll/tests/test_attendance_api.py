"""
Tests for attendance endpoints
"""
import pytest
from fastapi import status
from sqlalchemy.orm import Session

from attendance_payroll.core.security import hash_password
from attendance_payroll.models.employee import Employee, Role
from attendance_payroll.utils.datetime_utils import work_date_for


@pytest.fixture
def test_employee(db: Session):
    employee = Employee(
        emp_code="EMP001",
        name="Test Employee",
        role=Role.EMPLOYEE.value,
        salary=30000,
        password_hash=hash_password("testpass123"),
        active=True,
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


@pytest.fixture
def other_employee(db: Session):
    employee = Employee(
        emp_code="EMP002",
        name="Other Employee",
        role=Role.EMPLOYEE.value,
        password_hash=hash_password("otherpass123"),
        active=True,
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


@pytest.fixture
def test_admin(db: Session):
    admin = Employee(
        emp_code="ADM001",
        name="Admin",
        role=Role.ADMIN.value,
        password_hash=hash_password("adminpass123"),
        active=True,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


def get_auth_token(client, emp_code, password):
    """Helper to get auth token"""
    response = client.post(
        "/api/v1/auth/login",
        json={"emp_code": emp_code, "password": password}
    )
    return response.json()["access_token"]


def auth(client, emp_code, password):
    return {"Authorization": f"Bearer {get_auth_token(client, emp_code, password)}"}


def test_check_in_success(client, test_employee):
    headers = auth(client, "EMP001", "testpass123")
    response = client.post("/api/v1/attendance/check-in", headers=headers)

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["employee_id"] == test_employee.id
    assert data["status"] == "present"
    assert data["work_date"] == work_date_for().isoformat()
    assert data["check_out_at"] is None
    assert data["breaks"] == []
    # datetimes are emitted with the reference timezone offset
    assert data["check_in_at"].endswith("+05:30")


def test_check_in_twice_rejected(client, test_employee):
    headers = auth(client, "EMP001", "testpass123")
    assert client.post("/api/v1/attendance/check-in", headers=headers).status_code == 201

    response = client.post("/api/v1/attendance/check-in", headers=headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    body = response.json()
    assert body["error"] is True
    assert body["code"] == "AlreadyCheckedIn"
    assert body["detail"] == "Already checked in today"
    assert body["path"] == "/api/v1/attendance/check-in"


def test_full_flow(client, test_employee):
    headers = auth(client, "EMP001", "testpass123")
    client.post("/api/v1/attendance/check-in", headers=headers)

    response = client.post("/api/v1/attendance/break-start", headers=headers)
    assert response.status_code == 200
    assert response.json()["status"] == "on-break"
    assert len(response.json()["breaks"]) == 1

    response = client.post("/api/v1/attendance/check-out", headers=headers)
    assert response.status_code == 400
    assert response.json()["code"] == "OnBreakCannotCheckOut"

    response = client.post("/api/v1/attendance/break-end", headers=headers)
    assert response.status_code == 200
    assert response.json()["status"] == "present"
    assert response.json()["breaks"][0]["end_at"] is not None

    response = client.post("/api/v1/attendance/check-out", headers=headers)
    assert response.status_code == 200
    data = response.json()
    # checked out within minutes of checking in
    assert data["is_half_day"] is True
    assert data["status"] == "half-day"
    assert data["check_out_at"] is not None

    response = client.post("/api/v1/attendance/check-out", headers=headers)
    assert response.status_code == 400
    assert response.json()["code"] == "AlreadyCheckedOut"


def test_break_end_without_break(client, test_employee):
    headers = auth(client, "EMP001", "testpass123")
    client.post("/api/v1/attendance/check-in", headers=headers)
    response = client.post("/api/v1/attendance/break-end", headers=headers)
    assert response.status_code == 400
    assert response.json()["code"] == "NotOnBreak"


def test_check_out_without_check_in(client, test_employee):
    headers = auth(client, "EMP001", "testpass123")
    response = client.post("/api/v1/attendance/check-out", headers=headers)
    assert response.status_code == 400
    assert response.json()["code"] == "NotCheckedIn"


def test_today_absent_when_no_record(client, test_employee):
    headers = auth(client, "EMP001", "testpass123")
    response = client.get(f"/api/v1/attendance/today/{test_employee.id}", headers=headers)
    assert response.status_code == 200
    assert response.json()["status"] == "absent"


def test_today_after_check_in(client, test_employee):
    headers = auth(client, "EMP001", "testpass123")
    client.post("/api/v1/attendance/check-in", headers=headers)
    response = client.get(f"/api/v1/attendance/today/{test_employee.id}", headers=headers)
    assert response.status_code == 200
    assert response.json()["status"] == "present"


def test_employee_cannot_read_other_employee(client, test_employee, other_employee):
    headers = auth(client, "EMP001", "testpass123")
    response = client.get(f"/api/v1/attendance/today/{other_employee.id}", headers=headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN

    response = client.get(f"/api/v1/attendance/history/{other_employee.id}", headers=headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_admin_reads_any_employee(client, test_employee, test_admin):
    client.post("/api/v1/attendance/check-in", headers=auth(client, "EMP001", "testpass123"))

    headers = auth(client, "ADM001", "adminpass123")
    response = client.get(f"/api/v1/attendance/history/{test_employee.id}", headers=headers)
    assert response.status_code == 200
    assert len(response.json()) == 1


def test_manual_set_requires_admin(client, test_employee):
    headers = auth(client, "EMP001", "testpass123")
    response = client.post(
        "/api/v1/attendance/manual",
        json={"employee_id": test_employee.id, "date": "2024-04-03", "status": "present"},
        headers=headers,
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_manual_set_and_monthly_listing(client, test_employee, test_admin):
    headers = auth(client, "ADM001", "adminpass123")
    response = client.post(
        "/api/v1/attendance/manual",
        json={"employee_id": test_employee.id, "date": "2024-04-03", "status": "half-day", "note": "left early"},
        headers=headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "half-day"
    assert data["is_half_day"] is True
    assert data["work_date"] == "2024-04-03"
    assert data["check_in_at"] == "2024-04-03T00:00:00+05:30"

    response = client.post(
        "/api/v1/attendance/manual",
        json={"employee_id": test_employee.id, "date": "2024-04-03", "status": "present"},
        headers=headers,
    )
    assert response.json()["id"] == data["id"]
    assert response.json()["status"] == "present"
    assert response.json()["is_half_day"] is False

    response = client.get("/api/v1/attendance/monthly?year=2024&month=4", headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 1
    assert body["items"][0]["status"] == "present"


def test_manual_set_unknown_employee(client, test_admin):
    headers = auth(client, "ADM001", "adminpass123")
    response = client.post(
        "/api/v1/attendance/manual",
        json={"employee_id": 999, "date": "2024-04-03", "status": "present"},
        headers=headers,
    )
    assert response.status_code == 404
    assert response.json()["code"] == "EmployeeNotFound"


def test_manual_set_rejects_unknown_status(client, test_employee, test_admin):
    headers = auth(client, "ADM001", "adminpass123")
    response = client.post(
        "/api/v1/attendance/manual",
        json={"employee_id": test_employee.id, "date": "2024-04-03", "status": "holiday"},
        headers=headers,
    )
    assert response.status_code == 422


def test_monthly_invalid_month(client, test_admin):
    headers = auth(client, "ADM001", "adminpass123")
    response = client.get("/api/v1/attendance/monthly?year=2024&month=13", headers=headers)
    assert response.status_code == 400
    assert response.json()["code"] == "InvalidPeriod"


def test_requires_authentication(client):
    response = client.post("/api/v1/attendance/check-in")
    assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)
