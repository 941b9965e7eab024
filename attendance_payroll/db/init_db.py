"""
Database initialization
Helper function to seed the first OWNER account and default payroll settings
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from attendance_payroll.core.constants import DEFAULT_OFF_DAYS, SETTINGS_KEY
from attendance_payroll.core.security import hash_password
from attendance_payroll.models.employee import Employee, Role
from attendance_payroll.models.payroll_setting import PayrollSetting

logger = logging.getLogger(__name__)


def init_db(
    db: Session,
    password: str,
    emp_code: str = "OWN-001",
    name: str = "Owner",
) -> Optional[Employee]:
    """
    Create the initial OWNER and the default payroll settings row if missing

    This is a helper function and should NOT be auto-run on startup.
    Call manually (init_admin.py) when setting up a new database.

    Returns:
        The created owner, or None when an owner already exists
    """
    if db.query(PayrollSetting).filter(PayrollSetting.key == SETTINGS_KEY).first() is None:
        db.add(PayrollSetting(key=SETTINGS_KEY, off_days=list(DEFAULT_OFF_DAYS)))
        logger.info("Default payroll settings created: off_days=%s", list(DEFAULT_OFF_DAYS))

    existing = db.query(Employee).filter(Employee.role == Role.OWNER.value).first()
    if existing:
        db.commit()
        logger.info("Owner already exists (%s), skipping initialization", existing.emp_code)
        return None

    owner = Employee(
        emp_code=emp_code,
        name=name,
        role=Role.OWNER.value,
        password_hash=hash_password(password),
        active=True,
    )
    db.add(owner)
    db.commit()
    db.refresh(owner)
    logger.info("Initial owner created: emp_code=%s", emp_code)
    return owner
