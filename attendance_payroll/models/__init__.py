"""
Database models
"""
from attendance_payroll.models.employee import Employee, Role
from attendance_payroll.models.audit_log import AuditLog
from attendance_payroll.models.attendance import AttendanceRecord, AttendanceBreak
from attendance_payroll.models.payroll_setting import PayrollSetting, PayrollHoliday

__all__ = [
    "Employee",
    "Role",
    "AuditLog",
    "AttendanceRecord",
    "AttendanceBreak",
    "PayrollSetting",
    "PayrollHoliday",
]
