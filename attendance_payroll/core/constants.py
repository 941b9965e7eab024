"""
Constants for roles, attendance actions and payroll defaults
"""

SERVICE_NAME = "attendance-payroll-backend"

# Role constants
ROLE_OWNER = "OWNER"
ROLE_ADMIN = "ADMIN"
ROLE_EMPLOYEE = "EMPLOYEE"

# Capabilities checked by core.permissions.has_capability
CAP_ATTENDANCE_SELF = "attendance:self"
CAP_ATTENDANCE_VIEW = "attendance:view"
CAP_ATTENDANCE_MANAGE = "attendance:manage"
CAP_PAYROLL_VIEW = "payroll:view"
CAP_PAYROLL_RUN = "payroll:run"
CAP_SETTINGS_VIEW = "settings:view"
CAP_SETTINGS_MANAGE = "settings:manage"
CAP_EMPLOYEES_MANAGE = "employees:manage"

# Payroll defaults used when no settings row exists
DEFAULT_OFF_DAYS = (0,)  # 0 = Sunday
SETTINGS_KEY = "general"
