"""
Domain errors for the attendance/payroll engine.

Raised by the engine and services, rendered by core.errors.attendance_error_handler
in the same JSON envelope as HTTPException.
"""


class AttendanceError(Exception):
    """Base class for user-correctable and validation errors"""

    status_code: int = 400
    default_detail: str = "Attendance error"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    @property
    def code(self) -> str:
        return type(self).__name__


# --- Shift state machine violations ---


class AlreadyCheckedIn(AttendanceError):
    default_detail = "Already checked in today"


class AlreadyCheckedOut(AttendanceError):
    default_detail = "Already checked out"


class AlreadyOnBreak(AttendanceError):
    default_detail = "Already on break"


class NotCheckedIn(AttendanceError):
    default_detail = "No attendance record found for today"


class NotOnBreak(AttendanceError):
    default_detail = "Not on break"


class OnBreakCannotCheckOut(AttendanceError):
    default_detail = "Finish your break first"


# --- Caller-supplied invalid arguments ---


class EmployeeNotFound(AttendanceError):
    status_code = 404
    default_detail = "Employee not found"


class InvalidPeriod(AttendanceError):
    default_detail = "Invalid payroll period"


class InvalidCalendarInput(AttendanceError):
    default_detail = "Invalid year or month"
