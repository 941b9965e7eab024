"""
Attendance record model: one row per employee per work date, plus its breaks.
"""
from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey, Boolean, Text, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from attendance_payroll.db.base import Base
from attendance_payroll.engine.records import AttendanceStatus


class AttendanceRecord(Base):
    __tablename__ = "attendance_records"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id"), nullable=False, index=True)
    work_date = Column(Date, nullable=False, index=True)  # reference-timezone date
    status = Column(
        SQLEnum(
            AttendanceStatus,
            name="attendance_status",
            native_enum=False,
            length=20,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=AttendanceStatus.PRESENT,
    )
    check_in_at = Column(DateTime(timezone=True), nullable=True)  # UTC
    check_out_at = Column(DateTime(timezone=True), nullable=True)  # UTC
    total_break_time = Column(Integer, nullable=False, default=0)  # minutes
    total_work_time = Column(Integer, nullable=False, default=0)  # minutes
    is_half_day = Column(Boolean, nullable=False, default=False)
    note = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), onupdate=func.current_timestamp(), nullable=False)

    __table_args__ = (
        UniqueConstraint("employee_id", "work_date", name="uq_attendance_employee_work_date"),
    )

    employee = relationship("Employee", backref="attendance_records")
    breaks = relationship(
        "AttendanceBreak",
        back_populates="record",
        order_by="AttendanceBreak.start_at",
        cascade="all, delete-orphan",
    )


class AttendanceBreak(Base):
    __tablename__ = "attendance_breaks"

    id = Column(Integer, primary_key=True, index=True)
    record_id = Column(Integer, ForeignKey("attendance_records.id"), nullable=False, index=True)
    start_at = Column(DateTime(timezone=True), nullable=False)
    end_at = Column(DateTime(timezone=True), nullable=True)  # NULL while the break is open

    record = relationship("AttendanceRecord", back_populates="breaks")
