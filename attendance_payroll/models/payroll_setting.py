"""
Payroll settings models: weekly off-days and named holidays
"""
from sqlalchemy import Column, Integer, Date, DateTime, String, JSON
from sqlalchemy.sql import func
from attendance_payroll.db.base import Base


class PayrollSetting(Base):
    __tablename__ = "payroll_settings"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String, unique=True, nullable=False, default="general")
    off_days = Column(JSON, nullable=False, default=lambda: [0])  # weekday indices, 0 = Sunday
    updated_by = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), onupdate=func.current_timestamp(), nullable=False)


class PayrollHoliday(Base):
    __tablename__ = "payroll_holidays"

    id = Column(Integer, primary_key=True, index=True)
    date = Column(Date, unique=True, nullable=False, index=True)
    label = Column(String(255), nullable=False, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
