"""
Audit log model: who changed attendance records or payroll settings, and how.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, Index
from attendance_payroll.db.base import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    actor_id = Column(Integer, ForeignKey("employees.id"), nullable=False)
    action = Column(String, nullable=False)  # ATTENDANCE_CHECK_IN, ATTENDANCE_MANUAL_SET, PAYROLL_SETTINGS_UPDATE, ...
    entity_type = Column(String, nullable=False)  # attendance_records | payroll_settings
    entity_id = Column(Integer, nullable=True)
    meta_json = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("ix_audit_logs_entity", "entity_type", "entity_id"),
    )
