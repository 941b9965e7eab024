"""
Audit logging service
"""
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from attendance_payroll.models.audit_log import AuditLog
from attendance_payroll.utils.datetime_utils import now_utc
from attendance_payroll.utils.json_serializer import sanitize_for_json


def log_audit(
    db: Session,
    actor_id: int,
    action: str,
    entity_type: str,
    entity_id: Optional[int] = None,
    meta: Optional[Dict[str, Any]] = None,
    commit: bool = True,
) -> AuditLog:
    """
    Create an audit log entry

    Args:
        db: Database session
        actor_id: ID of the employee performing the action
        action: Action type (e.g., "ATTENDANCE_CHECK_IN", "ATTENDANCE_MANUAL_SET")
        entity_type: Type of entity (e.g., "attendance_records", "payroll_settings")
        entity_id: ID of the affected entity (optional)
        meta: Additional metadata (optional), stored JSON-safe
        commit: Commit immediately; pass False to join the caller's transaction
    """
    audit_log = AuditLog(
        actor_id=actor_id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        meta_json=sanitize_for_json(meta) if meta is not None else None,
        created_at=now_utc(),
    )
    db.add(audit_log)
    if commit:
        db.commit()
        db.refresh(audit_log)
    return audit_log
