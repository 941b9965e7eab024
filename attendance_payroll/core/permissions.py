"""
Capability predicate used by every endpoint instead of inline role checks.

ADMIN and OWNER hold every capability. Other roles hold only the self-service
capabilities, and only on resources they own.
"""
from typing import Optional

from attendance_payroll.core.constants import (
    CAP_ATTENDANCE_SELF,
    CAP_ATTENDANCE_VIEW,
    CAP_PAYROLL_VIEW,
    CAP_SETTINGS_VIEW,
    ROLE_ADMIN,
    ROLE_OWNER,
)

PRIVILEGED_ROLES = frozenset({ROLE_ADMIN, ROLE_OWNER})

# granted to everyone, on their own records only
SELF_SERVICE = frozenset({CAP_ATTENDANCE_SELF, CAP_ATTENDANCE_VIEW, CAP_PAYROLL_VIEW})

# granted to every authenticated user regardless of ownership
AUTHENTICATED = frozenset({CAP_SETTINGS_VIEW})


def role_name(role) -> str:
    """Role as an upper-case string, whether stored as enum or plain string"""
    value = role.value if hasattr(role, "value") else str(role)
    return value.upper()


def has_capability(actor, action: str, resource_owner_id: Optional[int] = None) -> bool:
    """
    Whether `actor` may perform `action`

    Args:
        actor: Authenticated employee (needs id and role)
        action: Capability name (core.constants.CAP_*)
        resource_owner_id: Employee that owns the target resource, if any
    """
    if actor is None:
        return False
    if role_name(actor.role) in PRIVILEGED_ROLES:
        return True
    if action in AUTHENTICATED:
        return True
    if action in SELF_SERVICE:
        return resource_owner_id is not None and resource_owner_id == actor.id
    return False
