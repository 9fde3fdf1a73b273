# marketadmin/permissions.py
"""
Role -> permission matrix.

Lookups fail closed: an unknown, empty or missing role has no permissions.
"""

import enum
from typing import FrozenSet, Optional, Union

from marketadmin.models.admin_user import AdminRole


class Permission(str, enum.Enum):
    VIEW_REPORTS = "view_reports"
    DISMISS_REPORTS = "dismiss_reports"
    WARN_USERS = "warn_users"
    REMOVE_LISTINGS = "remove_listings"
    SUSPEND_USERS = "suspend_users"
    BAN_USERS = "ban_users"
    MANAGE_ADMINS = "manage_admins"
    VIEW_AUDIT_LOG = "view_audit_log"
    SYSTEM_SETTINGS = "system_settings"


_MODERATOR = frozenset({
    Permission.VIEW_REPORTS,
    Permission.DISMISS_REPORTS,
    Permission.WARN_USERS,
    Permission.REMOVE_LISTINGS,
})

_ADMIN = _MODERATOR | {
    Permission.SUSPEND_USERS,
    Permission.BAN_USERS,
    Permission.VIEW_AUDIT_LOG,
}

_SUPER_ADMIN = frozenset(Permission)

ROLE_PERMISSIONS = {
    AdminRole.SUPER_ADMIN: _SUPER_ADMIN,
    AdminRole.ADMIN: frozenset(_ADMIN),
    AdminRole.MODERATOR: _MODERATOR,
}


def permissions_for(role: Optional[Union[AdminRole, str]]) -> FrozenSet[Permission]:
    if not role:
        return frozenset()
    try:
        role = AdminRole(role)
    except ValueError:
        return frozenset()
    return ROLE_PERMISSIONS.get(role, frozenset())


def has_permission(role, permission: Permission) -> bool:
    return permission in permissions_for(role)


def has_any_permission(role, *permissions: Permission) -> bool:
    granted = permissions_for(role)
    return any(p in granted for p in permissions)


def has_all_permissions(role, *permissions: Permission) -> bool:
    granted = permissions_for(role)
    return all(p in granted for p in permissions)
