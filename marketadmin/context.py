from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from marketadmin.models.admin_user import AdminRole
from marketadmin.permissions import Permission, permissions_for


@dataclass(frozen=True)
class AdminContext:
    """The authenticated admin for one request, passed explicitly to services."""

    admin_id: str
    user_id: str
    role: AdminRole
    ip_address: Optional[str] = None
    permissions: FrozenSet[Permission] = field(default=frozenset())

    def __post_init__(self):
        if not self.permissions:
            object.__setattr__(self, "permissions", permissions_for(self.role))

    def can(self, permission: Permission) -> bool:
        return permission in self.permissions

    @classmethod
    def from_admin_user(cls, admin_user, ip_address: Optional[str] = None) -> "AdminContext":
        return cls(
            admin_id=admin_user.id,
            user_id=admin_user.user_id,
            role=AdminRole(admin_user.role),
            ip_address=ip_address,
        )
